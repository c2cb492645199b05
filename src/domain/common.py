"""Shared value types passed between the engine components."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Union

from domain.errors import ValidationError
from domain.tiers import Tier, tier_for_points


@dataclass(frozen=True)
class ById:
    """Reference a player by primary key."""

    player_id: int


@dataclass(frozen=True)
class ByName:
    """Reference a player by display name."""

    name: str


PlayerRef = Union[ById, ByName]


@dataclass(frozen=True)
class PlayerSnapshot:
    """Point-in-time view of one player."""

    id: int
    name: str
    points: int

    @property
    def tier(self) -> Tier:
        return tier_for_points(self.points)

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "points": self.points,
            "tier": self.tier.value,
        }


@dataclass(frozen=True)
class MatchRecord:
    """One stored match as written by the recorder."""

    id: int
    winner_id: int
    loser_id: int
    winner_tier_before: str
    loser_tier_before: str
    winner_points_change: int
    loser_points_change: int
    match_date: datetime


def parse_player_id(value: object, *, label: str = "player") -> int:
    """Coerce a request value into a positive integer id."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {label} ID")
    if isinstance(value, int):
        player_id = value
    elif isinstance(value, str) and value.strip().lstrip("-").isdigit():
        player_id = int(value.strip())
    else:
        raise ValidationError(f"Invalid {label} ID")
    if player_id <= 0:
        raise ValidationError(f"Invalid {label} ID")
    return player_id


def player_ref_from_payload(
    payload: dict[str, Any],
    *,
    id_key: str,
    name_key: str,
) -> PlayerRef | None:
    """Build a ``PlayerRef`` from a request body, preferring the name when both are present."""
    name = payload.get(name_key)
    if isinstance(name, str) and name.strip():
        return ByName(name.strip())
    raw_id = payload.get(id_key)
    if raw_id is None or raw_id == "":
        return None
    return ById(parse_player_id(raw_id))


__all__ = [
    "ById",
    "ByName",
    "MatchRecord",
    "PlayerRef",
    "PlayerSnapshot",
    "parse_player_id",
    "player_ref_from_payload",
]
