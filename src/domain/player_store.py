"""Create, list and soft-delete club players."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from domain.common import PlayerRef, PlayerSnapshot
from domain.errors import ConflictError, NotFoundError, ValidationError
from domain.tiers import MAX_POINTS, MIN_POINTS, tier_for_points
from domain.unit_of_work import read_only, transaction
from repositories.players import (
    deactivate_player,
    get_player,
    get_player_by_name,
    insert_player,
    list_active_players,
    resolve_player_ref,
)

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100
PLAYER_ORDERINGS = ("name", "points")


def normalize_name(name: object) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Player name is required")
    cleaned = name.strip()
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValidationError(f"Player name must be at most {MAX_NAME_LENGTH} characters")
    return cleaned


def normalize_points(points: object) -> int:
    if isinstance(points, bool):
        raise ValidationError(f"Points must be between {MIN_POINTS} and {MAX_POINTS}")
    if isinstance(points, float) and points.is_integer():
        points = int(points)
    if isinstance(points, str) and points.strip().isdigit():
        points = int(points.strip())
    if not isinstance(points, int) or points < MIN_POINTS or points > MAX_POINTS:
        raise ValidationError(f"Points must be between {MIN_POINTS} and {MAX_POINTS}")
    return points


class PlayerStore:
    """Owner of player identity rows."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def create_player(self, name: object, points: object = 0) -> PlayerSnapshot:
        cleaned_name = normalize_name(name)
        initial_points = normalize_points(points)

        with transaction(self.session_factory, "add player") as session:
            if get_player_by_name(session, cleaned_name) is not None:
                raise ConflictError("Player name already exists")
            try:
                player = insert_player(session, name=cleaned_name, points=initial_points)
            except IntegrityError as exc:
                raise ConflictError("Player name already exists") from exc
            snapshot = PlayerSnapshot(id=player.id, name=player.name, points=player.points)

        logger.info("Player created id=%s name=%r points=%s", snapshot.id, snapshot.name, snapshot.points)
        return snapshot

    def remove_player(self, player_id: int) -> PlayerSnapshot:
        """Soft delete; match history keeps pointing at the row."""
        with transaction(self.session_factory, "remove player") as session:
            player = get_player(session, player_id)
            if player is None:
                raise NotFoundError("Player not found")
            deactivate_player(player)
            snapshot = PlayerSnapshot(id=player.id, name=player.name, points=player.points)

        logger.info("Player deactivated id=%s name=%r", snapshot.id, snapshot.name)
        return snapshot

    def get_player(self, ref: PlayerRef) -> PlayerSnapshot:
        with read_only(self.session_factory, "fetch player") as session:
            player = resolve_player_ref(session, ref)
            if player is None:
                raise NotFoundError("Player not found")
            return PlayerSnapshot(id=player.id, name=player.name, points=player.points)

    def list_players(self, order_by: str = "name") -> list[dict[str, Any]]:
        if order_by not in PLAYER_ORDERINGS:
            raise ValidationError(f"order_by must be one of {PLAYER_ORDERINGS}")

        with read_only(self.session_factory, "fetch players") as session:
            rows = list_active_players(session, order_by=order_by)
            return [
                {
                    "id": player.id,
                    "name": player.name,
                    "points": player.points,
                    "tier": tier_for_points(player.points).value,
                    "is_champion": player.is_champion,
                    "is_tournament_winner": is_tournament_winner,
                }
                for player, is_tournament_winner in rows
            ]
