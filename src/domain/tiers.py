"""Tier ladder derived from a player's point total."""

from __future__ import annotations

from enum import Enum

MIN_POINTS = 0
MAX_POINTS = 49
TIER_WIDTH = 10


class Tier(str, Enum):
    """Ordered tier labels, lowest first."""

    PAWN = "Pawn"
    KNIGHT = "Knight"
    BISHOP = "Bishop"
    ROOK = "Rook"
    QUEEN = "Queen"

    @property
    def index(self) -> int:
        return _TIER_ORDER.index(self)

    @property
    def min_points(self) -> int:
        return self.index * TIER_WIDTH

    @property
    def max_points(self) -> int:
        return min(MAX_POINTS, self.min_points + TIER_WIDTH - 1)


_TIER_ORDER: tuple[Tier, ...] = tuple(Tier)


def validate_points(points: int) -> int:
    """Return ``points`` if it is an integer inside the ladder range."""
    if isinstance(points, bool) or not isinstance(points, int):
        raise ValueError(f"points must be an integer, got {points!r}")
    if points < MIN_POINTS or points > MAX_POINTS:
        raise ValueError(f"points must be between {MIN_POINTS} and {MAX_POINTS}, got {points}")
    return points


def tier_for_points(points: int) -> Tier:
    """Map a point total to its tier (10-point buckets)."""
    validate_points(points)
    return _TIER_ORDER[points // TIER_WIDTH]


def clamp_points(points: int) -> int:
    return max(MIN_POINTS, min(MAX_POINTS, points))


__all__ = [
    "MAX_POINTS",
    "MIN_POINTS",
    "TIER_WIDTH",
    "Tier",
    "clamp_points",
    "tier_for_points",
    "validate_points",
]
