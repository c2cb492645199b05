"""Point exchange applied when a match result is recorded."""

from __future__ import annotations

from dataclasses import dataclass

from domain.common import PlayerSnapshot
from domain.tiers import Tier, clamp_points, tier_for_points


@dataclass(frozen=True)
class ExchangeParameters:
    points_per_win: int = 1
    upset_bonus_per_tier: int = 0


@dataclass(frozen=True)
class PointExchange:
    """Result of one exchange; changes are signed from each player's side."""

    winner_tier_before: Tier
    loser_tier_before: Tier
    winner_points_before: int
    loser_points_before: int
    delta: int
    winner_points_change: int
    loser_points_change: int

    @property
    def winner_points_after(self) -> int:
        return self.winner_points_before + self.winner_points_change

    @property
    def loser_points_after(self) -> int:
        return self.loser_points_before + self.loser_points_change

    @property
    def winner_tier_after(self) -> Tier:
        return tier_for_points(self.winner_points_after)

    @property
    def loser_tier_after(self) -> Tier:
        return tier_for_points(self.loser_points_after)


class PointExchangeCalculator:
    """Stateless calculator for the winner/loser point transfer."""

    def __init__(self, params: ExchangeParameters | None = None) -> None:
        self.params = params or ExchangeParameters()
        if self.params.points_per_win < 1:
            raise ValueError("points_per_win must be >= 1")
        if self.params.upset_bonus_per_tier < 0:
            raise ValueError("upset_bonus_per_tier must be >= 0")

    def exchange_magnitude(self, *, winner_tier: Tier, loser_tier: Tier) -> int:
        # Beating a player from a higher tier pays the bonus once per tier climbed.
        tier_gap = max(0, loser_tier.index - winner_tier.index)
        return self.params.points_per_win + (self.params.upset_bonus_per_tier * tier_gap)

    def process_match(self, winner: PlayerSnapshot, loser: PlayerSnapshot) -> PointExchange:
        if winner.id == loser.id:
            raise ValueError(f"player_id={winner.id} cannot play against itself")

        winner_tier = winner.tier
        loser_tier = loser.tier
        delta = self.exchange_magnitude(winner_tier=winner_tier, loser_tier=loser_tier)

        winner_after = clamp_points(winner.points + delta)
        loser_after = clamp_points(loser.points - delta)

        return PointExchange(
            winner_tier_before=winner_tier,
            loser_tier_before=loser_tier,
            winner_points_before=winner.points,
            loser_points_before=loser.points,
            delta=delta,
            winner_points_change=winner_after - winner.points,
            loser_points_change=loser_after - loser.points,
        )


__all__ = [
    "ExchangeParameters",
    "PointExchange",
    "PointExchangeCalculator",
]
