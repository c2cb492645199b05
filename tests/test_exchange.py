"""Unit tests for the point exchange calculator."""

from __future__ import annotations

import pytest

from domain.common import PlayerSnapshot
from domain.exchange import ExchangeParameters, PointExchangeCalculator
from domain.tiers import Tier


def _player(player_id: int, points: int) -> PlayerSnapshot:
    return PlayerSnapshot(id=player_id, name=f"player-{player_id}", points=points)


def test_exchange_parameters_defaults() -> None:
    params = ExchangeParameters()
    assert params.points_per_win == 1
    assert params.upset_bonus_per_tier == 0


def test_default_exchange_moves_one_point() -> None:
    exchange = PointExchangeCalculator().process_match(_player(1, 10), _player(2, 8))
    assert exchange.delta == 1
    assert exchange.winner_points_after == 11
    assert exchange.loser_points_after == 7
    assert exchange.winner_tier_before is Tier.KNIGHT
    assert exchange.loser_tier_before is Tier.PAWN


def test_exchange_conserves_points_away_from_the_boundaries() -> None:
    calculator = PointExchangeCalculator(ExchangeParameters(points_per_win=3))
    for winner_points in range(0, 47):
        for loser_points in (3, 20, 49):
            exchange = calculator.process_match(_player(1, winner_points), _player(2, loser_points))
            assert exchange.winner_points_change + exchange.loser_points_change == 0


def test_winner_at_max_points_is_clamped_and_loser_still_drops() -> None:
    exchange = PointExchangeCalculator().process_match(_player(1, 49), _player(2, 30))
    assert exchange.winner_points_after == 49
    assert exchange.winner_points_change == 0
    assert exchange.loser_points_after == 29
    assert exchange.loser_points_change == -1


def test_loser_at_zero_points_is_clamped() -> None:
    exchange = PointExchangeCalculator().process_match(_player(1, 5), _player(2, 0))
    assert exchange.loser_points_after == 0
    assert exchange.loser_points_change == 0
    assert exchange.winner_points_after == 6


def test_partial_clamp_when_delta_exceeds_headroom() -> None:
    calculator = PointExchangeCalculator(ExchangeParameters(points_per_win=3))
    exchange = calculator.process_match(_player(1, 48), _player(2, 1))
    assert exchange.winner_points_change == 1
    assert exchange.loser_points_change == -1


def test_upset_bonus_scales_with_tier_gap() -> None:
    calculator = PointExchangeCalculator(ExchangeParameters(points_per_win=1, upset_bonus_per_tier=2))
    upset = calculator.process_match(_player(1, 5), _player(2, 25))
    favourite = calculator.process_match(_player(2, 25), _player(1, 5))
    assert upset.delta == 1 + 2 * 2
    assert favourite.delta == 1


def test_tier_after_is_rederived_from_new_points() -> None:
    exchange = PointExchangeCalculator().process_match(_player(1, 19), _player(2, 20))
    assert exchange.winner_tier_after is Tier.BISHOP
    assert exchange.loser_tier_after is Tier.KNIGHT


def test_same_player_is_rejected() -> None:
    with pytest.raises(ValueError):
        PointExchangeCalculator().process_match(_player(1, 10), _player(1, 10))


@pytest.mark.parametrize(
    "params",
    [ExchangeParameters(points_per_win=0), ExchangeParameters(upset_bonus_per_tier=-1)],
)
def test_invalid_parameters_raise(params: ExchangeParameters) -> None:
    with pytest.raises(ValueError):
        PointExchangeCalculator(params)
