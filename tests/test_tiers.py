"""Unit tests for tier derivation."""

from __future__ import annotations

import pytest

from domain.tiers import MAX_POINTS, MIN_POINTS, Tier, clamp_points, tier_for_points


def test_tier_boundaries() -> None:
    assert tier_for_points(0) is Tier.PAWN
    assert tier_for_points(9) is Tier.PAWN
    assert tier_for_points(10) is Tier.KNIGHT
    assert tier_for_points(19) is Tier.KNIGHT
    assert tier_for_points(20) is Tier.BISHOP
    assert tier_for_points(30) is Tier.ROOK
    assert tier_for_points(40) is Tier.QUEEN
    assert tier_for_points(49) is Tier.QUEEN


def test_tier_is_monotonic_over_the_whole_range() -> None:
    indexes = [tier_for_points(points).index for points in range(MIN_POINTS, MAX_POINTS + 1)]
    assert indexes == sorted(indexes)
    assert indexes[0] == 0
    assert indexes[-1] == len(Tier) - 1


def test_tier_ranges_cover_points_without_gaps() -> None:
    for tier in Tier:
        assert tier_for_points(tier.min_points) is tier
        assert tier_for_points(tier.max_points) is tier
    assert Tier.QUEEN.max_points == MAX_POINTS


@pytest.mark.parametrize("points", [-1, 50, 1.5, True, "10"])
def test_out_of_range_or_non_integer_points_raise(points: object) -> None:
    with pytest.raises(ValueError):
        tier_for_points(points)  # type: ignore[arg-type]


def test_clamp_points_limits_to_ladder_range() -> None:
    assert clamp_points(-3) == 0
    assert clamp_points(25) == 25
    assert clamp_points(52) == 49
