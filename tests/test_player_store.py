"""Tests for player creation, listing and soft deletion."""

from __future__ import annotations

import pytest

from domain.common import ById, ByName
from domain.engine import RatingEngine
from domain.errors import ConflictError, NotFoundError, ValidationError
from domain.player_store import normalize_name, normalize_points


def test_normalize_name_trims_and_rejects_blank() -> None:
    assert normalize_name("  Magnus ") == "Magnus"
    with pytest.raises(ValidationError, match="Player name is required"):
        normalize_name("   ")
    with pytest.raises(ValidationError):
        normalize_name(None)
    with pytest.raises(ValidationError):
        normalize_name("x" * 101)


@pytest.mark.parametrize("raw,expected", [(0, 0), (49, 49), (12.0, 12), ("7", 7)])
def test_normalize_points_accepts_integral_values(raw: object, expected: int) -> None:
    assert normalize_points(raw) == expected


@pytest.mark.parametrize("raw", [-1, 50, 2.5, "abc", True, None])
def test_normalize_points_rejects_out_of_range(raw: object) -> None:
    with pytest.raises(ValidationError, match="Points must be between 0 and 49"):
        normalize_points(raw)


def test_create_player_defaults_to_zero_points(rating_engine: RatingEngine) -> None:
    player = rating_engine.players.create_player("Alice")

    assert player.points == 0
    assert player.as_dict() == {"id": player.id, "name": "Alice", "points": 0, "tier": "Pawn"}


def test_duplicate_active_name_conflicts(rating_engine: RatingEngine) -> None:
    rating_engine.players.create_player("Alice", 5)

    with pytest.raises(ConflictError, match="Player name already exists"):
        rating_engine.players.create_player(" Alice ", 7)


def test_removed_player_frees_the_name(rating_engine: RatingEngine) -> None:
    original = rating_engine.players.create_player("Alice", 5)
    rating_engine.players.remove_player(original.id)

    replacement = rating_engine.players.create_player("Alice", 9)

    assert replacement.id != original.id
    assert rating_engine.players.get_player(ByName("Alice")).id == replacement.id


def test_remove_player_twice_is_not_found(rating_engine: RatingEngine) -> None:
    player = rating_engine.players.create_player("Alice", 5)
    rating_engine.players.remove_player(player.id)

    with pytest.raises(NotFoundError, match="Player not found"):
        rating_engine.players.remove_player(player.id)
    with pytest.raises(NotFoundError):
        rating_engine.players.get_player(ById(player.id))


def test_list_players_orders_and_hides_removed(rating_engine: RatingEngine) -> None:
    carol = rating_engine.players.create_player("Carol", 30)
    rating_engine.players.create_player("Alice", 5)
    bob = rating_engine.players.create_player("Bob", 12)
    rating_engine.players.remove_player(carol.id)

    by_name = rating_engine.players.list_players()
    by_points = rating_engine.players.list_players("points")

    assert [row["name"] for row in by_name] == ["Alice", "Bob"]
    assert [row["name"] for row in by_points] == ["Bob", "Alice"]
    bob_row = next(row for row in by_name if row["id"] == bob.id)
    assert bob_row["tier"] == "Knight"
    assert bob_row["is_champion"] is False
    assert bob_row["is_tournament_winner"] is False


def test_list_players_rejects_unknown_ordering(rating_engine: RatingEngine) -> None:
    with pytest.raises(ValidationError):
        rating_engine.players.list_players("rating")
