"""Tests for monthly archives and champion flags."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from domain.archive_curator import normalize_month
from domain.engine import RatingEngine
from domain.errors import ConflictError, NotFoundError, ValidationError
from models import MonthlyArchive


def _podium(rating_engine: RatingEngine) -> tuple[int, int, int]:
    first = rating_engine.players.create_player("Gold", 45)
    second = rating_engine.players.create_player("Silver", 33)
    third = rating_engine.players.create_player("Bronze", 21)
    return first.id, second.id, third.id


def _archive_count(rating_engine: RatingEngine) -> int:
    with rating_engine.session_factory() as session:
        return int(session.scalar(select(func.count(MonthlyArchive.id))))


def test_normalize_month() -> None:
    assert normalize_month("2024-03") == "2024-03"
    assert normalize_month("2024-03-15") == "2024-03"
    with pytest.raises(ValidationError, match="YYYY-MM"):
        normalize_month("2024-13")
    with pytest.raises(ValidationError, match="YYYY-MM"):
        normalize_month("March 2024")
    for malformed in ("2024-03-xx", "2024-03-99", "2024-02-30"):
        with pytest.raises(ValidationError, match="YYYY-MM"):
            normalize_month(malformed)


def test_create_archive_snapshots_points_and_marks_champions(rating_engine: RatingEngine) -> None:
    first, second, third = _podium(rating_engine)

    summary = rating_engine.archives.create_archive("2024-03", first, str(second), third)

    assert summary.archive_month == "2024-03"
    assert summary.placements == ((first, 45), (second, 33), (third, 21))
    champions = {row["id"] for row in rating_engine.players.list_players() if row["is_champion"]}
    assert champions == {first, second, third}

    archives = rating_engine.archives.list_archives()
    assert len(archives) == 1
    assert archives[0]["first_place_name"] == "Gold"
    assert archives[0]["third_place_points"] == 21
    assert isinstance(archives[0]["archive_date"], str)


def test_duplicate_month_conflicts(rating_engine: RatingEngine) -> None:
    first, second, third = _podium(rating_engine)
    rating_engine.archives.create_archive("2024-03", first, second, third)

    with pytest.raises(ConflictError, match="Archive for this month already exists"):
        rating_engine.archives.create_archive("2024-03", third, second, first)

    assert _archive_count(rating_engine) == 1


def test_repeated_winner_is_rejected_before_writing(rating_engine: RatingEngine) -> None:
    first, _, third = _podium(rating_engine)

    with pytest.raises(ValidationError, match="All three winners must be different players"):
        rating_engine.archives.create_archive("2024-04", first, first, third)

    assert _archive_count(rating_engine) == 0
    assert not any(row["is_champion"] for row in rating_engine.players.list_players())


@pytest.mark.parametrize(
    "month,first,second,third",
    [("", 1, 2, 3), ("2024-05", None, 2, 3), ("2024-05", 1, 2, "")],
)
def test_missing_fields_are_rejected(
    rating_engine: RatingEngine,
    month: object,
    first: object,
    second: object,
    third: object,
) -> None:
    with pytest.raises(ValidationError, match="All fields are required"):
        rating_engine.archives.create_archive(month, first, second, third)


def test_unknown_or_removed_player_is_not_found(rating_engine: RatingEngine) -> None:
    first, second, third = _podium(rating_engine)
    rating_engine.players.remove_player(third)

    with pytest.raises(NotFoundError, match="One or more players not found"):
        rating_engine.archives.create_archive("2024-05", first, second, third)
    with pytest.raises(NotFoundError):
        rating_engine.archives.create_archive("2024-05", first, second, 999)

    assert _archive_count(rating_engine) == 0


def test_deleting_archive_keeps_champion_flags(rating_engine: RatingEngine) -> None:
    first, second, third = _podium(rating_engine)
    summary = rating_engine.archives.create_archive("2024-03", first, second, third)

    assert rating_engine.archives.delete_archive(summary.id) == "2024-03"

    assert rating_engine.archives.list_archives() == []
    champions = {row["id"] for row in rating_engine.players.list_players() if row["is_champion"]}
    assert champions == {first, second, third}

    # The month is free again once its archive is gone.
    rating_engine.archives.create_archive("2024-03", first, second, third)


def test_delete_unknown_archive(rating_engine: RatingEngine) -> None:
    with pytest.raises(NotFoundError, match="Archive not found"):
        rating_engine.archives.delete_archive(7)
