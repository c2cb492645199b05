"""Persistence helpers for monthly podium archives."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, aliased

from models import MonthlyArchive, Player
from repositories.players import utc_now


def insert_archive(
    session: Session,
    *,
    archive_month: str,
    placements: tuple[Player, Player, Player],
) -> MonthlyArchive:
    """Insert one archive row with each placed player's current points."""
    first, second, third = placements
    archive = MonthlyArchive(
        archive_month=archive_month,
        first_place_player_id=first.id,
        first_place_points=first.points,
        second_place_player_id=second.id,
        second_place_points=second.points,
        third_place_player_id=third.id,
        third_place_points=third.points,
        created_at=utc_now(),
    )
    session.add(archive)
    session.flush()
    return archive


def get_archive(session: Session, archive_id: int) -> MonthlyArchive | None:
    return session.get(MonthlyArchive, archive_id)


def get_archive_by_month(session: Session, archive_month: str) -> MonthlyArchive | None:
    statement = select(MonthlyArchive).where(MonthlyArchive.archive_month == archive_month)
    return session.execute(statement).scalar_one_or_none()


def fetch_archives(session: Session) -> list[dict[str, Any]]:
    """All archives, newest first, with placed player names."""
    first = aliased(Player, name="first_place")
    second = aliased(Player, name="second_place")
    third = aliased(Player, name="third_place")

    statement = (
        select(
            MonthlyArchive.id,
            MonthlyArchive.archive_month,
            MonthlyArchive.first_place_player_id,
            first.name.label("first_place_name"),
            MonthlyArchive.first_place_points,
            MonthlyArchive.second_place_player_id,
            second.name.label("second_place_name"),
            MonthlyArchive.second_place_points,
            MonthlyArchive.third_place_player_id,
            third.name.label("third_place_name"),
            MonthlyArchive.third_place_points,
            MonthlyArchive.created_at.label("archive_date"),
        )
        .join(first, MonthlyArchive.first_place_player_id == first.id)
        .join(second, MonthlyArchive.second_place_player_id == second.id)
        .join(third, MonthlyArchive.third_place_player_id == third.id)
        .order_by(MonthlyArchive.created_at.desc(), MonthlyArchive.id.desc())
    )
    return [dict(row) for row in session.execute(statement).mappings().all()]
