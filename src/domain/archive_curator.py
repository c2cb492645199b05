"""Monthly podium archives and the champion flag they grant."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from domain.common import parse_player_id
from domain.errors import ConflictError, NotFoundError, ValidationError
from domain.unit_of_work import read_only, transaction
from repositories.archives import fetch_archives, get_archive, get_archive_by_month, insert_archive
from repositories.players import lock_players, mark_champions

logger = logging.getLogger(__name__)

_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
_DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def normalize_month(month: object) -> str:
    """Accept ``YYYY-MM``; a valid ``YYYY-MM-DD`` date is reduced to its month."""
    if not isinstance(month, str) or not month.strip():
        raise ValidationError("All fields are required")
    value = month.strip()
    if _DAY_PATTERN.match(value):
        try:
            value = date.fromisoformat(value).strftime("%Y-%m")
        except ValueError as exc:
            raise ValidationError("Month must use the YYYY-MM format") from exc
    if not _MONTH_PATTERN.match(value):
        raise ValidationError("Month must use the YYYY-MM format")
    return value


@dataclass(frozen=True)
class ArchiveSummary:
    id: int
    archive_month: str
    placements: tuple[tuple[int, int], tuple[int, int], tuple[int, int]]
    created_at: datetime

    def as_dict(self) -> dict[str, Any]:
        (first_id, first_points), (second_id, second_points), (third_id, third_points) = self.placements
        return {
            "id": self.id,
            "archive_month": self.archive_month,
            "first_place_player_id": first_id,
            "first_place_points": first_points,
            "second_place_player_id": second_id,
            "second_place_points": second_points,
            "third_place_player_id": third_id,
            "third_place_points": third_points,
            "archive_date": self.created_at.isoformat(),
        }


class ArchiveCurator:
    """Owns monthly_archives rows and is the only writer of ``is_champion``."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def create_archive(
        self,
        month: object,
        first_id: object,
        second_id: object,
        third_id: object,
    ) -> ArchiveSummary:
        if any(value is None or value == "" for value in (month, first_id, second_id, third_id)):
            raise ValidationError("All fields are required")
        archive_month = normalize_month(month)
        placement_ids = (
            parse_player_id(first_id),
            parse_player_id(second_id),
            parse_player_id(third_id),
        )
        if len(set(placement_ids)) != len(placement_ids):
            raise ValidationError("All three winners must be different players")

        with transaction(self.session_factory, "create archive") as session:
            if get_archive_by_month(session, archive_month) is not None:
                raise ConflictError("Archive for this month already exists")

            locked = lock_players(session, placement_ids)
            if len(locked) != len(placement_ids):
                raise NotFoundError("One or more players not found")
            placements = tuple(locked[player_id] for player_id in placement_ids)

            try:
                archive = insert_archive(session, archive_month=archive_month, placements=placements)
            except IntegrityError as exc:
                raise ConflictError("Archive for this month already exists") from exc
            mark_champions(placements)

            summary = ArchiveSummary(
                id=archive.id,
                archive_month=archive.archive_month,
                placements=(
                    (archive.first_place_player_id, archive.first_place_points),
                    (archive.second_place_player_id, archive.second_place_points),
                    (archive.third_place_player_id, archive.third_place_points),
                ),
                created_at=archive.created_at,
            )

        logger.info("Archive created month=%s placements=%s", summary.archive_month, placement_ids)
        return summary

    def list_archives(self) -> list[dict[str, Any]]:
        with read_only(self.session_factory, "fetch archives") as session:
            archives = fetch_archives(session)
        return [
            {**archive, "archive_date": archive["archive_date"].isoformat()}
            for archive in archives
        ]

    def delete_archive(self, archive_id: int) -> str:
        """Delete one archive row; champion flags it granted stay in place."""
        with transaction(self.session_factory, "delete archive") as session:
            archive = get_archive(session, archive_id)
            if archive is None:
                raise NotFoundError("Archive not found")
            archive_month = archive.archive_month
            session.delete(archive)

        logger.info("Archive deleted id=%s month=%s", archive_id, archive_month)
        return archive_month
