"""Tournament winner badges, independent of points and tiers."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from domain.common import PlayerRef
from domain.errors import ConflictError, NotFoundError, ValidationError
from domain.unit_of_work import read_only, transaction
from repositories.players import get_player, resolve_player_ref
from repositories.tournament_winners import (
    badge_exists,
    delete_all_badges,
    delete_badges_for_player,
    fetch_badges,
    insert_badge,
)

logger = logging.getLogger(__name__)

DEFAULT_TOURNAMENT_NAME = "Tournament"


def normalize_tournament_name(name: object) -> str:
    if name is None:
        return DEFAULT_TOURNAMENT_NAME
    if not isinstance(name, str):
        raise ValidationError("Tournament name must be a string")
    cleaned = name.strip()
    return cleaned or DEFAULT_TOURNAMENT_NAME


class TournamentBadgeRegistry:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def add_badge(
        self,
        player_ref: PlayerRef,
        tournament_name: object = DEFAULT_TOURNAMENT_NAME,
        tournament_date: date | None = None,
    ) -> dict[str, Any]:
        name = normalize_tournament_name(tournament_name)
        badge_date = tournament_date or date.today()

        with transaction(self.session_factory, "add tournament winner") as session:
            player = resolve_player_ref(session, player_ref)
            if player is None:
                raise NotFoundError("Player not found")
            if badge_exists(session, player_id=player.id, tournament_name=name, tournament_date=badge_date):
                raise ConflictError("Tournament winner entry already exists")
            try:
                badge = insert_badge(
                    session,
                    player_id=player.id,
                    tournament_name=name,
                    tournament_date=badge_date,
                )
            except IntegrityError as exc:
                raise ConflictError("Tournament winner entry already exists") from exc
            payload = {
                "winner_id": badge.id,
                "player_id": player.id,
                "name": player.name,
                "tournament_name": badge.tournament_name,
                "tournament_date": badge.tournament_date.isoformat(),
            }

        logger.info("Tournament badge added player_id=%s tournament=%r", payload["player_id"], name)
        return payload

    def set_tournament_winner(
        self,
        player_id: int,
        is_winner: bool,
        tournament_name: object = DEFAULT_TOURNAMENT_NAME,
    ) -> int:
        """Grant one badge (idempotent) or strip all badges; returns rows changed."""
        name = normalize_tournament_name(tournament_name)
        badge_date = date.today()

        with transaction(self.session_factory, "update tournament winner status") as session:
            if get_player(session, player_id, active_only=False) is None:
                raise NotFoundError("Player not found")
            if not is_winner:
                changed = delete_badges_for_player(session, player_id)
            elif badge_exists(session, player_id=player_id, tournament_name=name, tournament_date=badge_date):
                changed = 0
            else:
                # A concurrent grant of the same badge leaves this one a no-op.
                try:
                    with session.begin_nested():
                        insert_badge(
                            session,
                            player_id=player_id,
                            tournament_name=name,
                            tournament_date=badge_date,
                        )
                    changed = 1
                except IntegrityError:
                    changed = 0

        logger.info("Tournament status player_id=%s is_winner=%s changed=%s", player_id, is_winner, changed)
        return changed

    def remove_badges_for_player(self, player_id: int) -> int:
        with transaction(self.session_factory, "remove tournament winner") as session:
            removed = delete_badges_for_player(session, player_id)
            if removed == 0:
                raise NotFoundError("Tournament winner not found")

        logger.info("Tournament badges removed player_id=%s count=%s", player_id, removed)
        return removed

    def clear_badges(self) -> int:
        with transaction(self.session_factory, "clear tournament winners") as session:
            removed = delete_all_badges(session)

        logger.info("Tournament badges cleared count=%s", removed)
        return removed

    def list_badges(self) -> list[dict[str, Any]]:
        with read_only(self.session_factory, "fetch tournament winners") as session:
            badges = fetch_badges(session)
        return [{**badge, "tournament_date": badge["tournament_date"].isoformat()} for badge in badges]
