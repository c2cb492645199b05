"""Record a match result and move points between the two players."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from domain.common import MatchRecord, PlayerRef, PlayerSnapshot
from domain.errors import NotFoundError, ValidationError
from domain.exchange import PointExchange, PointExchangeCalculator
from domain.unit_of_work import transaction
from repositories.matches import insert_match
from repositories.players import lock_players, resolve_player_ref, set_player_points, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchRecordResult:
    """Post-match state returned to callers."""

    winner: PlayerSnapshot
    loser: PlayerSnapshot
    match: MatchRecord
    exchange: PointExchange

    @property
    def message(self) -> str:
        return (
            f"Match recorded: {self.winner.name} (+{self.match.winner_points_change}) "
            f"defeated {self.loser.name} ({self.match.loser_points_change})"
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "winner": self.winner.as_dict(),
            "loser": self.loser.as_dict(),
            "match": {
                "id": self.match.id,
                "winner_tier_before": self.match.winner_tier_before,
                "loser_tier_before": self.match.loser_tier_before,
                "winner_points_change": self.match.winner_points_change,
                "loser_points_change": self.match.loser_points_change,
                "match_date": self.match.match_date.isoformat(),
            },
        }


class MatchRecorder:
    """Sole writer of matches and sole mutator of player points."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        calculator: PointExchangeCalculator | None = None,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.session_factory = session_factory
        self.calculator = calculator or PointExchangeCalculator()
        self.clock = clock

    def record_match(self, winner_ref: PlayerRef, loser_ref: PlayerRef) -> MatchRecordResult:
        with transaction(self.session_factory, "record match") as session:
            winner_row = resolve_player_ref(session, winner_ref)
            loser_row = resolve_player_ref(session, loser_ref)
            if winner_row is None or loser_row is None:
                raise NotFoundError("One or both players not found")
            if winner_row.id == loser_row.id:
                raise ValidationError("Winner and loser cannot be the same player")

            winner_id, loser_id = winner_row.id, loser_row.id
            locked = lock_players(session, (winner_id, loser_id))
            winner = locked.get(winner_id)
            loser = locked.get(loser_id)
            # A concurrent soft delete can land between resolution and locking.
            if winner is None or loser is None:
                raise NotFoundError("One or both players not found")

            exchange = self.calculator.process_match(
                PlayerSnapshot(id=winner.id, name=winner.name, points=winner.points),
                PlayerSnapshot(id=loser.id, name=loser.name, points=loser.points),
            )
            set_player_points(winner, exchange.winner_points_after)
            set_player_points(loser, exchange.loser_points_after)
            match = insert_match(
                session,
                winner_id=winner.id,
                loser_id=loser.id,
                exchange=exchange,
                match_date=self.clock(),
            )

            result = MatchRecordResult(
                winner=PlayerSnapshot(id=winner.id, name=winner.name, points=winner.points),
                loser=PlayerSnapshot(id=loser.id, name=loser.name, points=loser.points),
                match=MatchRecord(
                    id=match.id,
                    winner_id=match.winner_id,
                    loser_id=match.loser_id,
                    winner_tier_before=match.winner_tier_before,
                    loser_tier_before=match.loser_tier_before,
                    winner_points_change=match.winner_points_change,
                    loser_points_change=match.loser_points_change,
                    match_date=match.match_date,
                ),
                exchange=exchange,
            )

        logger.info(
            "match_id=%s winner_id=%s points=%s->%s loser_id=%s points=%s->%s",
            result.match.id,
            result.winner.id,
            exchange.winner_points_before,
            exchange.winner_points_after,
            result.loser.id,
            exchange.loser_points_before,
            exchange.loser_points_after,
        )
        return result
