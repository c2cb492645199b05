"""Rating engine facade: one store handle shared by every component."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from config import ClubConfig
from db import create_db_engine, create_session_factory
from domain.archive_curator import ArchiveCurator
from domain.exchange import ExchangeParameters, PointExchangeCalculator
from domain.leaderboard import DEFAULT_HISTORY_LIMIT, DEFAULT_RECENT_LIMIT, LeaderboardProjector
from domain.match_recorder import MatchRecorder
from domain.player_store import PlayerStore
from domain.tournament_registry import TournamentBadgeRegistry
from repositories.schema import ensure_schema

logger = logging.getLogger(__name__)


@dataclass
class RatingEngine:
    """Components wired to one engine; call ``close`` at shutdown."""

    engine: Engine
    session_factory: sessionmaker[Session]
    players: PlayerStore
    matches: MatchRecorder
    leaderboard: LeaderboardProjector
    archives: ArchiveCurator
    tournaments: TournamentBadgeRegistry

    @classmethod
    def open(
        cls,
        engine: Engine,
        *,
        exchange: ExchangeParameters | None = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
        create_schema: bool = False,
    ) -> RatingEngine:
        if create_schema:
            ensure_schema(engine)
        session_factory = create_session_factory(engine)
        return cls(
            engine=engine,
            session_factory=session_factory,
            players=PlayerStore(session_factory),
            matches=MatchRecorder(session_factory, PointExchangeCalculator(exchange)),
            leaderboard=LeaderboardProjector(
                session_factory,
                history_limit=history_limit,
                recent_limit=recent_limit,
            ),
            archives=ArchiveCurator(session_factory),
            tournaments=TournamentBadgeRegistry(session_factory),
        )

    @classmethod
    def from_config(
        cls,
        config: ClubConfig,
        *,
        db_url: str | None = None,
        create_schema: bool = False,
    ) -> RatingEngine:
        engine = create_db_engine(
            db_url or config.database.url,
            pool_size=config.database.pool_size,
            pool_recycle_seconds=config.database.pool_recycle_seconds,
        )
        logger.info("Opened store dialect=%s", engine.dialect.name)
        return cls.open(
            engine,
            exchange=config.rating,
            history_limit=config.leaderboard.history_limit,
            recent_limit=config.leaderboard.recent_matches_limit,
            create_schema=create_schema,
        )

    def server_time(self):
        """Round-trip to the store; raises on connectivity failure."""
        with self.engine.connect() as connection:
            return connection.execute(select(func.current_timestamp())).scalar_one()

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed")
