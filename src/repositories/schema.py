"""Schema bootstrap for the club tables."""

from __future__ import annotations

from sqlalchemy.engine import Engine

from models import Base, Match, MonthlyArchive, Player, TournamentWinner

CLUB_TABLES = (
    Player.__table__,
    Match.__table__,
    MonthlyArchive.__table__,
    TournamentWinner.__table__,
)


def ensure_schema(engine: Engine) -> None:
    """Create the club tables and their indexes if they do not exist."""
    Base.metadata.create_all(bind=engine, tables=list(CLUB_TABLES), checkfirst=True)
