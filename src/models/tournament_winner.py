"""tournament_winners table model."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class TournamentWinner(Base):
    """Tournament badge held by one player."""

    __tablename__ = "tournament_winners"
    __table_args__ = (
        UniqueConstraint(
            "player_id",
            "tournament_name",
            "tournament_date",
            name="uq_tournament_winners_identity",
        ),
        Index("idx_tournament_winners_player", "player_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    tournament_name: Mapped[str] = mapped_column(String(128), nullable=False)
    tournament_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
