"""matches table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Match(Base):
    """Append-only ledger row for one completed game."""

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("winner_id <> loser_id", name="ck_matches_distinct_players"),
        CheckConstraint("winner_points_change >= 0", name="ck_matches_winner_change"),
        CheckConstraint("loser_points_change <= 0", name="ck_matches_loser_change"),
        Index("idx_matches_winner", "winner_id"),
        Index("idx_matches_loser", "loser_id"),
        Index("idx_matches_date", "match_date", "id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    winner_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    loser_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    winner_tier_before: Mapped[str] = mapped_column(String(16), nullable=False)
    loser_tier_before: Mapped[str] = mapped_column(String(16), nullable=False)
    winner_points_before: Mapped[int] = mapped_column(Integer, nullable=False)
    loser_points_before: Mapped[int] = mapped_column(Integer, nullable=False)
    winner_points_change: Mapped[int] = mapped_column(Integer, nullable=False)
    loser_points_change: Mapped[int] = mapped_column(Integer, nullable=False)
    match_date: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
