"""monthly_archives table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class MonthlyArchive(Base):
    """Snapshot of the podium for one calendar month."""

    __tablename__ = "monthly_archives"
    __table_args__ = (
        UniqueConstraint("archive_month", name="uq_monthly_archives_month"),
        CheckConstraint(
            "first_place_player_id <> second_place_player_id "
            "AND first_place_player_id <> third_place_player_id "
            "AND second_place_player_id <> third_place_player_id",
            name="ck_monthly_archives_distinct_players",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    archive_month: Mapped[str] = mapped_column(String(7), nullable=False)
    first_place_player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    first_place_points: Mapped[int] = mapped_column(Integer, nullable=False)
    second_place_player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    second_place_points: Mapped[int] = mapped_column(Integer, nullable=False)
    third_place_player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    third_place_points: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
