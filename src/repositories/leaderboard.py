"""Read-side aggregation queries behind the leaderboard views."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models import Player
from repositories.matches import losses_subquery, wins_subquery
from repositories.players import tournament_winner_flag


def fetch_leaderboard_rows(
    session: Session,
    *,
    limit: int | None = None,
    player_id: int | None = None,
    active_only: bool = True,
) -> list[dict[str, Any]]:
    """Players with win/loss totals in ladder order (points, wins, name)."""
    wins = wins_subquery()
    losses = losses_subquery()
    win_count = func.coalesce(wins.c.win_count, 0)
    loss_count = func.coalesce(losses.c.loss_count, 0)

    statement = (
        select(
            Player.id,
            Player.name,
            Player.points,
            Player.is_active,
            Player.is_champion,
            win_count.label("wins"),
            loss_count.label("losses"),
            tournament_winner_flag(),
        )
        .outerjoin(wins, wins.c.player_id == Player.id)
        .outerjoin(losses, losses.c.player_id == Player.id)
        .order_by(Player.points.desc(), win_count.desc(), Player.name.asc(), Player.id.asc())
    )
    if active_only:
        statement = statement.where(Player.is_active.is_(True))
    if player_id is not None:
        statement = statement.where(Player.id == player_id)
    if limit is not None:
        statement = statement.limit(limit)

    rows: list[dict[str, Any]] = []
    for row in session.execute(statement).mappings().all():
        rows.append(
            {
                "id": int(row["id"]),
                "name": row["name"],
                "points": int(row["points"]),
                "is_active": bool(row["is_active"]),
                "is_champion": bool(row["is_champion"]),
                "is_tournament_winner": bool(row["is_tournament_winner"]),
                "wins": int(row["wins"]),
                "losses": int(row["losses"]),
            }
        )
    return rows
