"""Persistence helpers for tournament winner badges."""

from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from models import Player, TournamentWinner
from repositories.players import utc_now


def insert_badge(
    session: Session,
    *,
    player_id: int,
    tournament_name: str,
    tournament_date: date,
) -> TournamentWinner:
    badge = TournamentWinner(
        player_id=player_id,
        tournament_name=tournament_name,
        tournament_date=tournament_date,
        created_at=utc_now(),
    )
    session.add(badge)
    session.flush()
    return badge


def badge_exists(
    session: Session,
    *,
    player_id: int,
    tournament_name: str,
    tournament_date: date,
) -> bool:
    statement = select(TournamentWinner.id).where(
        TournamentWinner.player_id == player_id,
        TournamentWinner.tournament_name == tournament_name,
        TournamentWinner.tournament_date == tournament_date,
    )
    return session.execute(statement).first() is not None


def delete_badges_for_player(session: Session, player_id: int) -> int:
    """Delete every badge of one player and return how many were removed."""
    result = session.execute(delete(TournamentWinner).where(TournamentWinner.player_id == player_id))
    return int(result.rowcount or 0)


def delete_all_badges(session: Session) -> int:
    result = session.execute(delete(TournamentWinner))
    return int(result.rowcount or 0)


def fetch_badges(session: Session) -> list[dict[str, Any]]:
    """All badges, most recent tournament first."""
    statement = (
        select(
            TournamentWinner.id.label("winner_id"),
            TournamentWinner.player_id,
            Player.name,
            TournamentWinner.tournament_name,
            TournamentWinner.tournament_date,
        )
        .join(Player, TournamentWinner.player_id == Player.id)
        .order_by(TournamentWinner.tournament_date.desc(), TournamentWinner.id.desc())
    )
    return [dict(row) for row in session.execute(statement).mappings().all()]
