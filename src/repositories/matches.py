"""Persistence and read helpers for the append-only matches ledger."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import case, func, or_, select
from sqlalchemy.orm import Session, aliased

from domain.exchange import PointExchange
from models import Match, Player


def insert_match(
    session: Session,
    *,
    winner_id: int,
    loser_id: int,
    exchange: PointExchange,
    match_date: datetime,
) -> Match:
    """Append one match row and flush to obtain its id."""
    match = Match(
        winner_id=winner_id,
        loser_id=loser_id,
        winner_tier_before=exchange.winner_tier_before.value,
        loser_tier_before=exchange.loser_tier_before.value,
        winner_points_before=exchange.winner_points_before,
        loser_points_before=exchange.loser_points_before,
        winner_points_change=exchange.winner_points_change,
        loser_points_change=exchange.loser_points_change,
        match_date=match_date,
    )
    session.add(match)
    session.flush()
    return match


def wins_subquery():
    return (
        select(Match.winner_id.label("player_id"), func.count(Match.id).label("win_count"))
        .group_by(Match.winner_id)
        .subquery("wins")
    )


def losses_subquery():
    return (
        select(Match.loser_id.label("player_id"), func.count(Match.id).label("loss_count"))
        .group_by(Match.loser_id)
        .subquery("losses")
    )


def fetch_player_history(session: Session, player_id: int, *, limit: int) -> list[dict[str, Any]]:
    """Most recent matches of one player, described from that player's side."""
    winner = aliased(Player, name="winner")
    loser = aliased(Player, name="loser")
    won = Match.winner_id == player_id

    statement = (
        select(
            Match.id.label("match_id"),
            case((won, "win"), else_="loss").label("result"),
            case((won, loser.name), else_=winner.name).label("opponent_name"),
            case((won, Match.loser_tier_before), else_=Match.winner_tier_before).label("opponent_tier"),
            case((won, Match.winner_points_change), else_=Match.loser_points_change).label("point_change"),
            Match.match_date,
        )
        .join(winner, Match.winner_id == winner.id)
        .join(loser, Match.loser_id == loser.id)
        .where(or_(Match.winner_id == player_id, Match.loser_id == player_id))
        .order_by(Match.match_date.desc(), Match.id.desc())
        .limit(limit)
    )
    return [dict(row) for row in session.execute(statement).mappings().all()]


def fetch_recent_matches(session: Session, *, limit: int) -> list[dict[str, Any]]:
    """Newest matches first, with both player names."""
    winner = aliased(Player, name="winner")
    loser = aliased(Player, name="loser")

    statement = (
        select(
            Match.id.label("match_id"),
            Match.winner_id,
            winner.name.label("winner_name"),
            Match.winner_tier_before,
            Match.winner_points_change,
            Match.loser_id,
            loser.name.label("loser_name"),
            Match.loser_tier_before,
            Match.loser_points_change,
            Match.match_date,
        )
        .join(winner, Match.winner_id == winner.id)
        .join(loser, Match.loser_id == loser.id)
        .order_by(Match.match_date.desc(), Match.id.desc())
        .limit(limit)
    )
    return [dict(row) for row in session.execute(statement).mappings().all()]
