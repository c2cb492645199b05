"""Persistence helpers for the players table."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from domain.common import ById, ByName, PlayerRef
from models import Player, TournamentWinner


def utc_now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def get_player(session: Session, player_id: int, *, active_only: bool = True) -> Player | None:
    """Load one player by id."""
    statement = select(Player).where(Player.id == player_id)
    if active_only:
        statement = statement.where(Player.is_active.is_(True))
    return session.execute(statement).scalar_one_or_none()


def get_player_by_name(session: Session, name: str) -> Player | None:
    """Load the active player holding ``name``."""
    statement = select(Player).where(Player.name == name, Player.is_active.is_(True))
    return session.execute(statement).scalar_one_or_none()


def resolve_player_ref(session: Session, ref: PlayerRef) -> Player | None:
    """Resolve an id or name reference to an active player row."""
    if isinstance(ref, ById):
        return get_player(session, ref.player_id)
    if isinstance(ref, ByName):
        return get_player_by_name(session, ref.name.strip())
    raise TypeError(f"Unsupported player reference: {ref!r}")


def lock_players(
    session: Session,
    player_ids: Sequence[int],
    *,
    active_only: bool = True,
) -> dict[int, Player]:
    """Row-lock the given players in ascending id order and return them by id."""
    statement = (
        select(Player)
        .where(Player.id.in_(sorted(set(player_ids))))
        .order_by(Player.id)
        .with_for_update()
    )
    if active_only:
        statement = statement.where(Player.is_active.is_(True))
    # populate_existing refreshes rows already in the identity map with the locked values.
    rows = session.execute(statement.execution_options(populate_existing=True)).scalars().all()
    return {player.id: player for player in rows}


def insert_player(session: Session, *, name: str, points: int) -> Player:
    """Insert one active player and flush to obtain its id."""
    now = utc_now()
    player = Player(
        name=name,
        points=points,
        is_active=True,
        is_champion=False,
        created_at=now,
        updated_at=now,
    )
    session.add(player)
    session.flush()
    return player


def set_player_points(player: Player, points: int) -> None:
    player.points = points
    player.updated_at = utc_now()


def deactivate_player(player: Player) -> None:
    player.is_active = False
    player.updated_at = utc_now()


def mark_champions(players: Sequence[Player]) -> None:
    now = utc_now()
    for player in players:
        if not player.is_champion:
            player.is_champion = True
            player.updated_at = now


def tournament_winner_flag():
    """Correlated EXISTS expression: player holds at least one tournament badge."""
    return exists().where(TournamentWinner.player_id == Player.id).label("is_tournament_winner")


def list_active_players(session: Session, *, order_by: str = "name") -> list[tuple[Player, bool]]:
    """Active players with their tournament-winner flag."""
    if order_by == "name":
        ordering = (Player.name.asc(), Player.id.asc())
    elif order_by == "points":
        ordering = (Player.points.desc(), Player.name.asc(), Player.id.asc())
    else:
        raise ValueError(f"Unsupported player ordering: {order_by!r}")

    statement = (
        select(Player, tournament_winner_flag())
        .where(Player.is_active.is_(True))
        .order_by(*ordering)
    )
    return [(player, bool(flag)) for player, flag in session.execute(statement).all()]
