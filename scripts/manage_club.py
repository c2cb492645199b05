#!/usr/bin/env python3
"""Operator commands for players, matches, archives and tournament badges."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Annotated, TypeVar

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from config import DEFAULT_CONFIG_PATH, load_club_config
from domain.common import ById, ByName, PlayerRef
from domain.engine import RatingEngine
from domain.errors import ClubError
from logger import setup_logging

T = TypeVar("T")

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Chess club ladder administration.",
)

ConfigOption = Annotated[
    Path,
    typer.Option("--config", help="Path to the club TOML config."),
]
DbUrlOption = Annotated[
    str | None,
    typer.Option("--db-url", help="Database URL. Overrides [database].url."),
]


@contextmanager
def _open_engine(config_path: Path, db_url: str | None, *, create_schema: bool = False) -> Iterator[RatingEngine]:
    config = load_club_config(config_path, allow_missing=True)
    setup_logging(config.log_level)
    rating_engine = RatingEngine.from_config(config, db_url=db_url, create_schema=create_schema)
    try:
        yield rating_engine
    finally:
        rating_engine.close()


def _run(action: Callable[[], T]) -> T:
    try:
        return action()
    except ClubError as exc:
        typer.echo(f"error: {exc.message}", err=True)
        raise typer.Exit(code=1) from exc


def _player_ref(value: str) -> PlayerRef:
    """Numeric values are ids, anything else is a player name."""
    stripped = value.strip()
    if stripped.isdigit():
        return ById(int(stripped))
    return ByName(stripped)


@app.command("init-db")
def init_db(config_path: ConfigOption = DEFAULT_CONFIG_PATH, db_url: DbUrlOption = None) -> None:
    """Create the club tables and indexes if they do not exist."""
    with _open_engine(config_path, db_url, create_schema=True) as rating_engine:
        typer.echo(f"schema ready dialect={rating_engine.engine.dialect.name}")


@app.command("add-player")
def add_player(
    name: Annotated[str, typer.Argument(help="Display name, unique among active players.")],
    points: Annotated[int, typer.Option("--points", help="Initial points (0-49).")] = 0,
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    with _open_engine(config_path, db_url) as rating_engine:
        player = _run(lambda: rating_engine.players.create_player(name, points))
    typer.echo(f"added id={player.id} name={player.name} points={player.points} tier={player.tier.value}")


@app.command("remove-player")
def remove_player(
    player_id: Annotated[int, typer.Argument(help="Player id.")],
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    with _open_engine(config_path, db_url) as rating_engine:
        player = _run(lambda: rating_engine.players.remove_player(player_id))
    typer.echo(f"removed id={player.id} name={player.name}")


@app.command("record-match")
def record_match(
    winner: Annotated[str, typer.Argument(help="Winner id or name.")],
    loser: Annotated[str, typer.Argument(help="Loser id or name.")],
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    with _open_engine(config_path, db_url) as rating_engine:
        result = _run(lambda: rating_engine.matches.record_match(_player_ref(winner), _player_ref(loser)))
    typer.echo(result.message)
    for side, snapshot in (("winner", result.winner), ("loser", result.loser)):
        typer.echo(f"{side} id={snapshot.id} name={snapshot.name} points={snapshot.points} tier={snapshot.tier.value}")


@app.command("create-archive")
def create_archive(
    month: Annotated[str, typer.Argument(help="Archive month as YYYY-MM.")],
    first_id: Annotated[int, typer.Argument(help="First place player id.")],
    second_id: Annotated[int, typer.Argument(help="Second place player id.")],
    third_id: Annotated[int, typer.Argument(help="Third place player id.")],
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    with _open_engine(config_path, db_url) as rating_engine:
        archive = _run(lambda: rating_engine.archives.create_archive(month, first_id, second_id, third_id))
    typer.echo(f"archived month={archive.archive_month} id={archive.id}")


@app.command("delete-archive")
def delete_archive(
    archive_id: Annotated[int, typer.Argument(help="Archive id.")],
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    with _open_engine(config_path, db_url) as rating_engine:
        archive_month = _run(lambda: rating_engine.archives.delete_archive(archive_id))
    typer.echo(f"deleted archive month={archive_month}")


@app.command("add-badge")
def add_badge(
    player: Annotated[str, typer.Argument(help="Player id or name.")],
    tournament_name: Annotated[str, typer.Option("--tournament", help="Tournament name.")] = "Tournament",
    tournament_date: Annotated[
        str | None,
        typer.Option("--date", help="Tournament date as YYYY-MM-DD. Defaults to today."),
    ] = None,
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    try:
        badge_date = date.fromisoformat(tournament_date) if tournament_date else None
    except ValueError as exc:
        raise typer.BadParameter("--date must use YYYY-MM-DD", param_hint="--date") from exc

    with _open_engine(config_path, db_url) as rating_engine:
        badge = _run(lambda: rating_engine.tournaments.add_badge(_player_ref(player), tournament_name, badge_date))
    typer.echo(f"badge added player={badge['name']} tournament={badge['tournament_name']} date={badge['tournament_date']}")


@app.command("clear-badges")
def clear_badges(
    yes: Annotated[bool, typer.Option("--yes", help="Skip the confirmation prompt.")] = False,
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    if not yes:
        typer.confirm("Remove every tournament winner badge?", abort=True)
    with _open_engine(config_path, db_url) as rating_engine:
        removed = _run(rating_engine.tournaments.clear_badges)
    typer.echo(f"cleared badges={removed}")


if __name__ == "__main__":
    app()
