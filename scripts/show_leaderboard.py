#!/usr/bin/env python3
"""Print the current ladder standings."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from config import DEFAULT_CONFIG_PATH, load_club_config
from domain.engine import RatingEngine

app = typer.Typer(
    add_completion=False,
    help="Show the club leaderboard.",
)


@app.command()
def show_leaderboard(
    top_n: Annotated[
        int,
        typer.Option("--top-n", help="Number of players to print. Use 0 for everyone."),
    ] = 0,
    config_path: Annotated[
        Path,
        typer.Option("--config", help="Path to the club TOML config."),
    ] = DEFAULT_CONFIG_PATH,
    db_url: Annotated[
        str | None,
        typer.Option("--db-url", help="Database URL. Overrides [database].url."),
    ] = None,
) -> None:
    """Print active players in ladder order."""
    if top_n < 0:
        raise typer.BadParameter("--top-n must be >= 0")

    config = load_club_config(config_path, allow_missing=True)
    rating_engine = RatingEngine.from_config(config, db_url=db_url)
    try:
        entries = rating_engine.leaderboard.leaderboard(limit=top_n or None)
    finally:
        rating_engine.close()

    if not entries:
        typer.echo("No active players.")
        return

    for entry in entries:
        badges = ("C" if entry.is_champion else " ") + ("T" if entry.is_tournament_winner else " ")
        typer.echo(
            f"{entry.rank:3d}. {entry.name:<24} {badges} "
            f"points={entry.points:2d} tier={entry.tier:<6} "
            f"W-L={entry.wins}-{entry.losses} win%={entry.win_percentage:6.2f}"
        )


if __name__ == "__main__":
    app()
