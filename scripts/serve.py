#!/usr/bin/env python3
"""Run the chess club JSON API."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from api import create_app
from config import DEFAULT_CONFIG_PATH, load_club_config
from domain.engine import RatingEngine
from logger import setup_logging

logger = logging.getLogger("serve")

app = typer.Typer(
    add_completion=False,
    help="Serve the chess club API.",
)


@app.command()
def serve(
    config_path: Annotated[
        Path,
        typer.Option("--config", help="Path to the club TOML config."),
    ] = DEFAULT_CONFIG_PATH,
    db_url: Annotated[
        str | None,
        typer.Option("--db-url", help="Database URL. Overrides [database].url."),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", help="Port to listen on. Overrides [server].port."),
    ] = None,
) -> None:
    """Create missing tables, then serve until interrupted."""
    config = load_club_config(config_path, allow_missing=True)
    setup_logging(config.log_level)

    rating_engine = RatingEngine.from_config(config, db_url=db_url, create_schema=True)
    flask_app = create_app(rating_engine, config)
    listen_port = port or config.server.port

    logger.info("Chess club API running on port %s", listen_port)
    logger.info("Environment: %s", config.server.environment)
    logger.info("Health check: http://localhost:%s/api/health", listen_port)
    try:
        flask_app.run(
            host=config.server.host,
            port=listen_port,
            debug=False,
            use_reloader=False,
        )
    finally:
        rating_engine.close()


if __name__ == "__main__":
    app()
