"""Shared fixtures: a throwaway SQLite store per test."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from config import ClubConfig
from db import create_db_engine
from domain.engine import RatingEngine


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'club.db'}"


@pytest.fixture
def rating_engine(db_url: str) -> Iterator[RatingEngine]:
    engine = RatingEngine.open(create_db_engine(db_url), create_schema=True)
    try:
        yield engine
    finally:
        engine.close()


@pytest.fixture
def club_config() -> ClubConfig:
    return ClubConfig(file_path=None)
