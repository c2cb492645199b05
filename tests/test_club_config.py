"""Tests for club config loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from config import DEFAULT_CONFIG_PATH, DEFAULT_DB_URL, load_club_config


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "club.toml"
    path.write_text(body, encoding="utf-8")
    return path


def test_load_default_club_config() -> None:
    config = load_club_config(DEFAULT_CONFIG_PATH, environ={})

    assert config.file_path == DEFAULT_CONFIG_PATH
    assert config.server.port == 3000
    assert config.server.is_development
    assert config.rating.points_per_win == 1
    assert config.rating.upset_bonus_per_tier == 0
    assert config.leaderboard.history_limit == 20
    assert config.auth.token_max_age_seconds == 8 * 3600


def test_load_club_config_from_file(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
[database]
url = "sqlite:///club.db"

[server]
port = 8080
environment = "Production"

[rating]
points_per_win = 2
upset_bonus_per_tier = 1

[logging]
level = "debug"
""",
    )

    config = load_club_config(path, environ={})

    assert config.database.url == "sqlite:///club.db"
    assert config.server.port == 8080
    assert config.server.environment == "production"
    assert not config.server.is_development
    assert config.rating.points_per_win == 2
    assert config.rating.upset_bonus_per_tier == 1
    assert config.log_level == "DEBUG"


def test_environment_overrides_file_values(tmp_path: Path) -> None:
    path = _write_config(tmp_path, '[server]\nport = 8080\n')

    config = load_club_config(
        path,
        environ={"CLUB_PORT": "9000", "CLUB_DB_URL": "sqlite:///other.db", "CLUB_ADMIN_PASSWORD": ""},
    )

    assert config.server.port == 9000
    assert config.database.url == "sqlite:///other.db"
    assert config.auth.admin_password == "admin123"


def test_missing_file_raises_unless_allowed(tmp_path: Path) -> None:
    missing = tmp_path / "absent.toml"

    with pytest.raises(FileNotFoundError):
        load_club_config(missing, environ={})

    config = load_club_config(missing, environ={}, allow_missing=True)
    assert config.file_path is None
    assert config.database.url == DEFAULT_DB_URL


@pytest.mark.parametrize(
    "body,message",
    [
        ("[server]\nport = 0\n", r"\[server\].port"),
        ('[server]\nenvironment = "staging"\n', r"\[server\].environment"),
        ("[rating]\npoints_per_win = 0\n", r"\[rating\].points_per_win"),
        ("[rating]\nupset_bonus_per_tier = -1\n", r"\[rating\].upset_bonus_per_tier"),
        ("[leaderboard]\nhistory_limit = 0\n", r"\[leaderboard\].history_limit"),
        ("[leaderboard]\nhistory_limit = 200\n", r"\[leaderboard\].history_limit must be between 1 and 100"),
        ("[leaderboard]\nrecent_matches_limit = 101\n", r"\[leaderboard\].recent_matches_limit"),
        ('[server]\nport = "eighty"\n', r"\[server\].port must be an integer"),
        ("[database]\npool_size = true\n", r"\[database\].pool_size"),
        ('[logging]\nlevel = "LOUD"\n', r"\[logging\].level"),
        ('[auth]\nsecret_key = ""\n', r"\[auth\].secret_key"),
    ],
)
def test_invalid_values_raise(tmp_path: Path, body: str, message: str) -> None:
    path = _write_config(tmp_path, body)

    with pytest.raises(ValueError, match=message):
        load_club_config(path, environ={})


def test_malformed_environment_override_names_the_key(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "")

    with pytest.raises(ValueError, match=r"\[server\].port must be an integer, got 'abc'"):
        load_club_config(path, environ={"CLUB_PORT": "abc"})


def test_leaderboard_limit_at_maximum_is_accepted(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "[leaderboard]\nhistory_limit = 100\nrecent_matches_limit = 100\n")

    config = load_club_config(path, environ={})

    assert config.leaderboard.history_limit == 100
    assert config.leaderboard.recent_matches_limit == 100
