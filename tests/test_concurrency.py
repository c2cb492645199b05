"""Concurrent writers keep the ledger, points and archives consistent."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from sqlalchemy import func, select

from domain.common import ById
from domain.engine import RatingEngine
from domain.errors import ConflictError
from models import Match, MonthlyArchive, Player


def test_concurrent_matches_are_all_recorded(rating_engine: RatingEngine) -> None:
    hub = rating_engine.players.create_player("Hub", 20)
    opponents = [rating_engine.players.create_player(f"Opponent {index}", 20) for index in range(8)]

    def play(opponent_id: int) -> None:
        rating_engine.matches.record_match(ById(hub.id), ById(opponent_id))

    with ThreadPoolExecutor(max_workers=4) as pool:
        list(pool.map(play, [opponent.id for opponent in opponents]))

    with rating_engine.session_factory() as session:
        assert session.scalar(select(func.count(Match.id))) == len(opponents)
        assert session.get(Player, hub.id).points == 20 + len(opponents)
        for opponent in opponents:
            assert session.get(Player, opponent.id).points == 19
        points_before = sorted(session.scalars(select(Match.winner_points_before)).all())
    assert points_before == list(range(20, 20 + len(opponents)))


def test_concurrent_archives_for_one_month_allow_a_single_winner(rating_engine: RatingEngine) -> None:
    ids = [rating_engine.players.create_player(f"Podium {index}", 30 - index).id for index in range(3)]

    def archive(_attempt: int) -> str:
        try:
            rating_engine.archives.create_archive("2024-06", *ids)
        except ConflictError:
            return "conflict"
        return "ok"

    with ThreadPoolExecutor(max_workers=6) as pool:
        outcomes = list(pool.map(archive, range(6)))

    assert outcomes.count("ok") == 1
    assert outcomes.count("conflict") == 5
    with rating_engine.session_factory() as session:
        assert session.scalar(select(func.count(MonthlyArchive.id))) == 1
