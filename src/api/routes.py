"""Route table: one view per rating engine operation."""

from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, current_app, request
from sqlalchemy.exc import SQLAlchemyError

from api.auth import admin_required
from api.responses import fail, ok
from domain.common import parse_player_id, player_ref_from_payload
from domain.engine import RatingEngine
from domain.errors import ValidationError

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__, url_prefix="/api")


def _engine() -> RatingEngine:
    return current_app.extensions["rating_engine"]


def _body() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _query_int(name: str) -> int | None:
    raw = request.args.get(name)
    if raw is None or not raw.strip().isdigit():
        return None
    return int(raw)


@api.post("/admin/login")
def admin_login():
    tokens = current_app.extensions["admin_tokens"]
    if not tokens.check_password(_body().get("password")):
        return fail("Invalid password", 401)
    return ok(token=tokens.issue(), message="Authentication successful")


# Leaderboard


@api.get("/leaderboard")
def leaderboard():
    entries = _engine().leaderboard.leaderboard()
    return ok(players=[entry.as_dict() for entry in entries])


@api.get("/leaderboard/top3")
def leaderboard_top3():
    entries = _engine().leaderboard.top3()
    return ok(top3=[entry.as_dict() for entry in entries])


@api.get("/player/<raw_id>/stats")
def player_stats(raw_id: str):
    player_id = parse_player_id(raw_id)
    detail = _engine().leaderboard.player_detail(player_id)
    return ok(**detail)


@api.get("/matches/recent")
def recent_matches():
    matches = _engine().leaderboard.recent_matches(_query_int("limit"))
    return ok(matches=matches)


# Players


@api.post("/admin/players")
@admin_required
def add_player():
    body = _body()
    player = _engine().players.create_player(body.get("name"), body.get("points", 0))
    return ok(message=f"Player {player.name} added successfully!", player=player.as_dict())


@api.get("/admin/players")
@admin_required
def list_players():
    order_by = request.args.get("order_by", "name")
    return ok(players=_engine().players.list_players(order_by))


@api.delete("/admin/players/<raw_id>")
@admin_required
def remove_player(raw_id: str):
    player = _engine().players.remove_player(parse_player_id(raw_id))
    return ok(message=f"Player {player.name} removed successfully!")


# Matches


@api.post("/admin/matches")
@admin_required
def record_match():
    body = _body()
    winner_ref = player_ref_from_payload(body, id_key="winnerId", name_key="winnerName")
    loser_ref = player_ref_from_payload(body, id_key="loserId", name_key="loserName")
    if winner_ref is None or loser_ref is None:
        raise ValidationError("Either winner/loser names or IDs are required")
    result = _engine().matches.record_match(winner_ref, loser_ref)
    return ok(**result.as_dict())


# Archives


@api.get("/archives")
def list_archives():
    return ok(archives=_engine().archives.list_archives())


@api.post("/admin/archives")
@admin_required
def create_archive():
    body = _body()
    archive = _engine().archives.create_archive(
        body.get("month"),
        body.get("firstPlaceId"),
        body.get("secondPlaceId"),
        body.get("thirdPlaceId"),
    )
    return ok(
        message=f"Archive for {archive.archive_month} created successfully!",
        archive=archive.as_dict(),
    )


@api.delete("/admin/archives/<raw_id>")
@admin_required
def delete_archive(raw_id: str):
    archive_month = _engine().archives.delete_archive(parse_player_id(raw_id, label="archive"))
    return ok(message=f"Archive for {archive_month} deleted successfully!")


# Tournament badges


@api.get("/tournament-winners")
def list_tournament_winners():
    return ok(tournament_winners=_engine().tournaments.list_badges())


@api.patch("/admin/players/<raw_id>/tournament-winner")
@admin_required
def update_tournament_winner(raw_id: str):
    player_id = parse_player_id(raw_id)
    body = _body()
    _engine().tournaments.set_tournament_winner(
        player_id,
        bool(body.get("isTournamentWinner")),
        body.get("tournamentName"),
    )
    return ok(message="Tournament winner status updated!")


@api.post("/admin/tournament-winners")
@admin_required
def add_tournament_winner():
    body = _body()
    player_ref = player_ref_from_payload(body, id_key="playerId", name_key="playerName")
    if player_ref is None:
        raise ValidationError("Player ID or name is required")
    badge = _engine().tournaments.add_badge(player_ref, body.get("tournamentName"))
    return ok(message="Tournament winner badge added successfully!", tournament_winner=badge)


@api.delete("/admin/tournament-winners/<raw_id>")
@admin_required
def remove_tournament_winner(raw_id: str):
    _engine().tournaments.remove_badges_for_player(parse_player_id(raw_id))
    return ok(message="Tournament winner badge removed successfully!")


@api.delete("/admin/tournament-winners")
@admin_required
def clear_tournament_winners():
    removed = _engine().tournaments.clear_badges()
    return ok(message=f"Cleared {removed} tournament winner badges", removed=removed)


# Utility


@api.get("/health")
def health():
    try:
        server_time = _engine().server_time()
    except SQLAlchemyError as exc:
        logger.exception("Health check failed")
        body: dict[str, Any] = {"success": False, "status": "unhealthy", "database": "disconnected"}
        if current_app.config.get("ENVIRONMENT") == "development":
            body["error"] = str(exc)
        return body, 500
    return ok(
        status="healthy",
        database="connected",
        server_time=server_time.isoformat() if hasattr(server_time, "isoformat") else str(server_time),
    )
