"""Read-only ranked projections over players and the match ledger."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from domain.errors import NotFoundError, ValidationError
from domain.tiers import tier_for_points
from domain.unit_of_work import read_only
from repositories.leaderboard import fetch_leaderboard_rows
from repositories.matches import fetch_player_history, fetch_recent_matches

DEFAULT_HISTORY_LIMIT = 20
DEFAULT_RECENT_LIMIT = 10
MAX_LIMIT = 100


def win_percentage(wins: int, losses: int) -> float:
    """Share of games won as a percentage with two decimals (half up); 0.0 without games."""
    total = wins + losses
    if total == 0:
        return 0.0
    percentage = Decimal(wins) / Decimal(total) * 100
    return float(percentage.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    id: int
    name: str
    points: int
    tier: str
    wins: int
    losses: int
    total_games: int
    win_percentage: float
    is_champion: bool
    is_tournament_winner: bool

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def _entry(rank: int, row: dict[str, Any]) -> LeaderboardEntry:
    wins = row["wins"]
    losses = row["losses"]
    return LeaderboardEntry(
        rank=rank,
        id=row["id"],
        name=row["name"],
        points=row["points"],
        tier=tier_for_points(row["points"]).value,
        wins=wins,
        losses=losses,
        total_games=wins + losses,
        win_percentage=win_percentage(wins, losses),
        is_champion=row["is_champion"],
        is_tournament_winner=row["is_tournament_winner"],
    )


def _validate_limit(limit: int, *, label: str = "limit") -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1 or limit > MAX_LIMIT:
        raise ValidationError(f"{label} must be between 1 and {MAX_LIMIT}")
    return limit


def _serialize_date(value: object) -> object:
    return value.isoformat() if isinstance(value, datetime) else value


class LeaderboardProjector:
    """Derives ranked views without mutating state."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
    ) -> None:
        self.session_factory = session_factory
        self.history_limit = history_limit
        self.recent_limit = recent_limit

    def leaderboard(self, *, limit: int | None = None) -> list[LeaderboardEntry]:
        """Active players ranked by points, then wins, then name."""
        with read_only(self.session_factory, "fetch leaderboard") as session:
            rows = fetch_leaderboard_rows(session, limit=limit)
        return [_entry(rank, row) for rank, row in enumerate(rows, start=1)]

    def top3(self) -> list[LeaderboardEntry]:
        return self.leaderboard(limit=3)

    def player_detail(self, player_id: int, *, limit: int | None = None) -> dict[str, Any]:
        history_limit = _validate_limit(limit if limit is not None else self.history_limit)

        with read_only(self.session_factory, "fetch player statistics") as session:
            rows = fetch_leaderboard_rows(session, player_id=player_id, active_only=False)
            if not rows:
                raise NotFoundError("Player not found")
            history = fetch_player_history(session, player_id, limit=history_limit)

        row = rows[0]
        wins = row["wins"]
        losses = row["losses"]
        return {
            "player": {
                "id": row["id"],
                "name": row["name"],
                "points": row["points"],
                "tier": tier_for_points(row["points"]).value,
                "wins": wins,
                "losses": losses,
                "total_games": wins + losses,
                "win_percentage": win_percentage(wins, losses),
                "is_active": row["is_active"],
                "is_champion": row["is_champion"],
                "is_tournament_winner": row["is_tournament_winner"],
            },
            "matchHistory": [
                {**match, "match_date": _serialize_date(match["match_date"])} for match in history
            ],
        }

    def recent_matches(self, limit: int | None = None) -> list[dict[str, Any]]:
        recent_limit = _validate_limit(limit if limit is not None else self.recent_limit)
        with read_only(self.session_factory, "fetch recent matches") as session:
            matches = fetch_recent_matches(session, limit=recent_limit)
        return [{**match, "match_date": _serialize_date(match["match_date"])} for match in matches]
