"""ORM models."""

from models.archive import MonthlyArchive
from models.base import Base
from models.match import Match
from models.player import Player
from models.tournament_winner import TournamentWinner

__all__ = [
    "Base",
    "Match",
    "MonthlyArchive",
    "Player",
    "TournamentWinner",
]
