"""Rating engine domain modules."""

from domain.common import ById, ByName, PlayerRef, PlayerSnapshot
from domain.errors import ClubError, ConflictError, NotFoundError, StorageError, ValidationError
from domain.tiers import Tier, tier_for_points

__all__ = [
    "ById",
    "ByName",
    "ClubError",
    "ConflictError",
    "NotFoundError",
    "PlayerRef",
    "PlayerSnapshot",
    "StorageError",
    "Tier",
    "ValidationError",
    "tier_for_points",
]
