"""Error taxonomy raised by the rating engine."""

from __future__ import annotations


class ClubError(Exception):
    """Base class for rating engine errors; ``message`` is safe to show callers."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ClubError):
    """Bad or missing input; nothing was changed."""


class NotFoundError(ClubError):
    """A referenced player, archive or badge does not exist."""


class ConflictError(ClubError):
    """A uniqueness rule was violated (player name, archive month, badge)."""


class StorageError(ClubError):
    """The store failed (connectivity, transaction); internals stay in ``__cause__``."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Failed to {operation}")
        self.operation = operation


__all__ = [
    "ClubError",
    "ConflictError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
