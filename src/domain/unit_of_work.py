"""Transaction boundaries shared by the engine components."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from domain.errors import ClubError, StorageError

logger = logging.getLogger(__name__)


@contextmanager
def transaction(session_factory: sessionmaker[Session], operation: str) -> Iterator[Session]:
    """Run the block in one transaction: commit on success, roll back on any error.

    Engine errors pass through unchanged; store failures surface as ``StorageError``
    with the driver exception chained. ``IntegrityError`` must be handled inside
    the block by callers that map it to a ``ConflictError``.
    """
    with session_factory() as session:
        try:
            yield session
            session.commit()
        except ClubError:
            session.rollback()
            raise
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Storage failure during %s", operation)
            raise StorageError(operation) from exc
        except Exception:
            session.rollback()
            raise


@contextmanager
def read_only(session_factory: sessionmaker[Session], operation: str) -> Iterator[Session]:
    """Session for read paths; nothing is committed."""
    with session_factory() as session:
        try:
            yield session
        except SQLAlchemyError as exc:
            logger.exception("Storage failure during %s", operation)
            raise StorageError(operation) from exc
        finally:
            session.rollback()
