"""Database engine/session helpers."""

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


def create_db_engine(
    db_url: str,
    *,
    pool_size: int | None = None,
    pool_recycle_seconds: int | None = None,
) -> Engine:
    """Create a SQLAlchemy engine with conservative defaults for the club store."""
    options: dict[str, object] = {"pool_pre_ping": True, "future": True}
    is_sqlite = db_url.startswith("sqlite")
    if is_sqlite:
        # Pooled connections move between request threads.
        options["connect_args"] = {"check_same_thread": False}
    else:
        if pool_size is not None:
            options["pool_size"] = pool_size
        if pool_recycle_seconds is not None:
            options["pool_recycle"] = pool_recycle_seconds

    engine = create_engine(db_url, **options)
    if is_sqlite:
        _configure_sqlite(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to the provided engine."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)


def _configure_sqlite(engine: Engine) -> None:
    # pysqlite opens transactions lazily; BEGIN IMMEDIATE takes the write lock up
    # front so read-then-write transactions serialise instead of deadlocking.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, _connection_record) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA busy_timeout=10000")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(connection) -> None:
        connection.exec_driver_sql("BEGIN IMMEDIATE")
