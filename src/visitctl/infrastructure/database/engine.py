"""Database engine setup for the SQLite ledger.

SQLAlchemy Core (not ORM): visitctl is a short-lived CLI process with a
single table, so session management buys nothing.

Transactions open with ``BEGIN IMMEDIATE`` so a read-check-insert cycle
holds the write lock from its first read. Two processes adding visits
to the same day therefore cannot both pass the capacity check.
Connections tagged with :data:`READ_ONLY` open a deferred ``BEGIN``
instead, so plain reads never wait on a writer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine

from visitctl.infrastructure.database.schema import metadata

READ_ONLY = "visitctl_read_only"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and immediate transactions."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        # Hand transaction control to SQLAlchemy's "begin" hook below.
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _begin(conn: Connection) -> None:
        if conn.get_execution_options().get(READ_ONLY):
            conn.exec_driver_sql("BEGIN")
        else:
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def init_database(db_path: Path) -> Engine:
    """Create the parent directory and the ``visits`` table if missing.

    Idempotent — safe to call on an existing ledger.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    return engine
