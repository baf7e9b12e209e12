"""SQLite engine and schema for the visit ledger via SQLAlchemy Core."""

from visitctl.infrastructure.database.engine import (
    READ_ONLY,
    create_db_engine,
    init_database,
)
from visitctl.infrastructure.database.schema import metadata, visits

__all__ = [
    "READ_ONLY",
    "create_db_engine",
    "init_database",
    "metadata",
    "visits",
]
