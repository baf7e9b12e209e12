"""SQLAlchemy Core table definitions for the visit ledger.

``seq`` preserves append order; ``id`` is the visit's own identifier.
Days are stored as ISO-8601 text (``YYYY-MM-DD``).
"""

from __future__ import annotations

from sqlalchemy import Column, Index, Integer, MetaData, Table, Text

metadata = MetaData()

visits = Table(
    "visits",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("id", Text, nullable=False, unique=True),
    Column("country_code", Text, nullable=False),
    Column("day", Text, nullable=False),
    Index("ix_visits_day", "day"),
)
