"""Journal — the SQLite-backed ledger injected into every service.

The journal owns the engine. :meth:`Journal.transaction` yields a
:class:`JournalTransaction` whose reads and writes share one immediate
transaction; it commits on normal exit and rolls back if the block
raises.

Rows are turned back into :class:`CountryVisit` on load, so a corrupt
day string fails loudly instead of silently skewing statistics.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select

from visitctl.domain.visits import CountryVisit
from visitctl.infrastructure.database.engine import READ_ONLY, init_database
from visitctl.infrastructure.database.schema import visits

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

    from sqlalchemy import Connection, Row
    from sqlalchemy.engine import Engine

    from visitctl.config.settings import VisitSettings

logger = logging.getLogger(__name__)


def _to_visit(row: Row[Any]) -> CountryVisit:
    return CountryVisit(id=row.id, country_code=row.country_code, date=row.day)


@dataclass
class JournalTransaction:
    """Active transaction over the ``visits`` table."""

    conn: Connection

    def load_visits(self) -> tuple[CountryVisit, ...]:
        """The full ledger in append order."""
        rows = self.conn.execute(
            select(visits.c.id, visits.c.country_code, visits.c.day).order_by(visits.c.seq)
        ).fetchall()
        return tuple(_to_visit(r) for r in rows)

    def append_visits(self, new_visits: Iterable[CountryVisit]) -> int:
        """Insert *new_visits* after the existing rows. Returns count inserted."""
        values = [
            {"id": v.id, "country_code": v.country_code, "day": v.date.isoformat()}
            for v in new_visits
        ]
        if not values:
            return 0
        self.conn.execute(insert(visits), values)
        return len(values)

    def delete_visit(self, visit_id: str) -> bool:
        """Remove one record by id. Returns False if no such record exists."""
        result = self.conn.execute(delete(visits).where(visits.c.id == visit_id))
        return result.rowcount > 0


class Journal:
    """Ledger storage at ``{data_root}/.visitctl/{ledger.filename}``."""

    def __init__(self, settings: VisitSettings) -> None:
        self.settings = settings
        self._engine: Engine | None = None

    @property
    def path(self) -> Path:
        return self.settings.ledger_path

    @property
    def engine(self) -> Engine:
        """The SQLAlchemy engine (database created lazily on first access)."""
        if self._engine is None:
            logger.debug("Opening ledger at %s", self.path)
            self._engine = init_database(self.path)
        return self._engine

    @contextmanager
    def transaction(self) -> Iterator[JournalTransaction]:
        """Yield a transaction that commits on success and rolls back on error."""
        with self.engine.begin() as conn:
            yield JournalTransaction(conn=conn)

    def snapshot(self) -> tuple[CountryVisit, ...]:
        """Read-only copy of the current ledger.

        Uses a deferred transaction, so it does not take the write lock.
        """
        with self.engine.connect() as conn:
            conn.execution_options(**{READ_ONLY: True})
            return JournalTransaction(conn=conn).load_visits()

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
