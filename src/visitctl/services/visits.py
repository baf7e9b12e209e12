"""VisitService — add, remove, and list ledger records.

``add_visits`` is the validated-add workflow: it reads the ledger,
plans the new records against that snapshot, and appends them, all in
one journal transaction. A rejected request writes nothing.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from visitctl.domain.calendar import plan_visits
from visitctl.domain.errors import VisitError
from visitctl.domain.ids import IdFactory, generate_visit_id
from visitctl.domain.visits import merge_visits, visits_in_year, visits_on
from visitctl.services._helpers import parse_day, visit_item
from visitctl.services.base import BaseService
from visitctl.services.result import ServiceResult

if TYPE_CHECKING:
    from visitctl.infrastructure.journal import Journal

logger = logging.getLogger(__name__)


def _coerce_day(value: date | str | None) -> date | None:
    if value is None or isinstance(value, date):
        return value
    if not value.strip():
        return None
    return parse_day(value)


class VisitService(BaseService):
    """Mutations and listings over the visit ledger."""

    def __init__(self, journal: Journal, *, id_factory: IdFactory = generate_visit_id) -> None:
        super().__init__(journal)
        self._id_factory = id_factory

    def add_visits(
        self,
        country_code: str | None,
        start: date | str | None,
        end: date | str | None = None,
    ) -> ServiceResult:
        """Record *country_code* on every day from *start* to *end* inclusive.

        Returns ``ok=False`` with code ``MISSING_SELECTION``,
        ``INVALID_DATE``, ``INVALID_RANGE`` or ``DAY_AT_CAPACITY`` when the
        request is rejected; the ledger is then left untouched.
        """
        op = "add_visits"
        try:
            start_day = _coerce_day(start)
            end_day = _coerce_day(end)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_DATE", str(exc))

        with self._journal.transaction() as txn:
            ledger = txn.load_visits()
            try:
                planned = plan_visits(
                    country_code, start_day, end_day, ledger, id_factory=self._id_factory
                )
                merge_visits(ledger, planned)
            except VisitError as exc:
                logger.debug("Rejected %s: %s", op, exc.message)
                return self._rejected(op, exc)
            txn.append_visits(planned)

        logger.debug("Recorded %d visit(s) for %s", len(planned), planned[0].country_code)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "country_code": planned[0].country_code,
                "start": planned[0].date.isoformat(),
                "end": planned[-1].date.isoformat(),
                "count": len(planned),
                "items": [visit_item(v) for v in planned],
            },
        )

    def remove_visit(self, visit_id: str) -> ServiceResult:
        """Delete a single record by id."""
        op = "remove_visit"
        with self._journal.transaction() as txn:
            removed = txn.delete_visit(visit_id)
        if not removed:
            return ServiceResult.failure(
                op, "NOT_FOUND", f"No visit with id {visit_id}", {"id": visit_id}
            )
        logger.debug("Removed visit %s", visit_id)
        return ServiceResult(ok=True, op=op, data={"id": visit_id})

    def list_visits(
        self,
        *,
        year: int | None = None,
        on: date | str | None = None,
    ) -> ServiceResult:
        """Ledger records, optionally restricted to a year and/or a single day."""
        op = "list_visits"
        try:
            day = _coerce_day(on)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_DATE", str(exc))

        selected = self._journal.snapshot()
        if year is not None:
            selected = visits_in_year(selected, year)
        if day is not None:
            selected = visits_on(day, selected)

        items = [visit_item(v) for v in selected]
        return ServiceResult(ok=True, op=op, data={"count": len(items), "items": items})
