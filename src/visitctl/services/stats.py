"""StatsService — read-only statistics over the ledger.

Each call takes one snapshot of the journal and hands it to the pure
aggregators in :mod:`visitctl.domain.statistics`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from visitctl.domain.statistics import (
    calculate_least_visited_countries,
    calculate_monthly_breakdown,
    calculate_most_visited_countries,
    calculate_total_visits,
    calculate_visits_by_country,
    rank_countries,
    summarize,
)
from visitctl.domain.visits import visits_in_year
from visitctl.services.base import BaseService
from visitctl.services.result import ServiceResult

if TYPE_CHECKING:
    from visitctl.domain.visits import CountryVisit
    from visitctl.infrastructure.journal import Journal


class StatsService(BaseService):
    """Counts, rankings, and monthly breakdowns."""

    def __init__(self, journal: Journal, *, default_limit: int = 5) -> None:
        super().__init__(journal)
        self._default_limit = default_limit

    def _scoped(self, year: int | None) -> tuple[CountryVisit, ...]:
        visits = self._journal.snapshot()
        return visits_in_year(visits, year) if year is not None else visits

    def summary(self, *, year: int | None = None, limit: int | None = None) -> ServiceResult:
        """Totals, average, and the top of the most-visited ranking."""
        top = self._default_limit if limit is None else limit
        result = summarize(self._journal.snapshot(), year=year, limit=top)
        return ServiceResult(ok=True, op="summary", data=result.model_dump())

    def ranking(
        self,
        *,
        least: bool = False,
        year: int | None = None,
        limit: int | None = None,
    ) -> ServiceResult:
        """Most (default) or least visited countries with 1-based ranks."""
        top = self._default_limit if limit is None else limit
        visits = self._scoped(year)
        if least:
            counts = calculate_least_visited_countries(visits, top)
        else:
            counts = calculate_most_visited_countries(visits, top)
        items = [r.model_dump() for r in rank_countries(counts)]
        return ServiceResult(
            ok=True,
            op="ranking",
            data={
                "order": "least" if least else "most",
                "year": year,
                "count": len(items),
                "items": items,
            },
        )

    def monthly(self, year: int) -> ServiceResult:
        """Twelve month entries for *year*."""
        months = calculate_monthly_breakdown(self._journal.snapshot(), year)
        return ServiceResult(
            ok=True,
            op="monthly",
            data={
                "year": year,
                "total_visits": sum(m.visit_count for m in months),
                "months": [m.model_dump() for m in months],
            },
        )

    def by_country(self, *, year: int | None = None) -> ServiceResult:
        """Visit count per country code."""
        visits = self._scoped(year)
        return ServiceResult(
            ok=True,
            op="by_country",
            data={
                "year": year,
                "total_visits": calculate_total_visits(visits),
                "countries": calculate_visits_by_country(visits),
            },
        )
