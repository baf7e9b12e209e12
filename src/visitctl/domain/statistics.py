"""Aggregate travel statistics over a visit collection.

Every function is pure and total: the empty collection yields zeros,
empty lists or ``None``. Collections that break the day-capacity rule
are counted as they are.

Rankings order by count, then by country code ascending, so equal
counts always come out in the same order.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from pydantic import BaseModel

from visitctl.domain.visits import CountryVisit, visits_in_year

MONTHS_PER_YEAR = 12


class CountryCount(BaseModel):
    """Number of visits recorded for one country."""

    model_config = {"frozen": True}

    country_code: str
    count: int


class RankedCountry(CountryCount):
    """A :class:`CountryCount` with its 1-based position in a ranking."""

    rank: int


class MonthlyCount(BaseModel):
    """Visit and distinct-country counts for one month (0 = January)."""

    model_config = {"frozen": True}

    month: int
    visit_count: int = 0
    unique_countries: int = 0


class VisitSummary(BaseModel):
    """Headline figures plus the top of the most-visited ranking."""

    model_config = {"frozen": True}

    year: int | None = None
    total_countries: int
    total_visits: int
    average_visits_per_country: float
    most_visited: list[RankedCountry]


def calculate_total_countries_visited(visits: Iterable[CountryVisit]) -> int:
    return len({v.country_code for v in visits})


def calculate_total_visits(visits: Sequence[CountryVisit]) -> int:
    return len(visits)


def calculate_visits_by_country(visits: Iterable[CountryVisit]) -> dict[str, int]:
    """Visit count per country code, keyed in first-encounter order."""
    return dict(Counter(visit.country_code for visit in visits))


def _ranked(visits: Iterable[CountryVisit], *, descending: bool, limit: int) -> list[CountryCount]:
    counts = calculate_visits_by_country(visits)
    sign = -1 if descending else 1
    ordered = sorted(counts.items(), key=lambda item: (sign * item[1], item[0]))
    if limit > 0:
        ordered = ordered[:limit]
    return [CountryCount(country_code=code, count=count) for code, count in ordered]


def calculate_most_visited_countries(
    visits: Iterable[CountryVisit], limit: int = 5
) -> list[CountryCount]:
    """Countries by visit count, highest first. ``limit <= 0`` returns all."""
    return _ranked(visits, descending=True, limit=limit)


def calculate_least_visited_countries(
    visits: Iterable[CountryVisit], limit: int = 5
) -> list[CountryCount]:
    """Countries by visit count, lowest first. ``limit <= 0`` returns all."""
    return _ranked(visits, descending=False, limit=limit)


def calculate_monthly_breakdown(visits: Iterable[CountryVisit], year: int) -> list[MonthlyCount]:
    """Exactly twelve entries (months 0-11) for *year*; other years are ignored."""
    totals = [0] * MONTHS_PER_YEAR
    countries: list[set[str]] = [set() for _ in range(MONTHS_PER_YEAR)]
    for visit in visits_in_year(visits, year):
        month = visit.date.month - 1
        totals[month] += 1
        countries[month].add(visit.country_code)
    return [
        MonthlyCount(month=month, visit_count=totals[month], unique_countries=len(countries[month]))
        for month in range(MONTHS_PER_YEAR)
    ]


def calculate_average_visits_per_country(visits: Sequence[CountryVisit]) -> float:
    """Total visits divided by distinct countries, unrounded; 0 when empty."""
    total_countries = calculate_total_countries_visited(visits)
    if total_countries == 0:
        return 0.0
    return len(visits) / total_countries


def find_most_visited_country(visits: Iterable[CountryVisit]) -> CountryCount | None:
    top = calculate_most_visited_countries(visits, 1)
    return top[0] if top else None


def rank_countries(counts: Iterable[CountryCount]) -> list[RankedCountry]:
    """Attach 1-based positions to an already ordered ranking."""
    return [
        RankedCountry(country_code=c.country_code, count=c.count, rank=position)
        for position, c in enumerate(counts, start=1)
    ]


def summarize(
    visits: Sequence[CountryVisit],
    *,
    year: int | None = None,
    limit: int = 5,
) -> VisitSummary:
    """Statistics panel figures, optionally restricted to *year* first."""
    scoped = visits_in_year(visits, year) if year is not None else tuple(visits)
    return VisitSummary(
        year=year,
        total_countries=calculate_total_countries_visited(scoped),
        total_visits=calculate_total_visits(scoped),
        average_visits_per_country=calculate_average_visits_per_country(scoped),
        most_visited=rank_countries(calculate_most_visited_countries(scoped, limit)),
    )
