"""CountryVisit and pure ledger helpers.

A ledger is any ordered sequence of :class:`CountryVisit`. Helpers here
never mutate their input; they return new tuples and leave it to the
caller to swap its stored reference.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, Field, field_validator

from visitctl.domain.errors import DuplicateVisitId

DAY_CAPACITY = 2


def as_day(value: dt.date) -> dt.date:
    """Drop any time-of-day component, returning a plain calendar day."""
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def same_day(a: dt.date, b: dt.date) -> bool:
    """True when *a* and *b* share year, month and day-of-month."""
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


class CountryVisit(BaseModel):
    """Presence in one country on one calendar day."""

    model_config = {"frozen": True}

    id: str = Field(min_length=1)
    country_code: str = Field(min_length=1)
    date: dt.date

    @field_validator("country_code")
    @classmethod
    def _strip_code(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            msg = "country_code must not be blank"
            raise ValueError(msg)
        return stripped

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_datetime(cls, value: object) -> object:
        if isinstance(value, dt.datetime):
            return value.date()
        return value


def visits_on(day: dt.date, visits: Iterable[CountryVisit]) -> tuple[CountryVisit, ...]:
    """Visits recorded on *day*, in ledger order."""
    return tuple(v for v in visits if same_day(v.date, day))


def visits_in_year(visits: Iterable[CountryVisit], year: int) -> tuple[CountryVisit, ...]:
    """Visits whose date falls in *year*, in ledger order."""
    return tuple(v for v in visits if v.date.year == year)


def merge_visits(
    ledger: Sequence[CountryVisit],
    new_visits: Iterable[CountryVisit],
) -> tuple[CountryVisit, ...]:
    """Append-only union of *ledger* and *new_visits*.

    Raises:
        DuplicateVisitId: If any new record reuses an id already present.
    """
    seen = {v.id for v in ledger}
    merged = list(ledger)
    for visit in new_visits:
        if visit.id in seen:
            raise DuplicateVisitId(visit.id)
        seen.add(visit.id)
        merged.append(visit)
    return tuple(merged)


def without_visit(visits: Iterable[CountryVisit], visit_id: str) -> tuple[CountryVisit, ...]:
    """A new ledger with the record *visit_id* removed (no-op if absent)."""
    return tuple(v for v in visits if v.id != visit_id)
