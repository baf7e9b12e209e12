"""Day-capacity rules and range expansion.

Turns a ``(country_code, start, end)`` request plus the current ledger
into new :class:`CountryVisit` records, one per day of the inclusive
range, or raises a :class:`VisitError`.

INVARIANT: At most :data:`DAY_CAPACITY` visits per calendar day. Checked
against the ledger as it stood before the request; days inside the same
request never count against each other.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from visitctl.domain.errors import DayAtCapacity, InvalidRange, MissingSelection
from visitctl.domain.ids import IdFactory, generate_visit_id
from visitctl.domain.visits import DAY_CAPACITY, CountryVisit, as_day, same_day


def expand_date_range(start: date, end: date) -> list[date]:
    """Every calendar day from *start* to *end*, both inclusive, ascending.

    Time-of-day components are discarded before expanding.

    Raises:
        InvalidRange: If *end* is before *start*.
    """
    first = as_day(start)
    last = as_day(end)
    if last < first:
        raise InvalidRange(first, last)
    span = (last - first).days
    return [first + timedelta(days=offset) for offset in range(span + 1)]


def can_add_visit_to_date(day: date, existing_visits: Iterable[CountryVisit]) -> bool:
    """True iff fewer than :data:`DAY_CAPACITY` visits already fall on *day*.

    The country already recorded is irrelevant: the limit is on count,
    not on duplicates.
    """
    target = as_day(day)
    taken = sum(1 for v in existing_visits if same_day(v.date, target))
    return taken < DAY_CAPACITY


def plan_visits(
    country_code: str | None,
    start: date | None,
    end: date | None,
    ledger: Iterable[CountryVisit],
    *,
    id_factory: IdFactory = generate_visit_id,
) -> list[CountryVisit]:
    """Validate a request and build one new visit per day of the range.

    All-or-nothing: if any day is at capacity nothing is built. *end*
    of ``None`` means a single-day request.

    Args:
        country_code: Country to record. Blank or ``None`` is rejected.
        start: First day of the range.
        end: Last day of the range (inclusive), or ``None``.
        ledger: Already committed visits, read but never modified.
        id_factory: Source of fresh visit ids.

    Raises:
        MissingSelection: No country or no start date.
        InvalidRange: *end* before *start*.
        DayAtCapacity: The first day in range order that is already full.
    """
    code = (country_code or "").strip()
    if not code:
        raise MissingSelection("country")
    if start is None:
        raise MissingSelection("date")

    days = expand_date_range(start, end if end is not None else start)

    committed = tuple(ledger)
    for day in days:
        if not can_add_visit_to_date(day, committed):
            raise DayAtCapacity(day, DAY_CAPACITY)

    return [CountryVisit(id=id_factory(), country_code=code, date=day) for day in days]
