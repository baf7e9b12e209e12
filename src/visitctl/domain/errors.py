"""Validation errors raised by the range expander and ledger helpers.

Each error carries a stable ``code`` that the service layer copies into
``ServiceError.code``. None of them is retryable: they describe bad input,
not transient conditions.
"""

from __future__ import annotations

from datetime import date
from typing import Any


class VisitError(Exception):
    """Base class for visit validation failures."""

    code = "VISIT_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> dict[str, Any]:
        return {}


class MissingSelection(VisitError):
    """No country or no start date was supplied."""

    code = "MISSING_SELECTION"

    def __init__(self, field: str) -> None:
        super().__init__(f"Please select a {field}")
        self.field = field

    @property
    def detail(self) -> dict[str, Any]:
        return {"field": self.field}


class InvalidRange(VisitError):
    """End date falls before the start date."""

    code = "INVALID_RANGE"

    def __init__(self, start: date, end: date) -> None:
        super().__init__("End date cannot be before start date")
        self.start = start
        self.end = end

    @property
    def detail(self) -> dict[str, Any]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


class DayAtCapacity(VisitError):
    """A day in the requested range already holds the maximum number of visits."""

    code = "DAY_AT_CAPACITY"

    def __init__(self, day: date, capacity: int) -> None:
        super().__init__(
            f"Maximum {capacity} countries per day exceeded for {day.isoformat()}"
        )
        self.day = day
        self.capacity = capacity

    @property
    def detail(self) -> dict[str, Any]:
        return {"date": self.day.isoformat(), "capacity": self.capacity}


class DuplicateVisitId(VisitError):
    """Merging would place two records with the same id in one ledger."""

    code = "DUPLICATE_ID"

    def __init__(self, visit_id: str) -> None:
        super().__init__(f"Visit id already present in ledger: {visit_id}")
        self.visit_id = visit_id

    @property
    def detail(self) -> dict[str, Any]:
        return {"id": self.visit_id}
