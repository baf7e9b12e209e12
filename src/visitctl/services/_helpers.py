"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import date
from typing import Any

from visitctl.domain.visits import CountryVisit


def parse_day(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string.

    Raises:
        ValueError: If *value* is not an ISO calendar date.
    """
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        msg = f"Invalid date: {value!r}. Use YYYY-MM-DD (e.g., 2024-04-01)"
        raise ValueError(msg) from exc


def visit_item(visit: CountryVisit) -> dict[str, Any]:
    """JSON-ready dict for one visit."""
    return {
        "id": visit.id,
        "country_code": visit.country_code,
        "date": visit.date.isoformat(),
    }
