"""Shared pytest fixtures and test helpers for visitctl tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date
from pathlib import Path

import pytest
from click.testing import CliRunner

from visitctl.config.settings import VisitSettings
from visitctl.domain.ids import sequential_ids
from visitctl.domain.visits import CountryVisit
from visitctl.infrastructure.journal import Journal


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> VisitSettings:
    """Settings rooted at a temp directory, isolated from any real config."""
    monkeypatch.delenv("VISITCTL_CONFIG", raising=False)
    return VisitSettings.from_cli(data_root=tmp_path)


@pytest.fixture
def journal(settings: VisitSettings) -> Iterator[Journal]:
    """Empty ledger journal on a temp directory."""
    j = Journal(settings)
    try:
        yield j
    finally:
        j.close()


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from an empty temp directory.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.delenv("VISITCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_visits(*entries: tuple[str, str]) -> list[CountryVisit]:
    """Build visits from ``(country_code, "YYYY-MM-DD")`` pairs with ids v0001..."""
    next_id = sequential_ids("v")
    return [
        CountryVisit(id=next_id(), country_code=code, date=date.fromisoformat(day))
        for code, day in entries
    ]


SAMPLE_VISITS = (
    ("US", "2024-01-15"),
    ("US", "2024-01-20"),
    ("FR", "2024-02-10"),
    ("DE", "2024-03-05"),
    ("US", "2024-04-12"),
    ("FR", "2024-05-08"),
)
