"""Command group: record, remove, and list country visits."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from visitctl.commands._base import VisitGroup
from visitctl.services.visits import VisitService

if TYPE_CHECKING:
    from visitctl.commands._context import AppContext

_VISIT_EXAMPLES = """\
  visitctl visit add JP 2024-04-01 2024-04-07
  visitctl visit add FR 2024-05-08
  visitctl visit list --year 2024
  visitctl visit remove vst_0123456789abcdef0123456789abcdef"""


@click.group(cls=VisitGroup, examples=_VISIT_EXAMPLES)
@click.pass_obj
def visit(app: AppContext) -> None:
    """Record, remove, and list country visits."""


@visit.command(
    examples="""\
  visitctl visit add JP 2024-04-01 2024-04-07
  visitctl visit add FR 2024-05-08
  visitctl --json visit add US 2024-01-15 2024-01-20"""
)
@click.argument("country_code")
@click.argument("start")
@click.argument("end", required=False)
@click.pass_obj
def add(app: AppContext, country_code: str, start: str, end: str | None) -> None:
    """Record COUNTRY_CODE on every day from START to END (YYYY-MM-DD).

    END defaults to START. The whole range is rejected if any day
    already holds two countries.
    """
    app.emit(VisitService(app.journal).add_visits(country_code, start, end))


@visit.command(
    examples="""\
  visitctl visit remove vst_0123456789abcdef0123456789abcdef
  visitctl --json visit remove vst_0123456789abcdef0123456789abcdef"""
)
@click.argument("visit_id")
@click.pass_obj
def remove(app: AppContext, visit_id: str) -> None:
    """Remove a single visit by ID."""
    app.emit(VisitService(app.journal).remove_visit(visit_id))


@visit.command(
    name="list",
    examples="""\
  visitctl visit list
  visitctl visit list --year 2024
  visitctl visit list --on 2024-04-03
  visitctl -q visit list --year 2023""",
)
@click.option("--year", type=int, default=None, help="Only visits in this year.")
@click.option("--on", "on_date", default=None, help="Only visits on this day (YYYY-MM-DD).")
@click.pass_obj
def list_cmd(app: AppContext, year: int | None, on_date: str | None) -> None:
    """List recorded visits in ledger order."""
    app.emit(VisitService(app.journal).list_visits(year=year, on=on_date))
