"""Command group: travel statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from visitctl.commands._base import VisitGroup
from visitctl.services.stats import StatsService

if TYPE_CHECKING:
    from visitctl.commands._context import AppContext

_STATS_EXAMPLES = """\
  visitctl stats summary
  visitctl stats summary --year 2024
  visitctl stats ranking --least --limit 3
  visitctl stats monthly 2024
  visitctl stats by-country"""


def _service(app: AppContext) -> StatsService:
    return StatsService(app.journal, default_limit=app.settings.stats.default_limit)


@click.group(cls=VisitGroup, examples=_STATS_EXAMPLES)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Counts, rankings, and monthly breakdowns."""


@stats.command(
    examples="""\
  visitctl stats summary
  visitctl stats summary --year 2024 --limit 10
  visitctl --json stats summary"""
)
@click.option("--year", type=int, default=None, help="Restrict to one year.")
@click.option("--limit", type=int, default=None, help="Ranking length (0 for all).")
@click.pass_obj
def summary(app: AppContext, year: int | None, limit: int | None) -> None:
    """Countries visited, total visits, average, and top countries."""
    app.emit(_service(app).summary(year=year, limit=limit))


@stats.command(
    examples="""\
  visitctl stats ranking
  visitctl stats ranking --least
  visitctl stats ranking --year 2024 --limit 0"""
)
@click.option("--least", is_flag=True, help="Least visited first.")
@click.option("--year", type=int, default=None, help="Restrict to one year.")
@click.option("--limit", type=int, default=None, help="Ranking length (0 for all).")
@click.pass_obj
def ranking(app: AppContext, least: bool, year: int | None, limit: int | None) -> None:
    """Countries ranked by number of visits."""
    app.emit(_service(app).ranking(least=least, year=year, limit=limit))


@stats.command(
    examples="""\
  visitctl stats monthly 2024
  visitctl --json stats monthly 2023"""
)
@click.argument("year", type=int)
@click.pass_obj
def monthly(app: AppContext, year: int) -> None:
    """Visits and distinct countries for each month of YEAR."""
    app.emit(_service(app).monthly(year))


@stats.command(
    name="by-country",
    examples="""\
  visitctl stats by-country
  visitctl stats by-country --year 2024""",
)
@click.option("--year", type=int, default=None, help="Restrict to one year.")
@click.pass_obj
def by_country(app: AppContext, year: int | None) -> None:
    """Visit count for every country."""
    app.emit(_service(app).by_country(year=year))
