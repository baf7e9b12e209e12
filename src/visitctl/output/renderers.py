"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer. Country codes
are shown with their display name when the injected lookup knows one.
"""

from __future__ import annotations

import calendar
import json
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from visitctl.config.models import CountriesConfig
from visitctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from visitctl.services.result import ServiceResult

_Renderer = Callable[["ServiceResult", "Console", "_View"], None]


class _View:
    """Per-call rendering options."""

    def __init__(self, *, verbose: bool, country_names: Mapping[str, str]) -> None:
        self.verbose = verbose
        self._countries = CountriesConfig(names=dict(country_names))

    def country(self, code: str) -> str:
        name = self._countries.display_name(code)
        return code if name == code else f"{name} ({code})"


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    country_names: Mapping[str, str] | None = None,
) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    view = _View(verbose=verbose, country_names=country_names or {})

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, view)
    else:
        _render_error(result, console, view)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: ids of listed items, else a status line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        ids = [str(item["id"]) for item in items if isinstance(item, dict) and "id" in item]
        if ids:
            return "\n".join(ids)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="visit.ok"), Text(f"  {result.op}", style="visit.op"), sep="")


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    console.print(Text(f"  {key}: ", style="visit.key"), Text(str(value), style=style), sep="")


def _visit_table(items: list[dict[str, Any]], view: _View) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="visit.id", no_wrap=True)
    table.add_column("Date", style="visit.date", no_wrap=True)
    table.add_column("Country", style="visit.country")
    for item in items:
        table.add_row(
            str(item.get("id", "")),
            str(item.get("date", "")),
            view.country(str(item.get("country_code", ""))),
        )
    return table


def _ranking_table(items: list[dict[str, Any]], view: _View) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("Country", style="visit.country")
    table.add_column("Visits", style="visit.count", justify="right")
    for item in items:
        table.add_row(
            str(item["rank"]),
            view.country(str(item["country_code"])),
            _plural(int(item["count"]), "visit"),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, view: _View) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="visit.error")
    op = Text(f"  {result.op}", style="visit.op")
    console.print(label, op, f" — {msg}", sep="")

    if view.verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Ledger renderers ──────────────────────────────────────────────────


def _render_add(result: ServiceResult, console: Console, view: _View) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "country", view.country(str(d["country_code"])), style="visit.country")
    if d["start"] == d["end"]:
        _field(console, "date", d["start"], style="visit.date")
    else:
        _field(console, "dates", f"{d['start']} → {d['end']}", style="visit.date")
    _field(console, "recorded", _plural(int(d["count"]), "visit"), style="visit.count")
    if view.verbose:
        console.print()
        console.print(_visit_table(d.get("items", []), view))


def _render_remove(result: ServiceResult, console: Console, view: _View) -> None:
    _status_line(console, result)
    _field(console, "id", result.data["id"], style="visit.id")


def _render_visit_list(result: ServiceResult, console: Console, view: _View) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(Text("No visits recorded", style="visit.empty"))
        return
    console.print(_visit_table(items, view))
    console.print(f"\n{_plural(result.data.get('count', len(items)), 'visit')}")


# ── Statistics renderers ──────────────────────────────────────────────


def _render_summary(result: ServiceResult, console: Console, view: _View) -> None:
    d = result.data
    heading = f"Statistics ({d['year']})" if d.get("year") is not None else "Statistics"
    console.print(Text(heading, style="bold"))

    if d["total_visits"] == 0:
        console.print(Text("  No visits recorded yet", style="visit.empty"))
        return

    _field(console, "countries visited", d["total_countries"], style="visit.count")
    _field(console, "total visits", d["total_visits"], style="visit.count")
    _field(console, "average", f"{d['average_visits_per_country']:.1f} visits per country")

    if d["most_visited"]:
        console.print()
        console.print(Text("Most Visited Countries", style="bold"))
        console.print(_ranking_table(d["most_visited"], view))


def _render_ranking(result: ServiceResult, console: Console, view: _View) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(Text("No country visits yet", style="visit.empty"))
        return
    order = "Most" if result.data["order"] == "most" else "Least"
    title = f"{order} Visited Countries"
    if result.data.get("year") is not None:
        title += f" ({result.data['year']})"
    console.print(Text(title, style="bold"))
    console.print(_ranking_table(items, view))


def _render_monthly(result: ServiceResult, console: Console, view: _View) -> None:
    table = Table(
        title=f"{result.data['year']}",
        show_header=True,
        show_lines=False,
        pad_edge=False,
        expand=False,
    )
    table.add_column("Month")
    table.add_column("Visits", style="visit.count", justify="right")
    table.add_column("Countries", justify="right")
    for entry in result.data["months"]:
        table.add_row(
            calendar.month_name[entry["month"] + 1],
            str(entry["visit_count"]),
            str(entry["unique_countries"]),
        )
    console.print(table)


def _render_by_country(result: ServiceResult, console: Console, view: _View) -> None:
    countries: dict[str, int] = result.data.get("countries", {})
    if not countries:
        console.print(Text("No country visits yet", style="visit.empty"))
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Country", style="visit.country")
    table.add_column("Visits", style="visit.count", justify="right")
    for code, count in countries.items():
        table.add_row(view.country(code), str(count))
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, view: _View) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _field(console, key, value)


_OP_RENDERERS: dict[str, _Renderer] = {
    "add_visits": _render_add,
    "remove_visit": _render_remove,
    "list_visits": _render_visit_list,
    "summary": _render_summary,
    "ranking": _render_ranking,
    "monthly": _render_monthly,
    "by_country": _render_by_country,
}
