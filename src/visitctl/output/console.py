"""Rich Console factory and theme for visitctl output.

Consoles render into a StringIO buffer, so renderers keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich drops
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

VISIT_THEME = Theme(
    {
        "visit.ok": "bold green",
        "visit.error": "bold red",
        "visit.op": "bold cyan",
        "visit.key": "dim",
        "visit.id": "bold blue",
        "visit.country": "bold",
        "visit.date": "magenta",
        "visit.count": "yellow",
        "visit.empty": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=VISIT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
