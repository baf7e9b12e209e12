"""Adapt a ServiceResult to the requested output mode.

``--json`` dumps the result model, ``--quiet`` prints ids or a status
line, and everything else goes through the Rich renderers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from visitctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from visitctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output-mode flags resolved from the CLI."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    country_names: Mapping[str, str] = field(default_factory=dict)


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(
        result,
        verbose=settings.verbose,
        country_names=settings.country_names,
    )
