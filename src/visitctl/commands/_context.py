"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. The journal opens lazily so ``--help`` and
``--version`` never touch the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from visitctl.config.logging import configure_logging
from visitctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from visitctl.config.settings import VisitSettings
    from visitctl.infrastructure.journal import Journal
    from visitctl.services.result import ServiceResult


class AppContext:
    """Settings, the lazily opened journal, and result emission."""

    def __init__(self, settings: VisitSettings) -> None:
        self.settings = settings
        self._journal: Journal | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def journal(self) -> Journal:
        """The ledger journal (opened on first access)."""
        if self._journal is None:
            from visitctl.infrastructure.journal import Journal

            self._journal = Journal(self.settings)
        return self._journal

    def close(self) -> None:
        if self._journal is not None:
            self._journal.close()
            self._journal = None

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult with the right stream and exit code.

        * Success: stdout; warnings go to stderr outside JSON mode.
        * Failure: stderr, then exit with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            country_names=self.settings.countries.names,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
