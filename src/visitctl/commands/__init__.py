"""Subcommand modules for visitctl."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups on the root CLI group."""
    from visitctl.commands.stats import stats
    from visitctl.commands.visit import visit

    cli.add_command(visit)
    cli.add_command(stats)
