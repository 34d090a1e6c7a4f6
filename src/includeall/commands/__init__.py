"""Subcommand modules for includeall.

Provides register_commands() which uses deferred imports to keep
``includeall --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from includeall.commands.compare import compare
    from includeall.commands.load import load
    from includeall.commands.paths import paths
    from includeall.commands.schema import schema

    cli.add_command(paths)
    cli.add_command(schema)
    cli.add_command(load)
    cli.add_command(compare)
