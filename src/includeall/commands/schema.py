"""Command: show the schema graph the resolver walks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from includeall.commands._base import IncludeallCommand
from includeall.services.includes import IncludeService

if TYPE_CHECKING:
    from includeall.commands._context import AppContext


@click.command(
    cls=IncludeallCommand,
    examples="""\
  includeall schema
  includeall --json schema""",
)
@click.pass_obj
def schema(app: AppContext) -> None:
    """List entity types and their navigations in traversal order."""
    app.emit(IncludeService(app.store).describe_schema())
