"""Command: lazy vs eager loading statement counts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from includeall.commands._base import IncludeallCommand
from includeall.services.loading import LoadingService

if TYPE_CHECKING:
    from includeall.commands._context import AppContext


@click.command(
    cls=IncludeallCommand,
    examples="""\
  includeall compare
  includeall compare Book
  includeall --json compare Author""",
)
@click.argument("root", default="Author")
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum hops per path (default: [includes] max_depth).",
)
@click.pass_obj
def compare(app: AppContext, root: str, max_depth: int | None) -> None:
    """Count SQL statements for lazy, selectin and joined loading of ROOT."""
    app.emit(LoadingService(app.store).compare(root, max_depth=max_depth))
