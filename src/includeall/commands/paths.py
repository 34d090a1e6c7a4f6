"""Command: resolve include paths for a root entity type."""

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
  includeall paths Author
  includeall paths Book --max-depth 2
  includeall --json paths Tag
  includeall -q paths Author""",
)
@click.argument("root")
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum hops per path (default: [includes] max_depth).",
)
@click.pass_obj
def paths(app: AppContext, root: str, max_depth: int | None) -> None:
    """Resolve every include path reachable from ROOT."""
    app.emit(IncludeService(app.store).resolve_paths(root, max_depth=max_depth))
