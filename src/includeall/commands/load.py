"""Command: run an include-everything query."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from includeall.commands._base import IncludeallCommand
from includeall.infrastructure.loading import LoadStrategy
from includeall.services.includes import IncludeService

if TYPE_CHECKING:
    from includeall.commands._context import AppContext


@click.command(
    cls=IncludeallCommand,
    examples="""\
  includeall load Author
  includeall load Author --strategy joined
  includeall load Book --max-depth 2
  includeall --json load Tag""",
)
@click.argument("root")
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum hops per path (default: [includes] max_depth).",
)
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in LoadStrategy]),
    default=None,
    help="selectin: one query per include level; joined: single JOIN query.",
)
@click.pass_obj
def load(app: AppContext, root: str, max_depth: int | None, strategy: str | None) -> None:
    """Load every ROOT row together with its whole reachable subgraph."""
    app.emit(IncludeService(app.store).load(root, max_depth=max_depth, strategy=strategy))
