"""Click command class carrying usage examples.

``--help`` stays short; ``--examples`` prints the command's example
invocations and exits before any argument is validated or the store is
opened.
"""

from __future__ import annotations

from typing import Any

import click


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    command = ctx.command
    assert isinstance(command, IncludeallCommand)
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(command.examples)
    ctx.exit(0)


class IncludeallCommand(click.Command):
    """Command with an optional eager ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self._examples_flag: click.Option | None = None
        if examples:
            self._examples_flag = click.Option(
                ["--examples"],
                is_flag=True,
                is_eager=True,
                expose_value=False,
                callback=_print_examples,
                help="Show usage examples and exit.",
            )

    def get_params(self, ctx: click.Context) -> list[click.Parameter]:
        params = super().get_params(ctx)
        if self._examples_flag is None:
            return params
        return [*params, self._examples_flag]
