"""Rich Console factory and theme for includeall output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

INCLUDEALL_THEME = Theme(
    {
        "inc.ok": "bold green",
        "inc.error": "bold red",
        "inc.warning": "bold yellow",
        "inc.op": "bold cyan",
        "inc.key": "dim",
        "inc.type": "bold blue",
        "inc.path": "green",
        "inc.count": "magenta",
        "inc.mult.to-one": "cyan",
        "inc.mult.to-many": "yellow",
        "inc.mult.many-to-many": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=INCLUDEALL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_multiplicity(multiplicity: str) -> str:
    return f"inc.mult.{multiplicity}"
