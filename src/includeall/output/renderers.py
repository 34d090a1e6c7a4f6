"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from includeall.output.console import create_console, get_output, style_for_multiplicity

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from includeall.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=verbose)

    if verbose:
        _render_meta(console, result)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Path-producing operations print one include path per line so the
    output can be piped straight into other tools.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op in ("resolve_paths", "load"):
        return "\n".join(result.data.get("paths", []))
    if result.op == "compare_loading":
        return "\n".join(f"{i['strategy']} {i['queries']}" for i in result.data.get("items", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult, suffix: str = "") -> None:
    console.print(Text.assemble(("OK", "inc.ok"), (f"  {result.op}", "inc.op"), suffix))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    if isinstance(value, (dict, list)):
        value = _json.dumps(value, separators=(",", ":"))
    console.print(Text.assemble((f"  {key}: ", "inc.key"), str(value)))


def _path_tree(root: str, paths: list[str]) -> Tree:
    """Nest dot-joined paths under *root*.

    Paths arrive in pre-order, so each parent is already in the tree.
    """
    tree = Tree(Text(root, style="inc.type"))
    nodes: dict[str, Tree] = {"": tree}
    for path in paths:
        parent, _, name = path.rpartition(".")
        nodes[path] = nodes.get(parent, tree).add(Text(name, style="inc.path"))
    return tree


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = f"{' ' * indent}[{style}]{duration:>8.2f}ms[/{style}]  {span.get('name', '?')}"
    annotations = span.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Operation renderers ───────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_paths(result: ServiceResult, console: Console) -> None:
    data = result.data
    _status_line(console, result, f"  {data['count']} path(s), max depth {data['max_depth']}")
    console.print(_path_tree(data["root"], data["paths"]))


def _render_schema(result: ServiceResult, console: Console) -> None:
    _status_line(console, result, f"  {result.data['count']} entity type(s)")
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Type", style="inc.type", no_wrap=True)
    table.add_column("Navigation")
    table.add_column("Target", style="inc.type")
    table.add_column("Multiplicity")
    table.add_column("Inverse", style="dim")
    for entity in result.data["types"]:
        navigations = entity["navigations"] or [None]
        for i, nav in enumerate(navigations):
            type_cell = entity["name"] if i == 0 else ""
            if nav is None:
                table.add_row(type_cell, "", "", "", "")
                continue
            table.add_row(
                type_cell,
                nav["name"],
                nav["target"],
                Text(nav["multiplicity"], style=style_for_multiplicity(nav["multiplicity"])),
                nav["inverse"] or "",
            )
    console.print(table)


def _render_load(result: ServiceResult, console: Console) -> None:
    data = result.data
    _status_line(
        console,
        result,
        f"  {data['count']} {data['root']} row(s), {data['queries']} statement(s) "
        f"({data['strategy']})",
    )
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Path", style="inc.path")
    table.add_column("Depth", justify="right")
    table.add_column("Loaded", style="inc.count", justify="right")
    for item in data["items"]:
        table.add_row(item["path"], str(item["depth"]), str(item["count"]))
    console.print(table)


def _render_compare(result: ServiceResult, console: Console) -> None:
    data = result.data
    _status_line(console, result, f"  {data['root']}, {len(data['paths'])} include path(s)")
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Strategy", style="inc.op")
    table.add_column("Statements", style="inc.count", justify="right")
    table.add_column("Rows", justify="right")
    table.add_column("Saved vs lazy", justify="right")
    for item in data["items"]:
        table.add_row(item["strategy"], str(item["queries"]), str(item["rows"]), str(item["saved"]))
    console.print(table)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text.assemble(("ERROR", "inc.error"), (f"  {result.op}", "inc.op"), f": {msg}"))
    if err is None:
        return
    if "known" in err.detail:
        known = ", ".join(err.detail["known"])
        console.print(Text.assemble(("  known types: ", "inc.key"), known))
    if verbose:
        _field(console, "code", err.code)
        for key, value in err.detail.items():
            if key != "known":
                _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "resolve_paths": _render_paths,
    "schema": _render_schema,
    "load": _render_load,
    "compare_loading": _render_compare,
}
