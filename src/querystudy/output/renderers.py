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

from querystudy.output.console import column_style, create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from querystudy.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"

    if result.items:
        return "\n".join(_item_key(item) for item in result.items)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _item_key(item: Any) -> str:
    """The most identifying value of a row: username, name, or team."""
    if isinstance(item, dict):
        for key in ("username", "name", "team"):
            if key in item:
                return str(item[key])
    return str(item)


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="qs.ok")
    op = Text(f"  {result.op}", style="qs.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}:", style="qs.key")
    if isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    elif isinstance(value, (int, float)):
        v = Text(str(value), style="qs.number")
    else:
        v = Text(str(value))
    console.print(k, v)


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


def _dict_table(items: list[dict[str, Any]]) -> Table:
    """Build a Rich Table whose columns are the keys of the first item."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    columns = list(items[0].keys()) if items else []
    for col in columns:
        justify = "right" if isinstance(items[0][col], (int, float)) else "left"
        table.add_column(col.replace("_", " ").title(), style=column_style(col), justify=justify)
    for item in items:
        table.add_row(*("" if item.get(col) is None else str(item.get(col)) for col in columns))
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="qs.error")
    op = Text(f"  {result.op}", style="qs.op")
    console.print(label, op, Text(" - "), msg)
    if verbose and err and err.detail:
        for k, v in err.detail.items():
            _field(console, k, v)


# ── Table renderer ────────────────────────────────────────────────────


def _render_item_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Status line, a row count, and a table of ``data["items"]``."""
    _status_line(console, result)
    items = result.items
    console.print(Text(f"  {len(items)} row(s)", style="qs.key"))
    if items:
        console.print(_dict_table(items))
    for key, value in result.data.items():
        if key not in ("items", "count"):
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "search": _render_item_table,
    "team_stats": _render_item_table,
    "age_brackets": _render_item_table,
    "project": _render_item_table,
}
