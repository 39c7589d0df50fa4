"""Rich console and theme for querystudy output.

Renderers draw onto a console backed by a StringIO buffer and hand the
text back, so ``format_result()`` stays a plain ``-> str`` function. Rich
drops color codes on its own when stdout is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

QS_THEME = Theme(
    {
        "qs.ok": "bold green",
        "qs.error": "bold red",
        "qs.op": "bold cyan",
        "qs.key": "dim",
        "qs.id": "bold blue",
        "qs.name": "bold",
        "qs.team": "cyan",
        "qs.number": "magenta",
    }
)

# Table column -> theme style; unlisted columns are unstyled.
_COLUMN_STYLES: dict[str, str] = {
    "id": "qs.id",
    "username": "qs.name",
    "name": "qs.name",
    "team": "qs.team",
    "age": "qs.number",
    "avg_age": "qs.number",
    "rank": "qs.number",
}


def column_style(column: str) -> str | None:
    return _COLUMN_STYLES.get(column)


def create_console(*, no_color: bool = False, width: int = 120) -> Console:
    """A console writing into a fresh StringIO buffer.

    Tests pass ``no_color=True`` and a fixed *width* for stable output.
    """
    return Console(
        file=StringIO(),
        theme=QS_THEME,
        no_color=no_color,
        highlight=False,
        width=width,
    )


def get_output(console: Console) -> str:
    """Everything rendered so far on a console from :func:`create_console`."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
