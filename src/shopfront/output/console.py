"""Rich Console factory and renderers for shopfront CLI output.

Creates Console instances that render to a StringIO buffer so commands
can hand a plain string to ``click.echo``. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

SHOP_THEME = Theme(
    {
        "shop.error": "bold red",
        "shop.key": "bold",
        "shop.dir.asc": "green",
        "shop.dir.desc": "yellow",
        "shop.layer": "bold cyan",
        "shop.base": "bold blue",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=SHOP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def render_keys(keys: list[dict[str, Any]], *, no_color: bool = False) -> str:
    """Render tokenized sort keys as a table."""
    console = create_console(no_color=no_color)
    table = Table(show_header=True, header_style="shop.key")
    table.add_column("#", justify="right")
    table.add_column("Key")
    table.add_column("Dir")
    table.add_column("Name")

    for idx, key in enumerate(keys, start=1):
        style = "shop.dir.desc" if key["direction"] == "-" else "shop.dir.asc"
        table.add_row(
            str(idx),
            escape(key["raw"]),
            f"[{style}]{key['direction']}[/{style}]",
            escape(key["name"]),
        )

    console.print(table)
    return get_output(console)


def render_chain(identifier: str, layers: list[dict[str, str]], *, no_color: bool = False) -> str:
    """Render the layers of a controller chain, outermost first."""
    console = create_console(no_color=no_color)
    table = Table(title=identifier, show_header=True, header_style="shop.key")
    table.add_column("#", justify="right")
    table.add_column("Layer")
    table.add_column("Kind")

    for idx, layer in enumerate(layers, start=1):
        style = "shop.base" if layer["kind"] == "controller" else "shop.layer"
        table.add_row(str(idx), f"[{style}]{layer['class']}[/{style}]", layer["kind"])

    console.print(table)
    return get_output(console)


def render_error(message: str, errors: dict[str, Any] | None = None, *, no_color: bool = False) -> str:
    console = create_console(no_color=no_color)
    console.print(f"[shop.error]ERROR[/shop.error] {escape(message)}")
    for key, detail in (errors or {}).items():
        console.print(f"  {escape(key)}: {escape(str(detail))}")
    return get_output(console)
