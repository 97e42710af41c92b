"""Command: tokenize a sort-key string."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shopfront.commands._base import ShopCommand

if TYPE_CHECKING:
    from shopfront.commands._context import AppContext


@click.command(
    cls=ShopCommand,
    examples="""\
  shopfront keys "code,-position"
  shopfront keys 'sort:index.text:relevance("de","shoe"),-code'
  shopfront --json keys -- -ctime,name""",
)
@click.argument("raw")
@click.pass_obj
def keys(app: AppContext, raw: str) -> None:
    """Split RAW into sort keys with direction and name."""
    from shopfront.domain.keys import parse_sort_keys
    from shopfront.output.console import render_keys

    payload = [
        {"raw": key.raw, "direction": key.direction, "name": key.name}
        for key in parse_sort_keys(raw)
    ]
    app.emit(payload, render_keys(payload))
