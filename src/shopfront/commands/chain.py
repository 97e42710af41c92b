"""Command: show the decorator chain built for a controller path."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shopfront.commands._base import ShopCommand

if TYPE_CHECKING:
    from shopfront.commands._context import AppContext


@click.command(
    cls=ShopCommand,
    examples="""\
  shopfront chain supplier
  shopfront chain attribute --name Standard
  shopfront -c shop.toml --json chain supplier""",
)
@click.argument("path")
@click.option("--name", default=None, help="Implementation name (default from config).")
@click.pass_obj
def chain(app: AppContext, path: str, name: str | None) -> None:
    """Build the controller for PATH and list its layers, outermost first."""
    from shopfront.controllers.base import ControllerDecorator
    from shopfront.errors import FrontendError
    from shopfront.frontend import controller_identifier
    from shopfront.output.console import render_chain

    try:
        handle = app.frontend.create(app.context(), path, name)
    except FrontendError as exc:
        app.fail(exc.message, exc.error_list())
        return

    handles = handle.layers() if isinstance(handle, ControllerDecorator) else [handle]
    layers = [
        {
            "class": type(layer).__name__,
            "kind": "decorator" if isinstance(layer, ControllerDecorator) else "controller",
        }
        for layer in handles
    ]
    resolved = name or app.settings.config_store().get(f"controller/frontend/{path}/name", "Standard")
    identifier = controller_identifier(path, resolved)

    app.emit({"path": path, "identifier": identifier, "layers": layers}, render_chain(identifier, layers))
