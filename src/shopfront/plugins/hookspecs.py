"""Pluggy hook specifications for controller and decorator registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from shopfront.registry import ControllerRegistry

hookspec = pluggy.HookspecMarker("shopfront")
hookimpl = pluggy.HookimplMarker("shopfront")


class ShopfrontHookSpec:
    """Hook specifications for the shopfront plugin system."""

    @hookspec
    def register_controllers(self, registry: ControllerRegistry) -> None:
        """Register controller implementations on *registry*."""

    @hookspec
    def register_decorators(self, registry: ControllerRegistry) -> None:
        """Register shared and local decorators on *registry*.

        Called after every plugin's ``register_controllers``.
        """
