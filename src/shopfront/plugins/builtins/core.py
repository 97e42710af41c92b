"""Built-in plugin registering the standard controllers and decorators."""

from __future__ import annotations

from shopfront.controllers.attribute import (
    AttributeController,
    AttributeDecorator,
    StandardAttributeController,
)
from shopfront.controllers.common import Log
from shopfront.controllers.supplier import (
    StandardSupplierController,
    SupplierController,
    SupplierDecorator,
)
from shopfront.plugins.hookspecs import hookimpl
from shopfront.registry import COMMON, ControllerRegistry


class CorePlugin:
    """Standard ``attribute`` and ``supplier`` controllers, ``Log`` decorator."""

    @hookimpl
    def register_controllers(self, registry: ControllerRegistry) -> None:
        registry.register_controller(
            "attribute",
            "Standard",
            StandardAttributeController,
            interface=AttributeController,
            decorator=AttributeDecorator,
        )
        registry.register_controller(
            "supplier",
            "Standard",
            StandardSupplierController,
            interface=SupplierController,
            decorator=SupplierDecorator,
        )

    @hookimpl
    def register_decorators(self, registry: ControllerRegistry) -> None:
        registry.register_decorator(COMMON, "Log", Log)
