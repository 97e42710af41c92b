"""Frontend — creates decorated controllers for domain paths.

Controllers are created by providing only the domain path, e.g.
``"supplier"`` or ``"basket/address"``. The implementation defaults to
``Standard`` and can be replaced per path with the config key
``controller/frontend/<path>/name``.

Usage::

    frontend = Frontend(registry)
    cntl = frontend.create(context, "supplier")
    items = cntl.compare("==", "supplier.code", "demo").sort("-code").search()

Every call returns an independent duplicate of a cached template, so
conditions added to one handle never show up in another.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shopfront.cache import PrototypeCache
from shopfront.chain import DecoratorChainBuilder
from shopfront.config.models import DEFAULT_IMPLEMENTATION
from shopfront.controllers.base import ControllerHandle
from shopfront.errors import ConfigurationError, ContractError, FrontendError, ResolutionError
from shopfront.registry import ControllerRegistry, is_valid_name, is_valid_path

if TYPE_CHECKING:
    from shopfront.domain.context import Context

logger = logging.getLogger(__name__)


def controller_identifier(path: str, name: str) -> str:
    """Canonical identifier of implementation *name* of controller *path*.

    Examples:
        >>> controller_identifier("basket/address", "Standard")
        'Basket.Address.Standard'
    """
    parts = [part[:1].upper() + part[1:] for part in path.split("/")]
    return ".".join([*parts, name])


class Frontend:
    """Resolves, builds and caches frontend controller chains.

    Args:
        registry: Registered controllers and decorators.
        cache: Template cache; a new enabled cache when omitted.
    """

    def __init__(self, registry: ControllerRegistry, cache: PrototypeCache | None = None) -> None:
        self._registry = registry
        self._cache = cache if cache is not None else PrototypeCache()
        self._builder = DecoratorChainBuilder(registry)

    @property
    def registry(self) -> ControllerRegistry:
        return self._registry

    @property
    def prototypes(self) -> PrototypeCache:
        return self._cache

    def create(self, context: Context, path: str, name: str | None = None) -> ControllerHandle:
        """Return a ready-to-use controller for *path*.

        Args:
            context: Request context handed to controllers and decorators.
            path: Domain path, e.g. ``"supplier"`` or ``"basket/address"``.
            name: Implementation name; read from the configuration if None.

        Raises:
            ResolutionError: If *path* is empty, not registered or the
                controller cannot be constructed.
            ConfigurationError: If *path* or the implementation name is invalid.
            ContractError: If the controller does not implement its interface.
        """
        if not path:
            raise ResolutionError("Controller path is empty", code=400)
        if not is_valid_path(path):
            msg = f'Invalid characters in controller path "{path}"'
            raise ConfigurationError(msg, code=400)

        if not name:
            name = context.config.get(f"controller/frontend/{path}/name", DEFAULT_IMPLEMENTATION)
        if not is_valid_name(name):
            msg = f'Invalid implementation name "{name}" for controller "{path}"'
            raise ConfigurationError(msg, code=400)

        identifier = controller_identifier(path, name)
        template = self._cache.get(identifier)

        if template is None:
            template = self._build(context, path, name)
            self._cache.put(identifier, template)

        return template.duplicate()

    def inject(self, identifier: str, handle: ControllerHandle | None = None) -> None:
        """Force *handle* as template for *identifier* (None clears the slot).

        For tests only: call ``cache(False)`` afterwards so the injected
        template does not leak into later lookups.
        """
        if handle is None:
            self._cache.drop(identifier)
        else:
            self._cache.put(identifier, handle)

    def cache(self, enabled: bool) -> None:
        """Enable or disable template caching; drops all cached templates."""
        if enabled:
            self._cache.enable()
        else:
            self._cache.disable()

    def _build(self, context: Context, path: str, name: str) -> ControllerHandle:
        entry = self._registry.controller(path, name)
        identifier = controller_identifier(path, name)
        try:
            controller = entry.factory(context)
        except FrontendError:
            raise
        except Exception as exc:
            msg = f'Unable to construct controller "{identifier}": {exc}'
            raise ResolutionError(msg, code=500) from exc

        if not isinstance(controller, entry.interface):
            msg = f'Class "{type(controller).__name__}" does not implement "{entry.interface.__name__}"'
            raise ContractError(msg, code=400)

        logger.debug("Building controller %s", identifier)
        return self._builder.wrap(context, controller, path)
