"""Decorator chain builder.

Wraps a base controller in three tiers of decorators read from the
configuration, innermost first:

1. ``controller/frontend/common/decorators/default`` minus
   ``controller/frontend/<path>/decorators/excludes`` (shared namespace)
2. ``controller/frontend/<path>/decorators/global`` (shared namespace)
3. ``controller/frontend/<path>/decorators/local`` (the path's namespace)

The first name of each list ends up innermost within its tier. After
wrapping, the chain root is bound to the outermost decorator.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from shopfront.config.models import CommonConfig, ControllerConfig, load_common, validation_errors
from shopfront.controllers.base import ControllerHandle
from shopfront.errors import ConfigurationError
from shopfront.registry import COMMON, ControllerRegistry, is_valid_name

if TYPE_CHECKING:
    from shopfront.domain.context import Context

logger = logging.getLogger(__name__)


class DecoratorChainBuilder:
    """Builds decorator chains from configuration and registered classes."""

    def __init__(self, registry: ControllerRegistry) -> None:
        self._registry = registry

    def wrap(self, context: Context, controller: ControllerHandle, path: str) -> ControllerHandle:
        """Wrap *controller* with all decorators configured for *path*.

        Raises:
            ConfigurationError: If a configured name is invalid.
            ResolutionError: If a configured decorator is not registered.
            ContractError: If a decorator does not fit the controller.
        """
        common, local = self._read_config(context, path)

        excludes = set(local.decorators.excludes)
        defaults = [name for name in common.decorators.default if name not in excludes]

        controller = self._apply(context, controller, defaults, COMMON, path)
        controller = self._apply(context, controller, local.decorators.global_, COMMON, path)
        controller = self._apply(context, controller, local.decorators.local, path, path)

        return controller.set_object(controller)

    def _apply(
        self,
        context: Context,
        controller: ControllerHandle,
        names: list[str],
        namespace: str,
        path: str,
    ) -> ControllerHandle:
        for name in names:
            if not is_valid_name(name):
                msg = f'Invalid decorator name "{name}" in namespace "{namespace}"'
                raise ConfigurationError(msg, code=400)

            cls = self._registry.decorator(namespace, name, path)
            controller = cls(controller, context)
            logger.debug("Applied decorator %s/%s to %s", namespace, name, path)

        return controller

    @staticmethod
    def _read_config(context: Context, path: str) -> tuple[CommonConfig, ControllerConfig]:
        common = load_common(context.config)
        try:
            local = ControllerConfig.model_validate(context.config.section(f"controller/frontend/{path}"))
        except ValidationError as exc:
            msg = f'Invalid decorator configuration for "{path}"'
            raise ConfigurationError(msg, code=400, errors=validation_errors(exc)) from exc
        return common, local
