"""Registry of controller implementations and decorators.

Controllers are registered per ``(path, name)``, e.g. ``("supplier",
"Standard")``, together with the domain interface and the domain's
decorator base. Decorators are registered per ``(namespace, name)``: the
``common`` namespace holds shared decorators, every other namespace is a
controller path holding its local decorators.

All names are validated when they are registered, so a lookup can only
fail because a name was never registered.
"""

from __future__ import annotations

import inspect
import logging
import re
import types
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shopfront.controllers.base import CommonDecorator, ControllerDecorator, ControllerHandle
from shopfront.errors import ContractError, ResolutionError

if TYPE_CHECKING:
    from shopfront.domain.context import Context

logger = logging.getLogger(__name__)

COMMON = "common"

_NAME_RE = re.compile(r"^[A-Za-z0-9]+$")

ControllerFactory = Callable[["Context"], ControllerHandle]


def is_valid_name(name: object) -> bool:
    """Whether *name* is a non-empty alphanumeric string."""
    return isinstance(name, str) and _NAME_RE.match(name) is not None


def is_valid_path(path: object) -> bool:
    """Whether every ``/``-separated segment of *path* is a valid name."""
    return isinstance(path, str) and all(is_valid_name(part) for part in path.split("/"))


@dataclass(frozen=True)
class ControllerEntry:
    """One registered controller implementation."""

    path: str
    name: str
    factory: ControllerFactory
    interface: type[ControllerHandle]
    decorator: type[ControllerDecorator]


class ControllerRegistry:
    """Maps controller paths and decorator names to their classes."""

    def __init__(self) -> None:
        self._controllers: dict[tuple[str, str], ControllerEntry] = {}
        self._decorators: dict[tuple[str, str], type[ControllerDecorator]] = {}
        self._composed: dict[tuple[type, type], type[ControllerDecorator]] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_controller(
        self,
        path: str,
        name: str,
        factory: ControllerFactory,
        *,
        interface: type[ControllerHandle],
        decorator: type[ControllerDecorator],
    ) -> ControllerEntry:
        """Register *factory* as implementation *name* of controller *path*.

        Raises:
            ValueError: On invalid names or a conflicting registration.
            TypeError: If the classes do not fit together.
        """
        if not is_valid_path(path) or path == COMMON:
            msg = f"Invalid controller path {path!r}"
            raise ValueError(msg)
        if not is_valid_name(name):
            msg = f"Invalid implementation name {name!r} for controller {path!r}"
            raise ValueError(msg)
        if not callable(factory):
            msg = f"Factory for controller {path!r} must be callable"
            raise TypeError(msg)
        if not (inspect.isclass(interface) and issubclass(interface, ControllerHandle)):
            msg = f"Interface of controller {path!r} must extend ControllerHandle"
            raise TypeError(msg)
        if inspect.isclass(factory) and not issubclass(factory, interface):
            msg = f"Controller class {factory.__name__!r} does not implement {interface.__name__!r}"
            raise TypeError(msg)
        if not (
            inspect.isclass(decorator)
            and issubclass(decorator, ControllerDecorator)
            and issubclass(decorator, interface)
        ):
            msg = f"Decorator base of controller {path!r} must extend ControllerDecorator and {interface.__name__}"
            raise TypeError(msg)

        entry = ControllerEntry(path, name, factory, interface, decorator)
        existing = self._controllers.get((path, name))
        if existing is not None and existing != entry:
            msg = f"Controller {path!r} implementation {name!r} is already registered"
            raise ValueError(msg)

        for (namespace, dname), cls in self._decorators.items():
            if namespace == path and not issubclass(cls, decorator):
                msg = f"Local decorator {dname!r} of {path!r} must extend {decorator.__name__}"
                raise TypeError(msg)

        self._controllers[(path, name)] = entry
        logger.debug("Registered controller %s/%s", path, name)
        return entry

    def register_decorator(self, namespace: str, name: str, cls: type[ControllerDecorator]) -> None:
        """Register decorator *cls* as *name* in *namespace*.

        Shared decorators (namespace ``common``) must extend
        :class:`CommonDecorator`; local decorators must extend the decorator
        base of their controller path.

        Raises:
            ValueError: On invalid names or a conflicting registration.
            TypeError: If *cls* has the wrong base class.
        """
        if not is_valid_path(namespace):
            msg = f"Invalid decorator namespace {namespace!r}"
            raise ValueError(msg)
        if not is_valid_name(name):
            msg = f"Invalid decorator name {name!r} in namespace {namespace!r}"
            raise ValueError(msg)
        if not (inspect.isclass(cls) and issubclass(cls, ControllerDecorator)):
            msg = f"Decorator {name!r} must extend ControllerDecorator"
            raise TypeError(msg)

        if namespace == COMMON:
            if not issubclass(cls, CommonDecorator):
                msg = f"Shared decorator {name!r} must extend CommonDecorator"
                raise TypeError(msg)
        else:
            for entry in self._entries(namespace):
                if not issubclass(cls, entry.decorator):
                    msg = f"Local decorator {name!r} of {namespace!r} must extend {entry.decorator.__name__}"
                    raise TypeError(msg)

        existing = self._decorators.get((namespace, name))
        if existing is not None and existing is not cls:
            msg = f"Decorator {name!r} is already registered in namespace {namespace!r}"
            raise ValueError(msg)

        self._decorators[(namespace, name)] = cls
        logger.debug("Registered decorator %s/%s", namespace, name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def controller(self, path: str, name: str) -> ControllerEntry:
        """Return the entry of implementation *name* of controller *path*.

        Raises:
            ResolutionError: If nothing is registered under that key.
        """
        try:
            return self._controllers[(path, name)]
        except KeyError:
            msg = f'Controller "{path}" with implementation "{name}" not found'
            raise ResolutionError(msg, code=404) from None

    def decorator(self, namespace: str, name: str, path: str) -> type[ControllerDecorator]:
        """Return the decorator class to wrap controllers of *path* with.

        Shared decorators are combined with the decorator base of *path*,
        so the returned class always implements the domain interface.

        Raises:
            ResolutionError: If the decorator or controller is unknown.
            ContractError: If a local decorator does not fit the controller.
        """
        try:
            cls = self._decorators[(namespace, name)]
        except KeyError:
            msg = f'Decorator "{name}" not found in namespace "{namespace}"'
            raise ResolutionError(msg, code=404) from None

        entries = self._entries(path)
        if not entries:
            msg = f'Controller "{path}" not found'
            raise ResolutionError(msg, code=404)
        base = entries[0].decorator

        if namespace == COMMON:
            return self._compose(cls, base)

        if not issubclass(cls, base):
            msg = f'Decorator "{cls.__name__}" does not implement "{base.interface.__name__}"'
            raise ContractError(msg, code=400)
        return cls

    def controllers(self) -> list[ControllerEntry]:
        return list(self._controllers.values())

    def decorators(self, namespace: str) -> list[str]:
        return [name for (ns, name) in self._decorators if ns == namespace]

    def _entries(self, path: str) -> list[ControllerEntry]:
        return [entry for (p, _), entry in self._controllers.items() if p == path]

    def _compose(self, mixin: type[ControllerDecorator], base: type[ControllerDecorator]) -> type[ControllerDecorator]:
        """Combine a shared decorator with a domain decorator base (memoized)."""
        key = (mixin, base)
        composed = self._composed.get(key)
        if composed is None:
            composed = types.new_class(
                f"{mixin.__name__}{base.__name__}",
                (mixin, base),
                exec_body=lambda ns: ns.update({"__module__": mixin.__module__}),
            )
            self._composed[key] = composed
        return composed
