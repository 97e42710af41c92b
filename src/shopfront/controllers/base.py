"""Controller and decorator foundations.

Every handle returned by :class:`~shopfront.frontend.Frontend` implements
:class:`ControllerHandle`. Concrete controllers extend :class:`Controller`,
which owns the request state (the :class:`ExpressionAccumulator`).
Decorators extend :class:`ControllerDecorator`, which forwards every
operation to the wrapped handle through ``_forward()``.

All layers of one chain share a :class:`ChainRoot`. Binding it to the
outermost handle lets any layer address the full stack via ``object()``.

INVARIANT: A duplicate never shares its accumulator lists, or any list,
dict or set attribute of a layer, with the handle it was duplicated from.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, Self

from shopfront.domain.criteria import Sort
from shopfront.domain.keys import split_keys
from shopfront.errors import ContractError, DelegationError

if TYPE_CHECKING:
    from shopfront.domain.context import Context

logger = logging.getLogger(__name__)


class ChainRoot:
    """Shared reference to the outermost handle of one controller chain."""

    __slots__ = ("target",)

    def __init__(self) -> None:
        self.target: ControllerHandle | None = None

    def bind(self, handle: ControllerHandle) -> None:
        self.target = handle


class ExpressionAccumulator:
    """Ordered condition and sort expressions collected for one request."""

    def __init__(self) -> None:
        self._conditions: list[Any] = []
        self._sortations: list[Sort] = []

    def add(self, expr: Any) -> None:
        """Append *expr* to the sort or condition list; None is ignored."""
        if expr is None:
            return
        if isinstance(expr, Sort):
            self._sortations.append(expr)
        else:
            self._conditions.append(expr)

    def conditions(self) -> list[Any]:
        return list(self._conditions)

    def sortations(self) -> list[Sort]:
        return list(self._sortations)

    def fork(self) -> ExpressionAccumulator:
        """Return an independent accumulator with copies of every expression."""
        clone = ExpressionAccumulator()
        clone._conditions = [copy.copy(expr) for expr in self._conditions]
        clone._sortations = [copy.copy(expr) for expr in self._sortations]
        return clone

    def __len__(self) -> int:
        return len(self._conditions) + len(self._sortations)


class ControllerHandle(ABC):
    """Minimal capability set of every controller and decorator.

    Extra operations can be attached to a class at runtime with
    :meth:`macro` and invoked through :meth:`call`.
    """

    _macros: ClassVar[dict[str, Callable[..., Any]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._macros = {}

    @classmethod
    def macro(cls, name: str, func: Callable[..., Any] | None = None) -> Any:
        """Register *func* as operation *name* of this class.

        Usable directly or as a decorator::

            @StandardSupplierController.macro("codes")
            def codes(cntl, *args): ...

        The function receives the handle it is invoked on as first argument.
        """
        if not name.isidentifier():
            msg = f"Invalid macro name {name!r}"
            raise ValueError(msg)

        def register(f: Callable[..., Any]) -> Callable[..., Any]:
            cls._macros[name] = f
            return f

        if func is None:
            return register
        return register(func)

    @classmethod
    def find_macro(cls, name: str) -> Callable[..., Any] | None:
        """Look *name* up in the macro tables along the MRO."""
        for klass in cls.__mro__:
            table = klass.__dict__.get("_macros")
            if table and name in table:
                return table[name]
        return None

    @property
    @abstractmethod
    def root(self) -> ChainRoot:
        """Chain root shared by all layers of this handle's chain."""

    @abstractmethod
    def add_expression(self, expr: Any) -> Self:
        """Add a condition or sort expression; None is a no-op."""

    @abstractmethod
    def get_conditions(self) -> list[Any]:
        """Return the condition expressions in insertion order."""

    @abstractmethod
    def get_sortations(self) -> list[Sort]:
        """Return the sort expressions in insertion order."""

    @abstractmethod
    def set_object(self, handle: ControllerHandle) -> Self:
        """Bind the chain root to the outermost *handle*."""

    @abstractmethod
    def duplicate(self, root: ChainRoot | None = None) -> Self:
        """Return an independent copy with its own request state."""

    @abstractmethod
    def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke the macro *name* registered somewhere in the chain."""

    def object(self) -> ControllerHandle:
        """Return the outermost handle of the chain (or self if unbound)."""
        target = self.root.target
        return target if target is not None else self

    def _duplicate_state(self) -> None:
        """Replace mutable per-request attributes after a shallow copy.

        List, dict and set attributes get a copy of their own. Subclasses
        holding other mutable state override this and call ``super()``.
        """
        for attr, value in list(vars(self).items()):
            if isinstance(value, list | dict | set):
                setattr(self, attr, copy.copy(value))


class Controller(ControllerHandle):
    """Common base of concrete frontend controllers."""

    def __init__(self, context: Context, root: ChainRoot | None = None) -> None:
        self._context = context
        self._root = root or ChainRoot()
        self._accumulator = ExpressionAccumulator()

    @property
    def root(self) -> ChainRoot:
        return self._root

    def context(self) -> Context:
        return self._context

    def add_expression(self, expr: Any) -> Self:
        self._accumulator.add(expr)
        return self

    def get_conditions(self) -> list[Any]:
        return self._accumulator.conditions()

    def get_sortations(self) -> list[Sort]:
        return self._accumulator.sortations()

    def set_object(self, handle: ControllerHandle) -> Self:
        self._root.bind(handle)
        return self

    def duplicate(self, root: ChainRoot | None = None) -> Self:
        clone = copy.copy(self)
        clone._root = root or ChainRoot()
        clone._accumulator = self._accumulator.fork()
        clone._duplicate_state()
        if root is None:
            clone._root.bind(clone)
        return clone

    def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        func = type(self).find_macro(name)
        if func is None:
            msg = f"Unable to call method {name!r} of {type(self).__name__}"
            raise DelegationError(msg, code=404)
        return func(self, *args, **kwargs)

    def split_keys(self, keys: str | None) -> list[str]:
        return split_keys(keys)


class ControllerDecorator(ControllerHandle):
    """Base of all decorators: explicit delegation to the wrapped handle.

    Subclasses set ``interface`` to the domain interface; constructing a
    decorator around a handle that does not implement it raises
    :class:`~shopfront.errors.ContractError`.
    """

    interface: ClassVar[type[ControllerHandle]] = ControllerHandle

    def __init__(self, controller: ControllerHandle, context: Context) -> None:
        if not isinstance(controller, self.interface):
            msg = (
                f"Class {type(controller).__name__!r} does not implement "
                f"{self.interface.__name__!r} required by {type(self).__name__!r}"
            )
            raise ContractError(msg, code=400)

        self._controller = controller
        self._context = context

    @property
    def root(self) -> ChainRoot:
        return self._controller.root

    @property
    def controller(self) -> ControllerHandle:
        """The wrapped handle."""
        return self._controller

    def context(self) -> Context:
        return self._context

    def _forward(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke *operation* on the wrapped handle.

        Shared decorators override this single seam to add behavior to
        every operation of any domain.
        """
        return getattr(self._controller, operation)(*args, **kwargs)

    def _chain(self, operation: str, *args: Any, **kwargs: Any) -> Self:
        """Forward a fluent *operation* and return this decorator."""
        self._forward(operation, *args, **kwargs)
        return self

    def add_expression(self, expr: Any) -> Self:
        return self._chain("add_expression", expr)

    def get_conditions(self) -> list[Any]:
        return self._forward("get_conditions")

    def get_sortations(self) -> list[Sort]:
        return self._forward("get_sortations")

    def set_object(self, handle: ControllerHandle) -> Self:
        self._controller.set_object(handle)
        return self

    def duplicate(self, root: ChainRoot | None = None) -> Self:
        new_root = root or ChainRoot()
        clone = copy.copy(self)
        clone._controller = self._controller.duplicate(new_root)
        clone._duplicate_state()
        if root is None:
            new_root.bind(clone)
        return clone

    def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        func = type(self).find_macro(name)
        if func is not None:
            return func(self, *args, **kwargs)
        return self._forward("call", name, *args, **kwargs)

    def layers(self) -> list[ControllerHandle]:
        """Return every handle of the chain from this one inwards."""
        result: list[ControllerHandle] = [self]
        inner: ControllerHandle = self._controller
        while isinstance(inner, ControllerDecorator):
            result.append(inner)
            inner = inner.controller
        result.append(inner)
        return result


class CommonDecorator(ControllerDecorator):
    """Base of shared decorators usable with every domain.

    Shared decorators only override ``_forward()``; the chain builder
    combines them with the domain's decorator base so the result
    implements the full domain interface.
    """
