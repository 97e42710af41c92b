"""Supplier frontend controller."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Self

from shopfront.config.models import load_common
from shopfront.controllers.base import ChainRoot, Controller, ControllerDecorator, ControllerHandle
from shopfront.domain.context import Context
from shopfront.domain.keys import parse_sort_key
from shopfront.domain.managers import SearchResult
from shopfront.errors import NotFoundError


class SupplierController(ControllerHandle):
    """Interface of supplier controllers and their decorators."""

    @abstractmethod
    def compare(self, operator: str, key: str, value: Any) -> Self: ...

    @abstractmethod
    def find(self, code: str) -> dict[str, Any]: ...

    @abstractmethod
    def function(self, name: str, params: list[Any]) -> str: ...

    @abstractmethod
    def get(self, item_id: str) -> dict[str, Any]: ...

    @abstractmethod
    def has(self, domain: str, type: str | None = None, ref_id: str | None = None) -> Self: ...

    @abstractmethod
    def parse(self, conditions: dict[str, Any]) -> Self: ...

    @abstractmethod
    def resolve(self, name: str) -> dict[str, Any]: ...

    @abstractmethod
    def search(self) -> SearchResult: ...

    @abstractmethod
    def slice(self, start: int, limit: int) -> Self: ...

    @abstractmethod
    def sort(self, key: str | None = None) -> Self: ...

    @abstractmethod
    def uses(self, domains: list[str]) -> Self: ...


class StandardSupplierController(Controller, SupplierController):
    """Default supplier controller backed by the ``supplier`` manager."""

    def __init__(self, context: Context, root: ChainRoot | None = None) -> None:
        super().__init__(context, root)
        self._manager = context.manager("supplier")
        self._filter = self._manager.filter(True)
        self._domains: list[str] = []

    def _duplicate_state(self) -> None:
        super()._duplicate_state()
        self._filter = self._filter.copy()

    def compare(self, operator: str, key: str, value: Any) -> Self:
        self.add_expression(self._filter.compare(operator, key, value))
        return self

    def find(self, code: str) -> dict[str, Any]:
        return self._manager.find(code, self._domains)

    def function(self, name: str, params: list[Any]) -> str:
        return self._filter.make(name, params)

    def get(self, item_id: str) -> dict[str, Any]:
        return self._manager.get(item_id, self._domains)

    def has(self, domain: str, type: str | None = None, ref_id: str | None = None) -> Self:
        params: list[Any] = [domain]
        if type:
            params.append(type)
        if ref_id:
            params.append(ref_id)

        func = self._filter.make("supplier:has", params)
        self.add_expression(self._filter.compare("!=", func, None))
        return self

    def parse(self, conditions: dict[str, Any]) -> Self:
        cond = self._filter.parse(conditions)
        if cond is not None:
            self.add_expression(cond)
        return self

    def resolve(self, name: str) -> dict[str, Any]:
        """Return the supplier whose code is *name*, enabled or not.

        Raises:
            NotFoundError: If no supplier has that code.
        """
        criteria = self._manager.filter().add("supplier.code", "==", name).slice(0, 1)
        item = self._manager.search(criteria, self._domains).first()

        if item is None:
            msg = f'Unable to find supplier "{name}"'
            raise NotFoundError(msg, code=404)
        return item

    def search(self) -> SearchResult:
        criteria = self._filter.copy()

        criteria.add(criteria.and_(self.get_conditions()))
        criteria.set_sortations(self.get_sortations())

        return self._manager.search(criteria, self._domains)

    def slice(self, start: int, limit: int) -> Self:
        maxsize = load_common(self._context.config).max_size
        self._filter.slice(start, min(limit, maxsize))
        return self

    def sort(self, key: str | None = None) -> Self:
        for token in self.split_keys(key):
            sortkey = parse_sort_key(token)
            self.add_expression(self._filter.sort(sortkey.direction, sortkey.name))
        return self

    def uses(self, domains: list[str]) -> Self:
        self._domains = list(domains)
        return self


class SupplierDecorator(ControllerDecorator, SupplierController):
    """Base for supplier controller decorators."""

    interface = SupplierController

    def compare(self, operator: str, key: str, value: Any) -> Self:
        return self._chain("compare", operator, key, value)

    def find(self, code: str) -> dict[str, Any]:
        return self._forward("find", code)

    def function(self, name: str, params: list[Any]) -> str:
        return self._forward("function", name, params)

    def get(self, item_id: str) -> dict[str, Any]:
        return self._forward("get", item_id)

    def has(self, domain: str, type: str | None = None, ref_id: str | None = None) -> Self:
        return self._chain("has", domain, type, ref_id)

    def parse(self, conditions: dict[str, Any]) -> Self:
        return self._chain("parse", conditions)

    def resolve(self, name: str) -> dict[str, Any]:
        return self._forward("resolve", name)

    def search(self) -> SearchResult:
        return self._forward("search")

    def slice(self, start: int, limit: int) -> Self:
        return self._chain("slice", start, limit)

    def sort(self, key: str | None = None) -> Self:
        return self._chain("sort", key)

    def uses(self, domains: list[str]) -> Self:
        return self._chain("uses", domains)
