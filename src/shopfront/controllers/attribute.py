"""Attribute frontend controller.

Attributes are filtered by the domain they belong to (``"product"`` by
default). The ``position`` sort key orders by type first, then position.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Self

from shopfront.config.models import load_common
from shopfront.controllers.base import ChainRoot, Controller, ControllerDecorator, ControllerHandle
from shopfront.domain.context import Context
from shopfront.domain.keys import parse_sort_key
from shopfront.domain.managers import SearchResult


class AttributeController(ControllerHandle):
    """Interface of attribute controllers and their decorators."""

    @abstractmethod
    def attribute(self, attr_ids: str | list[str] | None) -> Self: ...

    @abstractmethod
    def compare(self, operator: str, key: str, value: Any) -> Self: ...

    @abstractmethod
    def domain(self, domain: str) -> Self: ...

    @abstractmethod
    def find(self, code: str, type: str) -> dict[str, Any]: ...

    @abstractmethod
    def function(self, name: str, params: list[Any]) -> str: ...

    @abstractmethod
    def get(self, item_id: str) -> dict[str, Any]: ...

    @abstractmethod
    def has(self, domain: str, type: str | None = None, ref_id: str | None = None) -> Self: ...

    @abstractmethod
    def parse(self, conditions: dict[str, Any]) -> Self: ...

    @abstractmethod
    def prop(self, type: str, value: str | None = None, lang_id: str | None = None) -> Self: ...

    @abstractmethod
    def search(self) -> SearchResult: ...

    @abstractmethod
    def slice(self, start: int, limit: int) -> Self: ...

    @abstractmethod
    def sort(self, key: str | None = None) -> Self: ...

    @abstractmethod
    def types(self, codes: str | list[str] | None) -> Self: ...

    @abstractmethod
    def uses(self, domains: list[str]) -> Self: ...


class StandardAttributeController(Controller, AttributeController):
    """Default attribute controller backed by the ``attribute`` manager."""

    def __init__(self, context: Context, root: ChainRoot | None = None) -> None:
        super().__init__(context, root)
        self._manager = context.manager("attribute")
        self._filter = self._manager.filter(True)
        self._domains: list[str] = []
        self._domain = "product"

    def _duplicate_state(self) -> None:
        super()._duplicate_state()
        self._filter = self._filter.copy()

    def attribute(self, attr_ids: str | list[str] | None) -> Self:
        """Restrict to the given attribute ID or IDs."""
        if attr_ids:
            self.add_expression(self._filter.compare("==", "attribute.id", attr_ids))
        return self

    def compare(self, operator: str, key: str, value: Any) -> Self:
        self.add_expression(self._filter.compare(operator, key, value))
        return self

    def domain(self, domain: str) -> Self:
        self._domain = domain
        return self

    def find(self, code: str, type: str) -> dict[str, Any]:
        return self._manager.find(code, self._domains, self._domain, type)

    def function(self, name: str, params: list[Any]) -> str:
        return self._filter.make(name, params)

    def get(self, item_id: str) -> dict[str, Any]:
        return self._manager.get(item_id, self._domains)

    def has(self, domain: str, type: str | None = None, ref_id: str | None = None) -> Self:
        """Restrict to attributes referencing items of *domain*."""
        params: list[Any] = [domain]
        if type:
            params.append(type)
        if ref_id:
            params.append(ref_id)

        func = self._filter.make("attribute:has", params)
        self.add_expression(self._filter.compare("!=", func, None))
        return self

    def parse(self, conditions: dict[str, Any]) -> Self:
        cond = self._filter.parse(conditions)
        if cond is not None:
            self.add_expression(cond)
        return self

    def prop(self, type: str, value: str | None = None, lang_id: str | None = None) -> Self:
        """Restrict to attributes carrying the property *type*."""
        func = self._filter.make("attribute:prop", [type, lang_id, value])
        self.add_expression(self._filter.compare("!=", func, None))
        return self

    def search(self) -> SearchResult:
        criteria = self._filter.copy()
        domain = criteria.compare("==", "attribute.domain", self._domain)

        criteria.add(criteria.and_([domain, *self.get_conditions()]))
        criteria.set_sortations(self.get_sortations())

        return self._manager.search(criteria, self._domains)

    def slice(self, start: int, limit: int) -> Self:
        maxsize = load_common(self._context.config).max_size
        self._filter.slice(start, min(limit, maxsize))
        return self

    def sort(self, key: str | None = None) -> Self:
        for token in self.split_keys(key):
            sortkey = parse_sort_key(token)

            if sortkey.name == "position":
                self.add_expression(self._filter.sort(sortkey.direction, "attribute.type"))
                self.add_expression(self._filter.sort(sortkey.direction, "attribute.position"))
            else:
                self.add_expression(self._filter.sort(sortkey.direction, sortkey.name))

        return self

    def types(self, codes: str | list[str] | None) -> Self:
        if codes:
            self.add_expression(self._filter.compare("==", "attribute.type", codes))
        return self

    def uses(self, domains: list[str]) -> Self:
        """Fetch the referenced items of *domains* together with the attributes."""
        self._domains = list(domains)
        return self


class AttributeDecorator(ControllerDecorator, AttributeController):
    """Base for attribute controller decorators."""

    interface = AttributeController

    def attribute(self, attr_ids: str | list[str] | None) -> Self:
        return self._chain("attribute", attr_ids)

    def compare(self, operator: str, key: str, value: Any) -> Self:
        return self._chain("compare", operator, key, value)

    def domain(self, domain: str) -> Self:
        return self._chain("domain", domain)

    def find(self, code: str, type: str) -> dict[str, Any]:
        return self._forward("find", code, type)

    def function(self, name: str, params: list[Any]) -> str:
        return self._forward("function", name, params)

    def get(self, item_id: str) -> dict[str, Any]:
        return self._forward("get", item_id)

    def has(self, domain: str, type: str | None = None, ref_id: str | None = None) -> Self:
        return self._chain("has", domain, type, ref_id)

    def parse(self, conditions: dict[str, Any]) -> Self:
        return self._chain("parse", conditions)

    def prop(self, type: str, value: str | None = None, lang_id: str | None = None) -> Self:
        return self._chain("prop", type, value, lang_id)

    def search(self) -> SearchResult:
        return self._forward("search")

    def slice(self, start: int, limit: int) -> Self:
        return self._chain("slice", start, limit)

    def sort(self, key: str | None = None) -> Self:
        return self._chain("sort", key)

    def types(self, codes: str | list[str] | None) -> Self:
        return self._chain("types", codes)

    def uses(self, domains: list[str]) -> Self:
        return self._chain("uses", domains)
