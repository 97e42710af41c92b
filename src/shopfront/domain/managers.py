"""Manager contract and an in-memory implementation.

Managers execute searches; controllers only build criteria for them.
:class:`InMemoryManager` evaluates criteria over plain item dicts keyed by
dotted names (``"supplier.code"``). Function-shaped keys such as
``supplier:has("media")`` are resolved through registered callables.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol

from shopfront.domain.criteria import Combine, Compare, Criteria, Expression, Sort

_FUNCTION_RE = re.compile(r"^(?P<name>[^(]+)\((?P<args>.*)\)$", re.DOTALL)

SearchFunction = Callable[..., Any]


@dataclass(frozen=True)
class SearchResult:
    """Items of one search page keyed by ID plus the unsliced total."""

    items: dict[str, dict[str, Any]] = field(default_factory=dict)
    total: int = 0

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.items.values())

    def __len__(self) -> int:
        return len(self.items)

    def keys(self) -> list[str]:
        return list(self.items)

    def first(self) -> dict[str, Any] | None:
        return next(iter(self.items.values()), None)


class Manager(Protocol):
    """Operations controllers need from a domain manager."""

    def filter(self, default: bool = False) -> Criteria: ...

    def search(self, criteria: Criteria, ref: Iterable[str] = ()) -> SearchResult: ...

    def get(self, item_id: str, ref: Iterable[str] = ()) -> dict[str, Any]: ...

    def find(
        self,
        code: str,
        ref: Iterable[str] = (),
        domain: str | None = None,
        type: str | None = None,
    ) -> dict[str, Any]: ...


class InMemoryManager:
    """Manager holding its items in memory.

    Args:
        domain: Key prefix of the items, e.g. ``"attribute"``.
        items: Item dicts; each needs ``"<domain>.id"``.
        functions: Search functions by name, called as ``func(item, *args)``.
    """

    def __init__(
        self,
        domain: str,
        items: Iterable[dict[str, Any]] = (),
        *,
        functions: dict[str, SearchFunction] | None = None,
    ) -> None:
        self.domain = domain
        self._items: dict[str, dict[str, Any]] = {}
        self._functions: dict[str, SearchFunction] = dict(functions or {})
        for item in items:
            self.save(item)

    def save(self, item: dict[str, Any]) -> dict[str, Any]:
        item_id = str(item[f"{self.domain}.id"])
        self._items[item_id] = dict(item)
        return self._items[item_id]

    def filter(self, default: bool = False) -> Criteria:
        """Return new criteria; *default* restricts to enabled items."""
        criteria = Criteria()
        if default:
            criteria.add(f"{self.domain}.status", "==", 1)
        return criteria

    def search(self, criteria: Criteria, ref: Iterable[str] = ()) -> SearchResult:
        condition = criteria.get_conditions()
        matches = [item for item in self._items.values() if self._matches(item, condition)]

        for sort in reversed(criteria.get_sortations()):
            matches.sort(
                key=lambda item, name=sort.name: _sort_value(self._value(item, name)),
                reverse=sort.direction == "-",
            )

        page = matches[criteria.offset : criteria.offset + criteria.limit]
        items = {str(item[f"{self.domain}.id"]): self._with_refs(item, ref) for item in page}
        return SearchResult(items=items, total=len(matches))

    def get(self, item_id: str, ref: Iterable[str] = ()) -> dict[str, Any]:
        try:
            return self._with_refs(self._items[str(item_id)], ref)
        except KeyError:
            msg = f"{self.domain.capitalize()} item with ID {item_id!r} not found"
            raise KeyError(msg) from None

    def find(
        self,
        code: str,
        ref: Iterable[str] = (),
        domain: str | None = None,
        type: str | None = None,
    ) -> dict[str, Any]:
        for item in self._items.values():
            if item.get(f"{self.domain}.code") != code:
                continue
            if domain is not None and item.get(f"{self.domain}.domain") != domain:
                continue
            if type is not None and item.get(f"{self.domain}.type") != type:
                continue
            return self._with_refs(item, ref)

        msg = f"{self.domain.capitalize()} item with code {code!r} not found"
        raise KeyError(msg)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def _with_refs(self, item: dict[str, Any], ref: Iterable[str]) -> dict[str, Any]:
        result = dict(item)
        refs = item.get("refs", {})
        result["refs"] = {name: refs[name] for name in ref if name in refs}
        return result

    def _value(self, item: dict[str, Any], name: str) -> Any:
        match = _FUNCTION_RE.match(name)
        if match is None:
            return item.get(name)

        func = self._functions.get(match.group("name"))
        if func is None:
            msg = f"Unknown search function {match.group('name')!r}"
            raise ValueError(msg)

        args = json.loads(f"[{match.group('args')}]")
        return func(item, *args)

    def _matches(self, item: dict[str, Any], expr: Expression | None) -> bool:
        if expr is None:
            return True
        if isinstance(expr, Combine):
            if expr.operator == "&&":
                return all(self._matches(item, sub) for sub in expr.expressions)
            if expr.operator == "||":
                return any(self._matches(item, sub) for sub in expr.expressions)
            return not self._matches(item, expr.expressions[0])
        if isinstance(expr, Compare):
            return _compare(self._value(item, expr.name), expr.operator, expr.value)
        if isinstance(expr, Sort):
            return True

        msg = f"Unsupported expression {type(expr).__name__}"
        raise TypeError(msg)


def _compare(actual: Any, operator: str, expected: Any) -> bool:
    if isinstance(expected, list | tuple | set):
        if operator == "!=":
            return all(_compare(actual, "!=", value) for value in expected)
        return any(_compare(actual, operator, value) for value in expected)

    if operator == "==":
        return actual == expected
    if operator == "!=":
        return actual != expected
    if actual is None or expected is None:
        return False
    if operator == "=~":
        return str(actual).startswith(str(expected))
    if operator == "~=":
        return str(expected) in str(actual)
    if operator == "<":
        return actual < expected
    if operator == "<=":
        return actual <= expected
    if operator == ">":
        return actual > expected
    return actual >= expected


def _sort_value(value: Any) -> tuple[bool, Any]:
    """Sort key placing missing values first."""
    return (value is not None, value if value is not None else 0)
