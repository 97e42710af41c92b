"""Criteria expressions — comparisons, combinations and sortations.

Expressions are small frozen value objects. :class:`Criteria` is the
mutable builder a manager hands out via ``manager.filter()``: it creates
expressions, holds a base condition, the sortations and the slice window.
Copying a Criteria (``copy.copy``) yields independent lists so a cached
template can be specialised per request.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from typing import Any

COMPARE_OPERATORS: frozenset[str] = frozenset({"==", "!=", "<", "<=", ">", ">=", "=~", "~="})
COMBINE_OPERATORS: frozenset[str] = frozenset({"&&", "||", "!"})
SORT_DIRECTIONS: frozenset[str] = frozenset({"+", "-"})


class Expression:
    """Marker base for all criteria expressions."""


@dataclass(frozen=True)
class Compare(Expression):
    """Compare the value of *name* with *value* using *operator*."""

    operator: str
    name: str
    value: Any

    def __post_init__(self) -> None:
        if self.operator not in COMPARE_OPERATORS:
            msg = f"Invalid compare operator {self.operator!r}"
            raise ValueError(msg)


@dataclass(frozen=True)
class Combine(Expression):
    """Combine sub-expressions with ``&&``, ``||`` or ``!``."""

    operator: str
    expressions: tuple[Expression, ...]

    def __post_init__(self) -> None:
        if self.operator not in COMBINE_OPERATORS:
            msg = f"Invalid combine operator {self.operator!r}"
            raise ValueError(msg)


@dataclass(frozen=True)
class Sort(Expression):
    """Order results by *name* in *direction* (``+`` or ``-``)."""

    direction: str
    name: str

    def __post_init__(self) -> None:
        if self.direction not in SORT_DIRECTIONS:
            msg = f"Invalid sort direction {self.direction!r}"
            raise ValueError(msg)


class Criteria:
    """Mutable search criteria: base condition, sortations and slice."""

    def __init__(self, *, offset: int = 0, limit: int = 100) -> None:
        self._condition: Expression | None = None
        self._sortations: list[Sort] = []
        self._offset = offset
        self._limit = limit

    def __copy__(self) -> Criteria:
        clone = Criteria(offset=self._offset, limit=self._limit)
        clone._condition = self._condition
        clone._sortations = list(self._sortations)
        return clone

    def copy(self) -> Criteria:
        return copy.copy(self)

    # ------------------------------------------------------------------
    # Expression factories
    # ------------------------------------------------------------------

    def compare(self, operator: str, name: str, value: Any) -> Compare:
        return Compare(operator, name, value)

    def and_(self, expressions: list[Expression | None]) -> Combine | None:
        """AND all non-empty expressions, None when nothing is left."""
        items = tuple(expr for expr in expressions if expr is not None)
        if not items:
            return None
        return Combine("&&", items)

    def or_(self, expressions: list[Expression | None]) -> Combine | None:
        items = tuple(expr for expr in expressions if expr is not None)
        if not items:
            return None
        return Combine("||", items)

    def not_(self, expression: Expression) -> Combine:
        return Combine("!", (expression,))

    def sort(self, direction: str, name: str) -> Sort:
        return Sort(direction, name)

    def make(self, name: str, params: list[Any]) -> str:
        """Build a search function key, e.g. ``supplier:has("media","default")``."""
        args = ",".join(json.dumps(param) for param in params)
        return f"{name}({args})"

    def parse(self, conditions: dict[str, Any]) -> Expression | None:
        """Parse a nested condition mapping into an expression.

        Accepts ``{"&&": [...]}``, ``{"||": [...]}``, ``{"!": {...}}`` and
        ``{"==": {"key": value}}`` shapes; several keys at one level are
        AND-combined.
        """
        exprs: list[Expression | None] = []

        for operator, operand in conditions.items():
            if operator in ("&&", "||"):
                parts = [self.parse(item) for item in operand]
                exprs.append(self.and_(parts) if operator == "&&" else self.or_(parts))
            elif operator == "!":
                inner = self.parse(operand)
                if inner is not None:
                    exprs.append(self.not_(inner))
            elif operator in COMPARE_OPERATORS:
                for name, value in operand.items():
                    exprs.append(self.compare(operator, name, value))
            else:
                msg = f"Invalid operator {operator!r} in conditions"
                raise ValueError(msg)

        exprs = [expr for expr in exprs if expr is not None]
        if not exprs:
            return None
        if len(exprs) == 1:
            return exprs[0]
        return self.and_(exprs)

    # ------------------------------------------------------------------
    # Builder state
    # ------------------------------------------------------------------

    def add(self, expr: Expression | str | None, operator: str | None = None, value: Any = None) -> Criteria:
        """AND *expr* to the base condition.

        With an *operator*, *expr* is a key name and a comparison is built.
        """
        if operator is not None:
            expr = self.compare(operator, str(expr), value)
        if expr is None:
            return self
        if not isinstance(expr, Expression):
            msg = f"Expected an expression, got {type(expr).__name__}"
            raise TypeError(msg)

        self._condition = expr if self._condition is None else self.and_([self._condition, expr])
        return self

    def get_conditions(self) -> Expression | None:
        return self._condition

    def set_conditions(self, expr: Expression | None) -> Criteria:
        self._condition = expr
        return self

    def get_sortations(self) -> list[Sort]:
        return list(self._sortations)

    def set_sortations(self, sortations: list[Sort]) -> Criteria:
        self._sortations = list(sortations)
        return self

    def slice(self, offset: int, limit: int) -> Criteria:
        self._offset = max(0, offset)
        self._limit = max(0, limit)
        return self

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def limit(self) -> int:
        return self._limit
