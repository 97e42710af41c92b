"""Hierarchical configuration store addressed by slash-separated keys.

Controllers read their options as ``controller/frontend/<path>/...``; the
store walks nested dicts one segment at a time and falls back to the
given default when any segment is missing.
"""

from __future__ import annotations

import copy
from typing import Any

_MISSING = object()


class ConfigStore:
    """Nested-dict configuration with ``get("a/b/c", default)`` access."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(data) if data else {}

    def get(self, key: str, default: Any = None) -> Any:
        node: Any = self._data
        for part in _split(key):
            if not isinstance(node, dict):
                return default
            node = node.get(part, _MISSING)
            if node is _MISSING:
                return default
        return node

    def set(self, key: str, value: Any) -> ConfigStore:
        parts = _split(key)
        if not parts:
            msg = "Config key must not be empty"
            raise ValueError(msg)

        node = self._data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value
        return self

    def section(self, key: str) -> dict[str, Any]:
        """Return a copy of the mapping stored under *key* (empty if absent)."""
        value = self.get(key, {})
        return copy.deepcopy(value) if isinstance(value, dict) else {}

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)


def _split(key: str) -> list[str]:
    return [part for part in key.split("/") if part]
