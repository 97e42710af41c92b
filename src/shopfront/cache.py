"""Prototype cache of fully constructed and decorated controller chains.

Entries are templates: :class:`~shopfront.frontend.Frontend` only ever
hands out duplicates of them.

Population is not synchronised. Two requests missing the same key both
build a chain and the last ``put()`` wins; both chains are equivalent.
"""

from __future__ import annotations

import logging

from shopfront.controllers.base import ControllerHandle

logger = logging.getLogger(__name__)


class PrototypeCache:
    """Identifier → controller template store with an on/off switch."""

    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled = enabled
        self._entries: dict[str, ControllerHandle] = {}

    @property
    def enabled(self) -> bool:
        return self._enabled

    def get(self, identifier: str) -> ControllerHandle | None:
        """Return the template for *identifier*; always None when disabled."""
        if not self._enabled:
            return None
        return self._entries.get(identifier)

    def put(self, identifier: str, handle: ControllerHandle) -> None:
        """Store *handle* as template for *identifier*; no-op when disabled."""
        if not self._enabled:
            return
        self._entries[identifier] = handle
        logger.debug("Cached controller %s", identifier)

    def drop(self, identifier: str) -> None:
        self._entries.pop(identifier, None)

    def clear(self) -> None:
        self._entries.clear()

    def enable(self) -> None:
        self._enabled = True
        self.clear()

    def disable(self) -> None:
        """Switch caching off and drop all templates."""
        self._enabled = False
        self.clear()

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)
