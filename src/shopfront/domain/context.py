"""Request context shared by controllers and decorators."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shopfront.config.store import ConfigStore
    from shopfront.domain.managers import Manager


@dataclass
class Context:
    """Configuration plus access to the domain managers.

    ``managers`` maps a domain name (``"attribute"``) to either a manager
    instance or a zero-argument factory returning one. ``fallback`` creates
    managers for domains missing from the mapping.
    """

    config: ConfigStore
    managers: dict[str, Manager | Callable[[], Manager]] = field(default_factory=dict)
    fallback: Callable[[str], Manager] | None = None

    def manager(self, domain: str) -> Manager:
        """Return the manager registered for *domain*.

        Raises:
            KeyError: If no manager is registered for *domain*.
        """
        entry = self.managers.get(domain)
        if entry is None and self.fallback is not None:
            entry = self.managers[domain] = self.fallback(domain)
        if entry is None:
            msg = f"No manager registered for domain {domain!r}"
            raise KeyError(msg)

        if not hasattr(entry, "filter"):
            entry = entry()
            self.managers[domain] = entry
        return entry  # type: ignore[return-value]
