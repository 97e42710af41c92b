"""Exception hierarchy for controller resolution and composition.

Every error raised by the composition core derives from :class:`FrontendError`
so callers can catch one type at the request boundary. The ``code`` mirrors
an HTTP status (400 for bad input, 404 for unknown names, 500 when a
controller cannot be constructed) and ``errors``
carries an optional structured mapping when several problems were found.
"""

from __future__ import annotations

from typing import Any


class FrontendError(Exception):
    """Base error of the frontend controller layer."""

    def __init__(
        self,
        message: str = "",
        code: int = 0,
        errors: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.errors: dict[str, Any] = dict(errors or {})

    def error_list(self) -> dict[str, Any]:
        """Return the mapping of keys to error messages."""
        return dict(self.errors)


class ConfigurationError(FrontendError):
    """A configured path, implementation or decorator name is invalid."""


class ResolutionError(FrontendError):
    """A controller or decorator could not be resolved."""


class ContractError(FrontendError, TypeError):
    """A handle does not implement the interface required by its domain."""


class DelegationError(FrontendError, AttributeError):
    """No layer of a controller chain provides the requested operation."""


class NotFoundError(FrontendError, LookupError):
    """A controller operation found no matching item."""
