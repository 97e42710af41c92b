"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Builds the plugin registry and the frontend lazily
so ``--help`` and ``--version`` never load plugins.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

if TYPE_CHECKING:
    from shopfront.config.settings import ShopSettings
    from shopfront.domain.context import Context
    from shopfront.frontend import Frontend


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: ShopSettings) -> None:
        self.settings = settings
        self._frontend: Frontend | None = None

        from shopfront.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def frontend(self) -> Frontend:
        """The frontend (created lazily on first access)."""
        if self._frontend is None:
            from shopfront.cache import PrototypeCache
            from shopfront.frontend import Frontend
            from shopfront.plugins import build_registry

            cache = PrototypeCache(enabled=self.settings.cache)
            self._frontend = Frontend(build_registry(), cache)
        return self._frontend

    def context(self) -> Context:
        """A request context with empty in-memory managers."""
        from shopfront.domain.context import Context
        from shopfront.domain.managers import InMemoryManager

        return Context(config=self.settings.config_store(), fallback=InMemoryManager)

    def emit(self, payload: Any, rendered: str) -> None:
        """Write *payload* as JSON or the *rendered* text to stdout."""
        if self.settings.json_output:
            click.echo(json.dumps(payload, indent=2))
        else:
            click.echo(rendered, nl=False)

    def fail(self, message: str, errors: dict[str, Any] | None = None) -> None:
        """Write *message* and any per-key *errors* to stderr and exit with code 1."""
        from shopfront.output.console import render_error

        if self.settings.json_output:
            payload: dict[str, Any] = {"ok": False, "error": message}
            if errors:
                payload["errors"] = errors
            click.echo(json.dumps(payload, default=str), err=True)
        else:
            click.echo(render_error(message, errors), err=True, nl=False)
        raise SystemExit(1)
