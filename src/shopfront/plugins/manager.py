"""Plugin discovery and registry population.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints
for the ``shopfront.plugins`` group, plus the built-in core plugin.
Capabilities: controller registration, shared and local decorators.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from shopfront.plugins.builtins.core import CorePlugin
from shopfront.plugins.hookspecs import ShopfrontHookSpec
from shopfront.registry import ControllerRegistry

PROJECT_NAME = "shopfront"
ENTRY_POINT_GROUP = "shopfront.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and registry population."""

    def __init__(self, *, builtins: bool = True) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(ShopfrontHookSpec)
        self._builtin_names: set[str] = set()
        self._loaded: bool = False
        if builtins:
            self.register_plugin(CorePlugin(), name="core")
            self._builtin_names.add("core")

    def discover_and_load(self) -> list[str]:
        """Load plugins from the ``shopfront.plugins`` entry point group.

        Returns a list of all registered plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    def get_plugins(self) -> list[object]:
        """Return all registered plugins."""
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def populate(self, registry: ControllerRegistry) -> ControllerRegistry:
        """Let every plugin register its controllers, then its decorators.

        Errors of built-in plugins propagate. A failing hook of a
        third-party plugin is logged as a warning and skipped.
        """
        for hook_name in ("register_controllers", "register_decorators"):
            caller = getattr(self._pm.hook, hook_name)
            # registration order: built-ins first
            for impl in caller.get_hookimpls():
                if impl.plugin_name in self._builtin_names:
                    impl.function(registry=registry)
                    continue
                try:
                    impl.function(registry=registry)
                except Exception:
                    logger.warning(
                        "Plugin %s failed in %s",
                        impl.plugin_name,
                        hook_name,
                        exc_info=True,
                    )
        return registry

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)


def build_registry(*, discover: bool = True) -> ControllerRegistry:
    """Create a registry populated by the built-in and installed plugins."""
    manager = PluginManager()
    if discover:
        manager.discover_and_load()
    return manager.populate(ControllerRegistry())
