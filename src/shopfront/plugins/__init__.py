"""Extension layer — controller and decorator registration via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Third-party plugin failures are warnings, never errors.
"""

from shopfront.plugins.manager import PluginManager, build_registry

__all__ = ["PluginManager", "build_registry"]
