"""Locating and loading ``shopfront.toml``.

The file is searched upwards from the working directory, so a shop project
can be used from any of its subdirectories. ``SHOPFRONT_CONFIG`` and the
``--config`` flag point at a file directly. Only the ``[controller]`` table
is relevant to controller resolution.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from shopfront.config.store import ConfigStore
from shopfront.errors import ConfigurationError

CONFIG_FILENAME = "shopfront.toml"
CONFIG_ENV_VAR = "SHOPFRONT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for shopfront.toml.

    Returns the path to the config file, or None if not found.
    Checks SHOPFRONT_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> ConfigStore:
    """Load the ``[controller]`` table of a TOML file into a :class:`ConfigStore`.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns an empty store if no file is found.

    Raises:
        ConfigurationError: If the file is not valid TOML or its
            ``controller`` entry is not a table.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return ConfigStore()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}"
        raise ConfigurationError(msg, code=400, errors={str(path): str(exc)}) from exc

    controller = data.get("controller", {})
    if not isinstance(controller, dict):
        msg = f"[controller] in {path} must be a table"
        raise ConfigurationError(msg, code=400)
    return ConfigStore({"controller": controller}) if controller else ConfigStore()
