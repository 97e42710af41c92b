"""Pydantic models for the per-domain controller configuration.

Sparse TOML contract: defaults baked here, ``shopfront.toml`` only
contains overrides, e.g.::

    [controller.frontend.common.decorators]
    default = ["Log"]

    [controller.frontend.supplier.decorators]
    excludes = ["Log"]
    local = ["Visible"]
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shopfront.errors import ConfigurationError

if TYPE_CHECKING:
    from shopfront.config.store import ConfigStore

DEFAULT_IMPLEMENTATION = "Standard"
DEFAULT_MAX_SIZE = 500


class DecoratorsConfig(BaseModel):
    """``[controller.frontend.<path>.decorators]`` section."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    default: list[str] = Field(default_factory=list)
    excludes: list[str] = Field(default_factory=list)
    global_: list[str] = Field(default_factory=list, alias="global")
    local: list[str] = Field(default_factory=list)


class ControllerConfig(BaseModel):
    """``[controller.frontend.<path>]`` section."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str = DEFAULT_IMPLEMENTATION
    decorators: DecoratorsConfig = Field(default_factory=DecoratorsConfig)


class CommonConfig(BaseModel):
    """``[controller.frontend.common]`` section."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    decorators: DecoratorsConfig = Field(default_factory=DecoratorsConfig)
    max_size: int = Field(default=DEFAULT_MAX_SIZE, alias="max-size", ge=1)


def validation_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten pydantic errors into ``{"dotted.location": message}``."""
    return {".".join(str(loc) for loc in err["loc"]): err["msg"] for err in exc.errors()}


def load_common(config: ConfigStore) -> CommonConfig:
    """Validate the ``controller/frontend/common`` section of *config*.

    Raises:
        ConfigurationError: If the section does not match :class:`CommonConfig`.
    """
    try:
        return CommonConfig.model_validate(config.section("controller/frontend/common"))
    except ValidationError as exc:
        msg = 'Invalid configuration for "controller/frontend/common"'
        raise ConfigurationError(msg, code=400, errors=validation_errors(exc)) from exc
