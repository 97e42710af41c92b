"""Shared pytest fixtures for shopfront tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

import pytest
from click.testing import CliRunner

from shopfront.config.store import ConfigStore
from shopfront.domain.context import Context
from shopfront.domain.managers import InMemoryManager
from shopfront.frontend import Frontend
from shopfront.plugins import build_registry
from shopfront.registry import ControllerRegistry

ATTRIBUTES: list[dict[str, Any]] = [
    {
        "attribute.id": "1",
        "attribute.code": "red",
        "attribute.type": "color",
        "attribute.domain": "product",
        "attribute.position": 1,
        "attribute.status": 1,
        "props": {"htmlcolor": "#f00"},
        "refs": {"text": ["Rot"]},
    },
    {
        "attribute.id": "2",
        "attribute.code": "blue",
        "attribute.type": "color",
        "attribute.domain": "product",
        "attribute.position": 0,
        "attribute.status": 1,
        "props": {"htmlcolor": "#00f"},
    },
    {
        "attribute.id": "3",
        "attribute.code": "xl",
        "attribute.type": "size",
        "attribute.domain": "product",
        "attribute.position": 0,
        "attribute.status": 1,
    },
    {
        "attribute.id": "4",
        "attribute.code": "black",
        "attribute.type": "color",
        "attribute.domain": "product",
        "attribute.position": 2,
        "attribute.status": 0,
    },
    {
        "attribute.id": "5",
        "attribute.code": "gift",
        "attribute.type": "option",
        "attribute.domain": "catalog",
        "attribute.position": 0,
        "attribute.status": 1,
    },
]

SUPPLIERS: list[dict[str, Any]] = [
    {
        "supplier.id": "s1",
        "supplier.code": "demo-ballroom",
        "supplier.label": "Ballroom",
        "supplier.status": 1,
        "refs": {"media": ["logo.png"]},
    },
    {
        "supplier.id": "s2",
        "supplier.code": "demo-test",
        "supplier.label": "Test",
        "supplier.status": 1,
    },
    {
        "supplier.id": "s3",
        "supplier.code": "demo-hidden",
        "supplier.label": "Hidden",
        "supplier.status": 0,
    },
]


def _has(item: dict[str, Any], domain: str, *_args: Any) -> bool | None:
    return True if domain in item.get("refs", {}) else None


def _prop(item: dict[str, Any], type: str, _lang: str | None, value: str | None) -> str | None:
    found = item.get("props", {}).get(type)
    if value is not None and found != value:
        return None
    return found


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None]:
    """Undo handlers installed by CLI invocations that configure logging."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)
    logging.getLogger("shopfront").setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's SHOPFRONT_* environment out of the tests."""
    monkeypatch.delenv("SHOPFRONT_CONFIG", raising=False)
    monkeypatch.delenv("SHOPFRONT_CACHE", raising=False)


@pytest.fixture
def config() -> ConfigStore:
    """Empty configuration; tests set the keys they need."""
    return ConfigStore()


@pytest.fixture
def attribute_manager() -> InMemoryManager:
    return InMemoryManager(
        "attribute",
        ATTRIBUTES,
        functions={"attribute:has": _has, "attribute:prop": _prop},
    )


@pytest.fixture
def supplier_manager() -> InMemoryManager:
    return InMemoryManager("supplier", SUPPLIERS, functions={"supplier:has": _has})


@pytest.fixture
def context(
    config: ConfigStore,
    attribute_manager: InMemoryManager,
    supplier_manager: InMemoryManager,
) -> Context:
    """Context with populated attribute and supplier managers."""
    return Context(
        config=config,
        managers={"attribute": attribute_manager, "supplier": supplier_manager},
    )


@pytest.fixture
def registry() -> ControllerRegistry:
    """Registry populated by the built-in plugin only."""
    return build_registry(discover=False)


@pytest.fixture
def frontend(registry: ControllerRegistry) -> Frontend:
    return Frontend(registry)
