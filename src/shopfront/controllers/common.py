"""Shared decorators applicable to controllers of every domain."""

from __future__ import annotations

import time
from typing import Any

import structlog

from shopfront.controllers.base import CommonDecorator


class Log(CommonDecorator):
    """Log every forwarded controller operation with its duration."""

    def _forward(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        log = structlog.get_logger("shopfront.controller")
        start = time.perf_counter()
        try:
            result = super()._forward(operation, *args, **kwargs)
        except Exception as exc:
            log.warning(
                "controller.call",
                controller=type(self.controller).__name__,
                operation=operation,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                ok=False,
                error=str(exc),
            )
            raise

        log.debug(
            "controller.call",
            controller=type(self.controller).__name__,
            operation=operation,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            ok=True,
        )
        return result
