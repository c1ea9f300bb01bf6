"""Invocation timing — log start and duration of a single awaited action."""

from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")


def elapsed_ms(start: float) -> int:
    """Whole milliseconds since *start* (a :func:`time.perf_counter` value)."""
    return int((time.perf_counter() - start) * 1000)


class Timing:
    """Wrap an awaitable action with start/finish log records.

    Parameters
    ----------
    logger:
        Logger to write to.  Defaults to this module's logger.
    level:
        Level of the completion record, ``logging.DEBUG`` or
        ``logging.INFO``.  The start record is always DEBUG.

    A failing action propagates unchanged and produces no completion
    record.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        level: int = logging.DEBUG,
    ) -> None:
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.level = level

    async def __call__(
        self,
        name: str,
        action: Callable[[], Awaitable[T]],
        correlation_id: str | None = None,
    ) -> T:
        start = time.perf_counter()
        self.logger.debug("Executing %s", name, extra={"correlation_id": correlation_id})

        result = await action()

        ms = elapsed_ms(start)
        self.logger.log(
            self.level,
            "Executing %s (took %d ms)",
            name,
            ms,
            extra={
                "operation": name,
                "duration_ms": ms,
                "correlation_id": correlation_id,
            },
        )
        return result
