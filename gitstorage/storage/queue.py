"""Write queue — serialise every mutation of the write tree.

:class:`WriteQueue` runs one unit of work at a time in enqueue order.
:class:`QueueTimingWrapper` adds a correlation id per call, wait/operation/
total durations, and hands the unit a git executor tagged with that id.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from typing import Awaitable, Callable, Sequence, TypeVar

from gitstorage.vcs.git import GitCommand
from gitstorage.vcs.timing import elapsed_ms

T = TypeVar("T")

Execute = Callable[[str | Sequence[str]], Awaitable[str]]


def new_correlation_id() -> str:
    return uuid.uuid4().hex


class WriteQueue:
    """Single-concurrency FIFO executor.

    ``asyncio.Lock`` hands ownership to waiters in the order they started
    waiting, so units run strictly in enqueue order.  A failing unit
    releases the queue like a successful one.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._pending = 0

    @property
    def pending(self) -> int:
        """Number of units enqueued or running."""
        return self._pending

    async def run(self, fn: Callable[[], Awaitable[T]]) -> T:
        self._pending += 1
        try:
            async with self._lock:
                return await fn()
        finally:
            self._pending -= 1


class QueueTimingWrapper:
    """Run bodies on a :class:`WriteQueue` with timing and correlation.

    Parameters
    ----------
    queue:
        The queue guarding the write tree.
    write_git:
        Git executor bound to the write tree.
    logger:
        Logger for the per-call summary record.
    level:
        Level of the summary record, ``logging.DEBUG`` or ``logging.INFO``.

    The summary record is written whether the body succeeds or fails.
    """

    def __init__(
        self,
        queue: WriteQueue,
        write_git: GitCommand,
        logger: logging.Logger | None = None,
        level: int = logging.DEBUG,
    ) -> None:
        self.queue = queue
        self.write_git = write_git
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.level = level

    async def __call__(
        self,
        operation_name: str,
        body: Callable[[Execute], Awaitable[T]],
    ) -> T:
        correlation_id = new_correlation_id()
        wait_start = time.perf_counter()

        def execute(command: str | Sequence[str]) -> Awaitable[str]:
            return self.write_git(command, correlation_id)

        async def unit() -> T:
            wait_ms = elapsed_ms(wait_start)
            operation_start = time.perf_counter()
            try:
                return await body(execute)
            finally:
                self.logger.log(
                    self.level,
                    "Git operation finished",
                    extra={
                        "correlation_id": correlation_id,
                        "operation": operation_name,
                        "wait_duration_ms": wait_ms,
                        "operation_duration_ms": elapsed_ms(operation_start),
                        "total_duration_ms": elapsed_ms(wait_start),
                    },
                )

        return await self.queue.run(unit)
