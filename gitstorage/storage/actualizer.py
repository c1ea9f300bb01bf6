"""Read actualizer — one pull at a time for the read tree.

Concurrent callers asking for the latest revision share a single in-flight
``pull`` + ``log`` cycle and all receive its outcome.
"""

from __future__ import annotations

import asyncio
import logging

from gitstorage.vcs.git import GitCommand

logger = logging.getLogger(__name__)

HEAD_REVISION = "log -n 1 --pretty=format:%H"


class ReadActualizer:
    """Deduplicate concurrent "fetch latest revision" requests.

    Parameters
    ----------
    read_git:
        Git executor bound to the read tree.
    """

    def __init__(self, read_git: GitCommand) -> None:
        self.read_git = read_git
        self._in_flight: asyncio.Task[str] | None = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None

    async def actualize(self, correlation_id: str | None = None) -> str:
        """Pull the read tree and return its head revision.

        Joins the outstanding cycle when one is running.  Every caller of a
        cycle receives the same revision or the same exception.
        """
        task = self._in_flight
        if task is None:
            task = asyncio.ensure_future(self._pull_and_query(correlation_id))
            self._in_flight = task
        else:
            logger.debug(
                "Joining in-flight actualize",
                extra={"correlation_id": correlation_id},
            )
        return await asyncio.shield(task)

    async def _pull_and_query(self, correlation_id: str | None) -> str:
        try:
            await self.read_git("pull", correlation_id)
            revision = await self.read_git(HEAD_REVISION, correlation_id)
            return revision.strip()
        finally:
            self._in_flight = None
