"""Process execution — run the git binary as an asyncio subprocess.

All git operations use :func:`asyncio.create_subprocess_exec`; no GitPython
dependency.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Sequence

logger = logging.getLogger(__name__)

Runner = Callable[[str, Sequence[str], str | Path | None], Awaitable[str]]


class GitError(Exception):
    """Raised when a git subprocess fails to start or exits non-zero.

    The message carries both stderr and stdout: git reports some
    conditions (``nothing to commit``) on stdout.
    """

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


async def run_process(
    binary: str,
    args: Sequence[str],
    cwd: str | Path | None = None,
) -> str:
    """Execute *binary* with *args* and return its stdout.

    Parameters
    ----------
    binary:
        Executable name, resolved through ``PATH``.
    args:
        Argument vector passed after the binary.
    cwd:
        Working directory for the command.

    Raises :class:`GitError` on spawn failure or non-zero exit.
    """
    command_line = " ".join([binary, *args])
    logger.debug("%s (cwd=%s)", command_line, cwd)
    try:
        proc = await asyncio.create_subprocess_exec(
            binary,
            *args,
            cwd=str(cwd) if cwd is not None else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise GitError(f"{command_line} could not be started: {exc}") from exc

    raw_out, raw_err = await proc.communicate()
    stdout = raw_out.decode("utf-8", errors="replace")
    stderr = raw_err.decode("utf-8", errors="replace")

    if proc.returncode != 0:
        details = "\n".join(part for part in (stderr.strip(), stdout.strip()) if part)
        raise GitError(
            f"{command_line} failed (rc={proc.returncode}): {details}",
            returncode=proc.returncode,
            stdout=stdout,
            stderr=stderr,
        )
    return stdout
