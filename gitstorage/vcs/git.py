"""Git — bind the tokenizer, invocation timing and a runner to a working tree."""

from __future__ import annotations

from pathlib import Path
from typing import Awaitable, Protocol, Sequence

from gitstorage.vcs.process import Runner, run_process
from gitstorage.vcs.timing import Timing
from gitstorage.vcs.tokenizer import parse_command


class GitCommand(Protocol):
    """A git executor bound to one working directory."""

    def __call__(
        self,
        command: str | Sequence[str],
        correlation_id: str | None = None,
    ) -> Awaitable[str]: ...


class Git:
    """Factory for working-tree-bound git executors.

    Parameters
    ----------
    timing:
        Invocation timing used for every command.
    runner:
        Process execution collaborator; defaults to :func:`run_process`.
    binary:
        Name of the git executable.
    """

    def __init__(
        self,
        timing: Timing | None = None,
        runner: Runner = run_process,
        binary: str = "git",
    ) -> None:
        self.timing = timing or Timing()
        self.runner = runner
        self.binary = binary

    def at(self, repo_path: str | Path | None = None) -> GitCommand:
        """Return an executor running commands inside *repo_path*.

        String commands are split with :func:`parse_command`; sequences are
        passed through as-is.
        """

        async def execute(
            command: str | Sequence[str],
            correlation_id: str | None = None,
        ) -> str:
            if isinstance(command, str):
                args = parse_command(command)
                name = f"{self.binary} {command}"
            else:
                args = list(command)
                name = " ".join([self.binary, *args])
            return await self.timing(
                name,
                lambda: self.runner(self.binary, args, repo_path),
                correlation_id,
            )

        return execute
