"""GitStorage — a git repository exposed as a versioned file store.

Two working trees live under ``target_path``:

  - ``read/`` stays on the branch head and is only ever pulled, through the
    :class:`~gitstorage.storage.actualizer.ReadActualizer`;
  - ``write/`` is scratch space, mutated only by units running on the
    :class:`~gitstorage.storage.queue.WriteQueue`, and idles on the branch
    head between units.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Awaitable, Callable, Generic, Mapping, TypeVar, Union

from gitstorage.config import READ_TREE_DIR, WRITE_TREE_DIR, StorageConfig
from gitstorage.files import FileStorage, ReadFileStorage
from gitstorage.storage.actualizer import HEAD_REVISION, ReadActualizer
from gitstorage.storage.meta import CommitMeta, commit_command, to_commit_meta
from gitstorage.storage.queue import Execute, QueueTimingWrapper, WriteQueue, new_correlation_id
from gitstorage.vcs.git import Git
from gitstorage.vcs.process import GitError
from gitstorage.vcs.timing import Timing

T = TypeVar("T")

NOTHING_TO_COMMIT = "nothing to commit"

ReadAction = Callable[[ReadFileStorage, str], Union[T, Awaitable[T]]]
WriteAction = Callable[[FileStorage, str], Union[T, Awaitable[T]]]


@dataclass(frozen=True)
class CommitResult(Generic[T]):
    """Outcome of :meth:`GitStorage.commit_and_push`."""

    result: T
    version: str


async def _call(action: Callable[..., Any], *args: Any) -> Any:
    """Invoke a sync or async action."""
    result = action(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


def _empty_dir(path: Path) -> None:
    """Create *path* if missing and delete everything inside it."""
    path.mkdir(parents=True, exist_ok=True)
    for entry in path.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


def _scoped(tree: Path, base_path: str | None) -> Path:
    return tree / base_path if base_path else tree


class GitStorage:
    """Versioned file storage backed by a git remote.

    Use :meth:`create` to build a ready instance; it clones the remote
    before returning.

    Parameters
    ----------
    config:
        Branch, remote and local layout.
    git:
        Git executor factory.  Defaults to the ``git`` binary with timing
        at ``config.log_level``.
    logger:
        Logger for timing and warning records.
    make_read_file_storage, make_file_storage:
        Factories building the file storages handed to actions.
    """

    def __init__(
        self,
        config: StorageConfig,
        *,
        git: Git | None = None,
        logger: logging.Logger | None = None,
        make_read_file_storage: Callable[[Path], ReadFileStorage] = ReadFileStorage,
        make_file_storage: Callable[[Path], FileStorage] = FileStorage,
    ) -> None:
        self.config = config
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.git = git or Git(Timing(self.logger, config.level))

        self.target_path = Path(config.target_path).resolve()
        self.read_path = self.target_path / READ_TREE_DIR
        self.write_path = self.target_path / WRITE_TREE_DIR

        self.read_storage = make_read_file_storage(_scoped(self.read_path, config.base_path))
        self.write_storage = make_file_storage(_scoped(self.write_path, config.base_path))

        self.read_git = self.git.at(self.read_path)
        self.write_git = self.git.at(self.write_path)

        self.queue = WriteQueue()
        self.enqueue = QueueTimingWrapper(
            self.queue, self.write_git, self.logger, config.level,
        )
        self.actualizer = ReadActualizer(self.read_git)

    # -- Bootstrap ------------------------------------------------------------

    @classmethod
    async def create(cls, config: StorageConfig, **kwargs: Any) -> GitStorage:
        """Build a storage and clone the remote into both working trees."""
        storage = cls(config, **kwargs)
        await storage.init()
        return storage

    async def init(self) -> None:
        """Reset ``target_path``, clone into ``read/`` and seed ``write/``.

        Must complete before any other operation is used.
        """
        await asyncio.to_thread(_empty_dir, self.target_path)
        self.read_path.mkdir(parents=True, exist_ok=True)
        self.write_path.mkdir(parents=True, exist_ok=True)

        await self.git.at()(
            [
                "clone", "-b", self.config.branch_name,
                "--", self.config.repo_url, str(self.read_path),
            ],
            new_correlation_id(),
        )

        await asyncio.to_thread(
            shutil.copytree, self.read_path, self.write_path,
            symlinks=True, dirs_exist_ok=True,
        )
        self.logger.info(
            "Cloned %s (%s) into %s", self.config.repo_url,
            self.config.branch_name, self.target_path,
        )

    # -- Read path ------------------------------------------------------------

    async def current_version(self) -> str:
        """Pull the read tree and return the branch head revision."""
        return await self.actualizer.actualize(new_correlation_id())

    async def get_history(
        self,
        path: str,
        max_count: int | None = None,
        skip: int | None = None,
    ) -> list[str]:
        """Return the revisions touching *path*, newest first.

        Parameters
        ----------
        path:
            Path relative to ``base_path`` (or the repository root).
        max_count:
            Maximum number of revisions to return.
        skip:
            Number of most recent revisions to skip.
        """
        for name, value in (("max_count", max_count), ("skip", skip)):
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}.")

        correlation_id = new_correlation_id()
        await self.actualizer.actualize(correlation_id)

        args = ["log", "--pretty=format:%H"]
        if max_count is not None:
            args.append(f"--max-count={max_count}")
        if skip is not None:
            args.append(f"--skip={skip}")
        args += ["--", self._history_path(path)]

        output = await self.read_git(args, correlation_id)
        return [line.strip() for line in output.splitlines() if line.strip()]

    def _history_path(self, path: str) -> str:
        parts = [p for p in (self.config.base_path, path.replace("\\", "/").strip("/")) if p]
        return str(PurePosixPath(*parts)) if parts else "."

    # -- Write path -----------------------------------------------------------

    async def use_version(
        self,
        action: ReadAction[T],
        version: str | None = None,
    ) -> T:
        """Run *action* against the write tree checked out at *version*.

        Without a version the action sees the freshly pulled branch head.
        With one, the write tree is checked back out to the branch
        afterwards, whether the action succeeded or not.
        """

        async def body(execute: Execute) -> T:
            try:
                await execute("pull")
                if version is None:
                    revision = (await execute(HEAD_REVISION)).strip()
                else:
                    await execute(["checkout", version])
                    revision = version
                return await _call(action, self.write_storage, revision)
            finally:
                if version is not None:
                    await execute(["checkout", self.config.branch_name])

        return await self.enqueue("use_version", body)

    async def commit_and_push(
        self,
        meta: CommitMeta | str | Mapping[str, Any],
        action: WriteAction[T],
    ) -> CommitResult[T]:
        """Let *action* change files, then commit and push the result.

        Returns the action's result and the branch head afterwards.  When
        the action changed nothing, the head is the pre-call revision.
        The write tree is hard-reset and cleaned afterwards in every case.
        """
        commit_meta = to_commit_meta(meta)

        async def body(execute: Execute) -> CommitResult[T]:
            try:
                await execute("pull")
                baseline = (await execute(HEAD_REVISION)).strip()
                result = await _call(action, self.write_storage, baseline)
                await execute("add -A")
                try:
                    await execute(commit_command(commit_meta))
                    await execute("push")
                except GitError as exc:
                    if NOTHING_TO_COMMIT not in str(exc):
                        raise
                    self.logger.warning("%s", exc)
                version = (await execute(HEAD_REVISION)).strip()
                return CommitResult(result=result, version=version)
            finally:
                await execute("reset --hard")
                await execute("clean -fd")

        return await self.enqueue("commit_and_push", body)


async def make_git_storage(config: StorageConfig, **kwargs: Any) -> GitStorage:
    """Create and bootstrap a :class:`GitStorage`."""
    return await GitStorage.create(config, **kwargs)
