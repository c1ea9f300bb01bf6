"""File storage — relative file access scoped to a working tree directory.

:class:`ReadFileStorage` is handed to ``use_version`` actions,
:class:`FileStorage` to ``commit_and_push`` actions.  Both accept paths
relative to their base directory and refuse paths that escape it.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


class ReadFileStorage:
    """Read-only access to files below *base_path*."""

    def __init__(self, base_path: str | Path) -> None:
        self.base_path = Path(base_path)

    def path(self, relative: str | Path) -> Path:
        """Resolve *relative* below the base directory.

        Raises
        ------
        ValueError
            If *relative* is absolute or resolves outside the base.
        """
        relative = Path(relative)
        if relative.is_absolute():
            raise ValueError(f"Expected a relative path, got '{relative}'.")
        base = self.base_path.resolve()
        target = (base / relative).resolve()
        if target != base and base not in target.parents:
            raise ValueError(f"Path '{relative}' escapes '{self.base_path}'.")
        return target

    def exists(self, relative: str | Path) -> bool:
        return self.path(relative).exists()

    def read_bytes(self, relative: str | Path) -> bytes:
        return self.path(relative).read_bytes()

    def read_text(self, relative: str | Path, encoding: str = "utf-8") -> str:
        return self.path(relative).read_text(encoding=encoding)

    def list_dir(self, relative: str | Path = ".") -> list[str]:
        """Return the sorted entry names of a directory, ``.git`` excluded."""
        return sorted(
            entry.name
            for entry in self.path(relative).iterdir()
            if entry.name != ".git"
        )


class FileStorage(ReadFileStorage):
    """Read/write access to files below *base_path*."""

    def write_bytes(self, relative: str | Path, data: bytes) -> Path:
        target = self.path(relative)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return target

    def write_text(
        self,
        relative: str | Path,
        text: str,
        encoding: str = "utf-8",
    ) -> Path:
        target = self.path(relative)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding=encoding)
        return target

    def make_dirs(self, relative: str | Path) -> Path:
        target = self.path(relative)
        target.mkdir(parents=True, exist_ok=True)
        return target

    def remove(self, relative: str | Path) -> bool:
        """Delete a file or directory tree.  Returns *True* if it existed."""
        target = self.path(relative)
        if target == self.base_path.resolve():
            raise ValueError("Refusing to remove the storage root.")
        if target.is_dir():
            shutil.rmtree(target)
        elif target.exists():
            target.unlink()
        else:
            return False
        logger.debug("Removed %s", target)
        return True
