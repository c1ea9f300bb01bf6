"""gitstorage — a git repository exposed as versioned file storage."""

__version__ = "1.0.0"

from gitstorage.config import StorageConfig
from gitstorage.files import FileStorage, ReadFileStorage
from gitstorage.storage.actualizer import ReadActualizer
from gitstorage.storage.engine import CommitResult, GitStorage, make_git_storage
from gitstorage.storage.meta import CommitMeta, Message, MessageWithAuthor
from gitstorage.storage.queue import QueueTimingWrapper, WriteQueue
from gitstorage.vcs.git import Git
from gitstorage.vcs.process import GitError, run_process
from gitstorage.vcs.timing import Timing
from gitstorage.vcs.tokenizer import parse_command

__all__ = [
    "__version__",
    # Engine
    "CommitResult",
    "GitStorage",
    "make_git_storage",
    "StorageConfig",
    # Commit metadata
    "CommitMeta",
    "Message",
    "MessageWithAuthor",
    # Coordination
    "QueueTimingWrapper",
    "ReadActualizer",
    "WriteQueue",
    # File storage
    "FileStorage",
    "ReadFileStorage",
    # Git invocation
    "Git",
    "GitError",
    "Timing",
    "parse_command",
    "run_process",
]
