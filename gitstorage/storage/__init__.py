"""Storage engine — versioned file access over a read tree and a write tree."""

from gitstorage.storage.actualizer import ReadActualizer
from gitstorage.storage.engine import CommitResult, GitStorage, make_git_storage
from gitstorage.storage.meta import CommitMeta, Message, MessageWithAuthor
from gitstorage.storage.queue import QueueTimingWrapper, WriteQueue

__all__ = [
    "CommitMeta",
    "CommitResult",
    "GitStorage",
    "Message",
    "MessageWithAuthor",
    "QueueTimingWrapper",
    "ReadActualizer",
    "WriteQueue",
    "make_git_storage",
]
