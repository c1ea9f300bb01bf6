"""Git invocation layer — tokenizing, timing and running git commands."""

from gitstorage.vcs.git import Git, GitCommand
from gitstorage.vcs.process import GitError, run_process
from gitstorage.vcs.timing import Timing
from gitstorage.vcs.tokenizer import parse_command

__all__ = ["Git", "GitCommand", "GitError", "Timing", "parse_command", "run_process"]
