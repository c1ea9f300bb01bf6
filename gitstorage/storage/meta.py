"""Commit metadata — a message, optionally with an author override."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union


@dataclass(frozen=True)
class Message:
    """Commit with the repository's configured identity."""

    text: str


@dataclass(frozen=True)
class MessageWithAuthor:
    """Commit attributed to *name* <*email*>."""

    text: str
    name: str
    email: str

    @property
    def author(self) -> str:
        return f"{self.name} <{self.email}>"


CommitMeta = Union[Message, MessageWithAuthor]


def to_commit_meta(meta: CommitMeta | str | Mapping[str, Any]) -> CommitMeta:
    """Normalise the accepted commit metadata shapes.

    Accepts a :class:`Message`, a :class:`MessageWithAuthor`, a bare
    message string, or a mapping ``{"message": ..., "author": {"name":
    ..., "email": ...}}`` whose ``author`` key is optional.

    Raises
    ------
    ValueError
        If the message is missing or blank, the author is incomplete, or
        *meta* has an unsupported type.
    """
    if isinstance(meta, str):
        meta = Message(meta)
    elif isinstance(meta, Mapping):
        meta = _from_mapping(meta)
    elif not isinstance(meta, (Message, MessageWithAuthor)):
        raise ValueError(f"Unsupported commit metadata: {meta!r}")

    # An empty quoted message vanishes in the tokenizer and shifts argv.
    if not meta.text.strip():
        raise ValueError("Commit message must not be empty.")
    return meta


def _from_mapping(meta: Mapping[str, Any]) -> CommitMeta:
    if "message" not in meta:
        raise ValueError("Commit metadata requires a 'message'.")
    author = meta.get("author")
    if not author:
        return Message(str(meta["message"]))
    try:
        return MessageWithAuthor(str(meta["message"]), author["name"], author["email"])
    except KeyError as exc:
        raise ValueError(f"Commit author is missing {exc.args[0]!r}.") from exc


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def commit_command(meta: CommitMeta) -> str:
    """Build the ``commit`` command line for *meta*.

    Backslashes and quotes inside the message and the author are escaped
    so that :func:`~gitstorage.vcs.tokenizer.parse_command` restores them.
    """
    command = f'commit -m "{_escape(meta.text)}"'
    if isinstance(meta, MessageWithAuthor):
        command += f' --author="{_escape(meta.author)}"'
    return command
