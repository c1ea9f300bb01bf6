"""Command tokenizer — split a human-style git command line into argv.

The rules follow the shell closely enough to build command lines that
carry user-supplied commit messages and author strings:

  - runs of spaces outside quotes separate tokens;
  - ``"`` toggles quoting and is stripped, except right after an unquoted
    ``=``, where the quotes are kept (``--author="Name <email>"``);
  - inside quotes ``\\"`` is a literal quote, ``\\\\`` a literal backslash,
    and a backslash before anything else is kept as-is;
  - outside quotes a backslash is an ordinary character, so Windows paths
    such as ``tmp\\git\\read`` survive.

Malformed input never raises: an unterminated quote folds the rest of the
line into the last token.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

_SPACE = " "
_QUOTE = '"'
_BACKSLASH = "\\"
_EQUALS = "="


class _State(Enum):
    NORMAL = "normal"
    IN_QUOTES = "in_quotes"
    ESCAPED = "escaped"
    AFTER_EQUALS = "after_equals"


class _CharClass(Enum):
    SPACE = "space"
    QUOTE = "quote"
    BACKSLASH = "backslash"
    EQUALS = "equals"
    OTHER = "other"


def _classify(char: str) -> _CharClass:
    if char == _SPACE:
        return _CharClass.SPACE
    if char == _QUOTE:
        return _CharClass.QUOTE
    if char == _BACKSLASH:
        return _CharClass.BACKSLASH
    if char == _EQUALS:
        return _CharClass.EQUALS
    return _CharClass.OTHER


class _Machine:
    """Mutable tokenizer context driven by :data:`_TRANSITIONS`."""

    def __init__(self) -> None:
        self.tokens: list[str] = []
        self.current: list[str] = []
        self.state = _State.NORMAL
        # Set when the open quoted region keeps its quote characters.
        self.keep_quotes = False

    # -- actions --------------------------------------------------------------

    def append(self, char: str) -> None:
        self.current.append(char)

    def emit(self, char: str) -> None:
        if self.current:
            self.tokens.append("".join(self.current))
        self.current = []
        self.keep_quotes = False

    def open_quote(self, char: str) -> None:
        self.keep_quotes = False

    def open_kept_quote(self, char: str) -> None:
        self.current.append(char)
        self.keep_quotes = True

    def close_quote(self, char: str) -> None:
        if self.keep_quotes:
            self.current.append(char)
        self.keep_quotes = False

    def arm_escape(self, char: str) -> None:
        pass

    def escaped_literal(self, char: str) -> None:
        self.current.append(char)

    def escaped_other(self, char: str) -> None:
        self.current.append(_BACKSLASH)
        self.current.append(char)

    def finish(self) -> list[str]:
        if self.state is _State.ESCAPED:
            self.current.append(_BACKSLASH)
        if self.current:
            self.tokens.append("".join(self.current))
        return self.tokens


_Action = Callable[[_Machine, str], None]

_TRANSITIONS: dict[tuple[_State, _CharClass], tuple[_Action, _State]] = {
    (_State.NORMAL, _CharClass.SPACE): (_Machine.emit, _State.NORMAL),
    (_State.NORMAL, _CharClass.QUOTE): (_Machine.open_quote, _State.IN_QUOTES),
    (_State.NORMAL, _CharClass.BACKSLASH): (_Machine.append, _State.NORMAL),
    (_State.NORMAL, _CharClass.EQUALS): (_Machine.append, _State.AFTER_EQUALS),
    (_State.NORMAL, _CharClass.OTHER): (_Machine.append, _State.NORMAL),
    (_State.AFTER_EQUALS, _CharClass.SPACE): (_Machine.emit, _State.NORMAL),
    (_State.AFTER_EQUALS, _CharClass.QUOTE): (_Machine.open_kept_quote, _State.IN_QUOTES),
    (_State.AFTER_EQUALS, _CharClass.BACKSLASH): (_Machine.append, _State.AFTER_EQUALS),
    (_State.AFTER_EQUALS, _CharClass.EQUALS): (_Machine.append, _State.AFTER_EQUALS),
    (_State.AFTER_EQUALS, _CharClass.OTHER): (_Machine.append, _State.AFTER_EQUALS),
    (_State.IN_QUOTES, _CharClass.SPACE): (_Machine.append, _State.IN_QUOTES),
    (_State.IN_QUOTES, _CharClass.QUOTE): (_Machine.close_quote, _State.NORMAL),
    (_State.IN_QUOTES, _CharClass.BACKSLASH): (_Machine.arm_escape, _State.ESCAPED),
    (_State.IN_QUOTES, _CharClass.EQUALS): (_Machine.append, _State.IN_QUOTES),
    (_State.IN_QUOTES, _CharClass.OTHER): (_Machine.append, _State.IN_QUOTES),
    (_State.ESCAPED, _CharClass.SPACE): (_Machine.escaped_other, _State.IN_QUOTES),
    (_State.ESCAPED, _CharClass.QUOTE): (_Machine.escaped_literal, _State.IN_QUOTES),
    (_State.ESCAPED, _CharClass.BACKSLASH): (_Machine.escaped_literal, _State.IN_QUOTES),
    (_State.ESCAPED, _CharClass.EQUALS): (_Machine.escaped_other, _State.IN_QUOTES),
    (_State.ESCAPED, _CharClass.OTHER): (_Machine.escaped_other, _State.IN_QUOTES),
}


def parse_command(command: str) -> list[str]:
    """Split *command* into an argument vector.

    Parameters
    ----------
    command:
        A git command line without the leading ``git``, e.g.
        ``'commit -m "fix \\"quoted\\" text" --author="A <a@b.c>"'``.

    Returns the list of tokens; never raises and never returns empty
    tokens.
    """
    machine = _Machine()
    for char in command:
        action, next_state = _TRANSITIONS[(machine.state, _classify(char))]
        action(machine, char)
        machine.state = next_state
    return machine.finish()
