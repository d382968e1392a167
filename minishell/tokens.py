"""Token kinds, the token record and character classes used by the parser."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_LIMITERS = frozenset("|()><&")


class TokenType(enum.Enum):
    """Kind of a lexical token."""

    WORD = enum.auto()
    PIPE = enum.auto()
    REDIR_IN = enum.auto()
    REDIR_OUT = enum.auto()
    REDIR_APPEND = enum.auto()
    HEREDOC = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    PAREN_OPEN = enum.auto()
    PAREN_CLOSE = enum.auto()


@dataclass
class Token:
    """One token of a command line.

    ``quote_type`` is 0 for unquoted text, 1 for single-quoted and 2 for
    double-quoted text. ``need_join`` is non-zero when the token must be glued
    to the one that follows it (2 means a trailing ``$`` is dropped first).
    """

    value: str
    type: TokenType = TokenType.WORD
    need_join: int = 0
    have_quote: bool = False
    quote_type: int = 0


def is_space(c: str) -> bool:
    """Return whether ``c`` is a blank: space or a character from tab to CR."""
    return len(c) == 1 and (c == " " or "\t" <= c <= "\r")


def is_limiter(c: str) -> bool:
    """Return whether ``c`` starts an operator or a parenthesis."""
    return len(c) == 1 and c in _LIMITERS


def has_bad_space(text: str) -> bool:
    """Return whether ``text`` starts with blanks followed by nothing or an operator."""
    if not text or not is_space(text[0]):
        return False
    rest = text.lstrip(" \t\n\v\f\r")
    return not rest or is_limiter(rest[0])