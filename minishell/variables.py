"""Parameter expansion of ``$NAME`` and ``$?`` inside word tokens."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Iterable, Mapping, Optional

from .tokens import Token, TokenType
from .words import expand_tilde, join_tokens, split_words

_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _char_at(text: str, i: int) -> str:
    return text[i] if 0 <= i < len(text) else ""


def _starts_name(c: str) -> bool:
    return c == "_" or c == "?" or ("a" <= c <= "z") or ("A" <= c <= "Z")


def _find_dollar(value: str, start: int, quote_type: int, from_heredoc: bool) -> int:
    """Return the index just after the next expandable ``$`` from ``start``, or -1.

    Quote state is counted afresh from ``start``; inside a double-quoted token
    the scan begins as if a double quote were already open.
    """
    if quote_type == 1:
        return -1
    single = 0
    double = 1 if quote_type == 2 else 0
    for i, c in enumerate(value[start:], start):
        if c == "'" and double % 2 == 0:
            single += 1
        elif c == '"' and single % 2 == 0:
            double += 1
        elif (
            c == "$"
            and (single % 2 == 0 or from_heredoc)
            and _starts_name(_char_at(value, i + 1))
        ):
            return i + 1
    return -1


def _expand_word(
    token: Token,
    env: Mapping[str, Optional[str]],
    exit_status: int,
    from_heredoc: bool,
) -> Token:
    """Expand every variable reference in one word token."""
    value = token.value
    need_join = token.need_join
    pos = _find_dollar(value, 0, token.quote_type, from_heredoc)
    while pos != -1:
        if value[pos] == "?":
            end = pos + 1
            replacement: Optional[str] = str(exit_status)
        else:
            found = _NAME.match(value, pos)
            end = found.end() if found else pos
            replacement = env.get(value[pos:end])
        if replacement is None:
            # An unset variable vanishes and glues its token to the next one.
            value = value[:pos - 1] + value[end:]
            pos -= 1
            need_join = 1
        else:
            value = value[:pos - 1] + replacement + value[end:]
            pos = pos - 1 + len(replacement)
        pos = _find_dollar(value, pos, token.quote_type, from_heredoc)
    if value == token.value and need_join == token.need_join:
        return token
    return replace(token, value=value, need_join=need_join)


def expand_variables(
    tokens: Iterable[Token],
    env: Mapping[str, Optional[str]],
    exit_status: int = 0,
    heredoc: bool = False,
) -> list[Token]:
    """Expand variables in word tokens and return the resulting token list.

    Single-quoted words are left alone, and so is the delimiter that follows
    a ``<<``. Outside heredoc mode, expanded words are then split on blanks
    and ``~`` is replaced by ``HOME`` from ``env``. Tokens marked for joining
    are glued together last. The input tokens are not modified.
    """
    expanded: list[Token] = []
    stream = iter(tokens)
    for token in stream:
        if token.type is TokenType.HEREDOC:
            expanded.append(token)
            delimiter = next(stream, None)
            if delimiter is not None:
                expanded.append(delimiter)
            continue
        if token.type is TokenType.WORD:
            token = _expand_word(token, env, exit_status, heredoc)
        expanded.append(token)
    if not heredoc:
        expanded = split_words(expanded)
        expanded = expand_tilde(expanded, env.get("HOME"))
    return join_tokens(expanded)


def expand_heredoc_line(
    line: str, env: Mapping[str, Optional[str]], exit_status: int = 0
) -> str:
    """Expand variables in one line of heredoc input; quotes do not protect ``$``."""
    result = expand_variables([Token(value=line)], env, exit_status, heredoc=True)
    return result[0].value