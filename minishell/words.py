"""Word splitting, tilde expansion, token joining and glob matching."""

from __future__ import annotations

import functools
import re
from dataclasses import replace
from typing import Iterable

from .tokens import Token, TokenType, is_space

_BLANKS = " \t\n\v\f\r"
_BLANK_RUN = re.compile(r"[ \t\n\v\f\r]+")
_TILDE_FOLLOWERS = " \t\n\r\v\f/"


def _split_kind(token: Token) -> int:
    """0: leave alone, 1: split into words, 2: only blanks."""
    if token.type is not TokenType.WORD or token.quote_type != 0 or not token.value:
        return 0
    stripped = token.value.lstrip(_BLANKS)
    if not stripped:
        return 2
    body = stripped.rstrip(_BLANKS)
    return 1 if any(is_space(c) for c in body) else 0


def split_words(tokens: Iterable[Token]) -> list[Token]:
    """Split unquoted words holding inner blanks into separate word tokens.

    A word made only of blanks collapses to a single space.
    """
    result: list[Token] = []
    for token in tokens:
        kind = _split_kind(token)
        if kind == 2:
            result.append(replace(token, value=" "))
        elif kind == 1:
            words = [w for w in _BLANK_RUN.split(token.value) if w]
            result.extend(Token(value=w) for w in words)
        else:
            result.append(token)
    return result


def _find_tilde(value: str, start: int) -> int:
    """Return the position of the next expandable ``~`` from ``start``, or -1."""
    single = double = 0
    for i, c in enumerate(value[start:], start):
        if c == "'" and double % 2 == 0:
            single += 1
        elif c == '"' and single % 2 == 0:
            double += 1
        elif (
            c == "~"
            and single % 2 == 0
            and double % 2 == 0
            and (i == 0 or is_space(value[i - 1]))
            and (i + 1 == len(value) or value[i + 1] in _TILDE_FOLLOWERS)
        ):
            return i
    return -1


def expand_tilde(tokens: Iterable[Token], home: str | None) -> list[Token]:
    """Replace a standalone ``~`` or leading ``~/`` in unquoted words by ``home``.

    Nothing changes when ``home`` is None.
    """
    tokens = list(tokens)
    if home is None:
        return tokens
    result: list[Token] = []
    for token in tokens:
        if token.type is TokenType.WORD and token.quote_type == 0:
            value = token.value
            pos = _find_tilde(value, 0)
            while pos != -1:
                value = value[:pos] + home + value[pos + 1:]
                pos = _find_tilde(value, pos + len(home))
            if value != token.value:
                token = replace(token, value=value)
        result.append(token)
    return result


def join_tokens(tokens: Iterable[Token]) -> list[Token]:
    """Glue each token marked ``need_join`` to the token that follows it.

    The merged token takes the type and join flag of the second one; a join
    flag of 2 drops the last character of the first one before gluing.
    """
    result: list[Token] = []
    for token in tokens:
        if result and result[-1].need_join > 0:
            prev = result[-1]
            head = prev.value[:-1] if prev.need_join == 2 else prev.value
            result[-1] = replace(
                prev,
                value=head + token.value,
                need_join=token.need_join,
                type=token.type,
            )
        else:
            result.append(token)
    return result


def match(pattern: str, name: str) -> bool:
    """Match ``name`` against ``pattern`` where ``*`` stands for any run of non-``/`` characters."""

    @functools.lru_cache(maxsize=None)
    def matches(p: int, n: int) -> bool:
        if p == len(pattern):
            return n == len(name)
        if pattern[p] == "*":
            if matches(p + 1, n):
                return True
            return n < len(name) and name[n] != "/" and matches(p, n + 1)
        return n < len(name) and pattern[p] == name[n] and matches(p + 1, n + 1)

    return matches(0, 0)