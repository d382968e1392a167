"""Splitting a checked command line into tokens."""

from __future__ import annotations

from .tokens import Token, TokenType, is_limiter, is_space

_QUOTES = "'\""
_DOUBLE_OPERATORS = frozenset({"||", "&&", "<<", ">>"})

_OPERATOR_TYPES = {
    "|": TokenType.PIPE,
    "<": TokenType.REDIR_IN,
    ">": TokenType.REDIR_OUT,
    ">>": TokenType.REDIR_APPEND,
    "<<": TokenType.HEREDOC,
    "(": TokenType.PAREN_OPEN,
    ")": TokenType.PAREN_CLOSE,
    "&&": TokenType.AND,
    "||": TokenType.OR,
}


def classify(value: str, quote_type: int) -> TokenType:
    """Return the token type of ``value``; quoted text is always a word."""
    if quote_type:
        return TokenType.WORD
    return _OPERATOR_TYPES.get(value, TokenType.WORD)


def _char_at(text: str, i: int) -> str:
    return text[i] if 0 <= i < len(text) else ""


def _joins_next(c: str) -> bool:
    return bool(c) and not is_limiter(c) and not is_space(c)


def _read_operator(text: str, i: int) -> tuple[str, int]:
    pair = text[i:i + 2]
    if pair in _DOUBLE_OPERATORS:
        return pair, i + 2
    return text[i], i + 1


def _read_word(text: str, i: int) -> tuple[str, int, int, int]:
    """Read a quoted or bare word at ``i``.

    Returns the value, the position after it, its join flag and its quote type.
    """
    c = text[i]
    if c in _QUOTES:
        quote_type = 1 if c == "'" else 2
        start = i + 1
        end = text.find(c, start)
        if end == -1:
            return text[start:], len(text), 0, quote_type
        need_join = 1 if _joins_next(_char_at(text, end + 1)) else 0
        return text[start:end], end + 1, need_join, quote_type
    end = i
    while end < len(text) and not (
        is_limiter(text[end]) or is_space(text[end]) or text[end] in _QUOTES
    ):
        end += 1
    nxt = _char_at(text, end)
    need_join = 1 if _joins_next(nxt) else 0
    if end > 0 and text[end - 1] == "$" and nxt and nxt in _QUOTES:
        need_join = 2
    return text[i:end], end, need_join, 0


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into words, operators and parentheses."""
    tokens: list[Token] = []
    i = 0
    while i < len(text):
        while i < len(text) and is_space(text[i]):
            i += 1
        if i >= len(text):
            break
        if is_limiter(text[i]):
            value, i = _read_operator(text, i)
            need_join, quote_type = 0, 0
        else:
            value, i, need_join, quote_type = _read_word(text, i)
        followed_by_quote = _char_at(text, i) in ("'", '"')
        tokens.append(
            Token(
                value=value,
                type=classify(value, quote_type),
                need_join=need_join,
                have_quote=followed_by_quote or bool(quote_type),
                quote_type=quote_type,
            )
        )
    return tokens