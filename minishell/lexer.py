"""Syntax checks run on a raw command line before it is tokenised."""

from __future__ import annotations

from .tokens import is_space

SYNTAX_ERROR_STATUS = 258

_OPERATOR_CHARS = "|&<>"
_WORD_STOPS = "|&<>()'\""

_UNCLOSED_PAREN = "syntax error: unclosed parenthesis"
_UNEXPECTED_CLOSE = "syntax error near unexpected token `)'"
_UNCLOSED_ARITH = "syntax error: unclosed arithmetic parentheses"
_EMPTY_ARITH = "syntax error: unexpected empty arithmetic expression"
_BAD_SUBSTITUTION = "syntax error: bad substitution"
_INVALID_VAR_CHAR = "invalid character in variable name"
_MISSING_BRACE = "syntax error: missing closing `}`"
_UNCLOSED_QUOTE = "syntax error: unclosed quote"
_UNEXPECTED_NEWLINE = "syntax error near unexpected token `newline'"


class ShellSyntaxError(Exception):
    """A command line that cannot be parsed; ``status`` is the exit status to report."""

    def __init__(self, message: str, status: int = SYNTAX_ERROR_STATUS) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


def is_valid_var_char(c: str) -> bool:
    """Return whether ``c`` may appear inside ``${...}``."""
    return len(c) == 1 and (
        c in "_?" or ("a" <= c <= "z") or ("A" <= c <= "Z") or ("0" <= c <= "9")
    )


def _char_at(text: str, i: int) -> str:
    return text[i] if i < len(text) else ""


def _skip_whitespace(text: str, i: int) -> int:
    while i < len(text) and is_space(text[i]):
        i += 1
    return i


def _only_spaces(text: str) -> bool:
    return all(is_space(c) for c in text)


def _skip_word(text: str, i: int) -> int:
    while i < len(text) and not is_space(text[i]) and text[i] not in _WORD_STOPS:
        i += 1
    return i


def _operator_message(text: str, i: int) -> str:
    c = text[i]
    token = c * 2 if c in "|&" and _char_at(text, i + 1) == c else c
    return f"syntax error near unexpected token `{token}'"


def check_parentheses_balance(text: str) -> bool:
    """Check that parentheses outside quotes are balanced; raise otherwise."""
    balance = 0
    quote = ""
    for c in text:
        if not quote and c in "'\"":
            quote = c
        elif quote and c == quote:
            quote = ""
        elif not quote and c == "(":
            balance += 1
        elif not quote and c == ")":
            balance -= 1
            if balance < 0:
                raise ShellSyntaxError(_UNEXPECTED_CLOSE)
    if balance > 0:
        raise ShellSyntaxError(_UNCLOSED_PAREN)
    return True


def check_parenthesis_group(text: str, pos: int) -> int:
    """Check the group opened at ``pos`` and return the position after it.

    A single ``(`` must be closed and hold something other than blanks; two
    or more open an arithmetic group that must be balanced and non-empty.
    """
    rest = text[pos:]
    count = len(rest) - len(rest.lstrip("("))
    if count == 0:
        return pos
    if count == 1:
        start = pos + 1
        close = text.find(")", start)
        if close == -1:
            raise ShellSyntaxError(_UNCLOSED_PAREN)
        if _only_spaces(text[start:close]):
            raise ShellSyntaxError(_UNEXPECTED_CLOSE)
        return close + 1
    i = start = pos + 2
    depth = 2
    while i < len(text):
        if text[i] == "(":
            depth += 1
        elif text[i] == ")":
            depth -= 1
            if depth == 0:
                break
        i += 1
    if depth != 0:
        raise ShellSyntaxError(_UNCLOSED_ARITH)
    if _only_spaces(text[start:i]):
        raise ShellSyntaxError(_EMPTY_ARITH)
    return i + 1


def _scan_dollar_brace(text: str, i: int) -> int:
    """Validate ``${...}`` starting at the ``$``; return the position after ``}``."""
    i += 2
    c = _char_at(text, i)
    nxt = _char_at(text, i + 1)
    if c in ("}", ""):
        raise ShellSyntaxError(_BAD_SUBSTITUTION)
    if c == "?" and nxt not in ("}", "?"):
        raise ShellSyntaxError(_BAD_SUBSTITUTION)
    if c == "?" and nxt == "}":
        return i + 2
    while i < len(text) and text[i] != "}":
        if text[i] in "'\"":
            raise ShellSyntaxError(_BAD_SUBSTITUTION)
        if not is_valid_var_char(text[i]):
            raise ShellSyntaxError(_INVALID_VAR_CHAR)
        i += 1
    if _char_at(text, i) != "}":
        raise ShellSyntaxError(_MISSING_BRACE)
    return i + 1


def _scan_quote(text: str, i: int) -> int:
    """Skip the quoted section opened at ``i``; return the position after it."""
    quote = text[i]
    i += 1
    while i < len(text) and text[i] != quote:
        if quote == '"' and text[i] == "$" and _char_at(text, i + 1) == "{":
            i = _scan_dollar_brace(text, i)
        else:
            i += 1
    if i >= len(text):
        raise ShellSyntaxError(_UNCLOSED_QUOTE)
    return i + 1


def _advance_operator(text: str, i: int) -> int:
    c = text[i]
    if c in _OPERATOR_CHARS and _char_at(text, i + 1) == c:
        return i + 2
    return i + 1


def _scan_operator(text: str, i: int, last_was_operator: bool) -> int:
    """Validate the operator at ``i`` and what follows; return the position after it."""
    if last_was_operator and text[i] in "|&":
        raise ShellSyntaxError(_operator_message(text, i))
    last_op = text[i]
    i = _advance_operator(text, i)
    j = _skip_whitespace(text, i)
    if j >= len(text):
        raise ShellSyntaxError(_UNEXPECTED_NEWLINE)
    nxt = text[j]
    if (last_op in "<>" and nxt in _OPERATOR_CHARS) or (
        last_op in "|&" and nxt in "|&"
    ):
        raise ShellSyntaxError(_operator_message(text, j))
    return i


def check_syntax(text: str) -> bool:
    """Check a whole command line for syntax errors.

    Returns True when the line is acceptable and raises ShellSyntaxError
    describing the first problem found otherwise.
    """
    check_parentheses_balance(text)
    last_was_operator = True
    i = _skip_whitespace(text, 0)
    while i < len(text):
        c = text[i]
        if c in "'\"":
            i = _scan_quote(text, i)
            last_was_operator = False
        elif c in "()":
            i += 1
            last_was_operator = False
        elif c in _OPERATOR_CHARS:
            i = _scan_operator(text, i, last_was_operator)
            last_was_operator = True
        elif not is_space(c):
            i = _skip_word(text, i)
            last_was_operator = False
        else:
            i += 1
        i = _skip_whitespace(text, i)
    return True