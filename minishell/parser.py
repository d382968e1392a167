"""Turning a command line into a command tree."""

from __future__ import annotations

from typing import Mapping, Optional

from .lexer import ShellSyntaxError, check_syntax
from .syntax_tree import Node, build_tree
from .tokenizer import tokenize
from .variables import expand_variables

PARSE_FAILURE_STATUS = 2

_BLANKS = " \t\n\v\f\r"


def is_blank(text: Optional[str]) -> bool:
    """Return whether ``text`` is empty or holds only blanks."""
    return not text or not text.strip(_BLANKS)


def parse(
    text: str, env: Mapping[str, Optional[str]], exit_status: int = 0
) -> Optional[Node]:
    """Tokenise, expand and build the tree for ``text``; None when nothing results."""
    tokens = tokenize(text)
    if not tokens:
        return None
    tokens = expand_variables(tokens, env, exit_status, False)
    return build_tree(tokens)


def parse_command_line(
    text: str, env: Mapping[str, Optional[str]], exit_status: int = 0
) -> Optional[Node]:
    """Check and parse one command line.

    Returns None for a blank line. Raises ShellSyntaxError for a syntax
    error, or with status 2 when no command tree can be built.
    """
    check_syntax(text)
    if is_blank(text):
        return None
    tree = parse(text, env, exit_status)
    if tree is None:
        raise ShellSyntaxError(
            "minishell: cannot build command tree", PARSE_FAILURE_STATUS
        )
    return tree