"""Building the command tree from a token list.

Simple commands are grouped first, then the operators ``|``, ``&&`` and
``||`` are ordered with the shunting-yard algorithm, and the resulting
postfix sequence is folded into a binary tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Optional, Sequence, Union

from .tokens import Token, TokenType

_OPERATORS = frozenset({TokenType.PIPE, TokenType.AND, TokenType.OR})
_REDIRECTIONS = frozenset(
    {
        TokenType.REDIR_IN,
        TokenType.REDIR_OUT,
        TokenType.REDIR_APPEND,
        TokenType.HEREDOC,
    }
)
_PARENS = frozenset({TokenType.PAREN_OPEN, TokenType.PAREN_CLOSE})


@dataclass
class Redirection:
    """One redirection of a command.

    ``quoted`` tells whether the target was written with quotes, which for a
    heredoc turns off expansion. ``fd`` holds the read end of a prepared
    heredoc, or None.
    """

    type: TokenType
    filename: str
    quoted: bool = False
    fd: Optional[int] = None


@dataclass
class CommandNode:
    """A simple command: its words and its redirections in order."""

    args: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)
    type: ClassVar[TokenType] = TokenType.WORD

    @property
    def cmd(self) -> Optional[str]:
        """The command name, or None for a command made only of redirections."""
        return self.args[0] if self.args else None


@dataclass
class OperatorNode:
    """A ``|``, ``&&`` or ``||`` joining two subtrees."""

    type: TokenType
    left: "Node"
    right: "Node"


Node = Union[CommandNode, OperatorNode]
Item = Union[CommandNode, Token]


def precedence(token_type: TokenType) -> int:
    """Binding strength of an operator: ``|`` binds tighter than ``&&``/``||``."""
    if token_type in (TokenType.OR, TokenType.AND):
        return 1
    if token_type is TokenType.PIPE:
        return 2
    return 0


def is_operator(token_type: TokenType) -> bool:
    """Return whether ``token_type`` joins two commands."""
    return token_type in _OPERATORS


def is_redirection(token_type: TokenType) -> bool:
    """Return whether ``token_type`` is one of ``<``, ``>``, ``>>`` or ``<<``."""
    return token_type in _REDIRECTIONS


def count_args(tokens: Sequence[Token]) -> int:
    """Count the argument words of the command at the start of ``tokens``.

    Counting stops at the first operator; a word right after a redirection
    is its target and does not count.
    """
    count = 0
    prev: Optional[Token] = None
    for token in tokens:
        if is_operator(token.type):
            break
        if token.type is TokenType.WORD and not (
            prev is not None and is_redirection(prev.type)
        ):
            count += 1
        prev = token
    return count


def _read_command(tokens: Sequence[Token], start: int) -> tuple[Optional[CommandNode], int]:
    """Read one simple command from ``start``; return it and the position after it."""
    node = CommandNode()
    i = start
    while i < len(tokens) and not is_operator(tokens[i].type):
        token = tokens[i]
        if token.type is TokenType.WORD:
            node.args.append(token.value)
            i += 1
        elif is_redirection(token.type):
            i += 1
            if i < len(tokens) and tokens[i].type is TokenType.WORD:
                target = tokens[i]
                node.redirections.append(
                    Redirection(
                        type=token.type,
                        filename=target.value,
                        quoted=bool(target.quote_type or target.have_quote),
                    )
                )
                i += 1
            else:
                break
        else:
            # Parentheses met inside a command are passed over.
            i += 1
    if not node.args and not node.redirections:
        return None, i
    return node, i


def group_tokens(tokens: Sequence[Token]) -> Optional[list[Item]]:
    """Replace each run of command tokens by a CommandNode.

    Operators and parentheses between commands are kept as tokens. Returns
    None when a command holds neither words nor redirections.
    """
    tokens = list(tokens)
    grouped: list[Item] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.type is TokenType.WORD or is_redirection(token.type):
            node, i = _read_command(tokens, i)
            if node is None:
                return None
            grouped.append(node)
        else:
            grouped.append(token)
            i += 1
    return grouped


def infix_to_postfix(items: Sequence[Item]) -> list[Item]:
    """Reorder grouped items into postfix order; parentheses are dropped."""
    output: list[Item] = []
    stack: list[Token] = []
    for item in items:
        if isinstance(item, CommandNode):
            output.append(item)
        elif item.type is TokenType.PAREN_OPEN:
            stack.append(item)
        elif item.type is TokenType.PAREN_CLOSE:
            while stack and stack[-1].type is not TokenType.PAREN_OPEN:
                output.append(stack.pop())
            if stack:
                stack.pop()
        elif is_operator(item.type):
            while (
                stack
                and stack[-1].type is not TokenType.PAREN_OPEN
                and is_operator(stack[-1].type)
                and precedence(stack[-1].type) >= precedence(item.type)
            ):
                output.append(stack.pop())
            stack.append(item)
    while stack:
        token = stack.pop()
        if token.type not in _PARENS:
            output.append(token)
    return output


def construct_tree(postfix: Sequence[Item]) -> Optional[Node]:
    """Fold a postfix sequence into a tree and return its root.

    Folding stops at an operator that lacks an operand; the node then on
    top of the stack, if any, is returned.
    """
    stack: list[Node] = []
    for item in postfix:
        if isinstance(item, CommandNode):
            stack.append(item)
        elif is_operator(item.type):
            right = stack.pop() if stack else None
            left = stack.pop() if stack else None
            if left is None or right is None:
                break
            stack.append(OperatorNode(type=item.type, left=left, right=right))
    return stack.pop() if stack else None


def build_tree(tokens: Sequence[Token]) -> Optional[Node]:
    """Build the command tree for ``tokens``; None when no tree can be built."""
    if not tokens:
        return None
    grouped = group_tokens(tokens)
    if grouped is None:
        return None
    return construct_tree(infix_to_postfix(grouped))


def iter_redirections(node: Optional[Node]) -> Iterator[Redirection]:
    """Yield every redirection in the tree, left to right."""
    if node is None:
        return
    if isinstance(node, CommandNode):
        yield from node.redirections
    else:
        yield from iter_redirections(node.left)
        yield from iter_redirections(node.right)