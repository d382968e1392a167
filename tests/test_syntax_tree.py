import pytest

from minishell.syntax_tree import (
    CommandNode,
    OperatorNode,
    Redirection,
    build_tree,
    construct_tree,
    count_args,
    group_tokens,
    infix_to_postfix,
    is_operator,
    is_redirection,
    iter_redirections,
    precedence,
)
from minishell.tokenizer import tokenize
from minishell.tokens import Token, TokenType


def cmd(*args):
    return CommandNode(args=list(args))


def tree(text):
    return build_tree(tokenize(text))


@pytest.mark.parametrize(
    "token_type, expected",
    [
        (TokenType.OR, 1),
        (TokenType.AND, 1),
        (TokenType.PIPE, 2),
        (TokenType.WORD, 0),
        (TokenType.PAREN_OPEN, 0),
    ],
)
def test_precedence(token_type, expected):
    assert precedence(token_type) == expected


def test_operator_and_redirection_classes():
    operators = {t for t in TokenType if is_operator(t)}
    redirections = {t for t in TokenType if is_redirection(t)}
    assert operators == {TokenType.PIPE, TokenType.AND, TokenType.OR}
    assert redirections == {
        TokenType.REDIR_IN,
        TokenType.REDIR_OUT,
        TokenType.REDIR_APPEND,
        TokenType.HEREDOC,
    }


def test_simple_command():
    node = tree("echo hello world")
    assert node == cmd("echo", "hello", "world")
    assert node.cmd == "echo"


def test_redirections_are_collected_in_order():
    node = tree("cat < in > out >> log")
    assert node.args == ["cat"]
    assert [(r.type, r.filename) for r in node.redirections] == [
        (TokenType.REDIR_IN, "in"),
        (TokenType.REDIR_OUT, "out"),
        (TokenType.REDIR_APPEND, "log"),
    ]
    assert all(r.fd is None for r in node.redirections)


def test_heredoc_quoting_is_recorded():
    plain = tree("cat << EOF")
    quoted = tree('cat << "EOF"')
    assert plain.redirections[0].quoted is False
    assert quoted.redirections[0].quoted is True
    assert quoted.redirections[0].filename == "EOF"


def test_redirection_only_command():
    node = tree("> out")
    assert node.cmd is None
    assert node.args == []
    assert node.redirections == [Redirection(TokenType.REDIR_OUT, "out")]


def test_pipe_binds_tighter_than_and():
    assert tree("a | b && c") == OperatorNode(
        TokenType.AND, OperatorNode(TokenType.PIPE, cmd("a"), cmd("b")), cmd("c")
    )
    assert tree("a && b | c") == OperatorNode(
        TokenType.AND, cmd("a"), OperatorNode(TokenType.PIPE, cmd("b"), cmd("c"))
    )


def test_and_or_are_left_associative():
    assert tree("a || b && c") == OperatorNode(
        TokenType.AND, OperatorNode(TokenType.OR, cmd("a"), cmd("b")), cmd("c")
    )


def test_parentheses_group_right_operand():
    assert tree("a && (b || c)") == OperatorNode(
        TokenType.AND, cmd("a"), OperatorNode(TokenType.OR, cmd("b"), cmd("c"))
    )


def test_count_args_skips_redirection_targets():
    tokens = tokenize("echo a > f b | c d")
    assert count_args(tokens) == 3


def test_count_args_matches_built_command():
    tokens = tokenize("grep -n x < in y")
    node = build_tree(tokens)
    assert count_args(tokens) == len(node.args)


def test_group_tokens_keeps_operators():
    grouped = group_tokens(tokenize("a b | c"))
    assert grouped[0] == cmd("a", "b")
    assert isinstance(grouped[1], Token) and grouped[1].type is TokenType.PIPE
    assert grouped[2] == cmd("c")
    assert len(grouped) == 3


def test_group_tokens_rejects_empty_command():
    tokens = [Token(value="<", type=TokenType.REDIR_IN)]
    assert group_tokens(tokens) is None
    assert build_tree(tokens) is None


def test_build_tree_of_nothing():
    assert build_tree([]) is None
    assert construct_tree([]) is None


def test_infix_to_postfix_drops_parentheses():
    postfix = infix_to_postfix(group_tokens(tokenize("(a || b) && c")))
    kinds = [
        "cmd" if isinstance(item, CommandNode) else item.type for item in postfix
    ]
    assert kinds == ["cmd", "cmd", TokenType.OR, "cmd", TokenType.AND]


def test_construct_tree_missing_operand():
    pipe = Token(value="|", type=TokenType.PIPE)
    assert construct_tree([cmd("a"), pipe]) is None


def test_construct_tree_round_trip():
    postfix = infix_to_postfix(group_tokens(tokenize("a | b | c")))
    assert construct_tree(postfix) == OperatorNode(
        TokenType.PIPE, OperatorNode(TokenType.PIPE, cmd("a"), cmd("b")), cmd("c")
    )


def test_iter_redirections_walks_left_to_right():
    node = tree("a < x | b > y && c << z")
    assert [r.filename for r in iter_redirections(node)] == ["x", "y", "z"]
    assert list(iter_redirections(None)) == []