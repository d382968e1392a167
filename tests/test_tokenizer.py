import pytest

from minishell.tokenizer import classify, tokenize
from minishell.tokens import TokenType


def values(tokens):
    return [t.value for t in tokens]


def types(tokens):
    return [t.type for t in tokens]


def test_simple_pipeline():
    tokens = tokenize("echo hello | cat")
    assert values(tokens) == ["echo", "hello", "|", "cat"]
    assert types(tokens) == [
        TokenType.WORD,
        TokenType.WORD,
        TokenType.PIPE,
        TokenType.WORD,
    ]


def test_logical_operators_without_spaces():
    tokens = tokenize("a&&b||c")
    assert values(tokens) == ["a", "&&", "b", "||", "c"]
    assert types(tokens)[1] is TokenType.AND
    assert types(tokens)[3] is TokenType.OR


def test_redirections():
    tokens = tokenize("< in >> out << eof > f")
    assert types(tokens) == [
        TokenType.REDIR_IN,
        TokenType.WORD,
        TokenType.REDIR_APPEND,
        TokenType.WORD,
        TokenType.HEREDOC,
        TokenType.WORD,
        TokenType.REDIR_OUT,
        TokenType.WORD,
    ]


def test_parentheses():
    tokens = tokenize("(a)")
    assert values(tokens) == ["(", "a", ")"]
    assert types(tokens) == [
        TokenType.PAREN_OPEN,
        TokenType.WORD,
        TokenType.PAREN_CLOSE,
    ]


def test_single_quoted_word_keeps_spaces():
    tokens = tokenize("echo 'a b'")
    assert values(tokens) == ["echo", "a b"]
    assert tokens[1].quote_type == 1
    assert tokens[1].have_quote is True
    assert tokens[0].have_quote is False


def test_double_quoted_operator_is_word():
    tokens = tokenize('"|"')
    assert values(tokens) == ["|"]
    assert tokens[0].type is TokenType.WORD
    assert tokens[0].quote_type == 2


def test_adjacent_pieces_are_marked_for_joining():
    tokens = tokenize('a"b"c')
    assert values(tokens) == ["a", "b", "c"]
    assert [t.need_join for t in tokens] == [1, 1, 0]
    assert [t.quote_type for t in tokens] == [0, 2, 0]
    assert tokens[0].have_quote is True


def test_dollar_before_quote_sets_join_two():
    tokens = tokenize('$"x"')
    assert values(tokens) == ["$", "x"]
    assert tokens[0].need_join == 2


def test_word_before_operator_does_not_join():
    tokens = tokenize("a|b")
    assert [t.need_join for t in tokens] == [0, 0, 0]


@pytest.mark.parametrize("text", ["", "   ", "\t\n "])
def test_blank_input_gives_no_tokens(text):
    assert tokenize(text) == []


def test_single_ampersand_is_word_type():
    tokens = tokenize("a & b")
    assert values(tokens) == ["a", "&", "b"]
    assert tokens[1].type is TokenType.WORD


@pytest.mark.parametrize(
    "value, expected",
    [
        ("|", TokenType.PIPE),
        ("<", TokenType.REDIR_IN),
        (">", TokenType.REDIR_OUT),
        (">>", TokenType.REDIR_APPEND),
        ("<<", TokenType.HEREDOC),
        ("(", TokenType.PAREN_OPEN),
        (")", TokenType.PAREN_CLOSE),
        ("&&", TokenType.AND),
        ("||", TokenType.OR),
        ("ls", TokenType.WORD),
    ],
)
def test_classify_unquoted(value, expected):
    assert classify(value, 0) is expected


@pytest.mark.parametrize("quote_type", [1, 2])
def test_classify_quoted_is_word(quote_type):
    assert classify("&&", quote_type) is TokenType.WORD


def test_tokens_cover_all_non_blank_text():
    text = "ls -l>out&&cat<in"
    tokens = tokenize(text)
    assert "".join(values(tokens)) == text.replace(" ", "")