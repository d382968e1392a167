import pytest

from minishell.tokens import Token, TokenType, has_bad_space, is_limiter, is_space


@pytest.mark.parametrize("c", [" ", "\t", "\n", "\v", "\f", "\r"])
def test_is_space_accepts_blanks(c):
    assert is_space(c)


@pytest.mark.parametrize("c", ["a", "|", "", "_", "\x00", "\x0e"])
def test_is_space_rejects_others(c):
    assert not is_space(c)


@pytest.mark.parametrize("c", list("|()><&"))
def test_is_limiter_accepts_operator_chars(c):
    assert is_limiter(c)


@pytest.mark.parametrize("c", ["a", " ", "", "$", "'", '"', "*"])
def test_is_limiter_rejects_others(c):
    assert not is_limiter(c)


@pytest.mark.parametrize("text", ["   ", "  |", "\t>", " \n&&"])
def test_has_bad_space_true(text):
    assert has_bad_space(text)


@pytest.mark.parametrize("text", ["", "ls", "  ls", "|  ", "\tword |"])
def test_has_bad_space_false(text):
    assert not has_bad_space(text)


def test_token_defaults_to_unquoted_word():
    token = Token("ls")
    assert token.type is TokenType.WORD
    assert token.value == "ls"
    assert token.quote_type == 0
    assert not token.have_quote
    assert token.need_join == 0