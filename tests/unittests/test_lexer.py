import pytest
from pointy_studio.parser.lexer import PointyLexer


@pytest.fixture(scope="module")
def lexer():
    return PointyLexer()


def test_event_header(lexer):
    tokens = lexer.tokenize("fetch_data {")
    assert [t.type for t in tokens] == ["IDENTIFIER", "LCURLY_BRACKET"]
    assert tokens[0].value == "fetch_data"


def test_connection_without_spaces(lexer):
    assert lexer.token_types("a->b") == ("IDENTIFIER", "POINTER", "IDENTIFIER")


def test_comment_runs_to_end_of_line(lexer):
    tokens = lexer.tokenize("a -> b // feeds b -> c")
    assert tuple(tok.type for tok in tokens) == (
        "IDENTIFIER",
        "POINTER",
        "IDENTIFIER",
        "COMMENT",
    )
    assert tokens[-1].value == "// feeds b -> c"
    assert lexer.token_types("// only a comment") == ("COMMENT",)


def test_unknown_characters_become_error_tokens(lexer):
    tokens = lexer.tokenize("a.b = 1")
    assert [t.type for t in tokens] == [
        "IDENTIFIER",
        "error",
        "IDENTIFIER",
        "error",
        "error",
    ]
    assert tokens[1].value == "."


def test_identifier_cannot_start_with_digit(lexer):
    assert lexer.token_types("1abc") == ("error", "IDENTIFIER")


def test_closing_bracket(lexer):
    assert lexer.token_types("}") == ("RCURLY_BRACKET",)


def test_lexer_instance_is_reusable(lexer):
    assert lexer.token_types("a {") == ("IDENTIFIER", "LCURLY_BRACKET")
    assert lexer.token_types("b -> c") == ("IDENTIFIER", "POINTER", "IDENTIFIER")
