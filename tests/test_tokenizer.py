import pytest

from luca.tokenizer import Lexer, TokenizerError, TokenType, tokenize
from luca.value import Currency


@pytest.mark.parametrize(
    "code, expected_types, expected_values",
    [
        pytest.param(
            "12 + 3.5",
            [TokenType.INTEGER, TokenType.PLUS, TokenType.FLOAT, TokenType.END],
            [12, None, 3.5, None],
        ),
        pytest.param(
            "€4 * 5$",
            [TokenType.CURRENCY, TokenType.INTEGER, TokenType.STAR, TokenType.INTEGER, TokenType.CURRENCY, TokenType.END],
            [Currency.EURO, 4, None, 5, Currency.DOLLAR, None],
        ),
        pytest.param(
            "x=(1-2)/3",
            [
                TokenType.IDENTIFIER,
                TokenType.EQUAL,
                TokenType.BRACKET_OPEN,
                TokenType.INTEGER,
                TokenType.MINUS,
                TokenType.INTEGER,
                TokenType.BRACKET_CLOSE,
                TokenType.SLASH,
                TokenType.INTEGER,
                TokenType.END,
            ],
            [None, None, None, 1, None, 2, None, None, 3, None],
        ),
        pytest.param("abc12", [TokenType.IDENTIFIER, TokenType.INTEGER, TokenType.END], [None, 12, None]),
        pytest.param("4a", [TokenType.INTEGER, TokenType.IDENTIFIER, TokenType.END], [4, None, None]),
        pytest.param("5.", [TokenType.FLOAT, TokenType.END], [5.0, None]),
        pytest.param("007", [TokenType.INTEGER, TokenType.END], [7, None]),
        pytest.param("   ", [TokenType.END], [None]),
        pytest.param("", [TokenType.END], [None]),
    ],
)
def test_tokenize(code: str, expected_types: list[TokenType], expected_values: list) -> None:
    tokens = tokenize(code)
    assert [t.type for t in tokens] == expected_types
    assert [t.value for t in tokens] == expected_values


def test_identifier_lexemes() -> None:
    tokens = tokenize("héllo wörld2")
    assert [t.lexeme for t in tokens] == ["héllo", "wörld", "2", ""]


def test_token_positions() -> None:
    tokens = tokenize(" 1 +  22")
    assert [t.position for t in tokens] == [1, 3, 6, 8]


def test_end_of_input_is_sticky() -> None:
    lexer = Lexer("1")
    assert lexer.next_token().type is TokenType.INTEGER
    for _ in range(3):
        assert lexer.next_token().type is TokenType.END


def test_peek_does_not_advance() -> None:
    lexer = Lexer("a = 1")
    assert lexer.next_token().lexeme == "a"
    assert lexer.peek_token().type is TokenType.EQUAL
    assert lexer.peek_token().type is TokenType.EQUAL
    assert lexer.next_token().type is TokenType.EQUAL
    assert lexer.next_token().value == 1


def test_largest_integer_literal() -> None:
    assert tokenize(str(2**127 - 1))[0].value == 2**127 - 1


@pytest.mark.parametrize(
    "code, error_char_idx",
    [
        pytest.param("1.2.3", 3, id="second-dot"),
        pytest.param("2 % 3", 2, id="percent"),
        pytest.param(".5", 0, id="leading-dot"),
        pytest.param("3²", 1, id="superscript"),
        pytest.param("1 + £4", 4, id="unknown-currency"),
        pytest.param("x = " + str(2**127), 4, id="int-overflow"),
        pytest.param("1" + "0" * 5000, 0, id="huge-literal"),
    ],
)
def test_tokenizer_errors(code: str, error_char_idx: int) -> None:
    with pytest.raises(TokenizerError) as exc_info:
        tokenize(code)
    assert exc_info.value.error_char_idx == error_char_idx


def test_peek_raises_on_bad_character() -> None:
    lexer = Lexer("a ?")
    lexer.next_token()
    with pytest.raises(TokenizerError):
        lexer.peek_token()
    assert lexer.pos == 1


def test_tokenizer_error_str() -> None:
    error = TokenizerError("Unexpected character: '%'", code="2 % 3", error_char_idx=2)
    assert str(error) == "[Tokenizer error] Unexpected character: '%'\n2 % 3\n  ^"


def test_tokenizer_error_str_elides_long_code() -> None:
    code = "1 + 2 + 3 + 4 + 5 + 6 + 7 ? 8 + 9 + 10 + 11 + 12"
    error = TokenizerError("Unexpected character: '?'", code=code, error_char_idx=26)
    _, snippet, pointer = str(error).split("\n")
    assert snippet == "...5 + 6 + 7 ? 8 + 9 + ..."
    assert snippet[len(pointer) - 1] == "?"
