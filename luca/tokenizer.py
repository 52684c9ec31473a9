import enum
from dataclasses import dataclass
from typing import Union

from luca.errors import CalculatorError
from luca.utils import PrintableEnum, point_at
from luca.value import INT_MAX, Currency


@dataclass
class TokenizerError(CalculatorError):
    errmsg: str
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        return point_at(f"[Tokenizer error] {self.errmsg}", self.code, self.error_char_idx)


class TokenType(PrintableEnum):
    INTEGER = enum.auto()
    FLOAT = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    EQUAL = enum.auto()
    IDENTIFIER = enum.auto()
    CURRENCY = enum.auto()
    END = enum.auto()


TokenValue = Union[int, float, Currency, None]


@dataclass
class Token:
    type: TokenType
    lexeme: str
    position: int
    value: TokenValue = None

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


def _is_digit(s: str) -> bool:
    return s.isascii() and s.isdigit()


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
    "=": TokenType.EQUAL,
}

CURRENCY_GLYPHS = {currency.glyph: currency for currency in Currency}


class Lexer:
    """Scans tokens on demand; the cursor never moves backwards except through peek_token"""

    def __init__(self, code: str) -> None:
        self.code = code
        self.pos = 0

    def next_token(self) -> Token:
        code = self.code
        while self.pos < len(code) and code[self.pos].isspace():
            self.pos += 1

        if self.pos >= len(code):
            return Token(type=TokenType.END, lexeme="", position=len(code))

        start = self.pos
        char = code[start]
        if _is_digit(char):
            return self._number()
        elif char.isalpha():
            ident_end_idx = start + 1
            while ident_end_idx < len(code) and code[ident_end_idx].isalpha():
                ident_end_idx += 1
            self.pos = ident_end_idx
            return Token(type=TokenType.IDENTIFIER, lexeme=code[start:ident_end_idx], position=start)
        elif char in SINGLE_CHAR_TOKENS:
            self.pos += 1
            return Token(type=SINGLE_CHAR_TOKENS[char], lexeme=char, position=start)
        elif char in CURRENCY_GLYPHS:
            self.pos += 1
            return Token(type=TokenType.CURRENCY, lexeme=char, position=start, value=CURRENCY_GLYPHS[char])
        else:
            raise TokenizerError(f"Unexpected character: {char!r}", code=code, error_char_idx=start)

    def peek_token(self) -> Token:
        saved_pos = self.pos
        try:
            return self.next_token()
        finally:
            self.pos = saved_pos

    def _number(self) -> Token:
        code = self.code
        start = self.pos
        end = start
        seen_dot = False
        while end < len(code) and (_is_digit(code[end]) or code[end] == "."):
            if code[end] == ".":
                if seen_dot:
                    raise TokenizerError("Malformed number: second decimal point", code=code, error_char_idx=end)
                seen_dot = True
            end += 1
        self.pos = end
        lexeme = code[start:end]

        if seen_dot:
            return Token(type=TokenType.FLOAT, lexeme=lexeme, position=start, value=float(lexeme))

        # longer than INT_MAX means out of range; int() is never asked to parse huge strings
        value = int(lexeme) if len(lexeme.lstrip("0")) <= len(str(INT_MAX)) else None
        if value is None or value > INT_MAX:
            raise TokenizerError("Integer literal does not fit in 128 bits", code=code, error_char_idx=start)
        return Token(type=TokenType.INTEGER, lexeme=lexeme, position=start, value=value)


def tokenize(code: str) -> list[Token]:
    lexer = Lexer(code)
    tokens: list[Token] = []
    while True:
        token = lexer.next_token()
        tokens.append(token)
        if token.type is TokenType.END:
            return tokens

