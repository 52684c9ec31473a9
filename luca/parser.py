"""Recursive descent parser for a single calculator line.

Grammar, loosest binding first:

    statement  := assignment | expr
    assignment := IDENTIFIER '=' expr
    expr       := term (('+' | '-') term)*
    term       := product (('*' | '/') product)*
    product    := factor IDENTIFIER*           (implicit multiplication, "4a" is 4 * a)
    factor     := ('+' | '-') factor | '(' expr ')' | IDENTIFIER | value
    value      := CURRENCY number | number CURRENCY?
    number     := INTEGER | FLOAT
"""
import enum
from dataclasses import dataclass

from luca.errors import CalculatorError
from luca.tokenizer import Lexer, Token, TokenType
from luca.utils import PrintableEnum, point_at
from luca.value import Currency, Float, Int

DEFAULT_MAX_DEPTH = 100
# each bracket level costs four Python frames (factor, expr, term, product)
MAX_DEPTH_LIMIT = 200


@dataclass
class ParserError(CalculatorError):
    errmsg: str
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        return point_at(f"[Parser error] {self.errmsg}", self.code, self.error_char_idx)


class BinaryOperator(PrintableEnum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()


@dataclass
class BinaryOperation:
    operator: BinaryOperator
    left: "Expression"
    right: "Expression"


class UnaryOperator(PrintableEnum):
    NEG = enum.auto()
    POS = enum.auto()


@dataclass
class UnaryOperation:
    operator: UnaryOperator
    operand: "Expression"


@dataclass
class CurrencyTag:
    currency: Currency
    operand: "Expression"


@dataclass
class Variable:
    name: str


@dataclass
class Assignment:
    target: Variable
    value: "Expression"


Expression = Int | Float | Variable | BinaryOperation | UnaryOperation | CurrencyTag
Statement = Assignment | Expression

BINARY_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
}

UNARY_OPERATORS = {
    TokenType.MINUS: UnaryOperator.NEG,
    TokenType.PLUS: UnaryOperator.POS,
}


class Parser:
    def __init__(self, lexer: Lexer, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.lexer = lexer
        self.max_depth = max_depth
        self._depth = 0
        self.current_token = lexer.next_token()

    def parse(self) -> Statement:
        try:
            statement = self._statement()
        except RecursionError:
            raise self._error("Expression nested too deeply for the interpreter stack") from None
        if self.current_token.type is not TokenType.END:
            raise self._error(f"Unexpected {self.current_token.type} after complete statement")
        return statement

    def _error(self, errmsg: str) -> ParserError:
        return ParserError(errmsg, code=self.lexer.code, error_char_idx=self.current_token.position)

    def _unexpected(self, expected: str) -> ParserError:
        if self.current_token.type is TokenType.END:
            return self._error(f"Unexpected end of input, {expected} expected")
        return self._error(f"{expected} expected, found {self.current_token.type}")

    def _eat(self, token_type: TokenType) -> Token:
        token = self.current_token
        if token.type is not token_type:
            raise self._unexpected(str(token_type))
        self.current_token = self.lexer.next_token()
        return token

    def _statement(self) -> Statement:
        if self.current_token.type is TokenType.IDENTIFIER and self.lexer.peek_token().type is TokenType.EQUAL:
            target = Variable(self._eat(TokenType.IDENTIFIER).lexeme)
            self._eat(TokenType.EQUAL)
            return Assignment(target=target, value=self._expr())
        return self._expr()

    def _expr(self) -> Expression:
        result = self._term()
        while self.current_token.type in (TokenType.PLUS, TokenType.MINUS):
            operator = BINARY_OPERATORS[self._eat(self.current_token.type).type]
            result = BinaryOperation(operator=operator, left=result, right=self._term())
        return result

    def _term(self) -> Expression:
        result = self._product()
        while self.current_token.type in (TokenType.STAR, TokenType.SLASH):
            operator = BINARY_OPERATORS[self._eat(self.current_token.type).type]
            result = BinaryOperation(operator=operator, left=result, right=self._product())
        return result

    def _product(self) -> Expression:
        result = self._factor()
        while self.current_token.type is TokenType.IDENTIFIER:
            variable = Variable(self._eat(TokenType.IDENTIFIER).lexeme)
            result = BinaryOperation(operator=BinaryOperator.MUL, left=result, right=variable)
        return result

    def _factor(self) -> Expression:
        self._depth += 1
        try:
            if self._depth > self.max_depth:
                raise self._error(f"Expression nested too deeply (more than {self.max_depth} levels)")

            token = self.current_token
            if token.type in UNARY_OPERATORS:
                self._eat(token.type)
                return UnaryOperation(operator=UNARY_OPERATORS[token.type], operand=self._factor())
            elif token.type is TokenType.BRACKET_OPEN:
                self._eat(TokenType.BRACKET_OPEN)
                result = self._expr()
                self._eat(TokenType.BRACKET_CLOSE)
                return result
            elif token.type is TokenType.IDENTIFIER:
                return Variable(self._eat(TokenType.IDENTIFIER).lexeme)
            else:
                return self._value()
        finally:
            self._depth -= 1

    def _value(self) -> Expression:
        if self.current_token.type is TokenType.CURRENCY:
            currency = self._eat(TokenType.CURRENCY).value
            return CurrencyTag(currency=currency, operand=self._number())  # type: ignore

        number = self._number()
        if self.current_token.type is TokenType.CURRENCY:
            currency = self._eat(TokenType.CURRENCY).value
            return CurrencyTag(currency=currency, operand=number)  # type: ignore
        return number

    def _number(self) -> Expression:
        token = self.current_token
        if token.type is TokenType.INTEGER:
            self._eat(TokenType.INTEGER)
            return Int(token.value)  # type: ignore
        elif token.type is TokenType.FLOAT:
            self._eat(TokenType.FLOAT)
            return Float(token.value)  # type: ignore
        else:
            raise self._unexpected("Number")


def parse(code: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Statement:
    return Parser(Lexer(code), max_depth=max_depth).parse()
