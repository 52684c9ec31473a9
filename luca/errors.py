from dataclasses import dataclass

from luca.value import Currency


class CalculatorError(Exception):
    """Base for everything that can go wrong while solving a line"""


@dataclass
class CalcRuntimeError(CalculatorError):
    errmsg: str

    def __str__(self) -> str:
        return f"[Runtime error] {self.errmsg}"


@dataclass
class UndefinedVariableError(CalcRuntimeError):
    name: str


@dataclass
class DivisionByZeroError(CalcRuntimeError):
    pass


@dataclass
class CurrencyMismatchError(CalcRuntimeError):
    left: Currency
    right: Currency


@dataclass
class IntegerOverflowError(CalcRuntimeError):
    pass
