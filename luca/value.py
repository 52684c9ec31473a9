import abc
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Union

from luca.utils import PrintableEnum

# signed 128-bit range
INT_MIN = -(2**127)
INT_MAX = 2**127 - 1


class Currency(PrintableEnum):
    EURO = "€"
    DOLLAR = "$"

    @property
    def glyph(self) -> str:
        return self.value


class Value(abc.ABC):
    @classmethod
    @abc.abstractmethod
    def type_name(cls) -> str:
        ...

    @property
    @abc.abstractmethod
    def magnitude(self) -> Union[int, float]:
        ...


UnaryOperationImpl = Callable[[Value], Value]
BinaryOperationImpl = Callable[[Value, Value], Value]


@dataclass(frozen=True)
class Int(Value):
    v: int

    @classmethod
    def type_name(cls) -> str:
        return "Int"

    @property
    def magnitude(self) -> int:
        return self.v

    def __str__(self) -> str:
        return str(self.v)


@dataclass(frozen=True)
class Float(Value):
    v: float

    @classmethod
    def type_name(cls) -> str:
        return "Float"

    @property
    def magnitude(self) -> float:
        return self.v

    def __str__(self) -> str:
        # shortest round-trip digits, written out without an exponent
        if not math.isfinite(self.v):
            return repr(self.v)
        text = format(Decimal(repr(self.v)), "f")
        return text if "." in text else text + ".0"


@dataclass(frozen=True)
class Money(Value):
    v: float
    currency: Currency

    @classmethod
    def type_name(cls) -> str:
        return "Money"

    @property
    def magnitude(self) -> float:
        return self.v

    def __str__(self) -> str:
        return f"{self.v:.2f} {self.currency.glyph}"
