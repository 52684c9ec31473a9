"""Binary and unary arithmetic over Int, Float and Money values.

Each operator is a table of ((operand types), implementation) pairs
scanned in order, so the first row that matches wins. Rows are ordered by
promotion priority: Money beats Float, Float beats Int.
"""
import operator
from typing import Callable, Type, Union

from luca.errors import CalcRuntimeError, CurrencyMismatchError, DivisionByZeroError, IntegerOverflowError
from luca.value import INT_MAX, INT_MIN, BinaryOperationImpl, Float, Int, Money, UnaryOperationImpl, Value

Number = Union[int, float]

BinaryOperationImplTable = list[tuple[tuple[Type[Value], Type[Value]], BinaryOperationImpl]]
UnaryOperationImplTable = list[tuple[tuple[Type[Value]], UnaryOperationImpl]]
ImplTable = Union[BinaryOperationImplTable, UnaryOperationImplTable]


def checked_int(v: int) -> Int:
    if not INT_MIN <= v <= INT_MAX:
        raise IntegerOverflowError("Integer result does not fit in 128 bits")
    return Int(v)


def _money_money(op: Callable[[Number, Number], Number]) -> BinaryOperationImpl:
    def impl(a: Money, b: Money) -> Value:  # type: ignore
        if a.currency is not b.currency:
            raise CurrencyMismatchError(
                f"Can't mix {a.currency.glyph} and {b.currency.glyph}", left=a.currency, right=b.currency
            )
        return Money(float(op(a.v, b.v)), a.currency)

    return impl  # type: ignore


def _promoting_table(op: Callable[[Number, Number], Number], int_impl: BinaryOperationImpl) -> BinaryOperationImplTable:
    return [
        ((Money, Money), _money_money(op)),
        ((Money, Value), lambda a, b: Money(float(op(a.v, float(b.magnitude))), a.currency)),  # type: ignore
        ((Value, Money), lambda a, b: Money(float(op(float(a.magnitude), b.v)), b.currency)),  # type: ignore
        ((Float, Value), lambda a, b: Float(float(op(a.v, float(b.magnitude))))),  # type: ignore
        ((Value, Float), lambda a, b: Float(float(op(float(a.magnitude), b.v)))),  # type: ignore
        ((Int, Int), int_impl),
    ]


def _int_div(a: Int, b: Int) -> Value:
    if a.v % b.v == 0:
        return checked_int(a.v // b.v)
    return Float(a.v / b.v)


add_impls = _promoting_table(operator.add, lambda a, b: checked_int(a.v + b.v))  # type: ignore
sub_impls = _promoting_table(operator.sub, lambda a, b: checked_int(a.v - b.v))  # type: ignore
mul_impls = _promoting_table(operator.mul, lambda a, b: checked_int(a.v * b.v))  # type: ignore
div_impls = _promoting_table(operator.truediv, _int_div)  # type: ignore

neg_impls: UnaryOperationImplTable = [
    ((Int,), lambda a: checked_int(-a.v)),  # type: ignore
    ((Float,), lambda a: Float(-a.v)),  # type: ignore
    ((Money,), lambda a: Money(-a.v, a.currency)),  # type: ignore
]


def _dispatch(table: ImplTable, operands: tuple[Value, ...], op_name: str) -> Value:
    impl = next((impl for types, impl in table if all(map(isinstance, operands, types))), None)
    if impl is None:
        type_names = " and ".join(operand.type_name() for operand in operands)
        raise CalcRuntimeError(f"{op_name} is not defined for {type_names}")
    return impl(*operands)


def add(a: Value, b: Value) -> Value:
    return _dispatch(add_impls, (a, b), "Addition")


def subtract(a: Value, b: Value) -> Value:
    return _dispatch(sub_impls, (a, b), "Subtraction")


def multiply(a: Value, b: Value) -> Value:
    return _dispatch(mul_impls, (a, b), "Multiplication")


def divide(a: Value, b: Value) -> Value:
    # covers Int(0), Float(0.0), Float(-0.0) and zero Money amounts
    if b.magnitude == 0:
        raise DivisionByZeroError("Division by zero")
    return _dispatch(div_impls, (a, b), "Division")


def negate(a: Value) -> Value:
    return _dispatch(neg_impls, (a,), "Negation")
