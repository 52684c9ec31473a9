from typing import Callable

from luca.arithmetic import add, divide, multiply, negate, subtract
from luca.errors import CalcRuntimeError, UndefinedVariableError
from luca.parser import (
    Assignment,
    BinaryOperation,
    BinaryOperator,
    CurrencyTag,
    Expression,
    Statement,
    UnaryOperation,
    UnaryOperator,
    Variable,
)
from luca.value import Float, Int, Money, Value

BINARY_OPERATION_FUNCS: dict[BinaryOperator, Callable[[Value, Value], Value]] = {
    BinaryOperator.ADD: add,
    BinaryOperator.SUB: subtract,
    BinaryOperator.MUL: multiply,
    BinaryOperator.DIV: divide,
}


def evaluate(statement: Statement, variables: dict[str, Value], plural_fallback: bool = False) -> Value:
    """Evaluates one parsed line against the shared variables.

    An assignment stores its value only once the right-hand side has been
    evaluated, so a failing line leaves ``variables`` untouched.
    """
    try:
        if isinstance(statement, Assignment):
            value = evaluate_expression(statement.value, variables, plural_fallback)
            variables[statement.target.name] = value
            return value
        return evaluate_expression(statement, variables, plural_fallback)
    except RecursionError:
        raise CalcRuntimeError("Expression nested too deeply to evaluate") from None


def evaluate_expression(expression: Expression, variables: dict[str, Value], plural_fallback: bool = False) -> Value:
    if isinstance(expression, (Int, Float)):
        return expression
    elif isinstance(expression, Variable):
        return lookup_variable(expression.name, variables, plural_fallback)
    elif isinstance(expression, BinaryOperation):
        # walking the left spine in a loop keeps "1 + 1 + ... + 1" from growing the call stack
        spine: list[BinaryOperation] = []
        node: Expression = expression
        while isinstance(node, BinaryOperation):
            spine.append(node)
            node = node.left
        result = evaluate_expression(node, variables, plural_fallback)
        for operation in reversed(spine):
            right_res = evaluate_expression(operation.right, variables, plural_fallback)
            result = BINARY_OPERATION_FUNCS[operation.operator](result, right_res)
        return result
    elif isinstance(expression, UnaryOperation):
        operand = evaluate_expression(expression.operand, variables, plural_fallback)
        if expression.operator is UnaryOperator.NEG:
            return negate(operand)
        elif expression.operator is UnaryOperator.POS:
            return operand
        else:
            raise CalcRuntimeError(f"Unexpected unary operator: {expression.operator}")
    elif isinstance(expression, CurrencyTag):
        operand = evaluate_expression(expression.operand, variables, plural_fallback)
        if isinstance(operand, Money):
            raise CalcRuntimeError(f"Can't tag {operand.type_name()} with {expression.currency.glyph}")
        return Money(float(operand.magnitude), expression.currency)
    else:
        raise CalcRuntimeError(f"Unexpected expression type: {expression}")


def lookup_variable(name: str, variables: dict[str, Value], plural_fallback: bool = False) -> Value:
    if name in variables:
        return variables[name]
    # "apples" falls back to "apple"
    if plural_fallback and len(name) > 1 and name.endswith("s") and name[:-1] in variables:
        return variables[name[:-1]]
    raise UndefinedVariableError(f"Reference to undefined variable {name!r}", name=name)
