"""Throws random lines at the solver.

Lines come from a small random grammar over numbers, currencies, variables
and brackets. Every line must either solve or fail with a CalculatorError;
lines without currencies or variables must also agree with Python's eval.
"""
import math
import random
import sys

from luca.errors import CalculatorError
from luca.solver import solve
from luca.value import Int, Value

VARIABLES: dict[str, Value] = {"a": Int(3), "b": Int(-2)}


def random_number() -> str:
    if random.random() < 0.3:
        return f"{random.randint(0, 99)}.{random.randint(0, 99)}"
    return str(random.randint(0, 20))


def random_line(depth: int, plain: bool) -> str:
    roll = random.random()
    if depth <= 0 or roll < 0.3:
        if not plain and roll < 0.1:
            return random.choice(["$", ""]) + random_number() + random.choice(["€", ""])
        if not plain and roll < 0.15:
            return random.choice(list(VARIABLES))
        return random_number()
    if roll < 0.4:
        return "-" + random_line(depth - 1, plain)
    if roll < 0.5:
        return f"({random_line(depth - 1, plain)})"
    op = random.choice(["+", "-", "*", "/"])
    return f"{random_line(depth - 1, plain)} {op} {random_line(depth - 1, plain)}"


def check(line: str, plain: bool) -> str | None:
    try:
        res = solve(line, dict(VARIABLES))
    except CalculatorError:
        return None
    except Exception as e:  # anything else is a bug
        return f"unexpected {type(e).__name__}: {e}"

    if not plain:
        return None
    try:
        expected = eval(line)
    except ZeroDivisionError:
        return f"python raised ZeroDivisionError, calculator gave {res}"
    if not math.isclose(float(res), expected, rel_tol=1e-9, abs_tol=1e-9):
        return f"python gave {expected!r}, calculator gave {res}"
    return None


if __name__ == "__main__":
    iterations = int(sys.argv[1]) if len(sys.argv) > 1 else 10_000
    for _ in range(iterations):
        plain = random.random() < 0.5
        line = random_line(depth=4, plain=plain)
        problem = check(line, plain)
        if problem is not None:
            print(f"{line!r}\n  {problem}\n")
