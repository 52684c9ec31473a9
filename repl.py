import argparse
import logging
from pathlib import Path

from luca.config import get_settings
from luca.errors import CalculatorError
from luca.solver import solve, solve_document
from luca.value import Value


if __name__ == "__main__":
    arg_parser = argparse.ArgumentParser(description="Line calculator with variables and currencies")
    arg_parser.add_argument("file", nargs="?", type=Path, help="solve every line of a file instead of reading stdin")
    args = arg_parser.parse_args()

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    if args.file is not None:
        print(solve_document(args.file.read_text(), settings))
        raise SystemExit(0)

    variables: dict[str, Value] = dict()

    while True:
        try:
            code = input("> ")
        except EOFError:
            break

        if not code.strip():
            continue

        try:
            print(solve(code, variables, settings))
        except CalculatorError as e:
            print(e)
