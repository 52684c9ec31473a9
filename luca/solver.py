import logging
from typing import Optional

from luca.config import Settings, get_settings
from luca.errors import CalculatorError
from luca.parser import Parser
from luca.runtime import evaluate
from luca.tokenizer import Lexer
from luca.value import Value

logger = logging.getLogger("luca.solver")


def solve(line: str, variables: dict[str, Value], settings: Optional[Settings] = None) -> str:
    """Evaluates one line and returns its display string.

    ``variables`` belongs to the caller and is shared between the lines of one
    document. Any failure raises a ``CalculatorError`` subclass and leaves
    ``variables`` as it was.
    """
    settings = settings or get_settings()
    parser = Parser(Lexer(line.strip()), max_depth=settings.max_nesting_depth)
    statement = parser.parse()
    result = evaluate(statement, variables, plural_fallback=settings.plural_fallback)
    return str(result)


def solve_document(text: str, settings: Optional[Settings] = None) -> str:
    """Solves every line top to bottom against one fresh set of variables.

    The output has one line per input line; lines that fail are left blank.
    """
    settings = settings or get_settings()
    variables: dict[str, Value] = dict()
    results: list[str] = []
    for lineno, line in enumerate(text.split("\n"), start=1):
        try:
            results.append(solve(line, variables, settings))
        except CalculatorError as e:
            logger.debug("Line %d not solved: %s", lineno, e)
            results.append("")
    return "\n".join(results)
