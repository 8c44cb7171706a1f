"""Interactive read-eval-print loop (``chainlisp`` / ``python -m chainlisp.repl``).

One expression may span several lines; input is buffered until its
parentheses balance. Errors are reported per expression and the loop goes on.
The exact input ``(exit)`` ends the session.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Callable

from chainlisp.config import configure_logging
from chainlisp.errors import LispError
from chainlisp.interpreter import Interpreter, is_exit_command
from chainlisp.printer import to_string
from chainlisp.reader.parser import lex, TokenStream

logger = logging.getLogger(__name__)

BANNER = (
    "A prototype evaluator for Scheme.\n"
    "Type Scheme expressions using quote, car, cdr, cons, define and friends.\n"
    "The function call (exit) quits."
)
PROMPT = "scheme> "
CONTINUATION_PROMPT = "...     "
GOODBYE = "Have a nice day!"


def paren_balance(text: str) -> int:
    """Open minus close parentheses in `text`, ignoring comments."""
    balance = 0
    for kind, _ in lex(text):
        if kind == "lparen":
            balance += 1
        elif kind == "rparen":
            balance -= 1
    return balance


def process(interp: Interpreter, source: str, out: IO[str]) -> bool:
    """Evaluate and print every expression in `source`. Returns False on (exit)."""
    stream = TokenStream(lex(source))
    while True:
        try:
            expr = stream.parse_expr()
        except LispError as ex:
            print(f"error: {ex}", file=out)
            return True
        if expr is None:
            return True
        if is_exit_command(expr):
            print(GOODBYE, file=out)
            return False
        try:
            result = interp.eval_node(expr)
        except LispError as ex:
            logger.debug("evaluation failed", exc_info=True)
            print(f"error: {ex}", file=out)
            continue
        if not result.is_void:
            print(to_string(result), file=out)


def run(
    interp: Interpreter,
    read_line: Callable[[str], str] = input,
    out: IO[str] = sys.stdout,
) -> None:
    print(BANNER, file=out)
    buffer = ""
    while True:
        try:
            line = read_line(CONTINUATION_PROMPT if buffer else PROMPT)
        except EOFError:
            print(file=out)
            break
        except KeyboardInterrupt:
            print(file=out)
            buffer = ""
            continue

        buffer = f"{buffer}\n{line}" if buffer else line
        try:
            if paren_balance(buffer) > 0:
                continue
        except LispError as ex:
            print(f"error: {ex}", file=out)
            buffer = ""
            continue

        source, buffer = buffer, ""
        if not source.strip():
            continue
        if not process(interp, source, out):
            break


def main() -> None:
    configure_logging()
    run(Interpreter())


if __name__ == "__main__":
    main()
