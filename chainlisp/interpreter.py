from __future__ import annotations

import logging
from typing import Literal

from chainlisp import SExpression
from chainlisp.config import apply_recursion_limit, get_prelude_files
from chainlisp.errors import LispRecursionError
from chainlisp.printer import to_string
from chainlisp.reader.parser import lex, TokenStream
from chainlisp.types.node import Handle, VOID
from chainlisp.types.session import Session
from chainlisp.evaluation.evaluator import evaluate

logger = logging.getLogger(__name__)


def is_exit_command(expr: SExpression | None) -> bool:
    """True only for the exact input (exit)."""
    if expr is None or expr.content is None:
        return False
    head = expr.content
    return (
        expr.continuation is None
        and head.content is None
        and head.label == "exit"
    )


class Interpreter:
    """
    Reads and evaluates chainlisp code against one Session.
    Definitions persist across calls until `reset`.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        apply_recursion_limit()
        self.session = Session()
        self._prelude = prelude
        self._load_prelude()

    def _load_prelude(self) -> None:
        if self._prelude is None:
            return  # explicit: no prelude
        if self._prelude == 'auto':
            for path in get_prelude_files():
                logger.debug("loading prelude %s", path)
                self.eval_prelude(path.read_text(encoding='utf-8'))
        elif self._prelude:
            self.eval_prelude(self._prelude)

    def eval_prelude(self, code: str) -> None:
        for expr in TokenStream(lex(code)).parse_all():
            self.eval_node(expr)

    def eval_node(self, expr: SExpression) -> Handle:
        """Evaluate one top-level expression in the session's global environment."""
        try:
            return evaluate(expr, self.session.variables, self.session)
        except RecursionError:
            raise LispRecursionError("Maximum evaluation depth exceeded") from None

    def eval(self, code: str) -> Handle:
        """Evaluate every expression in `code`; return the last result."""
        result = VOID
        stream = TokenStream(lex(code))
        while (expr := stream.parse_expr()) is not None:
            result = self.eval_node(expr)
        return result

    def eval_to_string(self, code: str) -> str:
        return to_string(self.eval(code))

    def reset(self) -> None:
        self.session.reset()
        self._load_prelude()
