from chainlisp import SExpression, EvaluatorFn
from chainlisp.errors import LispArityError
from chainlisp.types.node import Node, Handle, wrap
from chainlisp.types.session import Session


def quote_form(
    tail: list[SExpression], env: Node, session: Session, evaluate_fn: EvaluatorFn
) -> Handle:
    if len(tail) != 1:
        raise LispArityError("quote expects exactly 1 argument")
    return wrap(tail[0])
