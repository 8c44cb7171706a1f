from chainlisp import EvaluatorFn
from chainlisp import SExpression
from chainlisp.errors import LispArityError
from chainlisp.types.node import Node, Handle, is_true
from chainlisp.types.session import Session


def if_form(
    tail: list[SExpression],
    env: Node,
    session: Session,
    evaluate_fn: EvaluatorFn,
) -> Handle:
    if len(tail) != 3:
        raise LispArityError("if requires a condition, a then-expression and an else-expression")

    condition = evaluate_fn(tail[0], env, session)
    # Only #t is true; #f, () and every other value take the else branch
    if is_true(condition.node):
        return evaluate_fn(tail[1], env, session)
    return evaluate_fn(tail[2], env, session)
