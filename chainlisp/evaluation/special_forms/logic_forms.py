from chainlisp import SExpression, EvaluatorFn
from chainlisp.types.node import Node, Handle, TRUE, FALSE, is_true, wrap
from chainlisp.types.session import Session


def and_form(tail: list[SExpression], env: Node, session: Session, evaluate_fn: EvaluatorFn) -> Handle:
    """Short-circuiting logical AND special form.

    (and a b c ...) evaluates each operand left-to-right and returns FALSE at
    the first operand that is not true. Otherwise (including with zero
    operands) returns TRUE.
    """
    for expr in tail:
        if not is_true(evaluate_fn(expr, env, session).node):
            return wrap(FALSE)
    return wrap(TRUE)


def or_form(tail: list[SExpression], env: Node, session: Session, evaluate_fn: EvaluatorFn) -> Handle:
    """Short-circuiting logical OR special form.

    (or a b c ...) evaluates each operand left-to-right and returns TRUE at
    the first true operand. If none is true, or there are none, returns FALSE.
    """
    for expr in tail:
        if is_true(evaluate_fn(expr, env, session).node):
            return wrap(TRUE)
    return wrap(FALSE)
