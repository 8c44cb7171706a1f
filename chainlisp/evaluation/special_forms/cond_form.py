"""Special form: cond, the multi-branch conditional."""

from chainlisp import SExpression, EvaluatorFn
from chainlisp.errors import LispArityError
from chainlisp.types.node import Node, Handle, FALSE, elements, is_true, wrap
from chainlisp.types.session import Session

ELSE_LABELS = ("else", "#t")


def cond_form(
    tail: list[SExpression], env: Node, session: Session, evaluate_fn: EvaluatorFn
) -> Handle:
    """Evaluate a (cond (test expr...) ...).

    For each clause in order:
    - If the test is the symbol else or #t, evaluate the body without evaluating the test.
    - Otherwise evaluate the test; if it yields #t, evaluate the body.
    The body's expressions run in order and the last value is returned.
    If no clause matches, return FALSE.
    """
    for clause in tail:
        parts = list(elements(clause))
        if len(parts) < 2:
            raise LispArityError("cond clause requires a test and a body")
        test, body = parts[0], parts[1:]

        taken = test.content is None and test.label in ELSE_LABELS
        if not taken:
            taken = is_true(evaluate_fn(test, env, session).node)
        if taken:
            result = None
            for expr in body:
                result = evaluate_fn(expr, env, session)
            return result

    return wrap(FALSE)
