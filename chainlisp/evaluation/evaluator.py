"""Core evaluator for chainlisp.

`evaluate` inspects one node and decides between keyword dispatch, variable
resolution, user-function application and plain structure. A chain is walked
to its end before its shell is handed back, so every path returns something
the printer can render, including unmatched and atom-headed forms.
"""

from __future__ import annotations

from chainlisp import SExpression, EvaluatorFn
from chainlisp.builtins import PRIMITIVES, Primitive
from chainlisp.errors import LispTypeError
from chainlisp.types.node import Node, Handle, elements, wrap
from chainlisp.types.session import Session
from chainlisp.evaluation.apply import resolve_call, resolve_variable
from chainlisp.evaluation.special_forms import SPECIAL_FORMS


def operands(expr: SExpression) -> list[SExpression]:
    """The raw, unevaluated operand nodes following a keyword cell."""
    return list(elements(expr.continuation))


def primitive_form(fn: Primitive):
    """Adapt a primitive to the special-form signature: evaluate operands left to right."""

    def handler(
        tail: list[SExpression],
        env: Node,
        session: Session,
        evaluate_fn: EvaluatorFn,
    ) -> Handle:
        args = []
        for arg in tail:
            value = evaluate_fn(arg, env, session)
            if value.is_void:
                raise LispTypeError(f"{fn.__name__}: a definition has no value")
            args.append(value.node)
        return wrap(fn(env, args))

    handler.__name__ = fn.__name__
    return handler


# One table from keyword text to handler; matching is exact and case-sensitive.
KEYWORDS = {name: primitive_form(fn) for name, fn in PRIMITIVES.items()}
KEYWORDS.update(SPECIAL_FORMS)


def evaluate(expr: SExpression, env: Node, session: Session) -> Handle:
    atom_headed = False
    head = expr.content

    if head is not None:
        if head.label is not None:
            handler = KEYWORDS.get(head.label)
            if handler is not None:
                return handler(operands(expr), env, session, evaluate)
            # Not a keyword: a user function or a variable, decided on the way back
            atom_headed = True
        else:
            # Nested structure in head position is evaluated for its effects only
            evaluate(head, env, session)
    elif expr.label is not None:
        return resolve_variable(expr, env)

    # Walk the rest of the chain first, then hand back this cell unevaluated
    if expr.continuation is not None:
        evaluate(expr.continuation, env, session)
    result = wrap(expr)

    if atom_headed:
        result = resolve_call(expr, env, session, evaluate)
    return result
