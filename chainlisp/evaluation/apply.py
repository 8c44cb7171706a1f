"""Variable resolution and user-function application.

User functions live in the session's function store as pairs of
``((name formals...) body)``. A call binds the evaluated actuals to the
formals in a fresh environment that contains nothing else: the body sees its
parameters only, never the caller's or the global variables.
"""

from __future__ import annotations

import logging

from chainlisp import SExpression, EvaluatorFn
from chainlisp.types.node import Node, Handle, wrap
from chainlisp.types.session import Session
from chainlisp.types.environment import (
    lookup,
    is_no_match,
    binding_value,
    new_environment,
    bind_formals_to_actuals,
)

logger = logging.getLogger(__name__)


def resolve_variable(expr: SExpression, env: Node) -> Handle:
    """Look `expr`'s head symbol up in `env`; unbound symbols evaluate to themselves."""
    found = lookup(expr, env)
    if is_no_match(found):
        return wrap(expr)
    return wrap(binding_value(found.node))


def apply_user_function(
    definition: Node,
    call: SExpression,
    env: Node,
    session: Session,
    evaluate_fn: EvaluatorFn,
) -> Handle:
    """Apply the stored ``(signature body)`` pair `definition` at call site `call`."""
    signature = definition.content
    body = binding_value(definition)
    local_env = bind_formals_to_actuals(
        signature.continuation,
        call.continuation,
        new_environment(),
        env,
        session,
        evaluate_fn,
    )
    logger.debug("apply %s", signature.content.label)
    return evaluate_fn(body, local_env, session)


def resolve_call(
    expr: SExpression,
    env: Node,
    session: Session,
    evaluate_fn: EvaluatorFn,
) -> Handle:
    """An atom-headed chain: call the user function of that name, else resolve a variable."""
    found = lookup(expr, session.functions)
    if is_no_match(found):
        return resolve_variable(expr, env)
    return apply_user_function(found.node, expr, env, session, evaluate_fn)
