import logging

from chainlisp import EvaluatorFn
from chainlisp import SExpression
from chainlisp.errors import LispArityError, LispTypeError
from chainlisp.types.node import Node, Handle, VOID
from chainlisp.types.environment import define
from chainlisp.types.session import Session

logger = logging.getLogger(__name__)


def define_form(
    tail: list[SExpression],
    env: Node,
    session: Session,
    evaluate_fn: EvaluatorFn,
) -> Handle:
    """
    (define name value)          binds a variable in the current environment
    (define (name formals) body) stores a function in the session, always globally
    Produces no printable result.
    """
    if len(tail) != 2:
        raise LispArityError("define requires exactly 2 arguments")

    key, val_expr = tail
    if key.content is None:
        if key.label is None:
            raise LispTypeError("define requires a symbol or a (name formals...) list")
        value = evaluate_fn(val_expr, env, session)
        new_env = define(key, value, env)
        # Only a top-level define replaces the session's variables
        if session.is_global(env):
            session.publish_variables(new_env)
        logger.debug("define variable %s", key.label)
        return VOID

    if key.content.label is None:
        raise LispTypeError("function name must be a symbol")
    session.define_function(key, val_expr)
    logger.debug("define function %s", key.content.label)
    return VOID
