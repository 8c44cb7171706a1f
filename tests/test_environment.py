import pytest

from chainlisp.errors import LispArityError, LispTypeError
from chainlisp.evaluation.evaluator import evaluate
from chainlisp.types.environment import (
    bind_formals_to_actuals,
    binding_value,
    define,
    is_no_match,
    lookup,
    new_environment,
)
from chainlisp.types.node import VOID, atom, chain, wrap
from chainlisp.types.session import Session


def _value(env, name):
    return binding_value(lookup(atom(name), env).node).label


def test_lookup_in_empty_environment_is_no_match():
    found = lookup(atom("x"), new_environment())
    assert is_no_match(found)
    assert found.node.label == "#f"


def test_define_prepends_without_mutating():
    env = new_environment()
    env2 = define(atom("x"), wrap(atom("5")), env)
    assert _value(env2, "x") == "5"
    assert is_no_match(lookup(atom("x"), env))
    assert env2.continuation is env


def test_newest_binding_shadows_older_ones():
    env1 = define(atom("x"), wrap(atom("5")), new_environment())
    env2 = define(atom("x"), wrap(atom("7")), env1)
    assert _value(env2, "x") == "7"
    assert _value(env1, "x") == "5"


def test_lookup_matches_on_atomic_head():
    env = define(atom("x"), wrap(atom("5")), new_environment())
    found = lookup(chain(atom("x"), atom("y")), env)
    assert not is_no_match(found)
    assert binding_value(found.node).label == "5"


def test_binding_a_void_value_is_rejected():
    with pytest.raises(LispTypeError):
        define(atom("x"), VOID, new_environment())


def test_binding_value_of_malformed_pair():
    with pytest.raises(LispTypeError):
        binding_value(atom("x"))


def test_bind_formals_evaluates_actuals_in_caller_env():
    session = Session()
    session.publish_variables(define(atom("y"), wrap(atom("9")), session.variables))
    env = bind_formals_to_actuals(
        chain(atom("a"), atom("b")),
        chain(atom("1"), atom("y")),
        new_environment(),
        session.variables,
        session,
        evaluate,
    )
    assert _value(env, "a") == "1"
    assert _value(env, "b") == "9"
    # Only the formals are visible in the new environment
    assert is_no_match(lookup(atom("y"), env))


@pytest.mark.parametrize(
    "formals,actuals",
    [
        (chain(atom("a"), atom("b")), chain(atom("1"))),
        (chain(atom("a")), chain(atom("1"), atom("2"))),
        (None, chain(atom("1"))),
    ]
)
def test_bind_formals_with_mismatched_counts(formals, actuals):
    session = Session()
    with pytest.raises(LispArityError):
        bind_formals_to_actuals(formals, actuals, new_environment(), session.variables, session, evaluate)


def test_session_stores_functions_and_resets():
    session = Session()
    signature = chain(atom("double"), atom("n"))
    body = chain(atom("*"), atom("n"), atom("2"))
    session.define_function(signature, body)
    found = lookup(atom("double"), session.functions)
    assert not is_no_match(found)
    assert found.node.content is signature
    assert binding_value(found.node) is body

    session.reset()
    assert is_no_match(lookup(atom("double"), session.functions))


def test_session_global_environment_identity():
    session = Session()
    assert session.is_global(session.variables)
    assert not session.is_global(new_environment())
