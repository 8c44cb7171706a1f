import pytest

from chainlisp.errors import LispArityError, LispRecursionError
from chainlisp.interpreter import Interpreter, is_exit_command
from chainlisp.reader.parser import read


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2 3)", "6"),
        ("(if (> 3 2) 1 0)", "1"),
        ("(car '(a b c))", "a"),
        ("(cond ((< 2 1) 'no) (else 'yes))", "yes"),
        ("(define (double n) (* n 2)) (double 5)", "10"),
        ("(define x 5) x", "5"),
        ("(cdr '())", "()"),
    ]
)
def test_scenarios(run, source, expected):
    assert run(source) == expected


def test_unbound_symbol_evaluates_to_itself(run):
    assert run("foo") == "foo"
    assert run("42") == "42"


def test_unbound_call_returns_the_form(run):
    assert run("(foo 1 2)") == "(foo 1 2)"


def test_atom_headed_chain_falls_back_to_variable(run):
    run("(define x 5)")
    assert run("(x)") == "5"


def test_nested_head_returns_structure(run):
    assert run("((car '(a b)) c)") == "((car (quote (a b))) c)"


def test_function_body_sees_only_its_parameters(run):
    run("(define y 10)")
    run("(define (get-y) y)")
    assert run("(get-y)") == "y"


def test_callee_does_not_see_caller_parameters(run):
    run("(define (outer a) (inner))")
    run("(define (inner) a)")
    assert run("(outer 1)") == "a"


def test_parameters_shadow_globals(run):
    run("(define n 100)")
    run("(define (inc n) (+ n 1))")
    assert run("(inc 1)") == "2"
    assert run("n") == "100"


def test_actuals_are_evaluated_in_the_caller_environment(run):
    run("(define k 4)")
    run("(define (sq n) (* n n))")
    assert run("(sq k)") == "16"
    assert run("(sq (+ k 1))") == "25"


def test_recursive_function(run):
    run("(define (fact n) (if (< n 2) 1 (* n (fact (- n 1)))))")
    assert run("(fact 10)") == "3628800"
    assert run("(fact 20)") == "2432902008176640000"


def test_recursion_over_lists(run):
    run("(define (len xs) (if (null? xs) 0 (+ 1 (len (cdr xs)))))")
    assert run("(len '(a b c d))") == "4"


def test_moderately_deep_recursion(run):
    run("(define (down n) (if (< n 1) 'done (down (- n 1))))")
    assert run("(down 200)") == "done"


def test_runaway_recursion_is_reported(run):
    run("(define (spin n) (spin n))")
    with pytest.raises(LispRecursionError):
        run("(spin 1)")


def test_user_function_arity(run):
    run("(define (pair a b) (list a b))")
    assert run("(pair 1 2)") == "(1 2)"
    with pytest.raises(LispArityError):
        run("(pair 1)")
    with pytest.raises(LispArityError):
        run("(pair 1 2 3)")


def test_eval_returns_last_result(run):
    assert run("1 2 (+ 1 2)") == "3"


def test_empty_source_is_void(interp):
    assert interp.eval("").is_void
    assert interp.eval_to_string("; nothing\n") == ""


def test_sessions_are_isolated():
    first, second = Interpreter(prelude=None), Interpreter(prelude=None)
    first.eval("(define x 1)")
    assert first.eval_to_string("x") == "1"
    assert second.eval_to_string("x") == "x"


def test_reset_forgets_definitions(interp):
    interp.eval("(define x 1) (define (f) 2)")
    interp.reset()
    assert interp.eval_to_string("x") == "x"
    assert interp.eval_to_string("(f)") == "(f)"


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(exit)", True),
        ("( exit )", True),
        ("exit", False),
        ("(exit 1)", False),
        ("((exit))", False),
    ]
)
def test_is_exit_command(source, expected):
    assert is_exit_command(read(source)[0]) is expected


def test_empty_list_with_comment_does_not_end_input(run):
    assert run("(;c\n) (+ 1 2)") == "3"
    assert run("(list 1 (\n;x\n) 2)") == "(1 () 2)"


def test_prelude_with_commented_empty_list(interp):
    interp.eval_prelude("(;c\n) (define (one) 1)")
    assert interp.eval_to_string("(one)") == "1"
