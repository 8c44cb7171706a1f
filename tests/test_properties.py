import pytest
from hypothesis import given, strategies as st

from chainlisp.interpreter import Interpreter

data_symbols = st.sampled_from(["a", "b", "c", "foo", "bar", "x1", "-", "a?"])
symbols = st.one_of(data_symbols, st.just("#f"))
symbol_lists = st.lists(symbols, max_size=6)
data_lists = st.lists(data_symbols, max_size=6)
ints = st.integers(min_value=-10**6, max_value=10**6)


@pytest.fixture(scope="module")
def itp():
    return Interpreter(prelude=None)


def _quoted(items):
    return f"'({' '.join(items)})"


def _printed(items):
    return f"({' '.join(items)})"


@given(xs=symbol_lists)
def test_equal_is_reflexive(itp, xs):
    assert itp.eval_to_string(f"(equal? {_quoted(xs)} {_quoted(xs)})") == "#t"


@given(xs=symbol_lists, ys=symbol_lists)
def test_equal_is_symmetric(itp, xs, ys):
    forward = itp.eval_to_string(f"(equal? {_quoted(xs)} {_quoted(ys)})")
    backward = itp.eval_to_string(f"(equal? {_quoted(ys)} {_quoted(xs)})")
    assert forward == backward


@given(x=symbols, xs=symbol_lists)
def test_car_and_cdr_undo_cons(itp, x, xs):
    assert itp.eval_to_string(f"(car (cons '{x} {_quoted(xs)}))") == x
    assert itp.eval_to_string(f"(equal? (cdr (cons '{x} {_quoted(xs)})) {_quoted(xs)})") == "#t"
    if any(s != "#f" for s in xs):
        assert itp.eval_to_string(f"(cdr (cons '{x} {_quoted(xs)}))") == _printed(xs)


@given(xs=symbol_lists)
def test_length_counts_elements(itp, xs):
    # A list of nothing but #f has empty structure
    expected = len(xs) if any(s != "#f" for s in xs) else 0
    assert itp.eval_to_string(f"(length {_quoted(xs)})") == str(expected)


@given(xs=data_lists, ys=data_lists)
def test_append_concatenates(itp, xs, ys):
    assert itp.eval_to_string(f"(append {_quoted(xs)} {_quoted(ys)})") == _printed(xs + ys)


@given(nums=st.lists(ints, min_size=1, max_size=6))
def test_sum_and_product(itp, nums):
    args = " ".join(map(str, nums))
    product = 1
    for n in nums:
        product *= n
    assert itp.eval_to_string(f"(+ {args})") == str(sum(nums))
    assert itp.eval_to_string(f"(* {args})") == str(product)


@given(a=ints, b=ints)
def test_comparisons_agree_with_python(itp, a, b):
    assert itp.eval_to_string(f"(< {a} {b})") == ("#t" if a < b else "()")
    assert itp.eval_to_string(f"(>= {a} {b})") == ("#t" if a >= b else "()")
