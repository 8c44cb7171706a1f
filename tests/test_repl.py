import io

import pytest

from chainlisp.repl import BANNER, GOODBYE, paren_balance, process, run


def drive(interp, lines):
    feed = iter(lines)

    def read_line(prompt):
        try:
            return next(feed)
        except StopIteration:
            raise EOFError from None

    out = io.StringIO()
    run(interp, read_line, out)
    return out.getvalue().splitlines()


def transcript(interp, lines):
    """Output lines after the banner."""
    return drive(interp, lines)[len(BANNER.splitlines()):]


def test_banner_is_printed_first(interp):
    assert drive(interp, ["(exit)"])[0] == "A prototype evaluator for Scheme."


def test_exit_says_goodbye(interp):
    assert transcript(interp, ["(+ 1 2)", "(exit)"]) == ["3", GOODBYE]


def test_define_prints_nothing(interp):
    assert transcript(interp, ["(define x 5)", "x", "(exit)"]) == ["5", GOODBYE]


def test_expression_may_span_lines(interp):
    assert transcript(interp, ["(+ 1", "   2)", "(exit)"]) == ["3", GOODBYE]


def test_errors_are_reported_and_loop_continues(interp):
    out = transcript(interp, ["(car 'a)", "(+ 1 1)", "(exit)"])
    assert out[0].startswith("error:")
    assert out[1:] == ["2", GOODBYE]


def test_stray_close_paren_is_an_error(interp):
    out = transcript(interp, [")", "(exit)"])
    assert out[0].startswith("error:")
    assert out[-1] == GOODBYE


def test_end_of_input_ends_the_loop(interp):
    out = transcript(interp, ["(+ 1 1)"])
    assert "2" in out
    assert GOODBYE not in out


def test_exit_stops_remaining_expressions(interp):
    assert transcript(interp, ["(exit) (+ 1 2)", "(+ 3 4)"]) == [GOODBYE]


def test_several_expressions_on_one_line(interp):
    assert transcript(interp, ["(define x 2) (* x x) x", "(exit)"]) == ["4", "2", GOODBYE]


def test_process_returns_false_only_on_exit(interp):
    out = io.StringIO()
    assert process(interp, "(+ 1 2)", out) is True
    assert process(interp, "(exit)", out) is False
    assert out.getvalue().splitlines() == ["3", GOODBYE]


@pytest.mark.parametrize(
    "text,expected",
    [
        ("(a (b", 2),
        ("(a b)", 0),
        ("a)", -1),
        ("(a ; (((\n", 1),
        ("()", 0),
    ]
)
def test_paren_balance(text, expected):
    assert paren_balance(text) == expected


def test_commented_empty_list_keeps_later_expressions(interp):
    out = io.StringIO()
    assert process(interp, "(;c\n) (+ 1 2)", out) is True
    assert out.getvalue().splitlines() == ["()", "3"]
