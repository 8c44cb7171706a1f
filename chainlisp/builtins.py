"""Built-in primitives for chainlisp.

Every primitive receives its operands already evaluated, left to right, as a
list of Nodes, and returns a Node. Logical results are the TRUE / FALSE
singletons. Numbers are atoms whose label is a decimal numeral.
"""
from __future__ import annotations

import re
from typing import Callable, Optional

from chainlisp import LispValue
from chainlisp.errors import LispArityError, LispTypeError
from chainlisp.types.node import (
    Node,
    TRUE,
    atom,
    boolean,
    chain,
    cells,
    denotes_empty,
    elements,
    is_null_like,
    is_true,
    new_node,
)
from chainlisp.types.environment import lookup
from chainlisp.printer import to_string

Primitive = Callable[[Node, list[LispValue]], LispValue]

_NUMERAL = re.compile(r"-?[0-9]+")


def _expect(name: str, args: list[LispValue], count: int) -> None:
    if len(args) != count:
        plural = "argument" if count == 1 else "arguments"
        raise LispArityError(f"{name} requires exactly {count} {plural}, got {len(args)}")


def text_to_int(node: LispValue) -> int:
    """Parse a numeral atom; anything else is a LispTypeError."""
    if node.content is None and node.label is not None and _NUMERAL.fullmatch(node.label):
        return int(node.label)
    raise LispTypeError(f"Not a number: {_describe(node)}")


def _describe(node: LispValue) -> str:
    return to_string(node) or "<no value>"


def _numeral(value: int) -> LispValue:
    return atom(str(value))


# -------------------------------
# Arithmetic
# -------------------------------
def _fold(name: str, args: list[LispValue], op: Callable[[int, int], int]) -> LispValue:
    if not args:
        raise LispArityError(f"{name} requires at least 1 argument")
    result = text_to_int(args[0])
    for x in args[1:]:
        result = op(result, text_to_int(x))
    return _numeral(result)


def add(env: Node, args: list[LispValue]) -> LispValue:
    """Sum all operands."""
    return _fold("+", args, lambda a, b: a + b)


def sub(env: Node, args: list[LispValue]) -> LispValue:
    """Subtract all subsequent operands from the first."""
    return _fold("-", args, lambda a, b: a - b)


def mul(env: Node, args: list[LispValue]) -> LispValue:
    """Multiply all operands."""
    return _fold("*", args, lambda a, b: a * b)


# -------------------------------
# Comparison
# -------------------------------
def _compare(name: str, args: list[LispValue], op: Callable[[int, int], bool]) -> LispValue:
    _expect(name, args, 2)
    return boolean(op(text_to_int(args[0]), text_to_int(args[1])))


def lt(env: Node, args: list[LispValue]) -> LispValue:
    return _compare("<", args, lambda a, b: a < b)


def gt(env: Node, args: list[LispValue]) -> LispValue:
    return _compare(">", args, lambda a, b: a > b)


def lte(env: Node, args: list[LispValue]) -> LispValue:
    return _compare("<=", args, lambda a, b: a <= b)


def gte(env: Node, args: list[LispValue]) -> LispValue:
    return _compare(">=", args, lambda a, b: a >= b)


def logical_not(env: Node, args: list[LispValue]) -> LispValue:
    _expect("not", args, 1)
    return boolean(not is_true(args[0]))


# -------------------------------
# List operations
# -------------------------------
def _car(name: str, node: LispValue) -> LispValue:
    if node.content is None:
        raise LispTypeError(f"{name}: not a list: {_describe(node)}")
    return node.content


def _cdr(name: str, node: LispValue) -> LispValue:
    if node.content is None and not denotes_empty(node):
        raise LispTypeError(f"{name}: not a list: {_describe(node)}")
    if node.continuation is not None:
        return node.continuation
    # Past the last element: the empty list
    return new_node()


def car(env: Node, args: list[LispValue]) -> LispValue:
    _expect("car", args, 1)
    return _car("car", args[0])


def cdr(env: Node, args: list[LispValue]) -> LispValue:
    _expect("cdr", args, 1)
    return _cdr("cdr", args[0])


def _composition(name: str, path: str) -> Primitive:
    """Build a c[ad]+r shorthand; `path` is applied right to left, as in the name."""
    steps = [(_car if step == "a" else _cdr) for step in reversed(path)]

    def accessor(env: Node, args: list[LispValue]) -> LispValue:
        _expect(name, args, 1)
        node = args[0]
        for step in steps:
            node = step(name, node)
        return node

    accessor.__name__ = name
    accessor.__doc__ = f"({name} xs): shorthand for nested car/cdr."
    return accessor


cadr = _composition("cadr", "ad")
caddr = _composition("caddr", "add")
cadddr = _composition("cadddr", "addd")
caddddr = _composition("caddddr", "adddd")
cdar = _composition("cdar", "da")


def cons(env: Node, args: list[LispValue]) -> LispValue:
    """Prepend the first operand to the second; the tail is shared, not copied."""
    _expect("cons", args, 2)
    head, tail = args
    if denotes_empty(tail):
        return chain(head)
    return Node(content=head, continuation=tail)


def append(env: Node, args: list[LispValue]) -> LispValue:
    """Copy the cells of the first chain and attach the second one at its end."""
    _expect("append", args, 2)
    first, second = args
    if denotes_empty(first):
        return second
    if first.content is None:
        raise LispTypeError(f"append: not a list: {_describe(first)}")
    tail: Optional[Node] = None if denotes_empty(second) else second
    head: Optional[Node] = None
    last_cell: Optional[Node] = None
    for cell in cells(first):
        if cell.content is None:
            break
        surrogate = Node(content=cell.content)
        if last_cell is None:
            head = surrogate
        else:
            last_cell.continuation = surrogate
        last_cell = surrogate
    last_cell.continuation = tail
    return head


def list_builtin(env: Node, args: list[LispValue]) -> LispValue:
    return chain(*args)


def last(env: Node, args: list[LispValue]) -> LispValue:
    _expect("last", args, 1)
    node = args[0]
    if node.content is None and not denotes_empty(node):
        raise LispTypeError(f"last: not a list: {_describe(node)}")
    focus = node
    while focus.continuation is not None and focus.continuation.content is not None:
        focus = focus.continuation
    return focus.content if focus.content is not None else new_node()


def length(env: Node, args: list[LispValue]) -> LispValue:
    _expect("length", args, 1)
    node = args[0]
    if is_null_like(node):
        return _numeral(0)
    if node.content is None:
        raise LispTypeError(f"length: not a list: {_describe(node)}")
    return _numeral(sum(1 for _ in elements(node)))


# -------------------------------
# Predicates
# -------------------------------
def is_symbol(env: Node, args: list[LispValue]) -> LispValue:
    _expect("symbol?", args, 1)
    return boolean(args[0].label is not None)


def is_number(env: Node, args: list[LispValue]) -> LispValue:
    """(number? x): looks at the first atom of x, accepting digits and a leading '-'."""
    _expect("number?", args, 1)
    node = args[0]
    if node.content is not None:
        node = node.content
    if node.label is None:
        return boolean(False)
    return boolean(all(ch in "0123456789" or (i == 0 and ch == "-") for i, ch in enumerate(node.label)))


def is_list(env: Node, args: list[LispValue]) -> LispValue:
    _expect("list?", args, 1)
    return boolean(args[0].content is not None)


def is_null(env: Node, args: list[LispValue]) -> LispValue:
    _expect("null?", args, 1)
    return boolean(is_null_like(args[0]))


def is_equal(a: Optional[Node], b: Optional[Node]) -> bool:
    """Structural equality: labels, then content branches, then continuations."""
    if a is None or b is None:
        return a is None and b is None
    if is_true(a) or is_true(b):
        return is_true(a) and is_true(b)
    if a.label is not None and b.label is not None:
        if a.label != b.label:
            return False
    elif a.label is not None or b.label is not None:
        return False
    if (a.content is None) != (b.content is None):
        return False
    if a.content is not None and not is_equal(a.content, b.content):
        return False
    if (a.continuation is None) != (b.continuation is None):
        return False
    return a.continuation is None or is_equal(a.continuation, b.continuation)


def equal(env: Node, args: list[LispValue]) -> LispValue:
    _expect("equal?", args, 2)
    a, b = args
    if a is b:
        return TRUE
    # The FALSE sentinel and every empty/#f value are one value here
    if is_null_like(a) or is_null_like(b):
        return boolean(is_null_like(a) and is_null_like(b))
    return boolean(is_equal(a, b))


def assoc(env: Node, args: list[LispValue]) -> LispValue:
    """(assoc key alist): the first pair whose head is key, or the atom #f."""
    _expect("assoc", args, 2)
    key, alist = args
    return lookup(key, alist).node


PRIMITIVES: dict[str, Primitive] = {
    "+": add,
    "-": sub,
    "*": mul,
    "<": lt,
    ">": gt,
    "<=": lte,
    ">=": gte,
    "not": logical_not,
    "NOT": logical_not,
    "car": car,
    "cdr": cdr,
    "cadr": cadr,
    "caddr": caddr,
    "cadddr": cadddr,
    "caddddr": caddddr,
    "cdar": cdar,
    "cons": cons,
    "append": append,
    "list": list_builtin,
    "last": last,
    "length": length,
    "symbol?": is_symbol,
    "number?": is_number,
    "list?": is_list,
    "null?": is_null,
    "equal?": equal,
    "assoc": assoc,
}
