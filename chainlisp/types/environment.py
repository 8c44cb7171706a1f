"""Association-list environments for chainlisp.

An environment is an ordinary Node chain of ``(name value . #f)`` pairs,
most recent binding first. Binding never mutates an existing chain: `define`
returns a new head that shares the old chain as its tail, so redefinition is
additive and lookup returns the newest match.

The same `lookup` helper serves variable lookup, function lookup and the
user-facing ``assoc`` primitive.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from chainlisp import EvaluatorFn
from chainlisp.errors import LispArityError, LispTypeError
from chainlisp.types.node import Node, Handle, atom, deepest_label, wrap

if TYPE_CHECKING:
    from chainlisp.types.session import Session


def new_environment() -> Node:
    """Return an empty environment: a lone ``#f`` atom acting as terminator."""
    return atom("#f")


def _find_pair(label: str, cell: Optional[Node]) -> Optional[Node]:
    while cell is not None:
        # A cell without content ends the association list
        if cell.content is None:
            return None
        if deepest_label(cell) == label:
            return cell.content
        cell = cell.continuation
    return None


def lookup(symbol: Node, env: Node) -> Handle:
    """Find the pair whose key's atomic head matches `symbol`'s atomic head.

    Returns a Handle on the matched pair, or on a freshly synthesized ``#f``
    atom when nothing matches.
    """
    label = deepest_label(symbol)
    found = _find_pair(label, env) if label is not None else None
    if found is None:
        return wrap(atom("#f"))
    return wrap(found)


def is_no_match(found: Handle) -> bool:
    node = found.node
    return node is not None and node.content is None and node.label == "#f"


def binding_value(pair: Node) -> Node:
    """Unwrap a ``(name value . #f)`` pair to its value (the pair's cadr)."""
    rest = pair.continuation
    if rest is None or rest.content is None:
        raise LispTypeError("Malformed binding: pair carries no value")
    return rest.content


def define(symbol: Node, value: Handle, env: Node) -> Node:
    """Prepend the pair ``(symbol value . #f)`` to `env` and return the new head."""
    if value.is_void:
        raise LispTypeError(f"Cannot bind {symbol.label or 'list'} to a definition result")
    value_cell = Node(content=value.node, continuation=atom("#f"))
    pair = Node(content=symbol, continuation=value_cell)
    return Node(content=pair, continuation=env)


def bind_formals_to_actuals(
    formals: Optional[Node],
    actuals: Optional[Node],
    new_env: Node,
    caller_env: Node,
    session: Session,
    evaluate_fn: EvaluatorFn,
) -> Node:
    """Evaluate each actual in `caller_env` and bind it to its formal in `new_env`.

    The returned environment holds only the formals; it keeps no reference to
    `caller_env` or to the environment the function was defined in.
    """
    focus = formals
    param = actuals
    while focus is not None and focus.content is not None:
        if param is None or param.content is None:
            raise LispArityError(f"Missing argument for parameter {focus.content.label}")
        value = evaluate_fn(param.content, caller_env, session)
        new_env = define(focus.content, value, new_env)
        focus = focus.continuation
        param = param.continuation
    if param is not None and param.content is not None:
        raise LispArityError("Too many arguments in function call")
    return new_env
