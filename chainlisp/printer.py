"""Render evaluation results back to S-expression text."""

from __future__ import annotations

from io import StringIO
from typing import Optional, Union

from chainlisp.types.node import Node, Handle, TRUE, FALSE


def _write(node: Node, buffer: StringIO) -> None:
    if node is TRUE:
        buffer.write("#t")
    elif node is FALSE:
        buffer.write("()")
    elif node.content is None and node.continuation is None:
        # A bare cell holds nothing: the empty list
        buffer.write("()" if node.label is None else node.label)
    else:
        _write_chain(node, buffer)


def _write_chain(head: Node, buffer: StringIO) -> None:
    buffer.write("(")
    first = True
    cell: Optional[Node] = head
    while cell is not None:
        # Terminators and trailing empty cells carry no element
        if cell.content is not None:
            if not first:
                buffer.write(" ")
            _write(cell.content, buffer)
            first = False
        cell = cell.continuation
    buffer.write(")")


def to_string(value: Union[Handle, Node, None]) -> str:
    """Print a result: void -> "", TRUE -> #t, FALSE -> (), atoms and chains as text."""
    node = value.node if isinstance(value, Handle) else value
    if node is None:
        return ""
    with StringIO() as buffer:
        _write(node, buffer)
        return buffer.getvalue()
