"""Node and Handle: the single recursive data type of chainlisp.

A Node is used both for program trees and for runtime values:

- ``label``: atom text (symbol or numeral), present only on leaf-like nodes.
- ``content``: what this slot holds, a leaf atom or the head of a nested chain.
- ``continuation``: the next slot in the same chain, or None at the end.

A list is a chain of Nodes linked through ``continuation``; each cell's
``content`` is the element at that position. A node with only ``label`` set
is a bare atom.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Iterator, Optional


# Labels that do not count as "structure" when testing for emptiness.
RESERVED_LABELS = frozenset({"quote", "()", "#f", "#t"})


class Node:
    __slots__ = ("label", "content", "continuation")

    def __init__(
        self,
        label: Optional[str] = None,
        content: Optional[Node] = None,
        continuation: Optional[Node] = None,
    ):
        self.label = label
        self.content = content
        self.continuation = continuation

    @property
    def is_atom(self) -> bool:
        return self.label is not None and self.content is None

    @property
    def is_bare(self) -> bool:
        """True when label, content and continuation are all absent."""
        return self.label is None and self.content is None and self.continuation is None

    def __repr__(self) -> str:
        if self.is_atom and self.continuation is None:
            return f"Node({self.label!r})"
        return (
            f"Node(label={self.label!r}, content={self.content!r}, "
            f"continuation={self.continuation!r})"
        )


class Boolean(Node):
    """Process-wide truth sentinels. Compared by identity, never structurally."""

    __slots__ = ("value",)

    def __init__(self, value: bool):
        super().__init__()
        self.value = value

    def __repr__(self) -> str:
        return "TRUE" if self.value else "FALSE"


TRUE = Boolean(True)
FALSE = Boolean(False)


class Handle:
    """Transient attachment point wrapping a single Node.

    Two Handles wrapping structurally equal Nodes are unrelated objects.
    A Handle whose node is None is the void result of `define`.
    """

    __slots__ = ("node",)

    def __init__(self, node: Optional[Node]):
        self.node = node

    @property
    def is_void(self) -> bool:
        return self.node is None

    def __repr__(self) -> str:
        return f"Handle({self.node!r})"


VOID = Handle(None)


class Kind(Enum):
    TRUE = auto()
    FALSE = auto()
    EMPTY = auto()
    ATOM = auto()
    CHAIN = auto()


def new_node() -> Node:
    return Node()


def wrap(node: Optional[Node]) -> Handle:
    return Handle(node)


def atom(text: str) -> Node:
    return Node(label=text)


def chain(*items: Node) -> Node:
    """Build a fresh chain whose cells hold `items` as content.

    With no items the result is a bare node, the empty chain.
    """
    if not items:
        return Node()
    head = Node(content=items[0])
    cell = head
    for item in items[1:]:
        cell.continuation = Node(content=item)
        cell = cell.continuation
    return head


def elements(node: Optional[Node]) -> Iterator[Node]:
    """Yield the content of each cell of a chain, stopping at the first empty cell."""
    cell = node
    while cell is not None and cell.content is not None:
        yield cell.content
        cell = cell.continuation


def cells(node: Optional[Node]) -> Iterator[Node]:
    cell = node
    while cell is not None:
        yield cell
        cell = cell.continuation


def deepest_label(node: Node) -> Optional[str]:
    """Follow `content` down to the leaf and return its label."""
    focus = node
    while focus.content is not None:
        focus = focus.content
    return focus.label


def is_empty_structure(node: Optional[Node]) -> bool:
    """True if no label outside RESERVED_LABELS is reachable from `node`."""
    if node is None:
        return True
    if node.label is not None and node.label not in RESERVED_LABELS:
        return False
    if node.content is not None and not is_empty_structure(node.content):
        return False
    return is_empty_structure(node.continuation)


def kind_of(node: Optional[Node]) -> Kind:
    if node is None:
        return Kind.EMPTY
    match node:
        case Boolean(value=True):
            return Kind.TRUE
        case Boolean(value=False):
            return Kind.FALSE
        case Node(label="#t", content=None):
            return Kind.TRUE
        case Node(label="#f", content=None):
            return Kind.FALSE
    if is_empty_structure(node):
        return Kind.EMPTY
    if node.is_atom and node.continuation is None:
        return Kind.ATOM
    return Kind.CHAIN


def is_true(node: Optional[Node]) -> bool:
    """The TRUE sentinel, and also a literal ``#t`` atom typed in source.

    Accepting the literal atom widens the TRUE-only test of conditionals so
    that ``(if #t a b)`` takes the then-branch.
    """
    match node:
        case Boolean(value=flag):
            return flag
        case Node(label="#t", content=None):
            return True
    return False


def is_null_like(node: Optional[Node]) -> bool:
    return kind_of(node) in (Kind.FALSE, Kind.EMPTY)


def denotes_empty(node: Optional[Node]) -> bool:
    """The "#f is the empty list" convention used when building chains.

    Only null-like values qualify: a chain such as ``(#f b)`` still holds data.
    """
    return is_null_like(node)


def boolean(flag: bool) -> Boolean:
    return TRUE if flag else FALSE
