"""
  Lexer and reader for chainlisp source text.

- Streaming: `lex` yields tokens lazily, `TokenStream` pulls them on demand
- Emits Node chains (chainlisp.types.node), the only data type of the evaluator:

    - symbols and numerals -> atom Node (label only)
    - ()                   -> atom Node labelled "()", the empty list
    - (a b c)              -> chain of cells whose content is each element
    - 'x                   -> chain for (quote x)
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from chainlisp import SExpression
from chainlisp.errors import LispSyntaxError
from chainlisp.types.node import Node, atom


TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<empty>\(\s*\))"  # () is read as one atom
    r"|(?P<quote>')"  # '
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<symbol>[^\s()';]+)"  # everything else: symbols and numerals
    r")",
    re.DOTALL,
)

Token = tuple[Optional[str], Optional[str]]


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m or m.end() == pos:
            if source[pos:].strip() == "":
                break
            raise LispSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
        pos = m.end()
        if m.group("comment"):
            continue
        if m.group("empty"):
            yield "symbol", "()"
            continue
        for nm in ("quote", "lparen", "rparen", "symbol"):
            if m.group(nm):
                yield nm, m.group(nm)
                break


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> Token:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> Token:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def next_token(self) -> Optional[str]:
        """Pull interface: the text of the next token, or None at end of input."""
        return self.advance()[1]

    def parse_expr(self) -> Optional[SExpression]:
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None

        if tok_type == "symbol":
            self.advance()
            return atom(tok_val)

        # 'x is read as (quote x)
        if tok_type == "quote":
            self.advance()
            quoted = self.parse_expr()
            if quoted is None:
                raise LispSyntaxError("Nothing to quote after '")
            return Node(content=atom("quote"), continuation=Node(content=quoted))

        if tok_type == "lparen":
            self.advance()
            head: Optional[Node] = None
            cell: Optional[Node] = None
            while True:
                kind, _ = self.peek()
                if kind == "rparen":
                    self.advance()
                    break
                if kind is None:
                    raise LispSyntaxError("Unmatched '('")
                nxt = Node(content=self.parse_expr())
                if cell is None:
                    head = nxt
                else:
                    cell.continuation = nxt
                cell = nxt
            # Parens holding only comments or line breaks are still the empty list
            if head is None:
                return atom("()")
            return head

        if tok_type == "rparen":
            self.advance()
            raise LispSyntaxError("Unexpected ')'")

        raise LispSyntaxError(f"Unknown token: {tok_type} {tok_val}")

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read(source: str) -> list[SExpression]:
    """Read every expression in `source`."""
    return list(TokenStream(lex(source)).parse_all())
