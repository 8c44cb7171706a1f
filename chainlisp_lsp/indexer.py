from __future__ import annotations

"""
Lightweight indexer for chainlisp files without evaluating code.

We scan for top-level defines and build an index for:
- variables:  (define name value)
- functions:  (define (name formals...) body), with their formal parameters

The scanner is tolerant: it walks raw tokens with their offsets so partial
buffers never crash it. The real reader is run once to report the first
syntax error it meets.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple
import re

from chainlisp.errors import LispSyntaxError
from chainlisp.reader.parser import read

# Simple token patterns for scanning
TOKEN_REGEX = re.compile(
    r"\s+|;.*$|\(|\)|'|[^\s()';]+",
    re.MULTILINE,
)


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int
    formals: List[str] = field(default_factory=list)

    @property
    def signature(self) -> str:
        return f"({' '.join([self.name, *self.formals])})"


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    paren_balance: int = 0
    syntax_error: Optional[str] = None


def _iter_tokens(text: str):
    for m in TOKEN_REGEX.finditer(text):
        tok = m.group(0)
        if not tok or tok.isspace() or tok.startswith(';'):
            continue
        yield tok, m.start(), m.end()


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = list(_iter_tokens(text))

    depth = 0
    for i, (tok, start, end) in enumerate(tokens):
        if tok == '(':
            depth += 1
            # Only top-level (define ...) forms are indexed
            if depth != 1 or i + 2 >= len(tokens) or tokens[i + 1][0] != 'define':
                continue
            target, t_start, _ = tokens[i + 2]
            if target == '(':
                # (define (name formals...) body)
                names = []
                j = i + 3
                while j < len(tokens) and tokens[j][0] not in ('(', ')'):
                    names.append(tokens[j])
                    j += 1
                if not names:
                    continue
                name, n_start, _ = names[0]
                line, col = _position_from_offset(text, n_start)
                idx.symbols[name] = SymbolDef(
                    name=name, kind='function', line=line, col=col,
                    formals=[n for n, _, _ in names[1:]],
                )
            elif target not in (')', "'"):
                line, col = _position_from_offset(text, t_start)
                idx.symbols[target] = SymbolDef(name=target, kind='var', line=line, col=col)
        elif tok == ')':
            depth -= 1
    idx.paren_balance = depth

    try:
        read(text)
    except LispSyntaxError as ex:
        idx.syntax_error = str(ex)

    return idx


# Keyword signatures for quick hover/signature help without eval
KEYWORD_SIGNATURES: Dict[str, str] = {
    "+": "(+ n &rest nums)",
    "-": "(- n &rest nums)",
    "*": "(* n &rest nums)",
    "<": "(< a b)",
    ">": "(> a b)",
    "<=": "(<= a b)",
    ">=": "(>= a b)",
    "and": "(and &rest tests)",
    "or": "(or &rest tests)",
    "not": "(not x)",
    "car": "(car xs)",
    "cdr": "(cdr xs)",
    "cadr": "(cadr xs)",
    "caddr": "(caddr xs)",
    "cadddr": "(cadddr xs)",
    "caddddr": "(caddddr xs)",
    "cdar": "(cdar xs)",
    "cons": "(cons x xs)",
    "append": "(append xs ys)",
    "list": "(list &rest xs)",
    "last": "(last xs)",
    "length": "(length xs)",
    "symbol?": "(symbol? x)",
    "number?": "(number? x)",
    "list?": "(list? x)",
    "null?": "(null? x)",
    "equal?": "(equal? a b)",
    "assoc": "(assoc key alist)",
    "quote": "(quote x)",
    "if": "(if test then else)",
    "cond": "(cond (test body) ...)",
    "define": "(define name value)",
}
