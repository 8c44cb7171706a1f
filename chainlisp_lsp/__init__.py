"""chainlisp Language Server and REPL integration package.

This package provides:
- A pygls-based Language Server for chainlisp source files.
- A lightweight indexer that scans documents for top-level defines without evaluation.
- A simple TCP REPL server evaluating code with one Interpreter per client.

Note: The LSP does not evaluate user buffers; it builds a static index from text.
"""

__all__ = [
    "server",
    "indexer",
    "repl_server",
]
