from __future__ import annotations
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Resolve installation dir (chainlisp package directory)
_CHAINLISP_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_PATHS = [_CHAINLISP_DIR / 'prelude']
_DEFAULT_RECURSION_LIMIT = 10000
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_REPL_HOST = '127.0.0.1'
_DEFAULT_REPL_PORT = 8765


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var, '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_prelude_files() -> List[Path]:
    """Files to evaluate into every new interpreter, in order.

    Each entry of CHAINLISP_PRELUDE_PATH may be a file or a directory; a
    directory contributes its *.scm files sorted by name.
    """
    files: List[Path] = []
    for p in paths_from_env('CHAINLISP_PRELUDE_PATH', _DEFAULT_PRELUDE_PATHS):
        if p.is_dir():
            files.extend(sorted(p.glob('*.scm')))
        elif p.is_file():
            files.append(p)
    return files


def get_recursion_limit() -> int:
    return int_from_env('CHAINLISP_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT)


def apply_recursion_limit() -> None:
    # Never lower the interpreter's own limit
    limit = get_recursion_limit()
    if limit > sys.getrecursionlimit():
        sys.setrecursionlimit(limit)


def get_repl_address() -> tuple[str, int]:
    host = os.environ.get('CHAINLISP_REPL_HOST') or _DEFAULT_REPL_HOST
    return host, int_from_env('CHAINLISP_REPL_PORT', _DEFAULT_REPL_PORT)


def configure_logging() -> None:
    level = os.environ.get('CHAINLISP_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
    )
