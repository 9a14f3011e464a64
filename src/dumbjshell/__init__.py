"""
dumbjshell - a minimal interactive shell for Java-like statements.

Reads one statement or expression per line, evaluates it, and keeps
declared variables, with their declared types, across lines.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import DumbJShellError, ErrorKind, EvalError, ParseError
from .core.evaluator import EvalOutcome, Evaluator
from .core.store import VariableStore
from .shell import LineResult, ShellSession, parse_line

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "DumbJShellError",
    "ErrorKind",
    "EvalError",
    "EvalOutcome",
    "Evaluator",
    "LineResult",
    "ParseError",
    "ShellSession",
    "VariableStore",
    "parse_line",
]
