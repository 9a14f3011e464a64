"""Core dumbjshell functionality: syntax tree, parser, type table, variable store, evaluator."""

from . import ir
from .errors import DumbJShellError, ErrorKind, EvalError, ParseError
from .evaluator import EvalOutcome, Evaluator
from .store import Binding, VariableStore
from .types import StorageTag, TypeEntry, Value

__all__ = [
    "ir",
    "Binding",
    "DumbJShellError",
    "ErrorKind",
    "EvalError",
    "EvalOutcome",
    "Evaluator",
    "ParseError",
    "StorageTag",
    "TypeEntry",
    "Value",
    "VariableStore",
]
