"""
Error types for dumbjshell parsing and evaluation.

Every failure carries an ``ErrorKind`` so callers can branch on the kind
without matching exception classes, and a message that is shown verbatim
to the user.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Closed set of failure kinds surfaced by the shell."""

    DUPLICATE_NAME = "DuplicateName"
    UNKNOWN_TYPE = "UnknownType"
    UNDEFINED_VARIABLE = "UndefinedVariable"
    COERCION_ERROR = "CoercionError"
    UNSUPPORTED_LITERAL = "UnsupportedLiteral"
    UNSUPPORTED_OPERAND = "UnsupportedOperand"
    UNSUPPORTED_OPERAND_TYPES = "UnsupportedOperandTypes"
    UNSUPPORTED_OPERATOR = "UnsupportedOperator"
    UNSUPPORTED_ASSIGNMENT_OPERATOR = "UnsupportedAssignmentOperator"
    UNSUPPORTED_STATEMENT = "UnsupportedStatement"
    PARSE_ERROR = "ParseError"


class DumbJShellError(Exception):
    """Base exception for all dumbjshell errors."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ParseError(DumbJShellError):
    """
    Raised when a line of source cannot be turned into a syntax tree.

    Examples:
    - Unterminated string or char literal
    - Missing semicolon after a statement
    - Unexpected token
    """

    kind = ErrorKind.PARSE_ERROR

    def __init__(self, message: str, pos: int = 0) -> None:
        self.pos = pos
        super().__init__(message)


class EvalError(DumbJShellError):
    """Base class for failures raised while evaluating a parsed node."""


# -- Store / type registry ---------------------------------------------------


class DuplicateNameError(EvalError):
    kind = ErrorKind.DUPLICATE_NAME


class UnknownTypeError(EvalError):
    kind = ErrorKind.UNKNOWN_TYPE


class UndefinedVariableError(EvalError):
    kind = ErrorKind.UNDEFINED_VARIABLE


class CoercionError(EvalError):
    """Text could not be converted into a value of the requested type."""

    kind = ErrorKind.COERCION_ERROR


# -- Evaluator ----------------------------------------------------------------


class UnsupportedLiteralError(EvalError):
    kind = ErrorKind.UNSUPPORTED_LITERAL


class UnsupportedOperandError(EvalError):
    """Binary operand is neither a literal nor a variable reference."""

    kind = ErrorKind.UNSUPPORTED_OPERAND


class UnsupportedOperandTypesError(EvalError):
    kind = ErrorKind.UNSUPPORTED_OPERAND_TYPES


class UnsupportedOperatorError(EvalError):
    kind = ErrorKind.UNSUPPORTED_OPERATOR


class UnsupportedAssignmentOperatorError(EvalError):
    kind = ErrorKind.UNSUPPORTED_ASSIGNMENT_OPERATOR


class UnsupportedStatementError(EvalError):
    kind = ErrorKind.UNSUPPORTED_STATEMENT
