"""
Line-oriented shell session.

Turns one line of user input into a parsed node, evaluates it, and renders
the outcome. A line is tried first as a statement, then as a bare
expression, so both ``int x = 5`` and ``x + 1`` work without a semicolon.

Usage:
    session = ShellSession()
    session.run_line("int x = 5").output   # "==> 5"
    session.run_line("x - 2").output       # "==> 3"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dumbjshell.core.errors import ErrorKind, ParseError
from dumbjshell.core.evaluator import EvalOutcome, Evaluator
from dumbjshell.core.ir import ExpressionStmt, Node
from dumbjshell.core.java_lang import parse_expression, parse_statement
from dumbjshell.core.store import VariableStore

logger = logging.getLogger("dumbjshell.shell")

EXIT_COMMAND = "exit"
EXIT_MESSAGE = "Exiting..."
RESULT_PREFIX = "==> "


@dataclass(frozen=True)
class LineResult:
    """What one line of input produced."""

    outcome: EvalOutcome | None = None
    exit: bool = False

    @property
    def ok(self) -> bool:
        return self.outcome is None or self.outcome.ok

    @property
    def output(self) -> str | None:
        """Text to show the user, or None for blank input."""
        if self.exit:
            return EXIT_MESSAGE
        if self.outcome is None:
            return None
        if self.outcome.ok:
            return f"{RESULT_PREFIX}{self.outcome.display}"
        return f"Error: {self.outcome.message}"


def parse_line(text: str) -> Node:
    """Parse one line as a statement, falling back to a bare expression.

    A missing trailing semicolon is added for the statement attempt.

    Raises:
        ParseError: If the line is neither a statement nor an expression.
    """
    stripped = text.strip()
    statement_source = stripped if stripped.endswith((";", "}")) else stripped + ";"
    try:
        return parse_statement(statement_source)
    except ParseError as statement_error:
        logger.debug("not a statement (%s), trying expression", statement_error.message)
    try:
        return ExpressionStmt(expression=parse_expression(stripped))
    except ParseError as e:
        raise ParseError(f"Cannot parse input: {e.message}", e.pos) from e


class ShellSession:
    """One interactive session: an evaluator and the variables it has declared."""

    def __init__(self, evaluator: Evaluator | None = None) -> None:
        self.evaluator = evaluator if evaluator is not None else Evaluator()
        self.finished = False

    @property
    def store(self) -> VariableStore:
        return self.evaluator.store

    def run_line(self, text: str) -> LineResult:
        """Evaluate one line of input. Errors are reported, never raised."""
        if text.strip().lower() == EXIT_COMMAND:
            self.finished = True
            return LineResult(exit=True)
        if not text.strip():
            return LineResult()

        try:
            node = parse_line(text)
        except ParseError as e:
            return LineResult(outcome=EvalOutcome(kind=ErrorKind.PARSE_ERROR, message=e.message))

        return LineResult(outcome=self.evaluator.try_eval(node))
