"""
Statement evaluator for dumbjshell.

Walks one parsed node against a session's variable store and returns the
display string of the result. Only a small slice of the tree is runnable:

- local variable declarations with an initializer
- variable references
- int, String and boolean literals
- ``+`` and ``-`` over two literal-or-variable operands
- plain ``=`` assignment to a variable

Everything else raises a typed ``EvalError``. A binary operand that is
itself a binary expression is rejected; evaluation never nests deeper than
one operator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dumbjshell.core import types
from dumbjshell.core.errors import (
    ErrorKind,
    EvalError,
    UnsupportedAssignmentOperatorError,
    UnsupportedLiteralError,
    UnsupportedOperandError,
    UnsupportedOperandTypesError,
    UnsupportedOperatorError,
    UnsupportedStatementError,
)
from dumbjshell.core.ir import (
    AssignExpr,
    AssignOp,
    BinaryExpr,
    BinaryOp,
    ExpressionStmt,
    Literal,
    LiteralKind,
    NameExpr,
    Node,
    VariableDeclaration,
)
from dumbjshell.core.store import VariableStore
from dumbjshell.core.types import StorageTag, Value

logger = logging.getLogger("dumbjshell.core.evaluator")


@dataclass(frozen=True)
class EvalOutcome:
    """Result of one evaluation: a display string or a typed failure."""

    display: str | None = None
    kind: ErrorKind | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind is None

    @classmethod
    def success(cls, display: str) -> EvalOutcome:
        return cls(display=display)

    @classmethod
    def failure(cls, error: EvalError) -> EvalOutcome:
        return cls(kind=error.kind, message=error.message)


def _wrap_int32(number: int) -> int:
    """Two's-complement wrap, matching Java ``int`` arithmetic."""
    return (number + 2**31) % 2**32 - 2**31


def _node_label(node: Node) -> str:
    return type(node).__name__


class Evaluator:
    """Evaluates parsed nodes against a variable store it owns."""

    def __init__(self, store: VariableStore | None = None) -> None:
        self.store = store if store is not None else VariableStore()

    def eval(self, node: Node) -> str:
        """Evaluate ``node`` and return the display string of its value.

        Raises:
            EvalError: Subclass matching the failure kind.
        """
        try:
            return self._interpret(node).display()
        except EvalError as e:
            logger.debug("evaluation of %s failed: %s: %s", _node_label(node), e.kind, e.message)
            raise

    def try_eval(self, node: Node) -> EvalOutcome:
        """Like :meth:`eval` but returns failures instead of raising them."""
        try:
            return EvalOutcome.success(self.eval(node))
        except EvalError as e:
            return EvalOutcome.failure(e)

    # -- Dispatch --

    def _interpret(self, node: Node) -> Value:
        if isinstance(node, ExpressionStmt):
            return self._interpret(node.expression)

        if isinstance(node, VariableDeclaration):
            return self._interpret_declaration(node)

        if isinstance(node, NameExpr):
            return self.store.read(node.name)

        if isinstance(node, Literal):
            return self._interpret_literal(node)

        if isinstance(node, BinaryExpr):
            return self._interpret_binary(node)

        if isinstance(node, AssignExpr):
            return self._interpret_assign(node)

        raise UnsupportedStatementError(f"Cannot evaluate {_node_label(node)}: {node}")

    def _interpret_declaration(self, node: VariableDeclaration) -> Value:
        if node.initializer is None:
            raise UnsupportedStatementError(
                f"Variable declaration requires an initializer: {node}"
            )
        initial = self._interpret(node.initializer)

        # Re-declaring keeps the existing binding and reports its value.
        if node.name in self.store:
            logger.debug("ignoring re-declaration of %s", node.name)
            return self.store.read(node.name)

        return self.store.declare(node.name, node.type_name, initial.display())

    def _interpret_literal(self, node: Literal) -> Value:
        if node.kind == LiteralKind.INT:
            return types.coerce("int", node.text)
        if node.kind == LiteralKind.STRING:
            return Value(StorageTag.STR, node.text)
        if node.kind == LiteralKind.BOOLEAN:
            return Value(StorageTag.BOOL, node.text == "true")
        raise UnsupportedLiteralError(f"Unsupported literal: {node} ({node.kind} literal)")

    def _interpret_operand(self, node: Node) -> Value:
        if not isinstance(node, Literal | NameExpr):
            raise UnsupportedOperandError(
                f"Operand must be a literal or a variable, got {_node_label(node)}: {node}"
            )
        return self._interpret(node)

    def _interpret_binary(self, node: BinaryExpr) -> Value:
        left = self._interpret_operand(node.left)
        right = self._interpret_operand(node.right)

        if node.op == BinaryOp.PLUS:
            if left.tag == StorageTag.INT32 and right.tag == StorageTag.INT32:
                return Value(StorageTag.INT32, _wrap_int32(int(left.data) + int(right.data)))
            if left.tag == StorageTag.STR and right.tag == StorageTag.STR:
                return Value(StorageTag.STR, str(left.data) + str(right.data))
            raise self._operand_types_error(node, left, right)

        if node.op == BinaryOp.MINUS:
            if left.tag == StorageTag.INT32 and right.tag == StorageTag.INT32:
                return Value(StorageTag.INT32, _wrap_int32(int(left.data) - int(right.data)))
            raise self._operand_types_error(node, left, right)

        raise UnsupportedOperatorError(f"Unsupported operator: {node.op.value}")

    @staticmethod
    def _operand_types_error(node: BinaryExpr, left: Value, right: Value) -> EvalError:
        return UnsupportedOperandTypesError(
            f"Operator {node.op.value} cannot be applied to {left.tag} and {right.tag}"
        )

    def _interpret_assign(self, node: AssignExpr) -> Value:
        if node.op != AssignOp.ASSIGN:
            raise UnsupportedAssignmentOperatorError(
                f"Cannot evaluate assignment operator {node.op.value}"
            )
        if not isinstance(node.target, NameExpr):
            raise UnsupportedStatementError(
                f"Cannot assign to {_node_label(node.target)}: {node.target}"
            )

        text = self._interpret(node.value).display()
        return self.store.assign(node.target.name, text)
