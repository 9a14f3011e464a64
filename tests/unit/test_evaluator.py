"""Tests for the evaluator over hand-built syntax trees.

Covers:
- Declarations, including the re-declaration no-op
- Literals and variable references
- Binary + and - over literal-or-variable operands
- Assignment and its coercion through the declared type
- Rejection of everything outside the runnable subset
"""

from __future__ import annotations

import pytest

from dumbjshell.core.errors import (
    CoercionError,
    ErrorKind,
    UndefinedVariableError,
    UnknownTypeError,
    UnsupportedAssignmentOperatorError,
    UnsupportedLiteralError,
    UnsupportedOperandError,
    UnsupportedOperandTypesError,
    UnsupportedOperatorError,
    UnsupportedStatementError,
)
from dumbjshell.core.evaluator import Evaluator
from dumbjshell.core.ir import (
    AssignExpr,
    AssignOp,
    BinaryExpr,
    BinaryOp,
    BlockStmt,
    ConditionalExpr,
    EnclosedExpr,
    ExpressionStmt,
    IfStmt,
    Literal,
    LiteralKind,
    MethodCallExpr,
    NameExpr,
    ReturnStmt,
    UnaryExpr,
    UnaryOp,
    VariableDeclaration,
)
from dumbjshell.core.store import VariableStore
from dumbjshell.core.types import StorageTag


def _int(text: str) -> Literal:
    return Literal(kind=LiteralKind.INT, text=text)


def _str(text: str) -> Literal:
    return Literal(kind=LiteralKind.STRING, text=text)


def _bool(value: bool) -> Literal:
    return Literal(kind=LiteralKind.BOOLEAN, text="true" if value else "false")


def _name(name: str) -> NameExpr:
    return NameExpr(name=name)


def _declare(type_name: str, name: str, initializer) -> VariableDeclaration:
    return VariableDeclaration(type_name=type_name, name=name, initializer=initializer)


def _assign(name: str, value, op: AssignOp = AssignOp.ASSIGN) -> AssignExpr:
    return AssignExpr(target=_name(name), op=op, value=value)


# ============================================================================
# Declarations and reads
# ============================================================================


class TestDeclaration:
    def test_declare_and_read(self, evaluator: Evaluator) -> None:
        assert evaluator.eval(_declare("int", "x", _int("5"))) == "5"
        assert evaluator.eval(_name("x")) == "5"

    def test_declaration_wrapped_in_statement(self, evaluator: Evaluator) -> None:
        stmt = ExpressionStmt(expression=_declare("String", "s", _str("a")))
        assert evaluator.eval(stmt) == "a"

    def test_initializer_coerced_to_declared_type(self, evaluator: Evaluator) -> None:
        assert evaluator.eval(_declare("double", "d", _int("5"))) == "5.0"
        assert evaluator.eval(_declare("long", "n", _int("7"))) == "7"
        assert evaluator.eval(_declare("String", "t", _int("42"))) == "42"

    def test_initializer_from_binary_expression(self, evaluator: Evaluator) -> None:
        init = BinaryExpr(op=BinaryOp.PLUS, left=_int("2"), right=_int("3"))
        assert evaluator.eval(_declare("int", "sum", init)) == "5"

    def test_initializer_from_variable(self, evaluator: Evaluator) -> None:
        evaluator.eval(_declare("int", "x", _int("5")))
        assert evaluator.eval(_declare("double", "y", _name("x"))) == "5.0"

    def test_redeclaration_is_noop(self, evaluator: Evaluator, store: VariableStore) -> None:
        evaluator.eval(_declare("int", "x", _int("5")))
        assert evaluator.eval(_declare("int", "x", _int("99"))) == "5"
        assert store.read("x").data == 5

    def test_redeclaration_with_other_type_keeps_type(
        self, evaluator: Evaluator, store: VariableStore
    ) -> None:
        evaluator.eval(_declare("int", "x", _int("5")))
        assert evaluator.eval(_declare("String", "x", _str("hello"))) == "5"
        assert store.binding("x").declared_type.tag == StorageTag.INT32

    def test_unknown_type(self, evaluator: Evaluator, store: VariableStore) -> None:
        with pytest.raises(UnknownTypeError):
            evaluator.eval(_declare("char", "c", _int("1")))
        assert len(store) == 0

    def test_uncoercible_initializer(self, evaluator: Evaluator, store: VariableStore) -> None:
        with pytest.raises(CoercionError):
            evaluator.eval(_declare("int", "x", _str("abc")))
        assert "x" not in store

    def test_boolean_from_int_fails(self, evaluator: Evaluator) -> None:
        with pytest.raises(CoercionError):
            evaluator.eval(_declare("boolean", "b", _int("1")))

    def test_missing_initializer(self, evaluator: Evaluator) -> None:
        with pytest.raises(UnsupportedStatementError):
            evaluator.eval(VariableDeclaration(type_name="int", name="x"))

    def test_read_undefined(self, evaluator: Evaluator) -> None:
        with pytest.raises(UndefinedVariableError):
            evaluator.eval(_name("nope"))


# ============================================================================
# Literals
# ============================================================================


class TestLiterals:
    def test_int(self, evaluator: Evaluator) -> None:
        assert evaluator.eval(_int("42")) == "42"

    def test_string(self, evaluator: Evaluator) -> None:
        assert evaluator.eval(_str("hello")) == "hello"

    def test_boolean(self, evaluator: Evaluator) -> None:
        assert evaluator.eval(_bool(True)) == "true"
        assert evaluator.eval(_bool(False)) == "false"

    def test_int_overflow_is_coercion_error(self, evaluator: Evaluator) -> None:
        with pytest.raises(CoercionError):
            evaluator.eval(_int("2147483648"))

    @pytest.mark.parametrize(
        "kind",
        [LiteralKind.LONG, LiteralKind.FLOAT, LiteralKind.DOUBLE, LiteralKind.CHAR, LiteralKind.NULL],
    )
    def test_other_kinds_unsupported(self, evaluator: Evaluator, kind: LiteralKind) -> None:
        with pytest.raises(UnsupportedLiteralError) as exc_info:
            evaluator.eval(Literal(kind=kind, text="1"))
        assert exc_info.value.kind == ErrorKind.UNSUPPORTED_LITERAL


# ============================================================================
# Binary expressions
# ============================================================================


class TestBinary:
    def test_int_addition(self, evaluator: Evaluator) -> None:
        assert evaluator.eval(BinaryExpr(op=BinaryOp.PLUS, left=_int("2"), right=_int("3"))) == "5"

    def test_int_subtraction(self, evaluator: Evaluator) -> None:
        node = BinaryExpr(op=BinaryOp.MINUS, left=_int("2"), right=_int("3"))
        assert evaluator.eval(node) == "-1"

    def test_string_concatenation_with_variable(self, evaluator: Evaluator) -> None:
        evaluator.eval(_declare("String", "s", _str("a")))
        node = BinaryExpr(op=BinaryOp.PLUS, left=_name("s"), right=_str("b"))
        assert evaluator.eval(node) == "ab"

    def test_boxed_integer_variable_is_int(self, evaluator: Evaluator) -> None:
        evaluator.eval(_declare("Integer", "i", _int("4")))
        node = BinaryExpr(op=BinaryOp.PLUS, left=_name("i"), right=_int("1"))
        assert evaluator.eval(node) == "5"

    def test_int_addition_wraps(self, evaluator: Evaluator) -> None:
        node = BinaryExpr(op=BinaryOp.PLUS, left=_int("2147483647"), right=_int("1"))
        assert evaluator.eval(node) == "-2147483648"

    def test_int_subtraction_wraps(self, evaluator: Evaluator) -> None:
        evaluator.eval(_declare("int", "low", _int("2147483647")))
        evaluator.eval(_assign("low", BinaryExpr(op=BinaryOp.MINUS, left=_int("0"), right=_name("low"))))
        node = BinaryExpr(op=BinaryOp.MINUS, left=_name("low"), right=_int("2"))
        assert evaluator.eval(node) == "2147483647"

    @pytest.mark.parametrize(
        ("op", "left", "right"),
        [
            (BinaryOp.PLUS, _str("2"), _int("3")),
            (BinaryOp.PLUS, _int("2"), _str("3")),
            (BinaryOp.PLUS, _bool(True), _bool(False)),
            (BinaryOp.MINUS, _str("a"), _str("b")),
            (BinaryOp.MINUS, _bool(True), _int("1")),
        ],
    )
    def test_mismatched_operand_types(self, evaluator: Evaluator, op, left, right) -> None:
        with pytest.raises(UnsupportedOperandTypesError) as exc_info:
            evaluator.eval(BinaryExpr(op=op, left=left, right=right))
        assert exc_info.value.kind == ErrorKind.UNSUPPORTED_OPERAND_TYPES

    def test_long_variable_not_added(self, evaluator: Evaluator) -> None:
        evaluator.eval(_declare("long", "n", _int("1")))
        with pytest.raises(UnsupportedOperandTypesError):
            evaluator.eval(BinaryExpr(op=BinaryOp.PLUS, left=_name("n"), right=_int("1")))

    @pytest.mark.parametrize("op", [BinaryOp.MULTIPLY, BinaryOp.DIVIDE, BinaryOp.EQUALS, BinaryOp.AND])
    def test_other_operators(self, evaluator: Evaluator, op: BinaryOp) -> None:
        with pytest.raises(UnsupportedOperatorError):
            evaluator.eval(BinaryExpr(op=op, left=_int("6"), right=_int("3")))

    def test_nested_binary_operand(self, evaluator: Evaluator) -> None:
        inner = BinaryExpr(op=BinaryOp.PLUS, left=_int("1"), right=_int("2"))
        with pytest.raises(UnsupportedOperandError):
            evaluator.eval(BinaryExpr(op=BinaryOp.PLUS, left=inner, right=_int("3")))
        with pytest.raises(UnsupportedOperandError):
            evaluator.eval(BinaryExpr(op=BinaryOp.PLUS, left=_int("3"), right=inner))

    def test_enclosed_operand(self, evaluator: Evaluator) -> None:
        with pytest.raises(UnsupportedOperandError):
            evaluator.eval(
                BinaryExpr(op=BinaryOp.PLUS, left=EnclosedExpr(inner=_int("1")), right=_int("2"))
            )

    def test_undefined_operand(self, evaluator: Evaluator) -> None:
        with pytest.raises(UndefinedVariableError):
            evaluator.eval(BinaryExpr(op=BinaryOp.PLUS, left=_name("x"), right=_int("1")))


# ============================================================================
# Assignment
# ============================================================================


class TestAssignment:
    def test_assign_then_read(self, evaluator: Evaluator) -> None:
        evaluator.eval(_declare("int", "x", _int("5")))
        assert evaluator.eval(_assign("x", _int("10"))) == "10"
        assert evaluator.eval(_name("x")) == "10"

    def test_assign_coerces_through_declared_type(self, evaluator: Evaluator) -> None:
        evaluator.eval(_declare("double", "d", _int("1")))
        assert evaluator.eval(_assign("d", _int("3"))) == "3.0"

    def test_assign_string_variable_from_int(self, evaluator: Evaluator) -> None:
        evaluator.eval(_declare("String", "s", _str("a")))
        assert evaluator.eval(_assign("s", _int("12"))) == "12"

    def test_assign_from_binary(self, evaluator: Evaluator) -> None:
        evaluator.eval(_declare("int", "x", _int("5")))
        value = BinaryExpr(op=BinaryOp.PLUS, left=_name("x"), right=_int("1"))
        assert evaluator.eval(_assign("x", value)) == "6"

    def test_assignment_chain(self, evaluator: Evaluator) -> None:
        evaluator.eval(_declare("int", "a", _int("0")))
        evaluator.eval(_declare("String", "b", _str("")))
        assert evaluator.eval(_assign("b", _assign("a", _int("7")))) == "7"
        assert evaluator.eval(_name("a")) == "7"
        assert evaluator.eval(_name("b")) == "7"

    def test_undeclared_target(self, evaluator: Evaluator, store: VariableStore) -> None:
        evaluator.eval(_declare("int", "x", _int("5")))
        with pytest.raises(UndefinedVariableError):
            evaluator.eval(_assign("y", _int("4")))
        assert "y" not in store
        assert evaluator.eval(_name("x")) == "5"

    def test_uncoercible_value_keeps_old(self, evaluator: Evaluator, store: VariableStore) -> None:
        evaluator.eval(_declare("int", "x", _int("5")))
        with pytest.raises(CoercionError):
            evaluator.eval(_assign("x", _str("ten")))
        assert evaluator.eval(_name("x")) == "5"
        assert store.binding("x").declared_type.type_name == "int"

    @pytest.mark.parametrize("op", [AssignOp.PLUS, AssignOp.MINUS, AssignOp.MULTIPLY])
    def test_compound_operator(self, evaluator: Evaluator, op: AssignOp) -> None:
        evaluator.eval(_declare("int", "x", _int("5")))
        with pytest.raises(UnsupportedAssignmentOperatorError):
            evaluator.eval(_assign("x", _int("1"), op=op))
        assert evaluator.eval(_name("x")) == "5"

    def test_non_name_target(self, evaluator: Evaluator) -> None:
        node = AssignExpr(target=_int("1"), op=AssignOp.ASSIGN, value=_int("2"))
        with pytest.raises(UnsupportedStatementError):
            evaluator.eval(node)


# ============================================================================
# Unsupported nodes and outcomes
# ============================================================================


class TestUnsupported:
    @pytest.mark.parametrize(
        "node",
        [
            BlockStmt(statements=[]),
            IfStmt(condition=_bool(True), then_stmt=BlockStmt()),
            ReturnStmt(value=_int("1")),
            UnaryExpr(op=UnaryOp.MINUS, operand=_int("1")),
            MethodCallExpr(name="foo"),
            ConditionalExpr(condition=_bool(True), then_expr=_int("1"), else_expr=_int("2")),
            EnclosedExpr(inner=_int("1")),
        ],
    )
    def test_rejected(self, evaluator: Evaluator, node) -> None:
        with pytest.raises(UnsupportedStatementError) as exc_info:
            evaluator.eval(node)
        assert exc_info.value.kind == ErrorKind.UNSUPPORTED_STATEMENT


class TestTryEval:
    def test_success(self, evaluator: Evaluator) -> None:
        outcome = evaluator.try_eval(_int("3"))
        assert outcome.ok
        assert outcome.display == "3"
        assert outcome.kind is None

    def test_failure(self, evaluator: Evaluator) -> None:
        outcome = evaluator.try_eval(_name("ghost"))
        assert not outcome.ok
        assert outcome.kind == ErrorKind.UNDEFINED_VARIABLE
        assert outcome.message == "Variable ghost does not exist"

    def test_default_store_is_private(self) -> None:
        first = Evaluator()
        second = Evaluator()
        first.eval(_declare("int", "x", _int("1")))
        assert second.try_eval(_name("x")).kind == ErrorKind.UNDEFINED_VARIABLE
