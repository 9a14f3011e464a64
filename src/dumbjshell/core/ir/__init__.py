"""
dumbjshell syntax tree types.

All node types are re-exported from this package.
"""

from .nodes import (
    AssignExpr,
    AssignOp,
    BinaryExpr,
    BinaryOp,
    BlockStmt,
    ConditionalExpr,
    EmptyStmt,
    EnclosedExpr,
    Expr,
    ExpressionStmt,
    IfStmt,
    Literal,
    LiteralKind,
    MethodCallExpr,
    NameExpr,
    Node,
    ReturnStmt,
    Statement,
    UnaryExpr,
    UnaryOp,
    VariableDeclaration,
    WhileStmt,
)

__all__ = [
    # Operators
    "AssignOp",
    "BinaryOp",
    "LiteralKind",
    "UnaryOp",
    # Expressions
    "AssignExpr",
    "BinaryExpr",
    "ConditionalExpr",
    "EnclosedExpr",
    "Expr",
    "Literal",
    "MethodCallExpr",
    "NameExpr",
    "UnaryExpr",
    "VariableDeclaration",
    # Statements
    "BlockStmt",
    "EmptyStmt",
    "ExpressionStmt",
    "IfStmt",
    "ReturnStmt",
    "Statement",
    "WhileStmt",
    "Node",
]
