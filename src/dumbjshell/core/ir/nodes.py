"""
Syntax tree for one line of Java-like source.

The parser produces these nodes and the evaluator consumes them. The tree
covers more of Java than the evaluator runs: blocks, control flow, method
calls and the full operator set are represented so the evaluator can reject
them by kind instead of the parser failing on them.

Supports:
- Literals: 1, 1L, 1.5f, 1.5, 'c', "text", true, false, null
- Names: x
- Binary operators: arithmetic, shift, relational, equality, bitwise, logical
- Unary operators: -, +, !, ~
- Assignment: =, +=, -=, *=, /=, %=, &=, |=, ^=, <<=, >>=, >>>=
- Local variable declarations: int x = 5
- Statements: expression, block, if/else, while, return, empty
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators, spelled as in source."""

    # Arithmetic
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    REMAINDER = "%"
    # Shift
    LEFT_SHIFT = "<<"
    SIGNED_RIGHT_SHIFT = ">>"
    UNSIGNED_RIGHT_SHIFT = ">>>"
    # Comparison
    EQUALS = "=="
    NOT_EQUALS = "!="
    LESS = "<"
    GREATER = ">"
    LESS_EQUALS = "<="
    GREATER_EQUALS = ">="
    # Bitwise
    BINARY_AND = "&"
    BINARY_OR = "|"
    XOR = "^"
    # Logical
    AND = "&&"
    OR = "||"


class UnaryOp(StrEnum):
    """Prefix unary operators."""

    MINUS = "-"
    PLUS = "+"
    LOGICAL_COMPLEMENT = "!"
    BITWISE_COMPLEMENT = "~"


class AssignOp(StrEnum):
    """Plain and compound assignment operators."""

    ASSIGN = "="
    PLUS = "+="
    MINUS = "-="
    MULTIPLY = "*="
    DIVIDE = "/="
    REMAINDER = "%="
    BINARY_AND = "&="
    BINARY_OR = "|="
    XOR = "^="
    LEFT_SHIFT = "<<="
    SIGNED_RIGHT_SHIFT = ">>="
    UNSIGNED_RIGHT_SHIFT = ">>>="


class LiteralKind(StrEnum):
    """Source form of a literal."""

    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    CHAR = "char"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """
    A literal as written.

    ``text`` holds the digits without any type suffix for numeric kinds, the
    decoded contents for string and char kinds, and ``true``/``false``/``null``
    for the keyword kinds. Numeric text is never range-checked here.
    """

    kind: LiteralKind
    text: str = Field(description="Literal text with quotes and suffixes removed")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.kind == LiteralKind.STRING:
            return '"' + self.text.replace("\\", "\\\\").replace('"', '\\"') + '"'
        if self.kind == LiteralKind.CHAR:
            return "'" + self.text.replace("\\", "\\\\").replace("'", "\\'") + "'"
        if self.kind == LiteralKind.LONG:
            return f"{self.text}L"
        if self.kind == LiteralKind.FLOAT:
            return f"{self.text}f"
        return self.text


class NameExpr(BaseModel):
    """Reference to a variable by name."""

    name: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.left} {self.op.value} {self.right}"


class UnaryExpr(BaseModel):
    """Prefix operation: op operand."""

    op: UnaryOp
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.op.value}{self.operand}"


class EnclosedExpr(BaseModel):
    """Parenthesised expression, kept so the tree mirrors the source."""

    inner: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.inner})"


class ConditionalExpr(BaseModel):
    """Ternary: condition ? then_expr : else_expr."""

    condition: Expr
    then_expr: Expr
    else_expr: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.condition} ? {self.then_expr} : {self.else_expr}"


class MethodCallExpr(BaseModel):
    """Call: [scope.]name(arg1, arg2, ...)."""

    name: str
    scope: Expr | None = None
    args: list[Expr] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.args)
        prefix = f"{self.scope}." if self.scope is not None else ""
        return f"{prefix}{self.name}({args_str})"


class AssignExpr(BaseModel):
    """Assignment: target op value."""

    target: Expr
    op: AssignOp
    value: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.target} {self.op.value} {self.value}"


class VariableDeclaration(BaseModel):
    """Local variable declaration: type_name name [= initializer]."""

    type_name: str
    name: str
    initializer: Expr | None = None

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.initializer is None:
            return f"{self.type_name} {self.name}"
        return f"{self.type_name} {self.name} = {self.initializer}"


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


class ExpressionStmt(BaseModel):
    """An expression used as a statement: ``expr;``."""

    expression: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.expression};"


class BlockStmt(BaseModel):
    """Braced statement list."""

    statements: list[Statement] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "{ " + " ".join(str(s) for s in self.statements) + " }"


class IfStmt(BaseModel):
    condition: Expr
    then_stmt: Statement
    else_stmt: Statement | None = None

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        text = f"if ({self.condition}) {self.then_stmt}"
        if self.else_stmt is not None:
            text += f" else {self.else_stmt}"
        return text


class WhileStmt(BaseModel):
    condition: Expr
    body: Statement

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"while ({self.condition}) {self.body}"


class ReturnStmt(BaseModel):
    value: Expr | None = None

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.value is None:
            return "return;"
        return f"return {self.value};"


class EmptyStmt(BaseModel):
    """A lone semicolon."""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return ";"


# ---------------------------------------------------------------------------
# Union types
# ---------------------------------------------------------------------------

Expr = (
    Literal
    | NameExpr
    | BinaryExpr
    | UnaryExpr
    | EnclosedExpr
    | ConditionalExpr
    | MethodCallExpr
    | AssignExpr
    | VariableDeclaration
)

Statement = ExpressionStmt | BlockStmt | IfStmt | WhileStmt | ReturnStmt | EmptyStmt

Node = Expr | Statement

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()
UnaryExpr.model_rebuild()
EnclosedExpr.model_rebuild()
ConditionalExpr.model_rebuild()
MethodCallExpr.model_rebuild()
AssignExpr.model_rebuild()
VariableDeclaration.model_rebuild()
ExpressionStmt.model_rebuild()
BlockStmt.model_rebuild()
IfStmt.model_rebuild()
WhileStmt.model_rebuild()
ReturnStmt.model_rebuild()
