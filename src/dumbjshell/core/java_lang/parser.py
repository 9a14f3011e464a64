"""
Recursive descent parser for the shell's Java subset.

Grammar:
    statement    → block | if_stmt | while_stmt | return_stmt | ";"
                 | declaration ";" | expression ";"
    block        → "{" statement* "}"
    if_stmt      → "if" "(" expression ")" statement ("else" statement)?
    while_stmt   → "while" "(" expression ")" statement
    return_stmt  → "return" expression? ";"
    declaration  → IDENT IDENT ("=" expression)?

Expressions, precedence low to high:
    expression   → assignment
    assignment   → conditional (assign_op assignment)?
    conditional  → binary(||) ("?" expression ":" conditional)?
    binary       → || , && , | , ^ , & , == != , < > <= >= , << >> >>> , + - , * / %
    unary        → ("-" | "+" | "!" | "~") unary | postfix
    postfix      → primary ("." IDENT call_args?)*
    primary      → literal | "(" expression ")" | IDENT call_args?
    literal      → INT | LONG | FLOAT | DOUBLE | CHAR | STRING | "true" | "false" | "null"
"""

from __future__ import annotations

from dumbjshell.core.errors import ParseError
from dumbjshell.core.ir import (
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
    ReturnStmt,
    Statement,
    UnaryExpr,
    UnaryOp,
    VariableDeclaration,
    WhileStmt,
)
from dumbjshell.core.java_lang.tokenizer import Token, TokenKind, tokenize

# Binary operator levels, lowest precedence first. All are left-associative.
_BINARY_LEVELS: list[dict[TokenKind, BinaryOp]] = [
    {TokenKind.OR_OR: BinaryOp.OR},
    {TokenKind.AND_AND: BinaryOp.AND},
    {TokenKind.PIPE: BinaryOp.BINARY_OR},
    {TokenKind.CARET: BinaryOp.XOR},
    {TokenKind.AMP: BinaryOp.BINARY_AND},
    {TokenKind.EQ: BinaryOp.EQUALS, TokenKind.NE: BinaryOp.NOT_EQUALS},
    {
        TokenKind.LT: BinaryOp.LESS,
        TokenKind.GT: BinaryOp.GREATER,
        TokenKind.LE: BinaryOp.LESS_EQUALS,
        TokenKind.GE: BinaryOp.GREATER_EQUALS,
    },
    {
        TokenKind.SHL: BinaryOp.LEFT_SHIFT,
        TokenKind.SHR: BinaryOp.SIGNED_RIGHT_SHIFT,
        TokenKind.USHR: BinaryOp.UNSIGNED_RIGHT_SHIFT,
    },
    {TokenKind.PLUS: BinaryOp.PLUS, TokenKind.MINUS: BinaryOp.MINUS},
    {
        TokenKind.STAR: BinaryOp.MULTIPLY,
        TokenKind.SLASH: BinaryOp.DIVIDE,
        TokenKind.PERCENT: BinaryOp.REMAINDER,
    },
]

_ASSIGN_OPS: dict[TokenKind, AssignOp] = {
    TokenKind.ASSIGN: AssignOp.ASSIGN,
    TokenKind.PLUS_ASSIGN: AssignOp.PLUS,
    TokenKind.MINUS_ASSIGN: AssignOp.MINUS,
    TokenKind.STAR_ASSIGN: AssignOp.MULTIPLY,
    TokenKind.SLASH_ASSIGN: AssignOp.DIVIDE,
    TokenKind.PERCENT_ASSIGN: AssignOp.REMAINDER,
    TokenKind.AMP_ASSIGN: AssignOp.BINARY_AND,
    TokenKind.PIPE_ASSIGN: AssignOp.BINARY_OR,
    TokenKind.CARET_ASSIGN: AssignOp.XOR,
    TokenKind.SHL_ASSIGN: AssignOp.LEFT_SHIFT,
    TokenKind.SHR_ASSIGN: AssignOp.SIGNED_RIGHT_SHIFT,
    TokenKind.USHR_ASSIGN: AssignOp.UNSIGNED_RIGHT_SHIFT,
}

_UNARY_OPS: dict[TokenKind, UnaryOp] = {
    TokenKind.MINUS: UnaryOp.MINUS,
    TokenKind.PLUS: UnaryOp.PLUS,
    TokenKind.BANG: UnaryOp.LOGICAL_COMPLEMENT,
    TokenKind.TILDE: UnaryOp.BITWISE_COMPLEMENT,
}

_LITERAL_KINDS: dict[TokenKind, LiteralKind] = {
    TokenKind.INT: LiteralKind.INT,
    TokenKind.LONG: LiteralKind.LONG,
    TokenKind.FLOAT: LiteralKind.FLOAT,
    TokenKind.DOUBLE: LiteralKind.DOUBLE,
    TokenKind.CHAR: LiteralKind.CHAR,
    TokenKind.STRING: LiteralKind.STRING,
    TokenKind.TRUE: LiteralKind.BOOLEAN,
    TokenKind.FALSE: LiteralKind.BOOLEAN,
    TokenKind.NULL: LiteralKind.NULL,
}


class _Parser:
    """Recursive descent parser over a token list."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]  # EOF

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind) -> Token:
        tok = self.current
        if tok.kind != kind:
            raise ParseError(
                f"Expected {kind}, got {tok.kind} ({tok.value!r})",
                tok.pos,
            )
        return self.advance()

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.current.kind in kinds:
            return self.advance()
        return None

    def expect_end(self) -> None:
        if self.current.kind != TokenKind.EOF:
            raise ParseError(
                f"Unexpected token after input: {self.current.value!r}",
                self.current.pos,
            )

    # -- Statements --

    def parse_statement(self) -> Statement:
        tok = self.current

        if tok.kind == TokenKind.LBRACE:
            return self.parse_block()

        if tok.kind == TokenKind.IF:
            self.advance()
            condition = self._parse_paren_condition()
            then_stmt = self.parse_statement()
            else_stmt = self.parse_statement() if self.match(TokenKind.ELSE) else None
            return IfStmt(condition=condition, then_stmt=then_stmt, else_stmt=else_stmt)

        if tok.kind == TokenKind.WHILE:
            self.advance()
            condition = self._parse_paren_condition()
            return WhileStmt(condition=condition, body=self.parse_statement())

        if tok.kind == TokenKind.RETURN:
            self.advance()
            value = None if self.current.kind == TokenKind.SEMICOLON else self.parse_expr()
            self.expect(TokenKind.SEMICOLON)
            return ReturnStmt(value=value)

        if self.match(TokenKind.SEMICOLON):
            return EmptyStmt()

        expression = self.parse_declaration_or_expr()
        self.expect(TokenKind.SEMICOLON)
        return ExpressionStmt(expression=expression)

    def parse_block(self) -> BlockStmt:
        """'{' statement* '}'"""
        self.expect(TokenKind.LBRACE)
        statements: list[Statement] = []
        while self.current.kind not in (TokenKind.RBRACE, TokenKind.EOF):
            statements.append(self.parse_statement())
        self.expect(TokenKind.RBRACE)
        return BlockStmt(statements=statements)

    def _parse_paren_condition(self) -> Expr:
        self.expect(TokenKind.LPAREN)
        condition = self.parse_expr()
        self.expect(TokenKind.RPAREN)
        return condition

    def parse_declaration_or_expr(self) -> Expr:
        """A declaration starts with two identifiers in a row: ``int x``."""
        if self.current.kind == TokenKind.IDENT and self.peek(1).kind == TokenKind.IDENT:
            return self.parse_declaration()
        return self.parse_expr()

    def parse_declaration(self) -> VariableDeclaration:
        """IDENT IDENT ('=' expression)?"""
        type_tok = self.expect(TokenKind.IDENT)
        name_tok = self.expect(TokenKind.IDENT)
        initializer = self.parse_expr() if self.match(TokenKind.ASSIGN) else None
        if self.current.kind == TokenKind.COMMA:
            raise ParseError("Only one variable per declaration is supported", self.current.pos)
        return VariableDeclaration(
            type_name=type_tok.value, name=name_tok.value, initializer=initializer
        )

    # -- Expressions --

    def parse_expr(self) -> Expr:
        return self.parse_assignment()

    def parse_assignment(self) -> Expr:
        """conditional (assign_op assignment)?  (right-associative)"""
        target = self.parse_conditional()
        op = _ASSIGN_OPS.get(self.current.kind)
        if op is None:
            return target
        op_tok = self.advance()
        if not isinstance(target, NameExpr):
            raise ParseError(f"Invalid assignment target: {target}", op_tok.pos)
        value = self.parse_assignment()
        return AssignExpr(target=target, op=op, value=value)

    def parse_conditional(self) -> Expr:
        """binary ('?' expression ':' conditional)?"""
        condition = self.parse_binary(0)
        if not self.match(TokenKind.QUESTION):
            return condition
        then_expr = self.parse_expr()
        self.expect(TokenKind.COLON)
        else_expr = self.parse_conditional()
        return ConditionalExpr(condition=condition, then_expr=then_expr, else_expr=else_expr)

    def parse_binary(self, level: int) -> Expr:
        """One precedence level of left-associative binary operators."""
        if level == len(_BINARY_LEVELS):
            return self.parse_unary()
        ops = _BINARY_LEVELS[level]
        left = self.parse_binary(level + 1)
        while self.current.kind in ops:
            op = ops[self.advance().kind]
            right = self.parse_binary(level + 1)
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_unary(self) -> Expr:
        """('-' | '+' | '!' | '~') unary | postfix"""
        op = _UNARY_OPS.get(self.current.kind)
        if op is not None:
            self.advance()
            return UnaryExpr(op=op, operand=self.parse_unary())
        return self.parse_postfix()

    def parse_postfix(self) -> Expr:
        """primary ('.' IDENT call_args?)*"""
        expr = self.parse_primary()
        while self.match(TokenKind.DOT):
            name_tok = self.expect(TokenKind.IDENT)
            if self.current.kind == TokenKind.LPAREN:
                expr = MethodCallExpr(name=name_tok.value, scope=expr, args=self._parse_args())
            elif isinstance(expr, NameExpr):
                # Qualified name such as System.out
                expr = NameExpr(name=f"{expr.name}.{name_tok.value}")
            else:
                raise ParseError(f"Unexpected member access: .{name_tok.value}", name_tok.pos)
        return expr

    def parse_primary(self) -> Expr:
        """literal | '(' expression ')' | IDENT call_args?"""
        tok = self.current

        if tok.kind == TokenKind.LPAREN:
            self.advance()
            inner = self.parse_expr()
            self.expect(TokenKind.RPAREN)
            return EnclosedExpr(inner=inner)

        literal_kind = _LITERAL_KINDS.get(tok.kind)
        if literal_kind is not None:
            self.advance()
            return Literal(kind=literal_kind, text=tok.value)

        if tok.kind == TokenKind.IDENT:
            self.advance()
            if self.current.kind == TokenKind.LPAREN:
                return MethodCallExpr(name=tok.value, args=self._parse_args())
            return NameExpr(name=tok.value)

        raise ParseError(
            f"Unexpected token: {tok.kind} ({tok.value!r})",
            tok.pos,
        )

    def _parse_args(self) -> list[Expr]:
        """'(' (expression (',' expression)*)? ')'"""
        self.expect(TokenKind.LPAREN)
        args: list[Expr] = []
        if self.current.kind != TokenKind.RPAREN:
            args.append(self.parse_expr())
            while self.match(TokenKind.COMMA):
                args.append(self.parse_expr())
        self.expect(TokenKind.RPAREN)
        return args


def parse_statement(source: str) -> Statement:
    """Parse exactly one statement.

    Args:
        source: Statement text including its terminating semicolon
            (e.g., "int x = 5;")

    Returns:
        Parsed statement node.

    Raises:
        ParseError: If the text is not a single valid statement.
    """
    parser = _Parser(tokenize(source))
    statement = parser.parse_statement()
    parser.expect_end()
    return statement


def parse_expression(source: str) -> Expr:
    """Parse exactly one expression, with no trailing semicolon.

    A local variable declaration (``int x = 5``) is accepted here too.

    Raises:
        ParseError: If the text is not a single valid expression.
    """
    parser = _Parser(tokenize(source))
    expression = parser.parse_declaration_or_expr()
    parser.expect_end()
    return expression
