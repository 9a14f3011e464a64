"""
Tokenizer for one line of Java-like source.

Converts a source string into a sequence of typed tokens.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto

from dumbjshell.core.errors import ParseError


class TokenKind(StrEnum):
    """Token types for the shell's Java subset."""

    # Literals
    INT = auto()
    LONG = auto()
    FLOAT = auto()
    DOUBLE = auto()
    CHAR = auto()
    STRING = auto()

    # Identifiers and keywords
    IDENT = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    RETURN = auto()

    # Arithmetic
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()

    # Shift
    SHL = auto()  # <<
    SHR = auto()  # >>
    USHR = auto()  # >>>

    # Comparison
    EQ = auto()
    NE = auto()
    LT = auto()
    GT = auto()
    LE = auto()
    GE = auto()

    # Bitwise / logical
    AMP = auto()
    PIPE = auto()
    CARET = auto()
    TILDE = auto()
    BANG = auto()
    AND_AND = auto()
    OR_OR = auto()

    # Assignment
    ASSIGN = auto()
    PLUS_ASSIGN = auto()
    MINUS_ASSIGN = auto()
    STAR_ASSIGN = auto()
    SLASH_ASSIGN = auto()
    PERCENT_ASSIGN = auto()
    AMP_ASSIGN = auto()
    PIPE_ASSIGN = auto()
    CARET_ASSIGN = auto()
    SHL_ASSIGN = auto()
    SHR_ASSIGN = auto()
    USHR_ASSIGN = auto()

    # Punctuation
    QUESTION = auto()
    COLON = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    COMMA = auto()
    DOT = auto()
    SEMICOLON = auto()

    # End of input
    EOF = auto()


class Token:
    """A single token from the tokenizer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


_KEYWORDS: dict[str, TokenKind] = {
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "null": TokenKind.NULL,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "while": TokenKind.WHILE,
    "return": TokenKind.RETURN,
}

# Longest operators first so that ">>>=" wins over ">>" and ">"
_OPERATORS: list[tuple[str, TokenKind]] = [
    (">>>=", TokenKind.USHR_ASSIGN),
    ("<<=", TokenKind.SHL_ASSIGN),
    (">>=", TokenKind.SHR_ASSIGN),
    (">>>", TokenKind.USHR),
    ("==", TokenKind.EQ),
    ("!=", TokenKind.NE),
    ("<=", TokenKind.LE),
    (">=", TokenKind.GE),
    ("&&", TokenKind.AND_AND),
    ("||", TokenKind.OR_OR),
    ("+=", TokenKind.PLUS_ASSIGN),
    ("-=", TokenKind.MINUS_ASSIGN),
    ("*=", TokenKind.STAR_ASSIGN),
    ("/=", TokenKind.SLASH_ASSIGN),
    ("%=", TokenKind.PERCENT_ASSIGN),
    ("&=", TokenKind.AMP_ASSIGN),
    ("|=", TokenKind.PIPE_ASSIGN),
    ("^=", TokenKind.CARET_ASSIGN),
    ("<<", TokenKind.SHL),
    (">>", TokenKind.SHR),
    ("+", TokenKind.PLUS),
    ("-", TokenKind.MINUS),
    ("*", TokenKind.STAR),
    ("/", TokenKind.SLASH),
    ("%", TokenKind.PERCENT),
    ("<", TokenKind.LT),
    (">", TokenKind.GT),
    ("=", TokenKind.ASSIGN),
    ("!", TokenKind.BANG),
    ("~", TokenKind.TILDE),
    ("&", TokenKind.AMP),
    ("|", TokenKind.PIPE),
    ("^", TokenKind.CARET),
    ("?", TokenKind.QUESTION),
    (":", TokenKind.COLON),
    ("(", TokenKind.LPAREN),
    (")", TokenKind.RPAREN),
    ("{", TokenKind.LBRACE),
    ("}", TokenKind.RBRACE),
    (",", TokenKind.COMMA),
    (".", TokenKind.DOT),
    (";", TokenKind.SEMICOLON),
]

_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "b": "\b",
    "r": "\r",
    "f": "\f",
    "s": " ",
    "'": "'",
    '"': '"',
    "\\": "\\",
}

# Octal escape after the backslash: up to three digits, at most \377
_OCTAL_ESCAPE_RE = re.compile(r"[0-3][0-7]{0,2}|[4-7][0-7]?")
# Unicode escape after the backslash: one or more u's and four hex digits
_UNICODE_ESCAPE_RE = re.compile(r"u+([0-9a-fA-F]{4})")

# Decimal number with optional fraction, exponent and type suffix
_NUMBER_RE = re.compile(r"(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)(?:[eE][+-]?[0-9]+)?[lLfFdD]?")
# Identifier: letter, underscore or dollar followed by alphanumerics
_IDENT_RE = re.compile(r"[a-zA-Z_$][a-zA-Z0-9_$]*")


def tokenize(source: str) -> list[Token]:
    """Tokenize a source string into a list of tokens ending with EOF.

    Raises:
        ParseError: On an unexpected character or a malformed literal.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        # Skip whitespace
        if c in " \t\n\r\f":
            i += 1
            continue

        # Line comment runs to end of input
        if source.startswith("//", i):
            break

        if c == '"':
            i, tok = _read_quoted(source, i, TokenKind.STRING)
            tokens.append(tok)
            continue

        if c == "'":
            i, tok = _read_quoted(source, i, TokenKind.CHAR)
            if len(tok.value) != 1:
                raise ParseError("Char literal must hold exactly one character", tok.pos)
            tokens.append(tok)
            continue

        # Numbers, including ".5"
        if c.isdigit() or (c == "." and i + 1 < n and source[i + 1].isdigit()):
            m = _NUMBER_RE.match(source, i)
            assert m is not None
            tokens.append(_number_token(m.group(0), i))
            i = m.end()
            continue

        # Identifiers and keywords
        if c.isalpha() or c in "_$":
            m = _IDENT_RE.match(source, i)
            if m is None:
                raise ParseError(f"Unexpected character: {c!r}", i)
            word = m.group(0)
            kind = _KEYWORDS.get(word, TokenKind.IDENT)
            tokens.append(Token(kind, word, i))
            i = m.end()
            continue

        for text, kind in _OPERATORS:
            if source.startswith(text, i):
                tokens.append(Token(kind, text, i))
                i += len(text)
                break
        else:
            raise ParseError(f"Unexpected character: {c!r}", i)

    tokens.append(Token(TokenKind.EOF, "", n))
    return tokens


def _number_token(text: str, pos: int) -> Token:
    """Classify a numeric literal by its suffix and shape; the suffix is dropped."""
    suffix = text[-1]
    body = text[:-1] if suffix in "lLfFdD" else text
    is_decimal = "." in body or "e" in body or "E" in body

    if suffix in "lL":
        if is_decimal:
            raise ParseError(f"Malformed long literal: {text}", pos)
        return Token(TokenKind.LONG, body, pos)
    if suffix in "fF":
        return Token(TokenKind.FLOAT, body, pos)
    if suffix in "dD" or is_decimal:
        return Token(TokenKind.DOUBLE, body, pos)
    return Token(TokenKind.INT, body, pos)


def _read_quoted(source: str, start: int, kind: TokenKind) -> tuple[int, Token]:
    """Read a string or char literal, decoding escape sequences."""
    quote = source[start]
    i = start + 1
    n = len(source)
    chars: list[str] = []

    while i < n:
        c = source[i]
        if c == "\\":
            i, decoded = _read_escape(source, i)
            chars.append(decoded)
            continue
        if c == quote:
            return i + 1, Token(kind, "".join(chars), start)
        chars.append(c)
        i += 1

    label = "string" if kind == TokenKind.STRING else "char"
    raise ParseError(f"Unterminated {label} literal", start)


def _read_escape(source: str, start: int) -> tuple[int, str]:
    """Decode the escape sequence whose backslash sits at ``start``."""
    i = start + 1
    if i >= len(source):
        raise ParseError("Unterminated escape sequence", start)

    escaped = source[i]
    if escaped in _ESCAPES:
        return i + 1, _ESCAPES[escaped]

    m = _OCTAL_ESCAPE_RE.match(source, i)
    if m:
        return m.end(), chr(int(m.group(0), 8))

    if escaped == "u":
        m = _UNICODE_ESCAPE_RE.match(source, i)
        if m is None:
            raise ParseError("Illegal unicode escape", start)
        return m.end(), chr(int(m.group(1), 16))

    raise ParseError(f"Illegal escape character: \\{escaped}", start)
