"""
Parser for one line of Java-like shell input.

Usage:
    from dumbjshell.core.java_lang import parse_statement, parse_expression

    stmt = parse_statement("int x = 5;")
    expr = parse_expression("x + 1")
"""

from dumbjshell.core.java_lang.parser import parse_expression, parse_statement
from dumbjshell.core.java_lang.tokenizer import Token, TokenKind, tokenize

__all__ = ["Token", "TokenKind", "parse_expression", "parse_statement", "tokenize"]
