"""
minijava Lexer Package

Implements a from-scratch lexical analyzer (tokenizer) for the minijava
language, a small Java-like teaching language.

Key Features:
- Fixed, case-sensitive keyword table
- Line and block comments
- Decimal integer and string literals
- Never fails: unknown characters become ERROR tokens
- Line/column/offset tracking for every token
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError, LexerWarning

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "Diagnostic",
    "LexerError",
    "LexerWarning",
    "tokenize_string",
    "tokenize_file",
]
