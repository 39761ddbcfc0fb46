"""
minijava Front End Package

A from-scratch lexer and fault-tolerant recursive descent parser for a
small Java-like language. Source text goes in; an abstract syntax tree and a
list of human-readable diagnostics come out.

Architecture:
    minijava/
    ├── lexer/           # Tokenization
    ├── parser/          # Syntax analysis, AST, tree rendering
    └── cli.py           # Command-line driver

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType
from .parser import Parser, ParseResult, parse_string, parse_file

__all__ = [
    # Core classes
    "Lexer",
    "Token",
    "TokenType",
    "Parser",
    "ParseResult",
    "parse_string",
    "parse_file",

    # Version info
    "__version__",
    "__license__",
]
