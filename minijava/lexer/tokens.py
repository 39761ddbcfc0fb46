"""
Token definitions for the minijava lexer.

This module defines every token type the minijava front end understands:
- Keywords (types, modifiers, control flow)
- Operators (arithmetic, comparison, increment/decrement, assignment)
- Literals (decimal integers, strings)
- Identifiers, punctuation, error and end-of-input markers
"""

from enum import Enum, auto
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any


class TokenType(Enum):
    """
    Enumeration of all token types in minijava.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input
    ERROR = auto()                  # Unrecognized character

    # ========================================================================
    # Literals and Identifiers
    # ========================================================================
    NUMBER = auto()                 # 42
    STRING_LITERAL = auto()         # "hello"
    IDENTIFIER = auto()             # count, System, _tmp1

    # ========================================================================
    # Keywords
    # ========================================================================

    # Control flow
    WHILE = auto()                  # while
    IF = auto()                     # if
    ELSE = auto()                   # else
    RETURN = auto()                 # return

    # Types
    VOID = auto()                   # void
    INT = auto()                    # int
    STRING = auto()                 # String
    DOUBLE = auto()                 # double
    CHAR = auto()                   # char
    BOOLEAN = auto()                # boolean

    # Declarations and modifiers
    CLASS = auto()                  # class
    PUBLIC = auto()                 # public
    PRIVATE = auto()                # private
    PROTECTED = auto()              # protected
    STATIC = auto()                 # static
    FINAL = auto()                  # final

    # ========================================================================
    # Operators
    # ========================================================================
    ASSIGN = auto()                 # =
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /
    MODULO = auto()                 # %
    INCREMENT = auto()              # ++
    DECREMENT = auto()              # --

    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=
    LESS_THAN = auto()              # <
    GREATER_THAN = auto()           # >
    LESS_EQUAL = auto()             # <=
    GREATER_EQUAL = auto()          # >=

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    SEMICOLON = auto()              # ;
    COMMA = auto()                  # ,
    DOT = auto()                    # .


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Line and column are 1-based, offset is the 0-based index into the
    source buffer.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    ``lexeme`` is the exact slice of source text the token was scanned from.
    ``value`` is the decoded payload: for string literals the characters
    between the quotes with escapes resolved, for every other token the
    lexeme itself.
    """
    type: TokenType
    lexeme: str
    value: Any
    location: SourceLocation

    def __str__(self) -> str:
        return f"[{self.type.name}: '{self.value}' @{self.line}:{self.column}]"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column


# Lookup tables used by the lexer and parser. They are built once at import
# time and exposed read-only.

KEYWORDS = MappingProxyType({
    # Control flow
    "while": TokenType.WHILE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,

    # Types
    "void": TokenType.VOID,
    "int": TokenType.INT,
    "String": TokenType.STRING,
    "double": TokenType.DOUBLE,
    "char": TokenType.CHAR,
    "boolean": TokenType.BOOLEAN,

    # Declarations and modifiers
    "class": TokenType.CLASS,
    "public": TokenType.PUBLIC,
    "private": TokenType.PRIVATE,
    "protected": TokenType.PROTECTED,
    "static": TokenType.STATIC,
    "final": TokenType.FINAL,
})

# Tried before the single-character table
TWO_CHAR_OPERATORS = MappingProxyType({
    "==": TokenType.EQUAL,
    "!=": TokenType.NOT_EQUAL,
    "<=": TokenType.LESS_EQUAL,
    ">=": TokenType.GREATER_EQUAL,
    "++": TokenType.INCREMENT,
    "--": TokenType.DECREMENT,
})

SINGLE_CHAR_OPERATORS = MappingProxyType({
    "=": TokenType.ASSIGN,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "%": TokenType.MODULO,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
})

MODIFIERS = frozenset({
    TokenType.PUBLIC,
    TokenType.PRIVATE,
    TokenType.PROTECTED,
    TokenType.STATIC,
    TokenType.FINAL,
})

# Tokens that may start a method return type or a variable declaration
TYPE_KEYWORDS = frozenset({
    TokenType.VOID,
    TokenType.INT,
    TokenType.STRING,
    TokenType.DOUBLE,
    TokenType.CHAR,
    TokenType.BOOLEAN,
})

COMPARISON_OPERATORS = frozenset({
    TokenType.EQUAL,
    TokenType.NOT_EQUAL,
    TokenType.LESS_THAN,
    TokenType.GREATER_THAN,
    TokenType.LESS_EQUAL,
    TokenType.GREATER_EQUAL,
})
