"""
Error handling for the minijava parser.

Syntax problems are reported as ``Diagnostic`` records and never interrupt
parsing; the helpers below build those records with consistent wording and
error codes. ``ParseError`` exists for callers that prefer an exception over
inspecting a ``ParseResult``.
"""

from typing import List, Optional

from ..lexer.tokens import Token, TokenType, SourceLocation, TYPE_KEYWORDS
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised by the convenience helpers when parsing fails.

    Carries every diagnostic collected before the failure.
    """

    def __init__(self, message: str, diagnostics: Optional[List[str]] = None):
        super().__init__(message)
        self.diagnostics = list(diagnostics or [])


class SyntaxErrorRecovery:
    """
    Utilities for error recovery in the parser.

    Lets parsing continue after a malformed declaration so that several
    problems can be reported in a single pass.
    """

    # Token types that plausibly begin the next statement
    STATEMENT_BOUNDARIES = TYPE_KEYWORDS | frozenset({
        TokenType.SEMICOLON,
        TokenType.WHILE,
        TokenType.IF,
        TokenType.IDENTIFIER,
        TokenType.RIGHT_BRACE,
        TokenType.PUBLIC,
        TokenType.PRIVATE,
        TokenType.PROTECTED,
    })

    # Maximum number of tokens skipped while resynchronizing
    RESYNC_LIMIT = 10

    @staticmethod
    def synchronize_to_statement_boundary(tokens: List[Token], current_pos: int) -> int:
        """
        Find where parsing should resume after a declaration missing its ';'.

        Scans forward from ``current_pos`` for a statement boundary, giving up
        after ``RESYNC_LIMIT`` tokens or at EOF. A ';' boundary is skipped so
        the caller resumes just past it.

        Returns the position to resume parsing from.
        """
        start = current_pos
        last = len(tokens) - 1

        while current_pos < last and tokens[current_pos].type != TokenType.EOF:
            token = tokens[current_pos]

            if token.type in SyntaxErrorRecovery.STATEMENT_BOUNDARIES:
                if token.type == TokenType.SEMICOLON:
                    return current_pos + 1
                return current_pos

            if current_pos - start >= SyntaxErrorRecovery.RESYNC_LIMIT:
                return current_pos

            current_pos += 1

        return current_pos


# Helper functions for creating common parser diagnostics

def create_unexpected_token_error(expectation: str, found: Token) -> Diagnostic:
    """``<expectation> but found '<lexeme>' at line <n>``"""
    return Diagnostic(
        message=expectation,
        location=found.location,
        severity="error",
        code="P001",
        found=found.lexeme,
    )


def create_missing_semicolon_error(what: str, location: SourceLocation,
                                   found: Optional[Token] = None) -> Diagnostic:
    """``Expected ';' after <what> [but found '<lexeme>'] at line <n>``"""
    return Diagnostic(
        message=f"Expected ';' after {what}",
        location=location,
        severity="error",
        code="P002",
        help_text="Add a semicolon ';' to end the statement",
        found=found.lexeme if found is not None else None,
    )


def create_unrecognized_statement_error(token: Token) -> Diagnostic:
    return Diagnostic(
        message=f"Unrecognized statement: '{token.lexeme}'",
        location=token.location,
        severity="error",
        code="P003",
    )


def create_invalid_expression_error(token: Token) -> Diagnostic:
    return Diagnostic(
        message=f"Invalid expression: '{token.lexeme}'",
        location=token.location,
        severity="error",
        code="P004",
        help_text="An expression must start with a number, identifier, string or '('",
    )


def create_invalid_assignment_error(name_token: Token) -> Diagnostic:
    return Diagnostic(
        message=f"Invalid assignment: '{name_token.lexeme}'",
        location=name_token.location,
        severity="error",
        code="P005",
        help_text="Expected '=', '++' or '--' after the identifier",
    )


def create_fatal_error(exc: BaseException, location: SourceLocation) -> Diagnostic:
    return Diagnostic(
        message=f"Fatal error: {exc}",
        location=location,
        severity="fatal",
        code="P099",
    )
