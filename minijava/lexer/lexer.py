"""
minijava Lexer - turns a source buffer into a list of tokens.

The scanner is a small hand-written state machine. At each cursor position
the rules are tried in a fixed order (whitespace, comments, numbers,
identifiers/keywords, strings, operators) and anything left over becomes a
single-character ERROR token, so every step advances the cursor.
"""

import logging
import re
from typing import List, Union

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS,
    TWO_CHAR_OPERATORS, SINGLE_CHAR_OPERATORS
)
from .errors import LexerError, LexerWarning, create_invalid_character_warning

logger = logging.getLogger(__name__)

WHITESPACE = " \t\r\n\f\v"


class Lexer:
    """
    minijava lexical analyzer.

    Converts source code text into a list of tokens that always ends with a
    single EOF token. Malformed input never raises: unknown characters are
    emitted as ERROR tokens and recorded as warnings.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Complete source text
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.warnings: List[LexerWarning] = []

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""
        # ASCII only; str patterns would otherwise accept Unicode digits
        self.number_pattern = re.compile(r'[0-9]+')
        self.identifier_pattern = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens including EOF token
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []
        self.warnings = []

        while True:
            self._skip_whitespace_and_comments()

            if self.pos >= len(self.source):
                break

            self.tokens.append(self._next_token())

        self.tokens.append(Token(TokenType.EOF, "", "", self._location()))

        logger.debug("%s: %d tokens, %d warnings",
                     self.filename, len(self.tokens), len(self.warnings))
        return self.tokens

    def _next_token(self) -> Token:
        """Scan one token starting at the current position."""
        location = self._location()
        current_char = self.source[self.pos]

        # Numbers
        match = self.number_pattern.match(self.source, self.pos)
        if match:
            return self._make_token(TokenType.NUMBER, match.group(0), location)

        # Identifiers and keywords
        match = self.identifier_pattern.match(self.source, self.pos)
        if match:
            lexeme = match.group(0)
            token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
            return self._make_token(token_type, lexeme, location)

        # String literals
        if current_char == '"':
            return self._tokenize_string(location)

        # Operators and punctuation (two-character first)
        two_chars = self.source[self.pos:self.pos + 2]
        if two_chars in TWO_CHAR_OPERATORS:
            return self._make_token(TWO_CHAR_OPERATORS[two_chars], two_chars, location)

        if current_char in SINGLE_CHAR_OPERATORS:
            return self._make_token(SINGLE_CHAR_OPERATORS[current_char], current_char, location)

        # Single characters that aren't recognized
        self.warnings.append(create_invalid_character_warning(current_char, location))
        return self._make_token(TokenType.ERROR, current_char, location)

    def _make_token(self, token_type: TokenType, lexeme: str, location: SourceLocation) -> Token:
        self._advance_by(len(lexeme))
        return Token(token_type, lexeme, lexeme, location)

    def _tokenize_string(self, location: SourceLocation) -> Token:
        """
        Tokenize a string literal.

        A backslash makes the next character literal: the backslash is dropped
        from the value and the character is kept as-is (no ``\\n`` decoding).
        An unterminated string runs to the end of the input.
        """
        start_pos = self.pos
        self._advance()  # Skip opening quote

        value_parts = []

        while self.pos < len(self.source) and self.source[self.pos] != '"':
            if self.source[self.pos] == '\\':
                self._advance()
                if self.pos < len(self.source):
                    value_parts.append(self.source[self.pos])
                    self._advance()
            else:
                value_parts.append(self.source[self.pos])
                self._advance()

        if self.pos < len(self.source):
            self._advance()  # Skip closing quote

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.STRING_LITERAL, lexeme, ''.join(value_parts), location)

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and comments."""
        while self.pos < len(self.source):
            if self.source[self.pos] in WHITESPACE:
                self._advance()
                continue

            # Line comments run up to, not including, the newline
            if self.source.startswith('//', self.pos):
                while self.pos < len(self.source) and self.source[self.pos] != '\n':
                    self._advance()
                continue

            # Block comments; unterminated ones swallow the rest of the input
            if self.source.startswith('/*', self.pos):
                self._advance_by(2)
                while self.pos < len(self.source) and not self.source.startswith('*/', self.pos):
                    self._advance()
                self._advance_by(2)
                continue

            break

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()

    def has_warnings(self) -> bool:
        """Check if lexer met any unrecognized characters."""
        return len(self.warnings) > 0

    def get_diagnostics(self) -> List[Union[LexerError, LexerWarning]]:
        """Get all recorded diagnostics."""
        return list(self.warnings)


def tokenize_string(source: str, filename: str = "<string>", strict: bool = False) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        strict: Raise on the first unrecognized character instead of
            returning an ERROR token for it

    Returns:
        List of tokens

    Raises:
        LexerError: If ``strict`` and the source contains invalid characters
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if strict and lexer.has_warnings():
        raise lexer.warnings[0].to_error()

    return tokens


def tokenize_file(filepath: str, strict: bool = False) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If ``strict`` and the file contains invalid characters
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath, strict=strict)
