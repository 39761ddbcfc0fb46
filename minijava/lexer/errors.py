"""
Error handling for the minijava lexer.

The lexer itself never raises on bad input: unrecognized characters become
ERROR tokens. The records defined here let callers inspect what went wrong
without re-scanning the token stream.
"""

from typing import Optional
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Base record for diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info", "fatal"
    code: Optional[str] = None
    help_text: Optional[str] = None
    found: Optional[str] = None

    def __str__(self) -> str:
        if self.found is not None:
            return f"{self.message} but found '{self.found}' at line {self.location.line}"
        return f"{self.message} at line {self.location.line}"

    def describe(self) -> str:
        """Multi-line rendering with location and help text."""
        result = f"{self.severity.upper()}"
        if self.code:
            result += f"[{self.code}]"
        result += f": {self}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        return result


class LexerError(Exception):
    """
    Exception carrying a lexer diagnostic.

    Not raised by ``Lexer.tokenize``; available to callers that want to turn
    a recorded problem into a hard failure (see ``tokenize_string``).
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class LexerWarning:
    """
    Represents a lexer problem that doesn't stop tokenization.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="warning",
            code=code,
            help_text=help_text
        )

    def __str__(self) -> str:
        return str(self.diagnostic)

    def to_error(self) -> LexerError:
        d = self.diagnostic
        return LexerError(d.message, d.location, code=d.code, help_text=d.help_text)


def create_invalid_character_warning(char: str, location: SourceLocation) -> LexerWarning:
    """Create a warning for a character that starts no token."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in minijava source code."
    else:
        help_text = f"Non-printable character (U+{ord(char):04X}) is not allowed."

    return LexerWarning(
        message=f"Invalid character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text
    )

