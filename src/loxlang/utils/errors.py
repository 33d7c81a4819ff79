"""
Error types for the loxlang front end.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from loxlang.compiler.tokens import Token


class LoxError(Exception):
    """
    Base exception for all loxlang front-end errors.

    Attributes:
        message: Human readable description of the fault
        line: 1-indexed source line the fault was detected on
        filename: Optional filename for error reporting
    """

    def __init__(
        self,
        message: str,
        line: int,
        filename: Optional[str] = None,
    ) -> None:
        self.message = message
        self.line = line
        self.filename = filename
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        return f"[line {self.line}] Error: {self.message}"


class ScanError(LoxError):
    """Raised when the scanner meets an unterminated string or a stray character."""

    pass


class ParseError(LoxError):
    """
    Raised when the token sequence does not match the expression grammar.

    The offending token is kept when there is one; it is None when the
    parser ran out of tokens.
    """

    def __init__(
        self,
        message: str,
        line: int,
        token: Optional["Token"] = None,
        filename: Optional[str] = None,
    ) -> None:
        self.token = token
        super().__init__(message, line, filename)


class RenderError(LoxError):
    """Raised when a parsed tree cannot be rendered in the requested output format."""

    pass
