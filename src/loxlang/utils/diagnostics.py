"""
Rich diagnostics for loxlang.

Renders scan and parse errors with the offending source line underneath the
header, in the style of:

    error: unexpected character: @
      --> example.lox:3
       |
     3 | 1 + @
       |
       = help: ...
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from loxlang.utils.errors import LoxError, ParseError, ScanError


class DiagnosticLevel(Enum):
    """Severity level of a diagnostic message."""

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"

    def color_code(self) -> str:
        """Get ANSI color code for this level."""
        colors = {
            DiagnosticLevel.ERROR: "\033[91m",  # Red
            DiagnosticLevel.WARNING: "\033[93m",  # Yellow
            DiagnosticLevel.NOTE: "\033[96m",  # Cyan
            DiagnosticLevel.HELP: "\033[92m",  # Green
        }
        return colors.get(self, "")


# Extra guidance keyed by the start of an error message
_HELPS: dict[str, str] = {
    "unterminated string": "strings must close with '\"' on the line they start",
    "expected ')'": "add ')' to close the group",
    "unexpected end of input": "the expression is incomplete; an operand is missing",
}

_NOTES: dict[str, str] = {
    "unexpected trailing token": "an input holds exactly one expression; join parts with an operator or ','",
    "unexpected character": "valid characters are the language's operators, letters, digits, '_' and '\"'",
}


@dataclass
class Diagnostic:
    """
    A diagnostic message with source context.

    Attributes:
        level: Severity level
        message: The main diagnostic message
        line: 1-indexed line the diagnostic points at
        filename: Name shown in the location line
        notes: Additional notes to display
        helps: Help messages
    """

    level: DiagnosticLevel
    message: str
    line: int
    filename: str = "<input>"
    notes: list[str] = field(default_factory=list)
    helps: list[str] = field(default_factory=list)

    @classmethod
    def from_error(cls, error: LoxError, filename: Optional[str] = None) -> "Diagnostic":
        """Build an error diagnostic from a ScanError or ParseError."""
        diagnostic = cls(
            level=DiagnosticLevel.ERROR,
            message=error.message,
            line=error.line,
            filename=filename or error.filename or "<input>",
        )
        for prefix, help_msg in _HELPS.items():
            if error.message.startswith(prefix):
                diagnostic.helps.append(help_msg)
        for prefix, note in _NOTES.items():
            if error.message.startswith(prefix):
                diagnostic.notes.append(note)
        return diagnostic

    def render(self, source_code: str, use_color: bool = True) -> str:
        """
        Render this diagnostic as a formatted string.

        Args:
            source_code: The original source code for context
            use_color: Whether to use ANSI color codes

        Returns:
            A formatted multi-line string representation
        """
        lines: list[str] = []
        source_lines = source_code.splitlines()

        reset = "\033[0m" if use_color else ""
        bold = "\033[1m" if use_color else ""
        level_color = self.level.color_code() if use_color else ""
        blue = "\033[94m" if use_color else ""
        green = "\033[92m" if use_color else ""

        lines.append(f"{level_color}{bold}{self.level.value}{reset}: {bold}{self.message}{reset}")
        lines.append(f"  {blue}-->{reset} {self.filename}:{self.line}")

        if 1 <= self.line <= len(source_lines):
            gutter = len(str(self.line))
            pad = " " * gutter
            lines.append(f" {pad} {blue}|{reset}")
            lines.append(f" {blue}{self.line} |{reset} {source_lines[self.line - 1]}")
            lines.append(f" {pad} {blue}|{reset}")

        for note in self.notes:
            lines.append(f"   {blue}={reset} {bold}note:{reset} {note}")
        for help_msg in self.helps:
            lines.append(f"   {blue}={reset} {green}help:{reset} {help_msg}")

        return "\n".join(lines)

    def to_simple_message(self) -> str:
        """Get the one-line '[line N] Error: message' form."""
        return f"[line {self.line}] Error: {self.message}"


def render_error(
    error: LoxError,
    source: str,
    filename: Optional[str] = None,
    use_color: bool = True,
) -> str:
    """Render a scan or parse error with source context."""
    return Diagnostic.from_error(error, filename).render(source, use_color)


def error_kind(error: LoxError) -> str:
    """Short name of the pass that raised an error."""
    if isinstance(error, ScanError):
        return "scan"
    if isinstance(error, ParseError):
        return "parse"
    return "error"
