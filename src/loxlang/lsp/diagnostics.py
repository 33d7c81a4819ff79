"""
Diagnostic generation for the loxlang LSP.

This module converts scan and parse errors into LSP-compatible diagnostic
messages for display in editors.
"""

from lsprotocol import types

from loxlang.compiler.lexer import Lexer
from loxlang.compiler.parser import Parser
from loxlang.utils.diagnostics import Diagnostic as CompilerDiagnostic
from loxlang.utils.diagnostics import DiagnosticLevel, error_kind
from loxlang.utils.errors import LoxError


class DiagnosticProvider:
    """
    Generates LSP diagnostics from Lox source code.

    This provider runs the lexer and the parser. Both stop at the first
    fault, so a document yields at most one diagnostic.
    """

    def __init__(self, source: str, uri: str) -> None:
        """
        Initialize the diagnostic provider.

        Args:
            source: The Lox source code to analyze
            uri: The document URI for location information
        """
        self.source = source
        self.uri = uri
        self._diagnostics: list[types.Diagnostic] = []

    def get_diagnostics(self) -> list[types.Diagnostic]:
        """
        Get all diagnostics for the document.

        Returns:
            List of LSP diagnostic objects (empty for a valid document)
        """
        self._diagnostics = []

        try:
            tokens = Lexer(self.source, filename=self.uri).tokenize()
            Parser(tokens, filename=self.uri).parse()
        except LoxError as e:
            self._add_lox_error(e)

        return self._diagnostics

    def _line_length(self, line: int) -> int:
        """Length of a 0-indexed source line, 0 if there is no such line."""
        lines = self.source.splitlines()
        if 0 <= line < len(lines):
            return len(lines[line])
        return 0

    def _add_lox_error(self, error: LoxError) -> None:
        """
        Add a scan or parse error as an LSP diagnostic.

        Tokens carry no column, so the range spans the whole offending line.

        Args:
            error: The scan or parse error
        """
        severity_map = {
            DiagnosticLevel.ERROR: types.DiagnosticSeverity.Error,
            DiagnosticLevel.WARNING: types.DiagnosticSeverity.Warning,
            DiagnosticLevel.NOTE: types.DiagnosticSeverity.Information,
            DiagnosticLevel.HELP: types.DiagnosticSeverity.Hint,
        }
        diag = CompilerDiagnostic.from_error(error, self.uri)

        line = max(0, diag.line - 1)  # Convert to 0-indexed

        # Build message with notes and helps
        message_parts = [diag.message]
        for note in diag.notes:
            message_parts.append(f"note: {note}")
        for help_msg in diag.helps:
            message_parts.append(f"help: {help_msg}")

        diagnostic = types.Diagnostic(
            range=types.Range(
                start=types.Position(line=line, character=0),
                end=types.Position(line=line, character=self._line_length(line)),
            ),
            message="\n".join(message_parts),
            severity=severity_map.get(diag.level, types.DiagnosticSeverity.Error),
            source="loxlang",
            code=error_kind(error),
        )

        self._diagnostics.append(diagnostic)


def get_diagnostics_for_document(source: str, uri: str) -> list[types.Diagnostic]:
    """
    Convenience function to get diagnostics for a document.

    Args:
        source: The Lox source code
        uri: The document URI

    Returns:
        List of LSP diagnostics
    """
    provider = DiagnosticProvider(source, uri)
    return provider.get_diagnostics()
