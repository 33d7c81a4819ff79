"""Tests for the loxlang LSP diagnostics provider."""

import pytest

from loxlang.lsp.diagnostics import DiagnosticProvider, get_diagnostics_for_document
from lsprotocol.types import DiagnosticSeverity

URI = "test://test.lox"


class TestDiagnosticProvider:
    """Test suite for DiagnosticProvider."""

    def test_valid_code_no_errors(self) -> None:
        """Test that valid code produces no diagnostics."""
        source = """
// arithmetic
(1 + 2) * 3 >= 4 == !false
"""
        assert get_diagnostics_for_document(source, URI) == []

    def test_syntax_error_produces_diagnostic(self) -> None:
        """Test that a parse error produces exactly one error diagnostic."""
        diagnostics = get_diagnostics_for_document("1 +", URI)

        assert len(diagnostics) == 1
        assert diagnostics[0].severity == DiagnosticSeverity.Error
        assert diagnostics[0].code == "parse"
        assert diagnostics[0].message.startswith("unexpected end of input")

    def test_unterminated_string_error(self) -> None:
        """Test diagnostic for unterminated string."""
        diagnostics = get_diagnostics_for_document('1 + "hello', URI)

        assert len(diagnostics) == 1
        assert diagnostics[0].code == "scan"
        assert "unterminated string" in diagnostics[0].message

    def test_diagnostic_has_source(self) -> None:
        """Test that diagnostics have source set."""
        diagnostics = get_diagnostics_for_document("1 1", URI)
        assert diagnostics[0].source == "loxlang"

    def test_range_covers_offending_line(self) -> None:
        """The range spans the whole line the error was found on."""
        source = "1 +\n  2 @ 3\n"
        diag = get_diagnostics_for_document(source, URI)[0]

        assert diag.range.start.line == 1
        assert diag.range.start.character == 0
        assert diag.range.end.line == 1
        assert diag.range.end.character == len("  2 @ 3")

    def test_range_for_unclosed_group(self) -> None:
        """A missing ')' points at the line of the last token."""
        source = "(1 +\n2"
        diag = get_diagnostics_for_document(source, URI)[0]

        assert diag.range.start.line == 1
        assert diag.message.startswith("expected ')' after expression")

    def test_help_included_in_message(self) -> None:
        """Help text from the compiler diagnostic is appended."""
        diag = get_diagnostics_for_document("(1", URI)[0]
        assert "\nhelp: " in diag.message

    def test_note_included_in_message(self) -> None:
        """Notes from the compiler diagnostic are appended."""
        diag = get_diagnostics_for_document("1 2", URI)[0]
        assert "\nnote: " in diag.message

    def test_empty_document(self) -> None:
        """An empty document is an incomplete expression on the first line."""
        diag = get_diagnostics_for_document("", URI)[0]

        assert diag.range.start.line == 0
        assert diag.range.end.character == 0

    def test_diagnostic_provider_instance(self) -> None:
        """Test DiagnosticProvider class directly."""
        provider = DiagnosticProvider("nil", URI)

        assert provider.get_diagnostics() == []
        assert provider.uri == URI

    def test_provider_reruns_cleanly(self) -> None:
        """Calling get_diagnostics twice does not accumulate results."""
        provider = DiagnosticProvider("1 1", URI)

        provider.get_diagnostics()
        assert len(provider.get_diagnostics()) == 1

    @pytest.mark.parametrize("source", ["@", "1 1", "(", ")", "3."])
    def test_at_most_one_diagnostic(self, source) -> None:
        """Scanning and parsing stop at the first fault."""
        assert len(get_diagnostics_for_document(source, URI)) == 1

    def test_deep_nesting_is_a_diagnostic(self) -> None:
        """Deeply nested groups produce a parse diagnostic instead of crashing."""
        source = "\n" + "(" * 300 + "1" + ")" * 300
        diagnostics = get_diagnostics_for_document(source, URI)

        assert len(diagnostics) == 1
        assert diagnostics[0].code == "parse"
        assert "nested too deeply" in diagnostics[0].message
        assert diagnostics[0].range.start.line == 1

    def test_long_chain_is_valid(self) -> None:
        """A chain of thousands of operators has no diagnostics."""
        assert get_diagnostics_for_document(" + ".join(["1"] * 2000), URI) == []
