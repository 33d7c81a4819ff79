"""Tests for the loxlang language server handlers."""

import pytest
from lsprotocol import types

from loxlang.lsp.server import LoxLanguageServer, create_server

URI = "file:///tmp/example.lox"


@pytest.fixture
def server(monkeypatch):
    """A server whose published diagnostics are recorded instead of sent."""
    instance = create_server()
    published: list[tuple[str, list[types.Diagnostic]]] = []
    monkeypatch.setattr(
        instance,
        "_publish_diagnostics",
        lambda uri, diagnostics: published.append((uri, diagnostics)),
    )
    instance.published = published
    return instance


class TestLoxLanguageServer:
    """Tests for document synchronization handlers."""

    def test_create_server(self) -> None:
        """create_server returns a configured server."""
        assert isinstance(create_server(), LoxLanguageServer)

    def test_analyze_document(self, server) -> None:
        """analyze_document returns and remembers the diagnostics."""
        diagnostics = server.analyze_document(URI, "1 +")

        assert len(diagnostics) == 1
        assert server._diagnostics[URI] == diagnostics

    def test_did_open_publishes(self, server) -> None:
        """Opening a document publishes its diagnostics."""
        params = types.DidOpenTextDocumentParams(
            text_document=types.TextDocumentItem(
                uri=URI,
                language_id="lox",
                version=1,
                text="1 1",
            )
        )
        server._on_did_open(params)

        uri, diagnostics = server.published[-1]
        assert uri == URI
        assert len(diagnostics) == 1
        assert "unexpected trailing token" in diagnostics[0].message

    def test_did_open_valid_document(self, server) -> None:
        """A valid document publishes an empty list."""
        params = types.DidOpenTextDocumentParams(
            text_document=types.TextDocumentItem(
                uri=URI,
                language_id="lox",
                version=1,
                text="nil",
            )
        )
        server._on_did_open(params)

        assert server.published[-1] == (URI, [])

    def test_did_close_clears(self, server) -> None:
        """Closing a document clears its diagnostics."""
        server.analyze_document(URI, "(")
        params = types.DidCloseTextDocumentParams(
            text_document=types.TextDocumentIdentifier(uri=URI)
        )
        server._on_did_close(params)

        assert server.published[-1] == (URI, [])
        assert URI not in server._diagnostics
