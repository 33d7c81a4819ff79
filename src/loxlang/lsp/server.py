"""
loxlang Language Server Protocol (LSP) Server.

This module implements an LSP server for Lox expression files using pygls
(Python Language Server). It provides:

- Document synchronization (open, change, save, close)
- Diagnostics for scan and parse errors

Usage:
    # Start the server in stdio mode (for IDE integration)
    loxlang-lsp

    # Start in TCP mode (for debugging)
    loxlang-lsp --tcp --port 2087
"""

import logging

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from loxlang import __version__
from loxlang.lsp.diagnostics import get_diagnostics_for_document

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("loxlang-lsp")


class LoxLanguageServer(LanguageServer):
    """
    Language Server Protocol implementation for Lox.

    Every open, change or save re-scans and re-parses the whole document
    and publishes the result; closing a document clears its diagnostics.
    """

    def __init__(self) -> None:
        """Initialize the loxlang language server."""
        super().__init__(
            name="loxlang-lsp",
            version=f"v{__version__}",
        )

        # Last published diagnostics (uri -> diagnostics)
        self._diagnostics: dict[str, list[types.Diagnostic]] = {}

        # Register all handlers
        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register all LSP notification handlers."""
        # Document synchronization
        self.feature(types.TEXT_DOCUMENT_DID_OPEN)(self._on_did_open)
        self.feature(types.TEXT_DOCUMENT_DID_CHANGE)(self._on_did_change)
        self.feature(types.TEXT_DOCUMENT_DID_SAVE)(self._on_did_save)
        self.feature(types.TEXT_DOCUMENT_DID_CLOSE)(self._on_did_close)

    def analyze_document(self, uri: str, text: str) -> list[types.Diagnostic]:
        """Scan and parse a document and remember its diagnostics."""
        diagnostics = get_diagnostics_for_document(text, uri)
        self._diagnostics[uri] = diagnostics
        return diagnostics

    def _publish_diagnostics(self, uri: str, diagnostics: list[types.Diagnostic]) -> None:
        """Publish diagnostics to the client."""
        self.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )

    # =========================================================================
    # Document Synchronization
    # =========================================================================

    def _on_did_open(self, params: types.DidOpenTextDocumentParams) -> None:
        """Handle document open notification."""
        document = params.text_document
        logger.info(f"Document opened: {document.uri}")

        diagnostics = self.analyze_document(document.uri, document.text)
        self._publish_diagnostics(document.uri, diagnostics)

    def _on_did_change(self, params: types.DidChangeTextDocumentParams) -> None:
        """Handle document change notification."""
        uri = params.text_document.uri

        # Get the current document text
        doc = self.workspace.get_text_document(uri)
        if doc is None:
            return

        logger.debug(f"Document changed: {uri}")

        diagnostics = self.analyze_document(uri, doc.source)
        self._publish_diagnostics(uri, diagnostics)

    def _on_did_save(self, params: types.DidSaveTextDocumentParams) -> None:
        """Handle document save notification."""
        uri = params.text_document.uri
        logger.info(f"Document saved: {uri}")

        doc = self.workspace.get_text_document(uri)
        if doc:
            diagnostics = self.analyze_document(uri, doc.source)
            self._publish_diagnostics(uri, diagnostics)

    def _on_did_close(self, params: types.DidCloseTextDocumentParams) -> None:
        """Handle document close notification."""
        uri = params.text_document.uri
        logger.info(f"Document closed: {uri}")

        self._diagnostics.pop(uri, None)

        # Clear diagnostics
        self._publish_diagnostics(uri, [])


def create_server() -> LoxLanguageServer:
    """Create and configure a loxlang language server instance."""
    server = LoxLanguageServer()

    @server.feature(types.INITIALIZED)
    def on_initialized(
        params: types.InitializedParams,  # noqa: ARG001
    ) -> None:
        """Handle initialized notification."""
        logger.info("loxlang Language Server initialized successfully")

    @server.feature(types.SHUTDOWN)
    def on_shutdown(
        params: None,  # noqa: ARG001
    ) -> None:
        """Handle shutdown request."""
        logger.info("Shutting down loxlang Language Server")

    return server


def main() -> None:
    """
    Main entry point for the loxlang language server.

    Starts the server in stdio mode for IDE integration, or TCP mode with --tcp.
    """
    import argparse

    parser = argparse.ArgumentParser(
        description="loxlang Language Server",
        prog="loxlang-lsp",
    )
    parser.add_argument(
        "--tcp",
        action="store_true",
        help="Start server in TCP mode instead of stdio",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to in TCP mode (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=2087,
        help="Port to listen on in TCP mode (default: 2087)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging level (default: info)",
    )

    args = parser.parse_args()

    # Configure logging level
    log_level = getattr(logging, args.log_level.upper())
    logging.getLogger("loxlang-lsp").setLevel(log_level)

    server = create_server()

    if args.tcp:
        logger.info(f"Starting loxlang LSP in TCP mode on {args.host}:{args.port}")
        server.start_tcp(args.host, args.port)
    else:
        logger.info("Starting loxlang LSP in stdio mode")
        server.start_io()


if __name__ == "__main__":
    main()
