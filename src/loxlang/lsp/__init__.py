"""
loxlang Language Server Protocol (LSP) implementation.

This package provides an LSP server that reports scan and parse errors in
Lox expression files as editor diagnostics.

Usage:
    # Start the LSP server (stdio mode)
    loxlang-lsp

    # Or run as a module
    python -m loxlang.lsp
"""

from loxlang.lsp.diagnostics import DiagnosticProvider, get_diagnostics_for_document
from loxlang.lsp.server import LoxLanguageServer, create_server, main

__all__ = [
    "LoxLanguageServer",
    "DiagnosticProvider",
    "create_server",
    "get_diagnostics_for_document",
    "main",
]
