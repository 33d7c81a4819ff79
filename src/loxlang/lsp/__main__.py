"""
Entry point for running the loxlang LSP server as a module.

Usage:
    python -m loxlang.lsp
    python -m loxlang.lsp --tcp --port 2087
"""

from loxlang.lsp.server import main

if __name__ == "__main__":
    main()
