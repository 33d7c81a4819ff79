"""
Lox Utilities Package.

Common utilities for error handling and diagnostics.
"""

from loxlang.utils.diagnostics import (
    Diagnostic,
    DiagnosticLevel,
    error_kind,
    render_error,
)
from loxlang.utils.errors import LoxError, ParseError, RenderError, ScanError

__all__ = [
    # Errors
    "LoxError",
    "ScanError",
    "ParseError",
    "RenderError",
    # Diagnostics
    "DiagnosticLevel",
    "Diagnostic",
    "render_error",
    "error_kind",
]
