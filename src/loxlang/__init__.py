"""
loxlang - A scanner and parser for Lox expressions.

Turns Lox source text into tokens and tokens into an Abstract Syntax Tree,
with a command-line driver, an interactive REPL and a language server
built on top.
"""

from loxlang.compiler import parse_file, parse_source
from loxlang.compiler.lexer import Lexer, scan
from loxlang.compiler.parser import Parser, parse

__version__ = "0.1.0"
__all__ = [
    "scan",
    "parse",
    "parse_source",
    "parse_file",
    "Lexer",
    "Parser",
]
