"""
Pytest configuration and shared fixtures for loxlang tests.
"""

import pytest

from loxlang.compiler.ast_nodes import Expression
from loxlang.compiler.lexer import Lexer
from loxlang.compiler.parser import Parser
from loxlang.compiler.tokens import Token


@pytest.fixture
def lexer_factory():
    """Factory fixture for creating lexers."""

    def _create_lexer(source: str, filename: str = "test.lox") -> Lexer:
        return Lexer(source, filename)

    return _create_lexer


@pytest.fixture
def parser_factory(lexer_factory):
    """Factory fixture for creating parsers from source."""

    def _create_parser(source: str) -> Parser:
        lexer = lexer_factory(source)
        tokens = lexer.tokenize()
        return Parser(tokens)

    return _create_parser


@pytest.fixture
def tokenize(lexer_factory):
    """Fixture to tokenize source code."""

    def _tokenize(source: str) -> list[Token]:
        lexer = lexer_factory(source)
        return lexer.tokenize()

    return _tokenize


@pytest.fixture
def parse():
    """Fixture to parse a prepared token list into an AST."""

    def _parse(tokens: list[Token]) -> Expression:
        return Parser(tokens).parse()

    return _parse


@pytest.fixture
def parse_source(parser_factory):
    """Fixture to scan and parse source code into an AST."""

    def _parse_source(source: str) -> Expression:
        parser = parser_factory(source)
        return parser.parse()

    return _parse_source


@pytest.fixture
def lox_file(tmp_path):
    """Factory fixture writing Lox source to a temporary .lox file."""

    def _write(source: str, name: str = "input.lox"):
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return _write
