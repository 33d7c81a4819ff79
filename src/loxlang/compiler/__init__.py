"""
Lox Compiler Package.

This package contains the expression front end:
- Tokens: Token kinds and the Token record
- Lexer: Tokenizes Lox source code
- AST: Node definitions for the syntax tree
- Parser: Produces an Abstract Syntax Tree from tokens
- Printer: Renders a tree as prefix text, an indented tree, or dicts
"""

from pathlib import Path
from typing import Optional, Union

from loxlang.compiler.ast_nodes import (
    ASTNode,
    ASTVisitor,
    BooleanLiteral,
    Comparison,
    ComparisonOperator,
    Equality,
    EqualityOperator,
    Expression,
    NilLiteral,
    NumberLiteral,
    Primary,
    Product,
    ProductOperator,
    Series,
    StringLiteral,
    Sum,
    SumOperator,
    Unary,
    UnaryOperator,
)
from loxlang.compiler.lexer import Lexer, scan
from loxlang.compiler.parser import Parser, parse
from loxlang.compiler.printer import format_tree, print_ast, to_dict, to_json
from loxlang.compiler.tokens import KEYWORDS, Token, TokenType


def parse_source(source: str, filename: Optional[str] = None) -> Expression:
    """
    Scan and parse Lox source code in one step.

    Args:
        source: Lox source code string
        filename: Optional filename for error reporting

    Returns:
        The root Expression node

    Raises:
        ScanError: If the source cannot be tokenized
        ParseError: If the tokens do not form one expression
    """
    return parse(scan(source, filename), filename)


def parse_file(path: Union[str, Path]) -> Expression:
    """Read a .lox file and parse its contents."""
    path = Path(path)
    return parse_source(path.read_text(encoding="utf-8"), str(path))


__all__ = [
    # Tokens
    "Token",
    "TokenType",
    "KEYWORDS",
    # Passes
    "Lexer",
    "Parser",
    "scan",
    "parse",
    "parse_source",
    "parse_file",
    # AST
    "ASTNode",
    "ASTVisitor",
    "Expression",
    "Series",
    "Equality",
    "Comparison",
    "Sum",
    "Product",
    "Unary",
    "Primary",
    "EqualityOperator",
    "ComparisonOperator",
    "SumOperator",
    "ProductOperator",
    "UnaryOperator",
    "NilLiteral",
    "BooleanLiteral",
    "NumberLiteral",
    "StringLiteral",
    # Printing
    "print_ast",
    "format_tree",
    "to_dict",
    "to_json",
]
