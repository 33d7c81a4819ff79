"""
AST printers.

Three renderings of a parsed expression, all built on ASTVisitor:

- AstPrinter: one line, parenthesized prefix form, e.g. (+ 1 (* 2 3))
- TreeFormatter: indented tree, one node per line
- DictBuilder: nested dicts ready for json.dumps

A chain like 1 + 1 + ... + 1 nests as deep as it is long, so none of the
printers recurse: they drive the visit_* methods from an explicit stack.
"""

import json
from typing import Any

from loxlang.compiler.ast_nodes import (
    ASTNode,
    ASTVisitor,
    BinaryNode,
    BooleanLiteral,
    Comparison,
    Equality,
    Expression,
    Literal,
    NilLiteral,
    NumberLiteral,
    Primary,
    Product,
    Series,
    StringLiteral,
    Sum,
    Unary,
)
from loxlang.utils.errors import RenderError


def format_number(value: float) -> str:
    """Render a number the way Lox writes it: integral values lose the '.0'."""
    text = repr(value)
    if text.endswith(".0"):
        return text[:-2]
    return text


def format_literal(literal: Literal) -> str:
    """Render a literal as Lox source text."""
    if isinstance(literal, NilLiteral):
        return "nil"
    if isinstance(literal, BooleanLiteral):
        return "true" if literal.value else "false"
    if isinstance(literal, NumberLiteral):
        return format_number(literal.value)
    if isinstance(literal, StringLiteral):
        return f'"{literal.value}"'
    raise ValueError(f"Unknown literal: {literal!r}")


class FoldingVisitor(ASTVisitor):
    """
    Visitor that folds a tree bottom-up.

    Children are visited before their parent. When a visit_* method runs,
    the results for the node's children are in ``self.results``, in the
    order ``ASTNode.children()`` lists them.
    """

    def __init__(self) -> None:
        self.results: tuple[Any, ...] = ()

    def visit(self, node: ASTNode) -> Any:
        stack: list[tuple[ASTNode, bool]] = [(node, False)]
        values: list[Any] = []
        while stack:
            current, expanded = stack.pop()
            if not expanded:
                stack.append((current, True))
                stack.extend((child, False) for child in reversed(current.children()))
                continue
            count = len(current.children())
            if count:
                self.results = tuple(values[-count:])
                del values[-count:]
            else:
                self.results = ()
            values.append(current.accept(self))
        return values.pop()


class AstPrinter(FoldingVisitor):
    """Print an expression as a parenthesized prefix form."""

    def print(self, node: ASTNode) -> str:
        return self.visit(node)

    def _parenthesize(self, name: str) -> str:
        return "(" + " ".join((name,) + self.results) + ")"

    def visit_expression(self, node: Expression) -> str:
        return self.results[0]

    def visit_series(self, node: Series) -> str:
        return self._parenthesize(",")

    def visit_equality(self, node: Equality) -> str:
        return self._parenthesize(node.operator.value)

    def visit_comparison(self, node: Comparison) -> str:
        return self._parenthesize(node.operator.value)

    def visit_sum(self, node: Sum) -> str:
        return self._parenthesize(node.operator.value)

    def visit_product(self, node: Product) -> str:
        return self._parenthesize(node.operator.value)

    def visit_unary(self, node: Unary) -> str:
        return self._parenthesize(node.operator.value)

    def visit_primary(self, node: Primary) -> str:
        return format_literal(node.literal)


class TreeFormatter(ASTVisitor):
    """
    Format an expression as an indented tree.

    Example:
        Expression
          Sum +
            Primary 1
            Product *
              Primary 2
              Primary 3

    The visit_* methods return the label for one node; format() walks
    the tree in pre-order and indents each label by its depth.
    """

    def __init__(self, indent: str = "  ") -> None:
        self.indent = indent

    def format(self, node: ASTNode) -> str:
        lines: list[str] = []
        stack: list[tuple[ASTNode, int]] = [(node, 0)]
        while stack:
            current, depth = stack.pop()
            lines.append(f"{self.indent * depth}{self.visit(current)}")
            stack.extend((child, depth + 1) for child in reversed(current.children()))
        return "\n".join(lines)

    def _binary(self, node: BinaryNode) -> str:
        return f"{type(node).__name__} {node.operator.value}"

    def visit_expression(self, node: Expression) -> str:
        return "Expression"

    def visit_series(self, node: Series) -> str:
        return "Series"

    def visit_equality(self, node: Equality) -> str:
        return self._binary(node)

    def visit_comparison(self, node: Comparison) -> str:
        return self._binary(node)

    def visit_sum(self, node: Sum) -> str:
        return self._binary(node)

    def visit_product(self, node: Product) -> str:
        return self._binary(node)

    def visit_unary(self, node: Unary) -> str:
        return f"Unary {node.operator.value}"

    def visit_primary(self, node: Primary) -> str:
        return f"Primary {format_literal(node.literal)}"


class DictBuilder(FoldingVisitor):
    """Convert an expression to nested dicts of plain JSON types."""

    def _binary(self, node: BinaryNode) -> dict[str, Any]:
        left, right = self.results
        return {
            "node": type(node).__name__,
            "operator": node.operator.value,
            "left": left,
            "right": right,
            "line": node.line,
        }

    def visit_expression(self, node: Expression) -> dict[str, Any]:
        return {
            "node": "Expression",
            "expression": self.results[0],
            "line": node.line,
        }

    def visit_series(self, node: Series) -> dict[str, Any]:
        left, right = self.results
        return {
            "node": "Series",
            "left": left,
            "right": right,
            "line": node.line,
        }

    def visit_equality(self, node: Equality) -> dict[str, Any]:
        return self._binary(node)

    def visit_comparison(self, node: Comparison) -> dict[str, Any]:
        return self._binary(node)

    def visit_sum(self, node: Sum) -> dict[str, Any]:
        return self._binary(node)

    def visit_product(self, node: Product) -> dict[str, Any]:
        return self._binary(node)

    def visit_unary(self, node: Unary) -> dict[str, Any]:
        return {
            "node": "Unary",
            "operator": node.operator.value,
            "operand": self.results[0],
            "line": node.line,
        }

    def visit_primary(self, node: Primary) -> dict[str, Any]:
        literal = node.literal
        if isinstance(literal, NilLiteral):
            kind, value = "nil", None
        elif isinstance(literal, BooleanLiteral):
            kind, value = "boolean", literal.value
        elif isinstance(literal, NumberLiteral):
            kind, value = "number", literal.value
        else:
            kind, value = "string", literal.value
        return {"node": "Primary", "kind": kind, "value": value, "line": node.line}


def print_ast(node: ASTNode) -> str:
    """Render an AST as a one-line parenthesized prefix form."""
    return AstPrinter().print(node)


def format_tree(node: ASTNode, indent: str = "  ") -> str:
    """Render an AST as an indented tree."""
    return TreeFormatter(indent).format(node)


def to_dict(node: ASTNode) -> dict[str, Any]:
    """Convert an AST to nested dicts suitable for JSON output."""
    return DictBuilder().visit(node)


def to_json(node: ASTNode, indent: int = 2) -> str:
    """
    Serialize an AST as JSON text.

    Raises:
        RenderError: If the tree nests deeper than the json encoder can follow
    """
    try:
        return json.dumps(to_dict(node), indent=indent)
    except RecursionError:
        raise RenderError("expression too deep to render as JSON", node.line or 1) from None
