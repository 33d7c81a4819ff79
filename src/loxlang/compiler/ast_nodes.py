"""
Abstract Syntax Tree (AST) node definitions for Lox expressions.

This module defines the node types produced by the parser, one per level of
the precedence grammar. Each node is immutable and records the source line
it started on. The line is excluded from equality so that trees compare by
shape alone.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Iterator, Optional, Union


class ASTNode(ABC):
    """
    Base class for all AST nodes.

    Long operator chains build trees thousands of levels deep along their
    left spine, so comparison, hashing and traversal here use an explicit
    stack instead of recursion.
    """

    line: Optional[int]

    @abstractmethod
    def accept(self, visitor: "ASTVisitor") -> Any:
        """Accept a visitor for tree traversal."""
        pass

    def children(self) -> tuple["ASTNode", ...]:
        """Direct sub-expressions, in source order."""
        return tuple(
            getattr(self, f.name)
            for f in fields(self)
            if isinstance(getattr(self, f.name), ASTNode)
        )

    def _shape(self) -> tuple[Any, ...]:
        """Node type plus its operator or literal; fields with compare=False are left out."""
        return (type(self),) + tuple(
            getattr(self, f.name)
            for f in fields(self)
            if f.compare and not isinstance(getattr(self, f.name), ASTNode)
        )

    def walk(self) -> Iterator["ASTNode"]:
        """Yield this node and all of its descendants in pre-order."""
        stack: list[ASTNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ASTNode):
            return NotImplemented
        pending = [(self, other)]
        while pending:
            left, right = pending.pop()
            if left._shape() != right._shape():
                return False
            pending.extend(zip(left.children(), right.children()))
        return True

    def __hash__(self) -> int:
        return hash(tuple(node._shape() for node in self.walk()))


class ASTVisitor(ABC):
    """
    Visitor pattern base class for AST traversal.

    Implement this to create custom AST processors (printers,
    serializers, future evaluators).
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to the appropriate visit method."""
        return node.accept(self)

    @abstractmethod
    def visit_expression(self, node: "Expression") -> Any: ...

    @abstractmethod
    def visit_series(self, node: "Series") -> Any: ...

    @abstractmethod
    def visit_equality(self, node: "Equality") -> Any: ...

    @abstractmethod
    def visit_comparison(self, node: "Comparison") -> Any: ...

    @abstractmethod
    def visit_sum(self, node: "Sum") -> Any: ...

    @abstractmethod
    def visit_product(self, node: "Product") -> Any: ...

    @abstractmethod
    def visit_unary(self, node: "Unary") -> Any: ...

    @abstractmethod
    def visit_primary(self, node: "Primary") -> Any: ...


# -----------------------------------------------------------------------------
# Operators
# -----------------------------------------------------------------------------


class EqualityOperator(Enum):
    """Operators of the equality tier."""

    EQUAL = "=="
    NOT_EQUAL = "!="


class ComparisonOperator(Enum):
    """Operators of the comparison tier."""

    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="


class SumOperator(Enum):
    """Operators of the additive tier."""

    PLUS = "+"
    MINUS = "-"


class ProductOperator(Enum):
    """Operators of the multiplicative tier."""

    STAR = "*"
    SLASH = "/"


class UnaryOperator(Enum):
    """Prefix operators."""

    BANG = "!"
    MINUS = "-"


# -----------------------------------------------------------------------------
# Literals
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NilLiteral:
    """The nil literal."""


@dataclass(frozen=True, slots=True)
class BooleanLiteral:
    """A boolean literal (true/false)."""

    value: bool


@dataclass(frozen=True, slots=True)
class NumberLiteral:
    """A number literal. All Lox numbers are double precision floats."""

    value: float


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """A string literal, without its quotes."""

    value: str


Literal = Union[NilLiteral, BooleanLiteral, NumberLiteral, StringLiteral]


# -----------------------------------------------------------------------------
# Expression nodes
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, eq=False)
class Expression(ASTNode):
    """
    The root of a parsed expression (the grammar's start symbol).

    Example:
        1 + 2 parses to Expression(Sum(...))
    """

    expression: ASTNode
    line: Optional[int] = field(default=None, compare=False)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_expression(self)


@dataclass(frozen=True, slots=True, eq=False)
class Series(ASTNode):
    """
    Comma grouping of two sub-expressions, evaluated left to right.

    Example:
        a, b, c parses to Series(Series(a, b), c)
    """

    left: ASTNode
    right: ASTNode
    line: Optional[int] = field(default=None, compare=False)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_series(self)


@dataclass(frozen=True, slots=True, eq=False)
class Equality(ASTNode):
    """
    An equality test.

    Example:
        a == b, a != b
    """

    left: ASTNode
    operator: EqualityOperator
    right: ASTNode
    line: Optional[int] = field(default=None, compare=False)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_equality(self)


@dataclass(frozen=True, slots=True, eq=False)
class Comparison(ASTNode):
    """
    An ordering comparison.

    Example:
        a > b, a <= b
    """

    left: ASTNode
    operator: ComparisonOperator
    right: ASTNode
    line: Optional[int] = field(default=None, compare=False)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_comparison(self)


@dataclass(frozen=True, slots=True, eq=False)
class Sum(ASTNode):
    """An addition or subtraction."""

    left: ASTNode
    operator: SumOperator
    right: ASTNode
    line: Optional[int] = field(default=None, compare=False)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_sum(self)


@dataclass(frozen=True, slots=True, eq=False)
class Product(ASTNode):
    """A multiplication or division."""

    left: ASTNode
    operator: ProductOperator
    right: ASTNode
    line: Optional[int] = field(default=None, compare=False)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_product(self)


@dataclass(frozen=True, slots=True, eq=False)
class Unary(ASTNode):
    """
    A prefix operation.

    Example:
        -x, !flag
    """

    operator: UnaryOperator
    operand: ASTNode
    line: Optional[int] = field(default=None, compare=False)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_unary(self)


@dataclass(frozen=True, slots=True, eq=False)
class Primary(ASTNode):
    """A literal leaf."""

    literal: Literal
    line: Optional[int] = field(default=None, compare=False)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_primary(self)


BinaryNode = Union[Equality, Comparison, Sum, Product]
