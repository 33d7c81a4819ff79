"""
Lox Parser.

A recursive descent parser that transforms a token list into an Abstract
Syntax Tree (AST). Each precedence tier of the expression grammar is one
method, and each method delegates to the next tighter tier for its operands:

    expression -> series
    series     -> equality ( "," equality )*
    equality   -> comparison ( ( "==" | "!=" ) comparison )*
    comparison -> sum ( ( ">" | ">=" | "<" | "<=" ) sum )*
    sum        -> product ( ( "+" | "-" ) product )*
    product    -> unary ( ( "*" | "/" ) unary )*
    unary      -> ( "!" | "-" ) unary | primary
    primary    -> NUMBER | STRING | "true" | "false" | "nil"
                | "(" expression ")"
"""

import re
from typing import Optional, Sequence

from loxlang.compiler.tokens import Token, TokenType
from loxlang.compiler.ast_nodes import (
    ASTNode,
    Expression,
    Series,
    Equality,
    Comparison,
    Sum,
    Product,
    Unary,
    Primary,
    NilLiteral,
    BooleanLiteral,
    NumberLiteral,
    StringLiteral,
    EqualityOperator,
    ComparisonOperator,
    SumOperator,
    ProductOperator,
    UnaryOperator,
)
from loxlang.utils.errors import ParseError

# Same shape the scanner accepts for number literals
_NUMBER_LEXEME = re.compile(r"[0-9]+(\.[0-9]+)?")

# Combined depth of nested groups and prefix operators. Each level costs
# several Python frames, so this stays well inside the recursion limit.
MAX_NESTING_DEPTH = 64


# Map token types to the operator of each tier
EQUALITY_OP_MAP: dict[TokenType, EqualityOperator] = {
    TokenType.EQUAL_EQUAL: EqualityOperator.EQUAL,
    TokenType.BANG_EQUAL: EqualityOperator.NOT_EQUAL,
}

COMPARISON_OP_MAP: dict[TokenType, ComparisonOperator] = {
    TokenType.GREATER: ComparisonOperator.GREATER,
    TokenType.GREATER_EQUAL: ComparisonOperator.GREATER_EQUAL,
    TokenType.LESS: ComparisonOperator.LESS,
    TokenType.LESS_EQUAL: ComparisonOperator.LESS_EQUAL,
}

SUM_OP_MAP: dict[TokenType, SumOperator] = {
    TokenType.PLUS: SumOperator.PLUS,
    TokenType.MINUS: SumOperator.MINUS,
}

PRODUCT_OP_MAP: dict[TokenType, ProductOperator] = {
    TokenType.STAR: ProductOperator.STAR,
    TokenType.SLASH: ProductOperator.SLASH,
}

UNARY_OP_MAP: dict[TokenType, UnaryOperator] = {
    TokenType.BANG: UnaryOperator.BANG,
    TokenType.MINUS: UnaryOperator.MINUS,
}


class Parser:
    """
    Recursive descent parser for Lox expressions.

    Parses a list of tokens into a single Expression node. The end of the
    token list is the terminator; there is no EOF token.

    Usage:
        parser = Parser(tokens)
        ast = parser.parse()
    """

    def __init__(self, tokens: Sequence[Token], filename: Optional[str] = None) -> None:
        """
        Initialize the parser.

        Args:
            tokens: Tokens from the lexer
            filename: Optional filename for error reporting
        """
        self.tokens = tokens
        self.pos = 0
        self._depth = 0
        self._filename = filename

    @property
    def _current(self) -> Optional[Token]:
        """Get the current token, or None past the end."""
        if self.pos >= len(self.tokens):
            return None
        return self.tokens[self.pos]

    @property
    def _previous(self) -> Optional[Token]:
        """Get the most recently consumed token."""
        return self.tokens[self.pos - 1] if self.pos > 0 else None

    def _is_at_end(self) -> bool:
        """Check if every token has been consumed."""
        return self.pos >= len(self.tokens)

    def _check(self, *types: TokenType) -> bool:
        """Check if the current token is one of the given types."""
        token = self._current
        return token is not None and token.type in types

    def _advance(self) -> Token:
        """Consume and return the current token."""
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def _last_line(self) -> int:
        """Line of the last consumed token (1 before anything is consumed)."""
        previous = self._previous
        return previous.line if previous is not None else 1

    def _error(self, message: str, token: Optional[Token] = None) -> ParseError:
        """Create a parser error at a token, or at the last consumed line."""
        line = token.line if token is not None else self._last_line()
        return ParseError(message, line, token, self._filename)

    def _enter_nesting(self, token: Token) -> None:
        """Count one more open group or prefix operator."""
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            raise self._error("expression nested too deeply", token)

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    def parse(self) -> Expression:
        """
        Parse the whole token list as one expression.

        Returns:
            The root Expression node.

        Raises:
            ParseError: On the first grammar violation, when tokens are
                left over after the expression, or when groups and prefix
                operators nest deeper than MAX_NESTING_DEPTH.
        """
        self.pos = 0
        self._depth = 0
        node = self._parse_expression()

        if not self._is_at_end():
            token = self._current
            raise self._error(f"unexpected trailing token: {token.lexeme}", token)

        return node

    # -------------------------------------------------------------------------
    # Grammar rules, loosest to tightest
    # -------------------------------------------------------------------------

    def _parse_expression(self) -> Expression:
        """expression -> series"""
        line = self._current.line if self._current is not None else None
        return Expression(self._parse_series(), line=line)

    def _parse_series(self) -> ASTNode:
        """series -> equality ( "," equality )*"""
        node = self._parse_equality()

        while self._check(TokenType.COMMA):
            self._advance()
            node = Series(node, self._parse_equality(), line=node.line)

        return node

    def _parse_equality(self) -> ASTNode:
        """equality -> comparison ( ( "==" | "!=" ) comparison )*"""
        node = self._parse_comparison()

        while self._check(*EQUALITY_OP_MAP):
            operator = EQUALITY_OP_MAP[self._advance().type]
            right = self._parse_comparison()
            node = Equality(node, operator, right, line=node.line)

        return node

    def _parse_comparison(self) -> ASTNode:
        """comparison -> sum ( ( ">" | ">=" | "<" | "<=" ) sum )*"""
        node = self._parse_sum()

        while self._check(*COMPARISON_OP_MAP):
            operator = COMPARISON_OP_MAP[self._advance().type]
            right = self._parse_sum()
            node = Comparison(node, operator, right, line=node.line)

        return node

    def _parse_sum(self) -> ASTNode:
        """sum -> product ( ( "+" | "-" ) product )*"""
        node = self._parse_product()

        while self._check(*SUM_OP_MAP):
            operator = SUM_OP_MAP[self._advance().type]
            right = self._parse_product()
            node = Sum(node, operator, right, line=node.line)

        return node

    def _parse_product(self) -> ASTNode:
        """product -> unary ( ( "*" | "/" ) unary )*"""
        node = self._parse_unary()

        while self._check(*PRODUCT_OP_MAP):
            operator = PRODUCT_OP_MAP[self._advance().type]
            right = self._parse_unary()
            node = Product(node, operator, right, line=node.line)

        return node

    def _parse_unary(self) -> ASTNode:
        """unary -> ( "!" | "-" ) unary | primary"""
        if self._check(*UNARY_OP_MAP):
            token = self._advance()
            self._enter_nesting(token)
            # Right associative by recursion
            operand = self._parse_unary()
            self._depth -= 1
            return Unary(UNARY_OP_MAP[token.type], operand, line=token.line)

        return self._parse_primary()

    def _parse_primary(self) -> ASTNode:
        """primary -> NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")" """
        token = self._current
        if token is None:
            raise self._error("unexpected end of input")

        if token.type == TokenType.NUMBER:
            if not _NUMBER_LEXEME.fullmatch(token.lexeme):
                raise self._error(f"failed to parse number: {token.lexeme}", token)
            self._advance()
            return Primary(NumberLiteral(float(token.lexeme)), line=token.line)

        if token.type == TokenType.STRING:
            self._advance()
            return Primary(StringLiteral(token.lexeme), line=token.line)

        if token.type == TokenType.TRUE:
            self._advance()
            return Primary(BooleanLiteral(True), line=token.line)

        if token.type == TokenType.FALSE:
            self._advance()
            return Primary(BooleanLiteral(False), line=token.line)

        if token.type == TokenType.NIL:
            self._advance()
            return Primary(NilLiteral(), line=token.line)

        if token.type == TokenType.LEFT_PAREN:
            self._advance()
            self._enter_nesting(token)
            # Groups leave no node behind: return the inner expression itself
            inner = self._parse_series()
            if not self._check(TokenType.RIGHT_PAREN):
                raise self._error("expected ')' after expression")
            self._advance()
            self._depth -= 1
            return inner

        raise self._error(f"unexpected token: {token.lexeme}", token)


def parse(tokens: Sequence[Token], filename: Optional[str] = None) -> Expression:
    """
    Convenience function to parse a token list.

    Args:
        tokens: Tokens produced by the scanner
        filename: Optional filename for error reporting

    Returns:
        The root Expression node
    """
    return Parser(tokens, filename).parse()
