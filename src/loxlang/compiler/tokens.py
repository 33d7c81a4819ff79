"""
Token definitions for the Lox scanner.

This module defines every token type the scanner can produce: punctuation
and operators, literal kinds, and the reserved words of the language.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Enumeration of all token types in Lox."""

    # Single-character punctuation
    LEFT_PAREN = auto()     # (
    RIGHT_PAREN = auto()    # )
    LEFT_BRACE = auto()     # {
    RIGHT_BRACE = auto()    # }
    SEMICOLON = auto()      # ;
    COMMA = auto()          # ,
    DOT = auto()            # .
    PLUS = auto()           # +
    MINUS = auto()          # -
    STAR = auto()           # *
    SLASH = auto()          # /

    # One or two character operators
    BANG = auto()           # !
    BANG_EQUAL = auto()     # !=
    EQUAL = auto()          # =
    EQUAL_EQUAL = auto()    # ==
    GREATER = auto()        # >
    GREATER_EQUAL = auto()  # >=
    LESS = auto()           # <
    LESS_EQUAL = auto()     # <=

    # Literals
    STRING = auto()
    NUMBER = auto()
    IDENTIFIER = auto()

    # Keywords
    NIL = auto()
    TRUE = auto()
    FALSE = auto()
    AND = auto()
    OR = auto()
    IF = auto()
    ELSE = auto()
    FOR = auto()
    WHILE = auto()
    VAR = auto()
    FUN = auto()
    RETURN = auto()
    CLASS = auto()
    THIS = auto()
    SUPER = auto()
    PRINT = auto()


# Mapping of reserved words to token types
KEYWORDS: dict[str, TokenType] = {
    "nil": TokenType.NIL,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "and": TokenType.AND,
    "or": TokenType.OR,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "for": TokenType.FOR,
    "while": TokenType.WHILE,
    "var": TokenType.VAR,
    "fun": TokenType.FUN,
    "return": TokenType.RETURN,
    "class": TokenType.CLASS,
    "this": TokenType.THIS,
    "super": TokenType.SUPER,
    "print": TokenType.PRINT,
}

# Single character tokens
SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "!": TokenType.BANG,
    "=": TokenType.EQUAL,
    ">": TokenType.GREATER,
    "<": TokenType.LESS,
}

# Two character operators (checked before the single character table)
# Note: // is NOT here because it starts a line comment
DOUBLE_CHAR_TOKENS: dict[str, TokenType] = {
    "!=": TokenType.BANG_EQUAL,
    "==": TokenType.EQUAL_EQUAL,
    ">=": TokenType.GREATER_EQUAL,
    "<=": TokenType.LESS_EQUAL,
}


@dataclass(frozen=True, slots=True)
class Token:
    """
    Represents a single token from the source code.

    Attributes:
        type: The type of this token
        lexeme: Source text of the token (string contents without quotes)
        line: 1-indexed line the token starts on
    """

    type: TokenType
    lexeme: str
    line: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, line {self.line})"

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a reserved word."""
        return KEYWORDS.get(self.lexeme) is self.type

    @property
    def is_literal(self) -> bool:
        """Check if this token represents a literal value."""
        return self.type in {
            TokenType.STRING,
            TokenType.NUMBER,
            TokenType.NIL,
            TokenType.TRUE,
            TokenType.FALSE,
        }
