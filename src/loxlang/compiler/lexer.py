"""
Lox Lexer (Scanner).

Transforms Lox source code into a list of tokens in a single forward pass.
Scanning stops at the first lexical fault; no partial token list is
returned on error.
"""

from typing import Iterator, Optional

from loxlang.compiler.tokens import (
    Token,
    TokenType,
    KEYWORDS,
    SINGLE_CHAR_TOKENS,
    DOUBLE_CHAR_TOKENS,
)
from loxlang.utils.errors import ScanError

DIGITS = "0123456789"


class Lexer:
    """
    Tokenizer for Lox source code.

    The lexer supports:
    - Punctuation and one or two character operators (maximal munch)
    - Number literals with an optional fractional part
    - Double quoted string literals (no escape sequences)
    - Identifiers and reserved words
    - Line comments starting with //

    Usage:
        lexer = Lexer(source_code)
        tokens = lexer.tokenize()
        # or iterate: for token in lexer: ...
    """

    def __init__(self, source: str, filename: Optional[str] = None) -> None:
        """
        Initialize the lexer with source code.

        Args:
            source: The Lox source code to tokenize
            filename: Optional filename for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.tokens: list[Token] = []

        # Start offset of the lexeme being scanned
        self._start = 0

    @property
    def _current_char(self) -> Optional[str]:
        """Return the current character or None if at end."""
        if self.pos >= len(self.source):
            return None
        return self.source[self.pos]

    @property
    def _peek_char(self) -> Optional[str]:
        """Return the next character without consuming it."""
        peek_pos = self.pos + 1
        if peek_pos >= len(self.source):
            return None
        return self.source[peek_pos]

    def _advance(self) -> str:
        """Consume and return the current character."""
        char = self.source[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
        return char

    def _error(self, message: str, line: Optional[int] = None) -> ScanError:
        return ScanError(message, self.line if line is None else line, self.filename)

    def _make_token(self, token_type: TokenType, lexeme: Optional[str] = None) -> Token:
        if lexeme is None:
            lexeme = self.source[self._start:self.pos]
        return Token(token_type, lexeme, self.line)

    def _skip_whitespace(self) -> None:
        """Skip blanks and newlines; newlines bump the line counter in _advance."""
        while self._current_char is not None and self._current_char in " \t\r\n":
            self._advance()

    def _skip_line_comment(self) -> bool:
        """Skip a // comment up to (not including) the end of the line.

        Returns True if a comment was skipped.
        """
        if self._current_char == "/" and self._peek_char == "/":
            while self._current_char is not None and self._current_char != "\n":
                self._advance()
            return True
        return False

    def _read_string(self) -> Token:
        """
        Read a string literal.

        The lexeme is the text between the quotes. Strings may not span
        lines and have no escape sequences.
        """
        start_line = self.line
        self._advance()  # consume opening quote

        while self._current_char != '"':
            if self._current_char is None or self._current_char == "\n":
                raise self._error("unterminated string", start_line)
            self._advance()

        value = self.source[self._start + 1:self.pos]
        self._advance()  # consume closing quote
        return Token(TokenType.STRING, value, start_line)

    def _read_number(self) -> Token:
        """
        Read a number literal.

        Supports:
        - Integers: 123
        - Decimals: 123.456

        The dot is only part of the number when a digit follows it, so
        "3." scans as NUMBER "3" followed by DOT.
        """
        while self._current_char is not None and self._current_char in DIGITS:
            self._advance()

        if (
            self._current_char == "."
            and self._peek_char is not None
            and self._peek_char in DIGITS
        ):
            self._advance()  # consume '.'
            while self._current_char is not None and self._current_char in DIGITS:
                self._advance()

        return self._make_token(TokenType.NUMBER)

    def _read_identifier_or_keyword(self) -> Token:
        """
        Read an identifier or keyword.

        Identifiers start with a letter or underscore and contain
        letters, digits, and underscores. The whole run is looked up in
        the keyword table once it has been consumed.
        """
        while self._current_char is not None and (
            self._current_char.isalnum() or self._current_char == "_"
        ):
            self._advance()

        identifier = self.source[self._start:self.pos]
        return self._make_token(KEYWORDS.get(identifier, TokenType.IDENTIFIER))

    def _read_operator(self) -> Optional[Token]:
        """
        Read an operator or punctuation token (single or double character).

        Returns:
            The token, or None if the current character is not an operator.
        """
        # Try two-character operators first
        if self._peek_char is not None:
            two_char = self._current_char + self._peek_char
            if two_char in DOUBLE_CHAR_TOKENS:
                self._advance()
                self._advance()
                return self._make_token(DOUBLE_CHAR_TOKENS[two_char])

        if self._current_char in SINGLE_CHAR_TOKENS:
            token_type = SINGLE_CHAR_TOKENS[self._advance()]
            return self._make_token(token_type)

        return None

    def _next_token(self) -> Optional[Token]:
        """
        Extract the next token from the source.

        Returns:
            The next token, or None if at end of source.
        """
        # Skip whitespace and comments
        while True:
            self._skip_whitespace()
            if self._skip_line_comment():
                continue
            break

        if self._current_char is None:
            return None

        self._start = self.pos
        char = self._current_char

        if char == '"':
            return self._read_string()

        if char in DIGITS:
            return self._read_number()

        if char.isalpha() or char == "_":
            return self._read_identifier_or_keyword()

        op_token = self._read_operator()
        if op_token is not None:
            return op_token

        raise self._error(f"unexpected character: {char}")

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source code.

        Returns:
            A list of all tokens in source order. There is no end marker.

        Raises:
            ScanError: On the first unterminated string or unexpected character.
        """
        self.tokens = []
        self.pos = 0
        self.line = 1
        self._start = 0

        tokens: list[Token] = []
        while True:
            token = self._next_token()
            if token is None:
                break
            tokens.append(token)

        self.tokens = tokens
        return self.tokens

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens (tokenizes on first use)."""
        if not self.tokens:
            self.tokenize()
        return iter(self.tokens)


def scan(source: str, filename: Optional[str] = None) -> list[Token]:
    """
    Convenience function to tokenize source code.

    Args:
        source: Lox source code
        filename: Optional filename for error reporting

    Returns:
        List of tokens
    """
    return Lexer(source, filename).tokenize()
