"""
Unit tests for the Lox Lexer.
"""

import pytest

from loxlang.compiler.lexer import Lexer, scan
from loxlang.compiler.tokens import KEYWORDS, Token, TokenType
from loxlang.utils.errors import ScanError


class TestLexerBasics:
    """Basic lexer functionality tests."""

    def test_empty_source(self, tokenize):
        """Empty source should produce no tokens at all."""
        assert tokenize("") == []

    def test_whitespace_only(self, tokenize):
        """Whitespace-only source should produce no tokens."""
        assert tokenize("   \t \r\n  ") == []

    def test_line_comment(self, tokenize):
        """Line comments should be skipped."""
        assert tokenize("// this is a comment") == []

    def test_comment_with_code(self, tokenize):
        """Comments should not affect adjacent code."""
        tokens = tokenize("1 // comment\n2")
        assert [t.lexeme for t in tokens] == ["1", "2"]
        assert [t.line for t in tokens] == [1, 2]

    def test_bare_slash_is_division(self, tokenize):
        """A single slash is the division operator, not a comment."""
        tokens = tokenize("4 / 2")
        assert [t.type for t in tokens] == [
            TokenType.NUMBER,
            TokenType.SLASH,
            TokenType.NUMBER,
        ]

    def test_scan_function_matches_lexer(self):
        """scan() should give the same tokens as Lexer.tokenize()."""
        source = "(1 + 2) * 3"
        assert scan(source) == Lexer(source).tokenize()

    def test_iteration(self):
        """Iterating over a lexer yields its tokens."""
        lexer = Lexer("1 + 2")
        assert [t.lexeme for t in lexer] == ["1", "+", "2"]

    def test_tokenize_twice_is_stable(self):
        """Tokenizing again starts from scratch."""
        lexer = Lexer("a\nb")
        first = lexer.tokenize()
        second = lexer.tokenize()
        assert first == second
        assert second[1].line == 2


class TestSingleLexemes:
    """Every valid single lexeme scans to exactly one token on line 1."""

    @pytest.mark.parametrize(
        "source, token_type",
        [
            ("(", TokenType.LEFT_PAREN),
            (")", TokenType.RIGHT_PAREN),
            ("{", TokenType.LEFT_BRACE),
            ("}", TokenType.RIGHT_BRACE),
            (";", TokenType.SEMICOLON),
            (",", TokenType.COMMA),
            (".", TokenType.DOT),
            ("+", TokenType.PLUS),
            ("-", TokenType.MINUS),
            ("*", TokenType.STAR),
            ("/", TokenType.SLASH),
            ("!", TokenType.BANG),
            ("!=", TokenType.BANG_EQUAL),
            ("=", TokenType.EQUAL),
            ("==", TokenType.EQUAL_EQUAL),
            (">", TokenType.GREATER),
            (">=", TokenType.GREATER_EQUAL),
            ("<", TokenType.LESS),
            ("<=", TokenType.LESS_EQUAL),
        ],
    )
    def test_punctuation(self, tokenize, source, token_type):
        """Each operator or punctuation symbol is one token."""
        tokens = tokenize(source)
        assert tokens == [Token(token_type, source, 1)]

    @pytest.mark.parametrize("word", sorted(KEYWORDS))
    def test_keywords(self, tokenize, word):
        """Each reserved word is one keyword token."""
        tokens = tokenize(word)
        assert tokens == [Token(KEYWORDS[word], word, 1)]
        assert tokens[0].is_keyword

    def test_string(self, tokenize):
        """A quoted string is one STRING token without its quotes."""
        assert tokenize('"hello world"') == [Token(TokenType.STRING, "hello world", 1)]

    def test_empty_string(self, tokenize):
        """An empty string has an empty lexeme."""
        assert tokenize('""') == [Token(TokenType.STRING, "", 1)]

    @pytest.mark.parametrize("source", ["0", "42", "3.14", "10.05"])
    def test_number(self, tokenize, source):
        """A decimal number is one NUMBER token with its raw text."""
        assert tokenize(source) == [Token(TokenType.NUMBER, source, 1)]

    @pytest.mark.parametrize("source", ["x", "foo_bar", "_private", "abc123"])
    def test_identifier(self, tokenize, source):
        """An identifier is one IDENTIFIER token."""
        tokens = tokenize(source)
        assert tokens == [Token(TokenType.IDENTIFIER, source, 1)]
        assert not tokens[0].is_keyword


class TestMaximalMunch:
    """Tests for two-character operator disambiguation."""

    def test_bang_equal(self, tokenize):
        """!= is a single BANG_EQUAL token."""
        tokens = tokenize("!=")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.BANG_EQUAL

    def test_greater_then_other(self, tokenize):
        """> followed by a non-= character stands alone."""
        tokens = tokenize(">1")
        assert [t.type for t in tokens] == [TokenType.GREATER, TokenType.NUMBER]

    def test_spaced_operator_is_two_tokens(self, tokenize):
        """A space between the characters splits the operator."""
        tokens = tokenize("= =")
        assert [t.type for t in tokens] == [TokenType.EQUAL, TokenType.EQUAL]

    def test_triple_equal(self, tokenize):
        """=== is == followed by =."""
        tokens = tokenize("===")
        assert [t.type for t in tokens] == [TokenType.EQUAL_EQUAL, TokenType.EQUAL]

    def test_bang_bang(self, tokenize):
        """!! is two BANG tokens."""
        tokens = tokenize("!!true")
        assert [t.type for t in tokens] == [TokenType.BANG, TokenType.BANG, TokenType.TRUE]


class TestNumbers:
    """Tests for number literal boundaries."""

    def test_trailing_dot_not_consumed(self, tokenize):
        """3. scans as NUMBER 3 followed by DOT."""
        tokens = tokenize("3.")
        assert tokens == [
            Token(TokenType.NUMBER, "3", 1),
            Token(TokenType.DOT, ".", 1),
        ]

    def test_dot_then_identifier(self, tokenize):
        """A dot followed by a letter is not a fraction."""
        tokens = tokenize("3.x")
        assert [t.type for t in tokens] == [
            TokenType.NUMBER,
            TokenType.DOT,
            TokenType.IDENTIFIER,
        ]

    def test_leading_dot(self, tokenize):
        """.5 is DOT followed by NUMBER 5."""
        tokens = tokenize(".5")
        assert tokens == [
            Token(TokenType.DOT, ".", 1),
            Token(TokenType.NUMBER, "5", 1),
        ]

    def test_two_fractions(self, tokenize):
        """1.2.3 is NUMBER 1.2, DOT, NUMBER 3."""
        tokens = tokenize("1.2.3")
        assert [t.lexeme for t in tokens] == ["1.2", ".", "3"]


class TestIdentifiers:
    """Tests for identifier and keyword separation."""

    def test_keyword_prefix_is_identifier(self, tokenize):
        """A word that starts with a keyword is still an identifier."""
        tokens = tokenize("orchid")
        assert tokens == [Token(TokenType.IDENTIFIER, "orchid", 1)]

    def test_keyword_suffix_is_identifier(self, tokenize):
        """A keyword followed by more identifier characters is an identifier."""
        tokens = tokenize("nil_value true2")
        assert [t.type for t in tokens] == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]

    def test_number_then_identifier(self, tokenize):
        """Digits before letters scan as two tokens."""
        tokens = tokenize("123abc")
        assert tokens == [
            Token(TokenType.NUMBER, "123", 1),
            Token(TokenType.IDENTIFIER, "abc", 1),
        ]


class TestLineTracking:
    """Tests for line numbers on tokens."""

    def test_newline_separated_numbers(self, tokenize):
        """Tokens on the next line carry the next line number."""
        tokens = tokenize("1\n2")
        assert tokens == [
            Token(TokenType.NUMBER, "1", 1),
            Token(TokenType.NUMBER, "2", 2),
        ]

    def test_comment_line_counts(self, tokenize):
        """A comment line still advances the line counter."""
        tokens = tokenize("// first\n// second\nnil")
        assert tokens == [Token(TokenType.NIL, "nil", 3)]

    def test_blank_lines(self, tokenize):
        """Blank lines are counted."""
        tokens = tokenize("\n\n\n+")
        assert tokens[0].line == 4


class TestLexerErrors:
    """Tests for scan errors."""

    def test_unterminated_string(self, tokenize):
        """An unterminated string names the opening line."""
        with pytest.raises(ScanError) as exc_info:
            tokenize('"abc')
        assert exc_info.value.line == 1
        assert exc_info.value.message == "unterminated string"

    def test_string_broken_by_newline(self, tokenize):
        """A newline inside a string terminates it with an error."""
        with pytest.raises(ScanError) as exc_info:
            tokenize('1\n"abc\ndef"')
        assert exc_info.value.line == 2
        assert "unterminated string" in str(exc_info.value)

    def test_unexpected_character(self, tokenize):
        """A stray character is reported with its line."""
        with pytest.raises(ScanError) as exc_info:
            tokenize("1 +\n@")
        assert exc_info.value.line == 2
        assert exc_info.value.message == "unexpected character: @"

    def test_error_string_format(self, tokenize):
        """str() of a scan error is the one-line report."""
        with pytest.raises(ScanError) as exc_info:
            tokenize("#")
        assert str(exc_info.value) == "[line 1] Error: unexpected character: #"

    def test_error_keeps_filename(self):
        """The filename given to the lexer travels with the error."""
        with pytest.raises(ScanError) as exc_info:
            Lexer("$", "demo.lox").tokenize()
        assert exc_info.value.filename == "demo.lox"


class TestTokenHelpers:
    """Tests for Token properties."""

    def test_repr(self):
        """Token repr shows type, lexeme and line."""
        token = Token(TokenType.NUMBER, "1", 1)
        assert repr(token) == "Token(NUMBER, '1', line 1)"

    def test_is_literal(self, tokenize):
        """Literal tokens report is_literal."""
        tokens = tokenize('1 "s" nil true false x +')
        assert [t.is_literal for t in tokens] == [True, True, True, True, True, False, False]

    def test_string_content_matching_keyword(self, tokenize):
        """A string whose content is a keyword is not a keyword token."""
        tokens = tokenize('"nil"')
        assert tokens[0].type == TokenType.STRING
        assert not tokens[0].is_keyword

    def test_tokens_are_immutable(self):
        """Tokens cannot be modified after creation."""
        token = Token(TokenType.PLUS, "+", 1)
        with pytest.raises(AttributeError):
            token.line = 2
