"""
Teeny Tiny Lexer (Tokenizer)
============================

This module implements the lexer for the Teeny Tiny language.
It converts source text into a lazy stream of tokens for the parser.

Token Categories
----------------
- Keywords: PRINT, IF, THEN, ENDIF, WHILE, REPEAT, ENDWHILE, LABEL,
  GOTO, LET, INPUT (upper case only)
- Identifiers: variable and label names
- Numbers: 42, 3.14
- Strings: "double quoted", single line, no escapes
- Operators: + - * / = == != < <= > >=
- NEWLINE: one or more line breaks, collapsed

Comments
--------
A '#' discards the rest of the physical line.

Example Usage
-------------
>>> from teeny_tiny.compiler.lexer import Lexer
>>> for token in Lexer('LET foo = 12.5 # set foo').tokenize():
...     print(token)
Token(LET, 'LET', 1:1)
Token(IDENT, 'foo', 1:5)
Token(EQ, '=', 1:9)
Token(NUMBER, '12.5', 1:11)
Token(NEWLINE, 1:25)
Token(EOF, 2:1)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import string

from teeny_tiny.errors import SourceLocation
from teeny_tiny.compiler.errors import (
    InvalidNumberError,
    UnexpectedCharacterError,
    UnterminatedStringError,
)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Token kinds for the Teeny Tiny language.

    Keywords are distinguished from identifiers so the parser can pick
    a statement production from the kind alone.
    """

    # === Structural Tokens ===
    EOF = auto()
    NEWLINE = auto()

    # === Identifiers and Literals ===
    IDENT = auto()
    NUMBER = auto()
    STRING = auto()

    # === Keywords ===
    LABEL = auto()
    GOTO = auto()
    PRINT = auto()
    INPUT = auto()
    LET = auto()
    IF = auto()
    THEN = auto()
    ENDIF = auto()
    WHILE = auto()
    REPEAT = auto()
    ENDWHILE = auto()

    # === Operators ===
    EQ = auto()             # =
    PLUS = auto()           # +
    MINUS = auto()          # -
    ASTERISK = auto()       # *
    SLASH = auto()          # /
    EQEQ = auto()           # ==
    NOTEQ = auto()          # !=
    LT = auto()             # <
    LTEQ = auto()           # <=
    GT = auto()             # >
    GTEQ = auto()           # >=

    @property
    def is_comparison(self) -> bool:
        return self in COMPARISON_OPERATORS


# Map keyword spellings to their token kinds
KEYWORDS: dict[str, TokenKind] = {
    "LABEL": TokenKind.LABEL,
    "GOTO": TokenKind.GOTO,
    "PRINT": TokenKind.PRINT,
    "INPUT": TokenKind.INPUT,
    "LET": TokenKind.LET,
    "IF": TokenKind.IF,
    "THEN": TokenKind.THEN,
    "ENDIF": TokenKind.ENDIF,
    "WHILE": TokenKind.WHILE,
    "REPEAT": TokenKind.REPEAT,
    "ENDWHILE": TokenKind.ENDWHILE,
}

COMPARISON_OPERATORS = frozenset({
    TokenKind.EQEQ,
    TokenKind.NOTEQ,
    TokenKind.LT,
    TokenKind.LTEQ,
    TokenKind.GT,
    TokenKind.GTEQ,
})

# Single character operators that never start a two character operator
SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
}

# Operators that may be followed by '=': char -> (single kind, kind with '=')
EQUALS_PAIRS: dict[str, tuple[Optional[TokenKind], TokenKind]] = {
    "=": (TokenKind.EQ, TokenKind.EQEQ),
    "<": (TokenKind.LT, TokenKind.LTEQ),
    ">": (TokenKind.GT, TokenKind.GTEQ),
    "!": (None, TokenKind.NOTEQ),
}

COMMENT_CHAR = "#"


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified token.

    Attributes:
        kind: The TokenKind classification
        text: The exact source text (string contents without the quotes)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    kind: TokenKind
    text: str
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.kind in (TokenKind.NEWLINE, TokenKind.EOF):
            return f"Token({self.kind.name}, {self.line}:{self.column})"
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes Teeny Tiny source code.

    The lexer walks the source with a single forward cursor and one
    character of lookahead. A newline is appended to the source so the
    last statement is always terminated.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"
    DIGITS = frozenset(string.digits)

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: The complete Teeny Tiny program text
            filename: Name of the source file (for error messages)
        """
        self.source = source + "\n"
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects, ending with a single EOF token

        Raises:
            LexError: If the source contains an invalid lexeme
        """
        while True:
            self._skip_whitespace_and_comment()
            if self._at_end():
                break
            yield self._scan_token()

        yield self._make_token(TokenKind.EOF, "", self._line, self._column)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at cursor + offset, or '' past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _match(self, expected: str) -> bool:
        if self._peek() == expected:
            self._advance()
            return True
        return False

    # =========================================================================
    # Whitespace and Comments
    # =========================================================================

    def _skip_whitespace_and_comment(self) -> None:
        """Skip blanks, then a comment if one starts here."""
        while self._peek() in (" ", "\t", "\r"):
            self._advance()

        if self._peek() == COMMENT_CHAR:
            while not self._at_end() and self._peek() != "\n":
                self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _make_token(self, kind: TokenKind, text: str, line: int, column: int) -> Token:
        return Token(kind=kind, text=text, line=line, column=column, filename=self.filename)

    def _scan_token(self) -> Token:
        start_line = self._line
        start_column = self._column
        char = self._peek()

        if char == "\n":
            return self._scan_newlines(start_line, start_column)

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        if char in self.DIGITS:
            return self._scan_number(start_line, start_column)

        if char == '"':
            return self._scan_string(start_line, start_column)

        return self._scan_operator(start_line, start_column)

    def _scan_newlines(self, start_line: int, start_column: int) -> Token:
        """
        Collapse a run of line breaks into one NEWLINE token.

        Lines holding only whitespace or a comment are part of the run.
        """
        self._advance()
        while True:
            self._skip_whitespace_and_comment()
            if not self._match("\n"):
                break
        return self._make_token(TokenKind.NEWLINE, "\n", start_line, start_column)

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        kind = KEYWORDS.get(name, TokenKind.IDENT)
        return self._make_token(kind, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """
        Scan digits with an optional fractional part.

        A '.' must be followed by at least one digit, and only one '.' is
        allowed per literal.
        """
        chars = []
        while self._peek() in self.DIGITS:
            chars.append(self._advance())

        if self._peek() == ".":
            chars.append(self._advance())
            if self._peek() not in self.DIGITS:
                raise self._invalid_number(chars, start_line, start_column)
            while self._peek() in self.DIGITS:
                chars.append(self._advance())

            if self._peek() == ".":
                raise self._invalid_number(chars, start_line, start_column)

        return self._make_token(TokenKind.NUMBER, "".join(chars), start_line, start_column)

    def _invalid_number(self, chars: list[str], start_line: int, start_column: int) -> InvalidNumberError:
        """Build the error for a malformed literal, swallowing its remaining text."""
        while self._peek() in self.DIGITS or self._peek() == ".":
            chars.append(self._advance())
        return InvalidNumberError(
            "".join(chars),
            SourceLocation(self.filename, start_line, start_column),
            self._get_current_line(),
        )

    def _scan_string(self, start_line: int, start_column: int) -> Token:
        """Scan a double-quoted literal that must close on the same line."""
        self._advance()

        chars = []
        while not self._at_end() and self._peek() != "\n":
            char = self._advance()
            if char == '"':
                return self._make_token(TokenKind.STRING, "".join(chars), start_line, start_column)
            chars.append(char)

        raise UnterminatedStringError(
            '"' + "".join(chars),
            SourceLocation(self.filename, start_line, start_column),
            self._get_current_line(),
        )

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        char = self._advance()

        if char in SINGLE_CHAR_TOKENS:
            return self._make_token(SINGLE_CHAR_TOKENS[char], char, start_line, start_column)

        if char in EQUALS_PAIRS:
            single, double = EQUALS_PAIRS[char]
            if self._match("="):
                return self._make_token(double, char + "=", start_line, start_column)
            if single is not None:
                return self._make_token(single, char, start_line, start_column)
            raise UnexpectedCharacterError(
                char,
                SourceLocation(self.filename, start_line, start_column),
                self._get_current_line(),
                hint="did you mean '!='?",
            )

        raise UnexpectedCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column),
            self._get_current_line(),
        )

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]
