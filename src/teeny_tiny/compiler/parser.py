"""
Teeny Tiny Recursive Descent Parser
===================================

This module implements a single-pass recursive descent parser for Teeny
Tiny. It pulls tokens from the lexer one at a time, keeps exactly one
token of lookahead, and drives the Emitter as each production is
recognized. No syntax tree is built.

Grammar
-------
program    ::= { statement }
statement  ::= "PRINT" (expression | string) NL
             | "IF" comparison "THEN" NL { statement } "ENDIF" NL
             | "WHILE" comparison "REPEAT" NL { statement } "ENDWHILE" NL
             | "LABEL" ident NL
             | "GOTO" ident NL
             | "LET" ident "=" expression NL
             | "INPUT" ident NL
comparison ::= expression (("==" | "!=" | "<" | "<=" | ">" | ">=") expression)+
expression ::= term { ("-" | "+") term }
term       ::= unary { ("*" | "/") unary }
unary      ::= ["+" | "-"] primary
primary    ::= number | ident
NL         ::= newline+

Semantic Checks
---------------
- A variable must appear in a LET or INPUT before it is read. The target
  of a LET counts as declared within its own right-hand side.
- A label may be declared only once in the whole program.
- Every GOTO target must be declared somewhere; this is checked after the
  last statement so forward jumps are legal, and all missing labels are
  reported together.

Names are emitted through c_name() and numbers through c_number(), so
the C never sees a bare Teeny Tiny identifier or an int constant.

Example Usage
-------------
>>> from teeny_tiny.compiler.lexer import Lexer
>>> from teeny_tiny.compiler.emitter import Emitter
>>> emitter = Emitter()
>>> Parser(Lexer("LET x = 5\\nPRINT x\\n"), emitter).parse()
>>> print(emitter.finalize())
"""

import logging
from typing import Callable, Optional

from teeny_tiny.errors import SourceLocation
from teeny_tiny.compiler.lexer import Lexer, Token, TokenKind
from teeny_tiny.compiler.emitter import Emitter, c_name, c_number
from teeny_tiny.compiler.errors import (
    DuplicateLabelError,
    UndeclaredVariableError,
    UndefinedLabelError,
    UnexpectedTokenError,
    UnterminatedBlockError,
)

logger = logging.getLogger(__name__)


class Parser:
    """
    Recursive descent parser and translator for Teeny Tiny.

    One instance compiles one program: the symbol tables live on the
    instance and only ever grow during ``parse()``.

    Attributes:
        declared_labels: Label name -> location of its LABEL statement
        referenced_labels: Label name -> location of its first GOTO
        variables: Variable name -> location of its first LET/INPUT
        warnings: Non-fatal diagnostics (e.g. labels no GOTO targets)
    """

    def __init__(
        self,
        lexer: Lexer,
        emitter: Emitter,
        float_format: str = "%.2f",
    ):
        """
        Initialize the parser and read the first lookahead token.

        Args:
            lexer: Token source
            emitter: Destination for generated C
            float_format: printf conversion used by numeric PRINT
        """
        self.lexer = lexer
        self.emitter = emitter
        self.float_format = float_format
        self.source_lines = lexer.source.splitlines()

        self.declared_labels: dict[str, SourceLocation] = {}
        self.referenced_labels: dict[str, SourceLocation] = {}
        self.variables: dict[str, SourceLocation] = {}
        self.warnings: list[str] = []

        self.token_count = 0

        self._tokens = lexer.tokenize()
        self._current: Token = self._next_from_lexer()

        self._statements: dict[TokenKind, Callable[[], None]] = {
            TokenKind.PRINT: self._print_statement,
            TokenKind.IF: self._if_statement,
            TokenKind.WHILE: self._while_statement,
            TokenKind.LABEL: self._label_statement,
            TokenKind.GOTO: self._goto_statement,
            TokenKind.LET: self._let_statement,
            TokenKind.INPUT: self._input_statement,
        }

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _next_from_lexer(self) -> Token:
        token = next(self._tokens, None)
        if token is None:
            # The lexer ends with EOF; keep returning it
            return self._current
        self.token_count += 1
        return token

    @property
    def current(self) -> Token:
        """The lookahead token."""
        return self._current

    def _check(self, *kinds: TokenKind) -> bool:
        return self._current.kind in kinds

    def _advance(self) -> Token:
        """Consume the lookahead token and return it."""
        token = self._current
        if token.kind != TokenKind.EOF:
            self._current = self._next_from_lexer()
        return token

    def _expect(self, kind: TokenKind, production: str, expected: Optional[str] = None) -> Token:
        """
        Consume a token of the given kind.

        Raises:
            UnexpectedTokenError: If the lookahead is of another kind
        """
        if self._check(kind):
            return self._advance()
        raise self._unexpected(expected or kind.name, production)

    def _unexpected(self, expected: str, production: str) -> UnexpectedTokenError:
        token = self._current
        return UnexpectedTokenError(
            expected,
            token.kind.name,
            token.text,
            token.location,
            self._get_source_line(token.line),
            production=production,
        )

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Program
    # =========================================================================

    def parse(self) -> None:
        """
        Parse the whole program, emitting C as statements are recognized.

        Raises:
            LexError: On an invalid lexeme
            ParseError: On a grammar or semantic violation
        """
        # program ::= { statement }, leading blank lines allowed
        while self._check(TokenKind.NEWLINE):
            self._advance()

        while not self._check(TokenKind.EOF):
            self._statement()

        self._check_labels()

        logger.debug(
            "Parsed %d tokens: %d variables, %d labels",
            self.token_count, len(self.variables), len(self.declared_labels),
        )

    def _check_labels(self) -> None:
        """Verify every GOTO target was declared; report all at once."""
        missing = {
            name: location
            for name, location in self.referenced_labels.items()
            if name not in self.declared_labels
        }
        if missing:
            raise UndefinedLabelError(missing)

        for name, location in self.declared_labels.items():
            if name not in self.referenced_labels:
                self.warnings.append(f"{location}: warning: label '{name}' is never used")

    # =========================================================================
    # Statements
    # =========================================================================

    def _statement(self) -> None:
        handler = self._statements.get(self._current.kind)
        if handler is None:
            raise self._unexpected("a statement keyword", "statement")
        handler()
        self._newline("statement")

    def _newline(self, production: str) -> None:
        # NL ::= newline+ (the lexer already collapses runs)
        self._expect(TokenKind.NEWLINE, production, "NEWLINE")
        while self._check(TokenKind.NEWLINE):
            self._advance()

    def _print_statement(self) -> None:
        # "PRINT" (expression | string)
        self._advance()
        if self._check(TokenKind.STRING):
            self.emitter.emit_print_string(self._advance().text)
            return

        self.emitter.begin_print_number(self.float_format)
        self._expression()
        self.emitter.end_print_number()

    def _if_statement(self) -> None:
        # "IF" comparison "THEN" NL { statement } "ENDIF"
        opener = self._advance()
        self.emitter.emit("if (")
        self._comparison()
        self._expect(TokenKind.THEN, "IF statement")
        self._newline("IF statement")
        self.emitter.emit_line(") {")
        self._block(opener, TokenKind.ENDIF)
        self.emitter.emit_line("}")

    def _while_statement(self) -> None:
        # "WHILE" comparison "REPEAT" NL { statement } "ENDWHILE"
        opener = self._advance()
        self.emitter.emit("while (")
        self._comparison()
        self._expect(TokenKind.REPEAT, "WHILE statement")
        self._newline("WHILE statement")
        self.emitter.emit_line(") {")
        self._block(opener, TokenKind.ENDWHILE)
        self.emitter.emit_line("}")

    def _block(self, opener: Token, closing: TokenKind) -> None:
        """Parse statements up to and including the closing keyword."""
        self.emitter.indent()
        while not self._check(closing):
            if self._check(TokenKind.EOF):
                raise UnterminatedBlockError(
                    opener.kind.name,
                    closing.name,
                    opened_at=opener.location,
                    location=self._current.location,
                )
            self._statement()
        self._advance()
        self.emitter.dedent()

    def _label_statement(self) -> None:
        # "LABEL" ident
        self._advance()
        token = self._expect(TokenKind.IDENT, "LABEL statement", "label name")

        if token.text in self.declared_labels:
            raise DuplicateLabelError(
                token.text,
                token.location,
                original_location=self.declared_labels[token.text],
                source_line=self._get_source_line(token.line),
            )
        self.declared_labels[token.text] = token.location
        logger.debug("Declared label '%s' at %s", token.text, token.location)

        # The empty statement keeps a label legal at the end of a C block
        self.emitter.emit_line(f"{c_name(token.text)}:;")

    def _goto_statement(self) -> None:
        # "GOTO" ident
        self._advance()
        token = self._expect(TokenKind.IDENT, "GOTO statement", "label name")
        self.referenced_labels.setdefault(token.text, token.location)
        self.emitter.emit_line(f"goto {c_name(token.text)};")

    def _let_statement(self) -> None:
        # "LET" ident "=" expression
        self._advance()
        token = self._expect(TokenKind.IDENT, "LET statement", "variable name")
        self._expect(TokenKind.EQ, "LET statement", "'='")

        # The target is declared first, so "LET x = x + 1" may introduce x
        self._declare(token)
        self.emitter.emit(f"{c_name(token.text)} = ")
        self._expression()
        self.emitter.emit_line(";")

    def _input_statement(self) -> None:
        # "INPUT" ident
        self._advance()
        token = self._expect(TokenKind.IDENT, "INPUT statement", "variable name")
        self._declare(token)
        self.emitter.emit_input(token.text)

    def _declare(self, token: Token) -> None:
        """Record a variable on first assignment and declare it in the header."""
        if token.text not in self.variables:
            self.variables[token.text] = token.location
            self.emitter.emit_declaration(token.text)
            logger.debug("Declared variable '%s' at %s", token.text, token.location)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _comparison(self) -> None:
        """
        comparison ::= expression (relop expression)+

        A chain ``a < b < c`` becomes ``a < b && b < c``: each operand
        between two operators is emitted on both sides.
        """
        with self.emitter.capture() as parts:
            self._expression()
        left = "".join(parts)

        if not self._current.kind.is_comparison:
            raise self._unexpected("a comparison operator", "comparison")

        checks = []
        while self._current.kind.is_comparison:
            operator = self._advance().text
            with self.emitter.capture() as parts:
                self._expression()
            right = "".join(parts)
            checks.append(f"{left} {operator} {right}")
            left = right

        self.emitter.emit(" && ".join(checks))

    def _expression(self) -> None:
        # expression ::= term { ("-" | "+") term }
        self._term()
        while self._check(TokenKind.PLUS, TokenKind.MINUS):
            self.emitter.emit(f" {self._advance().text} ")
            self._term()

    def _term(self) -> None:
        # term ::= unary { ("*" | "/") unary }
        self._unary()
        while self._check(TokenKind.ASTERISK, TokenKind.SLASH):
            self.emitter.emit(f" {self._advance().text} ")
            self._unary()

    def _unary(self) -> None:
        # unary ::= ["+" | "-"] primary
        if self._check(TokenKind.PLUS, TokenKind.MINUS):
            self.emitter.emit(self._advance().text)
        self._primary()

    def _primary(self) -> None:
        # primary ::= number | ident
        if self._check(TokenKind.NUMBER):
            self.emitter.emit(c_number(self._advance().text))
            return

        if self._check(TokenKind.IDENT):
            token = self._current
            if token.text not in self.variables:
                raise UndeclaredVariableError(
                    token.text,
                    token.location,
                    self._get_source_line(token.line),
                    similar_names=self._find_similar_variables(token.text),
                )
            self.emitter.emit(c_name(self._advance().text))
            return

        raise self._unexpected("a number or variable", "primary")

    # =========================================================================
    # Diagnostics Helpers
    # =========================================================================

    def _find_similar_variables(self, name: str) -> list[str]:
        """
        Find declared variables with similar names for error hints.

        Uses a simple edit distance heuristic.
        """
        name_lower = name.lower()
        similar = []

        for var in self.variables:
            var_lower = var.lower()
            if (
                var_lower == name_lower or
                abs(len(var) - len(name)) <= 1 and
                _edit_distance(name_lower, var_lower) <= 2
            ):
                similar.append(var)

        return similar[:3]


def _edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous[j + 1] + 1
            deletions = current[j] + 1
            substitutions = previous[j] + (c1 != c2)
            current.append(min(insertions, deletions, substitutions))
        previous = current

    return previous[-1]
