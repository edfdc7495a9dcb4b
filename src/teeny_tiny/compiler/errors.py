"""
Teeny Tiny Compiler Error Hierarchy
===================================

This module defines the exception hierarchy for the Teeny Tiny compiler.
All exceptions inherit from CompileError, which itself inherits from
the base TeenyTinyError for consistent error handling across the package.

Exception Hierarchy
-------------------
CompileError (base for all compiler errors)
├── LexError - lexical errors
│   ├── UnexpectedCharacterError - character outside every token class
│   ├── UnterminatedStringError - missing closing quote
│   └── InvalidNumberError - malformed numeric literal
├── ParseError - grammar and semantic errors
│   ├── UnexpectedTokenError - lookahead does not match the production
│   ├── UnterminatedBlockError - end of file inside IF/WHILE
│   ├── DuplicateLabelError - LABEL declared twice
│   ├── UndeclaredVariableError - variable read before LET/INPUT
│   └── UndefinedLabelError - GOTO targets with no LABEL

Both LexError and ParseError are fatal: the compiler never recovers from
them and never writes a partial output file.

Example:
    loop.teeny:3:7: error: undeclared variable 'cuont'
        PRINT cuont
              ^
    hint: did you mean 'count'?
"""

from typing import Optional

from teeny_tiny.errors import TeenyTinyError, SourceLocation


# =============================================================================
# Base Compiler Exception
# =============================================================================

class CompileError(TeenyTinyError):
    """
    Base exception for all Teeny Tiny compiler errors.

    Provides common functionality for error messages including source
    location tracking, source line context, and helpful hints.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        """Line number of the error, if known."""
        return self.location.line if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            hello.teeny:2:7: error: unterminated string literal
                PRINT "oops
                      ^
            hint: add a closing '"' on the same line
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class LexError(CompileError):
    """
    Lexical error in Teeny Tiny source.

    Raised by the lexer when the source text cannot be split into tokens.
    Carries the offending text so tools can highlight it.
    """

    def __init__(
        self,
        message: str,
        text: str = "",
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(message, location=location, hint=hint, source_line=source_line)


class UnexpectedCharacterError(LexError):
    """
    Character that does not start any token.

    Example:
        LET x = 3 $ 4
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unexpected character '{char}' (0x{ord(char):02X})",
            text=char,
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnterminatedStringError(LexError):
    """
    String literal not closed before the end of the line or file.

    Example:
        PRINT "hello
    """

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated string literal",
            text=text,
            location=location,
            hint="add a closing '\"' on the same line",
            source_line=source_line,
        )


class InvalidNumberError(LexError):
    """
    Malformed numeric literal.

    Examples:
        LET x = 1.2.3
        LET y = 7.
    """

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            f"invalid number '{text}'",
            text=text,
            location=location,
            hint="numbers are digits with at most one '.' followed by more digits",
            source_line=source_line,
        )


# =============================================================================
# Parse Errors (Grammar and Semantics)
# =============================================================================

class ParseError(CompileError):
    """
    Grammar or semantic error in Teeny Tiny source.

    Attributes:
        production: Name of the grammar rule being matched when the
                    error was detected (e.g. "statement", "comparison")
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        production: Optional[str] = None,
    ):
        self.production = production
        super().__init__(message, location=location, hint=hint, source_line=source_line)


class UnexpectedTokenError(ParseError):
    """
    Lookahead token does not match what the grammar requires.

    Attributes:
        expected: Description of the expected token kind(s)
        found: Name of the token kind actually seen
        text: Source text of the offending token
    """

    def __init__(
        self,
        expected: str,
        found: str,
        text: str = "",
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        production: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        self.text = text

        shown = found if not text or text == "\n" else f"{found} '{text}'"
        message = f"expected {expected}, found {shown}"
        if production:
            message += f" in {production}"

        super().__init__(
            message,
            location=location,
            source_line=source_line,
            production=production,
        )


class UnterminatedBlockError(ParseError):
    """
    End of file reached inside an IF or WHILE body.

    Attributes:
        keyword: The opening keyword (IF or WHILE)
        closing: The closing keyword that was never seen
        opened_at: Location of the opening keyword
    """

    def __init__(
        self,
        keyword: str,
        closing: str,
        opened_at: Optional[SourceLocation] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.keyword = keyword
        self.closing = closing
        self.opened_at = opened_at

        hint = None
        if opened_at:
            hint = f"the {keyword} block opened at {opened_at} needs a matching {closing}"

        super().__init__(
            f"unterminated {keyword} block: reached end of file before {closing}",
            location=location,
            hint=hint,
            source_line=source_line,
            production="statement",
        )


class DuplicateLabelError(ParseError):
    """
    LABEL declared more than once.

    Labels share one flat namespace across the whole program, including
    labels declared inside IF and WHILE bodies.
    """

    def __init__(
        self,
        label: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.label = label
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{label}' was first declared at {original_location}"

        super().__init__(
            f"duplicate label '{label}'",
            location=location,
            hint=hint,
            source_line=source_line,
            production="statement",
        )


class UndeclaredVariableError(ParseError):
    """
    Variable read before any LET or INPUT assigned it.

    The parser suggests similarly-named variables when it can, to catch
    typos.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_names: Optional[list[str]] = None,
    ):
        self.name = name
        self.similar_names = similar_names or []

        if self.similar_names:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_names[:3])
            hint = f"did you mean {suggestions}?"
        else:
            hint = f"assign it first with 'LET {name} = ...' or 'INPUT {name}'"

        super().__init__(
            f"undeclared variable '{name}'",
            location=location,
            hint=hint,
            source_line=source_line,
            production="primary",
        )


class UndefinedLabelError(ParseError):
    """
    One or more GOTO targets were never declared with LABEL.

    Label checks run after the whole program has been parsed, so every
    missing label is reported in this single error.

    Attributes:
        labels: Mapping of missing label name to the location of its
                first GOTO, in source order
    """

    def __init__(self, labels: dict[str, SourceLocation]):
        self.labels = dict(labels)
        names = ", ".join(f"'{name}'" for name in self.labels)
        word = "label" if len(self.labels) == 1 else "labels"

        first = next(iter(self.labels.values()), None)
        hint = None
        if len(self.labels) > 1:
            hint = "; ".join(f"'{name}' referenced at {loc}" for name, loc in self.labels.items())

        super().__init__(
            f"GOTO to undefined {word} {names}",
            location=first,
            hint=hint,
            production="program",
        )

    @property
    def missing(self) -> list[str]:
        """Names of the missing labels in order of first reference."""
        return list(self.labels)

