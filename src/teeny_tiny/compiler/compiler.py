"""
Teeny Tiny Compiler Main Module
===============================

This module provides the main compiler interface for Teeny Tiny.
It orchestrates the complete translation:

    Source → Lex → Parse (+ Emit) → C

Usage
-----
Command line:
    $ ttc hello.teeny -o hello.c
    $ gcc -std=c99 -o hello hello.c

Programmatic:
    >>> from teeny_tiny.compiler import compile_teeny
    >>> c_source = compile_teeny('PRINT "Hi"\\n')

Error Handling
--------------
Every LexError or ParseError is fatal and propagates to the caller
unchanged. Output files are written only after the whole program has
been translated, so a failed compile never leaves a partial file.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from teeny_tiny.compiler.lexer import Lexer, Token
from teeny_tiny.compiler.parser import Parser
from teeny_tiny.compiler.emitter import Emitter
from teeny_tiny.compiler.errors import CompileError

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        float_format: printf conversion used when PRINTing a number.
                      The language prints two decimals ("%.2f").
        indent: Text used for one level of indentation in the output
        emit_comments: Put a banner naming the source file at the top
                       of the generated C
    """
    float_format: str = "%.2f"
    indent: str = "    "
    emit_comments: bool = True


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename
        success: True if compilation succeeded
        output: Generated C source
        token_count: Number of tokens consumed by the parser
        variables: Declared variables in declaration order
        labels: Declared labels in declaration order
        warnings: Non-fatal diagnostics
    """
    filename: str = ""
    success: bool = False
    output: str = ""
    token_count: int = 0
    variables: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class TeenyTinyCompiler:
    """
    Teeny Tiny to C compiler.

    Each call to ``compile_source()`` builds a fresh lexer, parser and
    emitter, so one compiler object can be reused without state leaking
    between programs.

    Example:
        compiler = TeenyTinyCompiler()
        result = compiler.compile_file("hello.teeny")
        print(result.output)
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile Teeny Tiny source code to C.

        Args:
            source: Teeny Tiny program text
            filename: Source filename for error messages

        Returns:
            CompilerResult with the generated C

        Raises:
            LexError: On an invalid lexeme
            ParseError: On a grammar or semantic violation
        """
        logger.debug("Compiling %s (%d characters)", filename, len(source))

        banner = f"Generated by ttc from {filename}" if self.options.emit_comments else None
        emitter = Emitter(indent_unit=self.options.indent, banner=banner)
        parser = Parser(Lexer(source, filename), emitter, float_format=self.options.float_format)

        try:
            parser.parse()
        except CompileError as e:
            logger.debug("Compilation of %s failed: %s", filename, e.message)
            raise

        result = CompilerResult(
            filename=filename,
            success=True,
            output=emitter.finalize(),
            token_count=parser.token_count,
            variables=list(parser.variables),
            labels=list(parser.declared_labels),
            warnings=list(parser.warnings),
        )
        logger.debug(
            "Compiled %s: %d tokens, %d bytes of C",
            filename, result.token_count, len(result.output),
        )
        return result

    def compile_file(self, filepath: Union[str, Path]) -> CompilerResult:
        """
        Compile a Teeny Tiny source file to C.

        Raises:
            FileNotFoundError: If the source file does not exist
            LexError, ParseError: If compilation fails
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """Return the full token list for source (debugging aid)."""
    return list(Lexer(source, filename).tokenize())


def compile_teeny(source: str, filename: str = "<input>") -> str:
    """
    Compile Teeny Tiny source code to C.

    This is the primary high-level interface.

    Example:
        >>> print(compile_teeny('LET x = 5\\nPRINT x\\n'))
    """
    result = TeenyTinyCompiler().compile_source(source, filename)
    return result.output


def compile_file(
    filepath: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Compile a Teeny Tiny source file to C.

    The output file is written only when compilation succeeds.

    Args:
        filepath: Path to the .teeny source
        output_path: Optional path to write the C output
        options: Compiler configuration

    Returns:
        Generated C source
    """
    result = TeenyTinyCompiler(options).compile_file(filepath)

    if output_path:
        Path(output_path).write_text(result.output, encoding="utf-8")
        logger.debug("Wrote %s", output_path)

    return result.output
