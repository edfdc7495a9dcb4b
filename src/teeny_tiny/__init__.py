"""
Teeny Tiny - A Compiler from a Minimal BASIC to C
=================================================

This package translates programs written in Teeny Tiny, a minimal
BASIC-like language, into C source code that any C99 compiler turns
into a native executable.

Main Components
---------------
- **compiler**: lexer, parser and C emitter (ttc)
- **cli**: the ``ttc`` command-line tool

Quick Start
-----------
Compile a program:
    >>> from teeny_tiny import TeenyTinyCompiler
    >>> result = TeenyTinyCompiler().compile_file("hello.teeny")
    >>> print(result.output)

Or use the command-line tool:
    $ ttc hello.teeny -o hello.c
    $ gcc -std=c99 -o hello hello.c
"""

__version__ = "1.0.0"

from teeny_tiny.errors import TeenyTinyError, SourceLocation
from teeny_tiny.compiler import (
    TeenyTinyCompiler,
    CompilerOptions,
    CompilerResult,
    compile_teeny,
    compile_file,
    CompileError,
    LexError,
    ParseError,
)

__all__ = [
    "__version__",
    "TeenyTinyError",
    "SourceLocation",
    "TeenyTinyCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_teeny",
    "compile_file",
    "CompileError",
    "LexError",
    "ParseError",
]
