"""
Teeny Tiny Compiler
===================

This package implements an ahead-of-time compiler from Teeny Tiny, a
minimal BASIC-like language, to C. The generated C is compiled to a
native executable by any C99 toolchain.

Pipeline
--------
    Teeny Tiny Source → Lexer → Parser → Emitter → C Source

The parser translates while it parses: there is no syntax tree, and
each recognized production appends C to the emitter.

Usage
-----
>>> from teeny_tiny.compiler import compile_teeny
>>> print(compile_teeny('PRINT "Hello, world!"\\n'))

Language Summary
----------------
- One data type: floating point, variables created by LET or INPUT
- Statements: PRINT, INPUT, LET, IF/THEN/ENDIF, WHILE/REPEAT/ENDWHILE,
  LABEL, GOTO
- Comments start with '#'
"""

from teeny_tiny.compiler.compiler import (
    TeenyTinyCompiler,
    CompilerOptions,
    CompilerResult,
    compile_teeny,
    compile_file,
    tokenize,
)
from teeny_tiny.compiler.errors import (
    CompileError,
    LexError,
    UnexpectedCharacterError,
    UnterminatedStringError,
    InvalidNumberError,
    ParseError,
    UnexpectedTokenError,
    UnterminatedBlockError,
    DuplicateLabelError,
    UndeclaredVariableError,
    UndefinedLabelError,
)
from teeny_tiny.compiler.lexer import Lexer, Token, TokenKind
from teeny_tiny.compiler.parser import Parser
from teeny_tiny.compiler.emitter import Emitter

__all__ = [
    # Main API
    "TeenyTinyCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_teeny",
    "compile_file",
    "tokenize",
    # Errors
    "CompileError",
    "LexError",
    "UnexpectedCharacterError",
    "UnterminatedStringError",
    "InvalidNumberError",
    "ParseError",
    "UnexpectedTokenError",
    "UnterminatedBlockError",
    "DuplicateLabelError",
    "UndeclaredVariableError",
    "UndefinedLabelError",
    # Pipeline stages
    "Lexer",
    "Token",
    "TokenKind",
    "Parser",
    "Emitter",
]
