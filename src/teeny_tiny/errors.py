"""
Teeny Tiny Error Hierarchy
==========================

This module defines the root of the exception hierarchy for the Teeny Tiny
toolchain. All exceptions inherit from TeenyTinyError, allowing callers
to catch every toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
TeenyTinyError (base)
└── CompileError (see teeny_tiny.compiler.errors)
    ├── LexError - invalid characters, strings and numbers
    └── ParseError - grammar and semantic violations

Design Philosophy
-----------------
Each compiler exception captures source location information (filename,
line, column). This allows for detailed error messages that help users
quickly locate and fix issues in their source code.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class TeenyTinyError(Exception):
    """
    Base exception for all Teeny Tiny errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch all toolchain errors with a single except clause:

        try:
            compiler.compile_file("hello.teeny")
        except TeenyTinyError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Tokens carry one of these so that every diagnostic can point back at
    the exact place in the source file. The frozen design ensures locations
    cannot be accidentally modified once recorded in a symbol table.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
