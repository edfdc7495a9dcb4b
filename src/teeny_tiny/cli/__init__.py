"""
Teeny Tiny Command-Line Interface
=================================

- **ttc**: Teeny Tiny to C compiler

The tool is a Click application with built-in help and consistent
exit codes (see teeny_tiny.cli.errors).
"""

__all__ = ["ttc"]
