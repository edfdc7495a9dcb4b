#!/usr/bin/env python3
"""
Teeny Tiny Compiler Demo
========================

This script compiles every sample program in this directory and shows
the generated C for one of them. It also demonstrates how compile
errors are reported.

Usage:
    python examples/compile_demo.py
"""

from pathlib import Path

from teeny_tiny import TeenyTinyCompiler, CompileError


def main():
    here = Path(__file__).parent
    compiler = TeenyTinyCompiler()

    # ==========================================================================
    # 1. Compile all samples
    # ==========================================================================
    for source in sorted(here.glob("*.teeny")):
        result = compiler.compile_file(source)
        print(f"{source.name:<18} {result.token_count:>4} tokens, "
              f"variables: {', '.join(result.variables) or '-'}")

    # ==========================================================================
    # 2. Show generated C
    # ==========================================================================
    print()
    print(compiler.compile_file(here / "factorial.teeny").output)

    # ==========================================================================
    # 3. Error reporting
    # ==========================================================================
    try:
        compiler.compile_source("LET count = 1\nPRINT cuont\n", "typo.teeny")
    except CompileError as e:
        print(e)


if __name__ == "__main__":
    main()
