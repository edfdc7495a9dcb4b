"""
ttc - Teeny Tiny Compiler Command-Line Interface
================================================

This module implements the command-line interface for the Teeny Tiny
compiler. It reads one source file and writes the generated C next to
it (or where -o says).

Usage Examples
--------------
Basic compilation:
    $ ttc hello.teeny

With output file:
    $ ttc hello.teeny -o hello.c

Full pipeline to an executable:
    $ ttc hello.teeny -o hello.c && gcc -std=c99 -o hello hello.c

Token dump:
    $ ttc --tokens hello.teeny
"""

import logging
from pathlib import Path
from typing import Optional

import click

from teeny_tiny import __version__
from teeny_tiny.compiler import TeenyTinyCompiler, CompilerOptions, tokenize
from teeny_tiny.cli.errors import handle_cli_exception

logger = logging.getLogger(__name__)


@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output C file (default: input.c)",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "--no-comments",
    is_flag=True,
    help="Omit the banner comment from the generated C",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="ttc")
def main(
    input_file: Path,
    output: Optional[Path],
    tokens: bool,
    no_comments: bool,
    verbose: bool,
) -> None:
    """
    Compile a Teeny Tiny program to C.

    INPUT_FILE is the Teeny Tiny source file (.teeny) to compile.

    The generated C is written only if the whole program compiles; build
    it with any C99 compiler.

    \b
    Examples:
        ttc hello.teeny              # Outputs hello.c
        ttc hello.teeny -o out.c     # Specify output file
        ttc --tokens hello.teeny     # Dump tokens
        ttc -v hello.teeny           # Verbose output
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if output is None:
        output = input_file.with_suffix(".c")

    options = CompilerOptions(emit_comments=not no_comments)

    try:
        if verbose:
            click.echo(f"Compiling {input_file}...")

        source = input_file.read_text(encoding="utf-8")

        if tokens:
            for token in tokenize(source, str(input_file)):
                click.echo(repr(token))
            return

        result = TeenyTinyCompiler(options).compile_source(source, str(input_file))

        for warning in result.warnings:
            click.echo(warning, err=True)

        output.write_text(result.output, encoding="utf-8")

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Variables: {', '.join(result.variables) or '(none)'}")
            click.echo(f"Labels: {', '.join(result.labels) or '(none)'}")
            click.echo(f"Wrote {len(result.output)} bytes to {output}")

        click.echo(f"Compiled {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
