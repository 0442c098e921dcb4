"""
tinyc - Tiny Language Translator Command-Line Interface
=======================================================

This module implements the command-line interface for the translator.
It turns a tiny-language program into a C++ source file.

Usage Examples
--------------
Basic translation:
    $ tinyc prog.txt                # writes prog.cpp

With output file:
    $ tinyc prog.txt -o out.cpp

Print instead of writing:
    $ tinyc --stdout prog.txt

Full pipeline to an executable:
    $ tinyc prog.txt && g++ prog.cpp -o prog && ./prog

Exit Codes
----------
0 - Success
1 - Lexical or syntax error in the program
2 - Invalid arguments, missing or non-UTF-8 file, wrong extension
3 - Internal error
"""

import logging
from pathlib import Path
from typing import Optional

import click

from tiny_translator import __version__
from tiny_translator.cli.errors import handle_cli_exception
from tiny_translator.language import TinyLexer, Translator, TranslatorOptions, derive_output_path


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output C++ file (default: input with .cpp extension)",
)
@click.option(
    "--stdout", "to_stdout",
    is_flag=True,
    help="Print the C++ to stdout instead of writing a file",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "--indent",
    type=click.IntRange(1, 16),
    default=None,
    help="Indent nested code with N spaces (default: one tab)",
)
@click.option(
    "-t", "--type", "variable_type",
    type=click.Choice(["int", "long", "float", "double"]),
    default="int",
    show_default=True,
    help="C++ type used to declare variables",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="tinyc")
def main(
    input_file: Path,
    output: Optional[Path],
    to_stdout: bool,
    tokens: bool,
    indent: Optional[int],
    variable_type: str,
    verbose: bool,
) -> None:
    """
    Translate a tiny-language program to C++.

    INPUT_FILE is the program (.txt) to translate.

    \b
    Examples:
        tinyc prog.txt               # Outputs prog.cpp
        tinyc prog.txt -o out.cpp    # Specify output file
        tinyc --stdout prog.txt      # Print the C++
        tinyc --tokens prog.txt      # Dump tokens

    \b
    Language summary:
        BEGIN ... END               program block
        PRINT "text" | PRINT x      output
        INPUT x                     input (declares x)
        LET x = a + b               assignment (declares x)
        IF c / ELSEIF c / ELSE / ENDIF
        WHILE c REPEAT ... ENDWHILE
    """
    setup_logging(verbose)

    if to_stdout and output is not None:
        raise click.UsageError("--stdout cannot be combined with -o/--output")

    try:
        options = TranslatorOptions(
            indent_unit=" " * indent if indent else "\t",
            variable_type=variable_type,
        )

        # Every mode takes only source files
        derive_output_path(input_file, options)

        if tokens:
            source = input_file.read_text(encoding="utf-8")
            for token in TinyLexer(source, str(input_file)).tokenize():
                click.echo(repr(token))
            return

        translator = Translator(options)

        if to_stdout:
            source = input_file.read_text(encoding="utf-8")
            result = translator.translate_source(source, str(input_file))
            click.echo(result.output, nl=False)
            return

        if verbose:
            click.echo(f"Translating {input_file}...")

        result = translator.translate_file(input_file, output)

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Declared: {', '.join(result.declared) or 'no variables'}")
            click.echo(f"Wrote {result.line_count} lines to {result.output_path}")

        click.echo(f"Translated {input_file} -> {result.output_path}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
