"""
Tiny Translator - Tiny Teaching Language to C++
===============================================

This package translates programs written in a small imperative teaching
language into equivalent C++ source code.

Main Components
---------------
- **language**: the translator itself
    Lexer, symbol table, and a recursive descent parser that emits C++
    while it recognizes the program

- **cli**: command-line tools
    ``tinyc`` translates a ``.txt`` program into a ``.cpp`` file

Quick Start
-----------
Translate a string:
    >>> from tiny_translator import translate_source
    >>> cpp = translate_source('BEGIN\\nPRINT "Hello"\\nEND')

Translate a file:
    >>> from tiny_translator import translate_file
    >>> translate_file("hello.txt")
    PosixPath('hello.cpp')

Or use the command-line tool:
    $ tinyc hello.txt
    $ g++ hello.cpp -o hello && ./hello

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"
__author__ = "Tiny Translator Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from tiny_translator.errors import (
    TinyError,
    SourceLocation,
    InvalidSourcePathError,
)

from tiny_translator.language import (
    Translator,
    TranslatorOptions,
    TranslationResult,
    derive_output_path,
    translate_file,
    translate_source,
    TranslationError,
    TinyLexicalError,
    TinySyntaxError,
    UndeclaredIdentifierError,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Translator
    "Translator",
    "TranslatorOptions",
    "TranslationResult",
    "derive_output_path",
    "translate_file",
    "translate_source",
    # Exception hierarchy
    "TinyError",
    "SourceLocation",
    "InvalidSourcePathError",
    "TranslationError",
    "TinyLexicalError",
    "TinySyntaxError",
    "UndeclaredIdentifierError",
]
