"""
Tiny Language Front End
=======================

This package translates programs in the tiny teaching language to C++.

The tiny language has one block (BEGIN ... END), console output (PRINT),
console input (INPUT), assignment (LET), conditionals
(IF/ELSEIF/ELSE/ENDIF), loops (WHILE ... REPEAT ... ENDWHILE) and
integer/real arithmetic. Every variable is a single numeric cell,
declared by its first LET or INPUT.

Pipeline
--------
Translation is a single syntax-directed pass:

    Source → Lexer ⇄ Parser → Emitter → C++

The parser pulls tokens from the lexer one at a time and writes C++ for
each production as soon as it recognizes it. No syntax tree is built.

Usage
-----
>>> from tiny_translator.language import translate_source
>>> cpp = translate_source('''BEGIN
... INPUT n
... WHILE n > 0 REPEAT
... PRINT n
... LET n = n - 1
... ENDWHILE
... END''')
>>> "while(n > 0)" in cpp
True

Language Limits
---------------
- At most one arithmetic operator per expression (no ``a + b + c``)
- Exactly one comparison per condition (no ``and``/``or``)
- No parentheses, no unary minus on identifiers
"""

from tiny_translator.language.translator import (
    Translator,
    TranslatorOptions,
    TranslationResult,
    derive_output_path,
    translate_file,
    translate_source,
)
from tiny_translator.language.errors import (
    TranslationError,
    TinyLexicalError,
    TinySyntaxError,
    InvalidCharacterError,
    MalformedNumberError,
    IllegalStringCharacterError,
    UnterminatedStringError,
    UnexpectedTokenError,
    MissingNewlineError,
    UndeclaredIdentifierError,
    NestingTooDeepError,
)
from tiny_translator.language.lexer import TinyLexer, Token, TokenType, KEYWORDS
from tiny_translator.language.symbols import SymbolTable
from tiny_translator.language.emitter import CppEmitter
from tiny_translator.language.parser import TinyParser

__all__ = [
    # Main API
    "Translator",
    "TranslatorOptions",
    "TranslationResult",
    "derive_output_path",
    "translate_file",
    "translate_source",
    # Errors
    "TranslationError",
    "TinyLexicalError",
    "TinySyntaxError",
    "InvalidCharacterError",
    "MalformedNumberError",
    "IllegalStringCharacterError",
    "UnterminatedStringError",
    "UnexpectedTokenError",
    "MissingNewlineError",
    "UndeclaredIdentifierError",
    "NestingTooDeepError",
    # Lexer
    "TinyLexer",
    "Token",
    "TokenType",
    "KEYWORDS",
    # Symbols
    "SymbolTable",
    # Emitter
    "CppEmitter",
    # Parser
    "TinyParser",
]
