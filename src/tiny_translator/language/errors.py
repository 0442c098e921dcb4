"""
Translation Error Hierarchy
===========================

This module defines the exceptions raised while translating a source
program. All of them inherit from TranslationError, which itself inherits
from the base TinyError for consistent error handling across the package.

Exception Hierarchy
-------------------
TranslationError (base for all lexing/parsing failures)
├── TinyLexicalError - ill-formed token
│   ├── InvalidCharacterError - character that starts no token
│   ├── MalformedNumberError - missing digits after '.' or exponent marker
│   ├── IllegalStringCharacterError - disallowed character inside a string
│   └── UnterminatedStringError - input ends before the closing quote
└── TinySyntaxError - grammar violation
    ├── UnexpectedTokenError - token that does not fit the production
    ├── MissingNewlineError - line break required but not found
    ├── UndeclaredIdentifierError - identifier used before LET/INPUT
    └── NestingTooDeepError - blocks nested beyond the supported depth

Errors are never recovered from: the first one raised anywhere in the
lexer or parser unwinds to the translator and aborts the run.

Error Message Format
--------------------
    prog.txt:3:7: Syntax Error: undeclared identifier 'cuont'
        PRINT cuont
              ^
    hint: did you mean 'count'?
"""

from typing import List, Optional

from tiny_translator.errors import TinyError, SourceLocation


# =============================================================================
# Base Translation Exception
# =============================================================================

class TranslationError(TinyError):
    """
    Base exception for all lexical and syntax errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    # Human-readable error kind, reported ahead of the message
    kind = "Translation Error"

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example:
            prog.txt:2:9: Lexical Error: no digits after decimal point
                LET x = 12.
                        ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: {self.kind}: {self.message}")
        else:
            parts.append(f"{self.kind}: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class TinyLexicalError(TranslationError):
    """
    Lexical error in a source program.

    Raised when the lexer cannot form a token from the characters at the
    current position.

    Examples:
        - Number with a decimal point but no digits after it
        - Exponent marker without digits
        - Character that starts no token
        - String literal containing a control character
    """

    kind = "Lexical Error"


class InvalidCharacterError(TinyLexicalError):
    """
    Character that cannot start any token.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character {char!r} (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


class MalformedNumberError(TinyLexicalError):
    """
    Numeric literal that stops where digits are required.

    Raised for a decimal point that is not followed by a digit
    (``12.``, ``.x``) and for an exponent marker that is not followed by
    digits after its optional sign (``5E``, ``5e+``).
    """

    def __init__(
        self,
        message: str,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            message,
            location=location,
            hint=f"complete the number '{text}' with at least one digit",
            source_line=source_line,
        )


class IllegalStringCharacterError(TinyLexicalError):
    """
    String literal containing a character that is not a letter, digit,
    punctuation or space.

    The message names the text read so far, so the user can see where
    the literal went wrong.
    """

    def __init__(
        self,
        partial_text: str,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.partial_text = partial_text
        self.char = char
        super().__init__(
            f"unexpected character in string {partial_text}",
            location=location,
            hint=f"strings may only hold letters, digits, punctuation and spaces, found {char!r}",
            source_line=source_line,
        )


class UnterminatedStringError(TinyLexicalError):
    """
    String literal that is still open when the input runs out.
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated string literal",
            location=location,
            hint="add closing '\"' to complete the string",
            source_line=source_line,
        )


# =============================================================================
# Syntax Errors
# =============================================================================

class TinySyntaxError(TranslationError):
    """
    Syntax error in a source program.

    Raised when the parser finds a token sequence that the grammar does
    not accept, or when an identifier is used before being declared.
    """

    kind = "Syntax Error"


class UnexpectedTokenError(TinySyntaxError):
    """
    Token that does not fit the production being recognized.
    """

    def __init__(
        self,
        message: str,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}, found {found}"

        super().__init__(
            message,
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingNewlineError(TinySyntaxError):
    """
    Construct that must end its line is followed by more tokens.
    """

    def __init__(
        self,
        construct: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.construct = construct
        super().__init__(
            f"{construct} must be followed by a newline",
            location=location,
            source_line=source_line,
        )


class UndeclaredIdentifierError(TinySyntaxError):
    """
    Reference to an identifier that no LET or INPUT has declared.

    The parser passes similarly-named declared identifiers so the hint
    can catch typos.
    """

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_identifiers: Optional[List[str]] = None,
    ):
        self.identifier = identifier
        self.similar_identifiers = similar_identifiers or []

        hint = None
        if self.similar_identifiers:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_identifiers[:3])
            hint = f"did you mean {suggestions}?"
        else:
            hint = f"declare '{identifier}' with LET or INPUT before using it"

        super().__init__(
            f"undeclared identifier '{identifier}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class NestingTooDeepError(TinySyntaxError):
    """
    IF or WHILE opened more levels deep than the translator accepts.
    """

    def __init__(
        self,
        limit: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.limit = limit
        super().__init__(
            f"nesting too deep (more than {limit} levels of IF/WHILE)",
            location=location,
            hint="move some of the inner blocks out of this one",
            source_line=source_line,
        )
