"""
Tiny Language Lexer (Tokenizer)
===============================

This module implements the lexer for the tiny teaching language. It turns
source text into classified tokens on demand: the parser pulls one token
at a time and may hand the most recent one back with ``rollback()``.

Token Categories
----------------
- Keywords: BEGIN, END, PRINT, INPUT, LET, IF, ELSEIF, ELSE, ENDIF,
  WHILE, REPEAT, ENDWHILE (exact, case-sensitive)
- Identifiers: a letter followed by letters and digits
- Numbers: 123, 12.34, .5, 5E10, 5e-3 (kept as spelled in the source)
- Strings: "double quoted", no escapes
- Operators: = + - * / mod > < == >= <=
- Newline: only in newline-sensitive mode, otherwise plain whitespace

Keywords are recognized by scanning an identifier first and then checking
the whole lexeme against the keyword table, so ``BEGINX`` and ``Begin``
are ordinary identifiers. ``mod`` is the one lowercase entry: it is the
modulo operator.

Newline-Sensitive Mode
----------------------
Line breaks matter only at a few grammar points (after BEGIN, after each
statement, between a WHILE condition and REPEAT). ``next(True)`` stops
skipping whitespace at ``\\n`` and returns a NEWLINE token for it;
``next(False)`` treats it like any other whitespace.

Rollback
--------
``rollback()`` undoes the last ``next()`` by parking that token in a
one-slot held-back buffer and rewinding the cursor to where the token's
scan began. The following ``next()`` drains the slot when it asks for the
same mode; in the other mode it rescans from the saved cursor, because a
token read past a line break may be a NEWLINE when re-read
newline-sensitively.

Example Usage
-------------
>>> from tiny_translator.language.lexer import TinyLexer
>>> lexer = TinyLexer('LET x = 5', "prog.txt")
>>> for token in lexer.tokenize():
...     print(token)
Token(LET, 'LET', 1:1)
Token(IDENTIFIER, 'x', 1:5)
Token(ASSIGN, '=', 1:7)
Token(NUMBER, '5', 1:9)
Token(EOF, 1:10)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional, TextIO
import string

from tiny_translator.errors import SourceLocation
from tiny_translator.language.errors import (
    IllegalStringCharacterError,
    InvalidCharacterError,
    MalformedNumberError,
    UnterminatedStringError,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for the tiny language.

    Keywords are distinguished from identifiers to simplify parsing.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of input
    NEWLINE = auto()        # Line break (newline-sensitive mode only)

    # === Identifiers and Literals ===
    IDENTIFIER = auto()     # Variable names
    STRING = auto()         # String literals "..."
    NUMBER = auto()         # Numeric literals, integer or real

    # === Assignment and Arithmetic ===
    ASSIGN = auto()         # =
    PLUS = auto()           # +
    MINUS = auto()          # -
    STAR = auto()           # *
    SLASH = auto()          # /
    MOD = auto()            # mod

    # === Comparison ===
    GT = auto()             # >
    LT = auto()             # <
    EQ = auto()             # ==
    GE = auto()             # >=
    LE = auto()             # <=

    # === Keywords ===
    BEGIN = auto()
    END = auto()
    PRINT = auto()
    INPUT = auto()
    LET = auto()
    IF = auto()
    ELSEIF = auto()
    ELSE = auto()
    ENDIF = auto()
    WHILE = auto()
    REPEAT = auto()
    ENDWHILE = auto()


# =============================================================================
# Keyword Mapping
# =============================================================================

# Exact lexemes that are not identifiers
KEYWORDS: dict[str, TokenType] = {
    "BEGIN": TokenType.BEGIN,
    "END": TokenType.END,
    "PRINT": TokenType.PRINT,
    "INPUT": TokenType.INPUT,
    "LET": TokenType.LET,
    "IF": TokenType.IF,
    "ELSEIF": TokenType.ELSEIF,
    "ELSE": TokenType.ELSE,
    "ENDIF": TokenType.ENDIF,
    "WHILE": TokenType.WHILE,
    "REPEAT": TokenType.REPEAT,
    "ENDWHILE": TokenType.ENDWHILE,

    # Identifier-shaped operator
    "mod": TokenType.MOD,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    Represents a single token from a source program.

    Attributes:
        type: The TokenType classification
        text: The exact lexeme (string contents without the quotes;
              empty for NEWLINE and EOF)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    text: str
    line: int
    column: int
    filename: str

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.text:
            return f"Token({self.type.name}, {self.text!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def describe(self) -> str:
        """Describe the token for error messages ('PRINT', 'x', end of input)."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.NEWLINE:
            return "newline"
        if self.type == TokenType.STRING:
            return f'"{self.text}"'
        return f"'{self.text}'"


# =============================================================================
# Cursor Snapshots
# =============================================================================

@dataclass(frozen=True)
class _Cursor:
    """Saved scanning position, used to rewind on rollback."""
    pos: int
    line: int
    column: int
    line_start: int


@dataclass(frozen=True)
class _Scanned:
    """A token together with the cursor before and after scanning it."""
    token: Token
    newline_sensitive: bool
    start: _Cursor
    end: _Cursor


# =============================================================================
# Lexer Implementation
# =============================================================================

class TinyLexer:
    """
    Produces tokens from a tiny-language program on demand.

    Usage:
        lexer = TinyLexer(source_text, filename)
        token = lexer.next()
        if token.type != TokenType.PRINT:
            lexer.rollback()

    Attributes:
        source: The source text being tokenized
        filename: Name of the source file (for error reporting)
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits

    # C isspace() set
    WHITESPACE = " \t\n\r\f\v"

    # Characters allowed between the quotes of a string literal
    STRING_CHARS = string.ascii_letters + string.digits + string.punctuation + " "

    # Operators that never take a second character
    SINGLE_OPERATORS = {
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "*": TokenType.STAR,
        "/": TokenType.SLASH,
    }

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source text.

        Args:
            source: The program text to tokenize
            filename: Name of the source file (for error messages)
        """
        self.source = source
        self.filename = filename

        # Current position in source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

        # Most recently produced token
        self._current: Optional[Token] = None

        # Last token handed out, kept so it can be rolled back
        self._last: Optional[_Scanned] = None

        # Token given back by rollback(), waiting for the next call
        self._held: Optional[_Scanned] = None

    @classmethod
    def from_stream(cls, stream: TextIO, filename: Optional[str] = None) -> "TinyLexer":
        """
        Create a lexer over a caller-owned text stream.

        The stream is read to the end but not closed; the caller keeps
        ownership of it.
        """
        if filename is None:
            filename = getattr(stream, "name", "<stream>")
        return cls(stream.read(), str(filename))

    # =========================================================================
    # Public Interface
    # =========================================================================

    def next(self, newline_sensitive: bool = False) -> Token:
        """
        Advance to the next token and return it.

        Args:
            newline_sensitive: Report a line break as a NEWLINE token
                               instead of skipping it

        Raises:
            TinyLexicalError: If the characters form no valid token
        """
        held = self._held
        self._held = None

        if held is not None and held.newline_sensitive == newline_sensitive:
            self._restore(held.end)
            self._last = held
            self._current = held.token
            return held.token

        start = self._save()
        token = self._scan_token(newline_sensitive)
        self._last = _Scanned(token, newline_sensitive, start, self._save())
        self._current = token
        return token

    def current(self) -> Optional[Token]:
        """Return the most recently produced token (None before the first)."""
        return self._current

    def current_text(self) -> str:
        """Return the lexeme of the most recently produced token."""
        if self._current is None:
            return ""
        return self._current.text

    def rollback(self) -> None:
        """
        Undo the last next() call.

        The source is rewound to just before that token; current() keeps
        reporting it until next() is called again.

        Raises:
            RuntimeError: If there is no next() call to undo
        """
        if self._last is None:
            raise RuntimeError("rollback() without a preceding next()")

        self._restore(self._last.start)
        self._held = self._last
        self._last = None

    def tokenize(self) -> Iterator[Token]:
        """
        Yield every remaining token, newlines skipped, ending with EOF.

        Used for debugging output; it consumes the lexer.
        """
        while True:
            token = self.next()
            yield token
            if token.type == TokenType.EOF:
                return

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self._pos >= len(self.source)

    def _peek(self) -> str:
        """Look at the current character without advancing ("" at end)."""
        if self._at_end():
            return ""
        return self.source[self._pos]

    def _peek_in(self, chars: str) -> bool:
        """Check that the current character exists and is one of chars."""
        char = self._peek()
        return bool(char) and char in chars

    def _advance(self) -> str:
        """
        Consume and return the current character, advancing position.

        Updates line and column tracking for error reporting.
        """
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _match(self, expected: str) -> bool:
        """Consume next character if it matches expected."""
        if self._peek() == expected:
            self._advance()
            return True
        return False

    def _save(self) -> _Cursor:
        return _Cursor(self._pos, self._line, self._column, self._line_start_pos)

    def _restore(self, cursor: _Cursor) -> None:
        self._pos = cursor.pos
        self._line = cursor.line
        self._column = cursor.column
        self._line_start_pos = cursor.line_start

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        token_type: TokenType,
        text: str,
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            type=token_type,
            text=text,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    def _here(self) -> SourceLocation:
        return SourceLocation(self.filename, self._line, self._column)

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _skip_whitespace(self, newline_sensitive: bool) -> None:
        """Skip whitespace, stopping at a line break in newline-sensitive mode."""
        while self._peek_in(self.WHITESPACE):
            if newline_sensitive and self._peek() == "\n":
                return
            self._advance()

    def _scan_token(self, newline_sensitive: bool) -> Token:
        """Scan the next token from source."""
        self._skip_whitespace(newline_sensitive)

        start_line = self._line
        start_column = self._column

        if self._at_end():
            return self._make_token(TokenType.EOF, "", start_line, start_column)

        char = self._peek()

        # Only reachable in newline-sensitive mode
        if char == "\n":
            self._advance()
            return self._make_token(TokenType.NEWLINE, "", start_line, start_column)

        # Identifiers, keywords and 'mod'
        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        # Numbers
        if char in string.digits or char == ".":
            return self._scan_number(start_line, start_column)

        # String literal
        if char == '"':
            return self._scan_string(start_line, start_column)

        return self._scan_operator(start_line, start_column)

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """
        Scan an identifier or keyword.

        The whole lexeme is read first and then looked up, so keywords
        only match exactly.
        """
        chars = []
        while self._peek_in(self.IDENT_CHARS):
            chars.append(self._advance())

        name = "".join(chars)
        token_type = KEYWORDS.get(name, TokenType.IDENTIFIER)
        return self._make_token(token_type, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """
        Scan a numeric literal.

        Accepted forms: n, n.m, .m, each optionally followed by an
        exponent E/e with an optional sign and at least one digit. The
        token keeps the source spelling; the target compiler reads it.
        """
        chars = []

        if self._peek_in(string.digits):
            chars.extend(self._scan_digits())
            if self._peek() == ".":
                chars.append(self._advance())
                self._require_digits(chars, "no digits after decimal point")
                chars.extend(self._scan_digits())
        else:
            chars.append(self._advance())  # the leading '.'
            self._require_digits(chars, "no digits after decimal point")
            chars.extend(self._scan_digits())

        # Exponent part: E/e, optional sign, digits
        if self._peek_in("Ee"):
            chars.append(self._advance())
            if self._peek_in("+-"):
                chars.append(self._advance())
            self._require_digits(chars, "no digits in exponent part")
            chars.extend(self._scan_digits())

        return self._make_token(TokenType.NUMBER, "".join(chars), start_line, start_column)

    def _scan_digits(self) -> list[str]:
        chars = []
        while self._peek_in(string.digits):
            chars.append(self._advance())
        return chars

    def _require_digits(self, chars: list[str], message: str) -> None:
        """Raise MalformedNumberError unless a digit comes next."""
        if not self._peek_in(string.digits):
            raise MalformedNumberError(
                message,
                "".join(chars),
                self._here(),
                self._get_current_line(),
            )

    def _scan_string(self, start_line: int, start_column: int) -> Token:
        """
        Scan a double-quoted string literal.

        Contents are kept verbatim; there are no escape sequences.
        """
        self._advance()  # consume opening "

        chars = []
        while not self._at_end():
            char = self._peek()

            if char == '"':
                self._advance()  # consume closing "
                return self._make_token(TokenType.STRING, "".join(chars), start_line, start_column)

            if char not in self.STRING_CHARS:
                raise IllegalStringCharacterError(
                    "".join(chars),
                    char,
                    self._here(),
                    self._get_current_line(),
                )

            chars.append(self._advance())

        raise UnterminatedStringError(
            SourceLocation(self.filename, start_line, start_column),
            self._get_current_line(),
        )

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        """
        Scan an operator.

        '>', '<' and '=' look one character ahead for '='.
        """
        char = self._advance()

        if char == ">":
            if self._match("="):
                return self._make_token(TokenType.GE, ">=", start_line, start_column)
            return self._make_token(TokenType.GT, ">", start_line, start_column)

        if char == "<":
            if self._match("="):
                return self._make_token(TokenType.LE, "<=", start_line, start_column)
            return self._make_token(TokenType.LT, "<", start_line, start_column)

        if char == "=":
            if self._match("="):
                return self._make_token(TokenType.EQ, "==", start_line, start_column)
            return self._make_token(TokenType.ASSIGN, "=", start_line, start_column)

        if char in self.SINGLE_OPERATORS:
            return self._make_token(self.SINGLE_OPERATORS[char], char, start_line, start_column)

        # Unknown character
        raise InvalidCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column),
            self._get_current_line(),
        )
