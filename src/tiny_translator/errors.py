"""
Tiny Translator Error Hierarchy
===============================

This module defines the base of the exception hierarchy for the whole
package. All exceptions inherit from TinyError, allowing callers to catch
every translator-related error with a single except clause if desired.

Exception Hierarchy
-------------------
TinyError (base)
├── TranslationError (language front end, see tiny_translator.language.errors)
│   ├── TinyLexicalError - ill-formed token
│   └── TinySyntaxError - grammar violation or undeclared identifier
└── InvalidSourcePathError - input path rejected by the file entry point

Design Philosophy
-----------------
Each exception captures source location information (filename, line, column)
when applicable. This allows for detailed error messages that help users
quickly locate and fix issues in their source programs.

Error messages follow this format:
    filename:line:column: Kind: description
    source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class TinyError(Exception):
    """
    Base exception for all Tiny Translator errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch all translator-related errors with a single except clause:

        try:
            translate_file("program.txt")
        except TinyError as e:
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

    Tokens carry one of these so that any error raised while lexing or
    parsing can point at the exact place in the source program.

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


# =============================================================================
# File Entry Point Exceptions
# =============================================================================

class InvalidSourcePathError(TinyError):
    """
    Input path rejected before translation starts.

    Raised by the file entry point when the path does not carry the
    expected source extension (".txt" by default).
    """

    def __init__(self, path: Path, reason: str, expected_suffix: Optional[str] = None):
        self.path = path
        self.reason = reason
        self.expected_suffix = expected_suffix

        message = f"{path}: {reason}"
        if expected_suffix:
            message += f" (expected a '{expected_suffix}' file)"
        super().__init__(message)
