"""
Tiny Translator Command-Line Interface
======================================

This package provides the command-line tool for the translator:

- **tinyc**: tiny language to C++ translator

The tool is a Click-based CLI application with help text and
consistent error reporting and exit codes.
"""

__all__ = ["tinyc"]
