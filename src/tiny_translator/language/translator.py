"""
Tiny Translator Main Module
===========================

This module provides the entry points that run a translation:

    Source → Lexer ⇄ Parser → Emitter → C++

Usage
-----
Command line:
    $ tinyc prog.txt            # writes prog.cpp

Programmatic:
    >>> from tiny_translator import translate_source
    >>> cpp = translate_source('BEGIN\\nPRINT "hi"\\nEND')

Each run builds a fresh lexer, symbol table and emitter, so runs never
share state and translating the same input twice gives identical output.

Error Handling
--------------
The first lexical or syntax error aborts the run and propagates to the
caller unchanged. File runs delete the partially written output file on
any failure before re-raising, so a failed run leaves no output behind,
and they refuse an output path that names the source file.
"""

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from tiny_translator.errors import InvalidSourcePathError
from tiny_translator.language.emitter import CppEmitter
from tiny_translator.language.lexer import TinyLexer
from tiny_translator.language.parser import TinyParser
from tiny_translator.language.symbols import SymbolTable

logger = logging.getLogger(__name__)


@dataclass
class TranslatorOptions:
    """
    Translator configuration options.

    Attributes:
        indent_unit: Indentation added per nesting level in the output
        variable_type: C++ type given to every declared variable
        input_suffix: Extension a source file must carry for file runs
        output_suffix: Extension substituted to name the output file
    """
    indent_unit: str = "\t"
    variable_type: str = "int"
    input_suffix: str = ".txt"
    output_suffix: str = ".cpp"

    def __post_init__(self):
        if not self.indent_unit or self.indent_unit.strip():
            raise ValueError(f"indent unit must be non-empty whitespace, got {self.indent_unit!r}")
        for suffix in (self.input_suffix, self.output_suffix):
            if not suffix.startswith(".") or len(suffix) < 2:
                raise ValueError(f"suffix must look like '.ext', got {suffix!r}")
        if not self.variable_type.strip():
            raise ValueError("variable type must not be empty")


@dataclass
class TranslationResult:
    """
    Result of a translation.

    Attributes:
        filename: Source filename
        success: True if translation succeeded
        output: Generated C++ (empty for file runs, which write to disk)
        output_path: File written by a file run
        declared: Variables declared, in first-use order
        token_count: Number of tokens consumed
        line_count: Number of C++ lines emitted
    """
    filename: str = ""
    success: bool = False
    output: str = ""
    output_path: Optional[Path] = None
    declared: list[str] = field(default_factory=list)
    token_count: int = 0
    line_count: int = 0


def derive_output_path(path: Union[str, Path], options: Optional[TranslatorOptions] = None) -> Path:
    """
    Name the output file for a source file: prog.txt -> prog.cpp.

    Raises:
        InvalidSourcePathError: If path does not carry the input suffix
    """
    options = options or TranslatorOptions()
    path = Path(path)
    if path.suffix != options.input_suffix:
        raise InvalidSourcePathError(path, "invalid file extension", options.input_suffix)
    return path.with_suffix(options.output_suffix)


class Translator:
    """
    Tiny-language to C++ translator.

    Example:
        translator = Translator()
        result = translator.translate_file("prog.txt")
        print(result.output_path)

    Attributes:
        options: Translator configuration options
    """

    def __init__(self, options: Optional[TranslatorOptions] = None):
        """
        Initialize the translator.

        Args:
            options: Translator configuration (uses defaults if None)
        """
        self.options = options or TranslatorOptions()

    def translate_source(self, source: str, filename: str = "<input>") -> TranslationResult:
        """
        Translate program text to C++.

        Args:
            source: Program text
            filename: Source filename for error messages

        Returns:
            TranslationResult with the generated C++ in output

        Raises:
            TranslationError: If lexing or parsing fails
        """
        sink = io.StringIO()
        result = self._run(TinyLexer(source, filename), sink)
        result.output = sink.getvalue()
        return result

    def translate_file(
        self,
        filepath: Union[str, Path],
        output_path: Optional[Union[str, Path]] = None,
    ) -> TranslationResult:
        """
        Translate a source file, writing C++ next to it (or to output_path).

        Args:
            filepath: Path to the source file
            output_path: Where to write the C++ (derived from filepath if None)

        Returns:
            TranslationResult describing the written file

        Raises:
            FileNotFoundError: If the source file does not exist
            InvalidSourcePathError: If the source file has the wrong extension
                or the output file is the source file itself
            TranslationError: If translation fails

        The output file is removed whenever the run fails after opening it.
        """
        path = Path(filepath)
        if not path.is_file():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        if output_path is None:
            target = derive_output_path(path, self.options)
        else:
            if path.suffix != self.options.input_suffix:
                raise InvalidSourcePathError(path, "invalid file extension", self.options.input_suffix)
            target = Path(output_path)

        if target.resolve() == path.resolve():
            raise InvalidSourcePathError(path, "output file would overwrite the source")

        with path.open(encoding="utf-8") as source_file:
            lexer = TinyLexer.from_stream(source_file, str(path))

        sink = target.open("w", encoding="utf-8", newline="\n")
        try:
            with sink:
                result = self._run(lexer, sink)
        except Exception:
            target.unlink(missing_ok=True)
            logger.warning(f"Removed incomplete output {target}")
            raise

        result.output_path = target
        logger.info(f"Translated {path} -> {target}")
        return result

    def _run(self, lexer: TinyLexer, sink) -> TranslationResult:
        """Parse one program from lexer into sink."""
        emitter = CppEmitter(
            sink,
            indent_unit=self.options.indent_unit,
            variable_type=self.options.variable_type,
        )
        parser = TinyParser(lexer, emitter, SymbolTable())
        parser.parse()

        return TranslationResult(
            filename=lexer.filename,
            success=True,
            declared=parser.symbols.names(),
            token_count=parser.token_count,
            line_count=emitter.line_count,
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def translate_source(
    source: str,
    filename: str = "<input>",
    options: Optional[TranslatorOptions] = None,
) -> str:
    """
    Translate program text to C++.

    This is the primary high-level interface.

    Raises:
        TranslationError: If translation fails

    Example:
        >>> print(translate_source('BEGIN\\nLET x = 5\\nPRINT x\\nEND'))
        #include <iostream>
        <BLANKLINE>
        using namespace std;
        <BLANKLINE>
        int main(int argc, char *argv[])
        {
        	int x = 5;
        	cout << x;
        	return 0;
        }
        <BLANKLINE>
    """
    return Translator(options).translate_source(source, filename).output


def translate_file(
    filepath: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    options: Optional[TranslatorOptions] = None,
) -> Path:
    """
    Translate a source file and return the path of the C++ written.

    Raises:
        TranslationError: If translation fails (no output file is left)
        InvalidSourcePathError: If the source file has the wrong extension
        FileNotFoundError: If the source file does not exist
    """
    result = Translator(options).translate_file(filepath, output_path)
    return result.output_path
