"""
C++ Emitter
===========

Writes the translated program to a text sink. The parser calls into the
emitter while it recognizes the source, so output is produced in the same
pass as parsing; nothing is buffered and nothing is taken back.

Generated Program Layout
------------------------
    #include <iostream>

    using namespace std;

    int main(int argc, char *argv[])
    {
    	int x = 5;
    	cout << x;
    	return 0;
    }

Statements go inside main(), indented by one unit per nesting level.
Fragments of a line (``if(`` + condition + ``)``) are written piecewise;
the indentation prefix goes out with the first fragment of each line.
"""

from contextlib import contextmanager
from typing import Iterator, TextIO


class CppEmitter:
    """
    Append-only C++ output for one translation run.

    Attributes:
        indent_unit: Text added per nesting level
        variable_type: C++ type used to declare every variable
    """

    PREAMBLE = (
        "#include <iostream>",
        "",
        "using namespace std;",
        "",
    )

    MAIN_SIGNATURE = "int main(int argc, char *argv[])"

    def __init__(self, sink: TextIO, indent_unit: str = "\t", variable_type: str = "int"):
        """
        Args:
            sink: Text stream receiving the output; the caller owns it
            indent_unit: Indentation added per nesting level
            variable_type: Type name used in variable declarations
        """
        self.indent_unit = indent_unit
        self.variable_type = variable_type

        self._sink = sink
        self._depth = 0
        self._at_line_start = True
        self._line_count = 0

    @property
    def prefix(self) -> str:
        """Indentation for the current nesting level."""
        return self.indent_unit * self._depth

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def line_count(self) -> int:
        """Number of complete lines written so far."""
        return self._line_count

    # =========================================================================
    # Output Methods
    # =========================================================================

    def write(self, fragment: str) -> None:
        """Write part of a line, indenting it if it starts the line."""
        if self._at_line_start:
            self._sink.write(self.prefix)
            self._at_line_start = False
        self._sink.write(fragment)

    def end_line(self) -> None:
        self._sink.write("\n")
        self._at_line_start = True
        self._line_count += 1

    def emit_line(self, text: str = "") -> None:
        """Write a complete line; empty text gives a blank line."""
        if text:
            self.write(text)
        self.end_line()

    @contextmanager
    def block(self) -> Iterator[None]:
        """
        Emit a brace-delimited block around the body of the with statement.

        The opening brace is written at the current level, the body one
        level deeper, the closing brace once the body completes.
        """
        self.emit_line("{")
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
        self.emit_line("}")

    # =========================================================================
    # Program Skeleton
    # =========================================================================

    def emit_prologue(self) -> None:
        """Emit the includes and open main()."""
        for line in self.PREAMBLE:
            self.emit_line(line)
        self.emit_line(self.MAIN_SIGNATURE)
        self.emit_line("{")
        self._depth = 1

    def emit_epilogue(self) -> None:
        """Emit the normal-exit return and close main()."""
        self.emit_line("return 0;")
        self._depth = 0
        self.emit_line("}")

    # =========================================================================
    # Declarations
    # =========================================================================

    def declaration_prefix(self) -> str:
        """Text put ahead of an assignment that declares its target."""
        return f"{self.variable_type} "

    def emit_declaration(self, name: str) -> None:
        """Declare a variable on a line of its own."""
        self.emit_line(f"{self.variable_type} {name};")
