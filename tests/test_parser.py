# =============================================================================
# test_parser.py - Parser/Emitter Unit Tests
# =============================================================================
# Tests for the recursive descent parser and the C++ it emits.
#
# Test coverage includes:
#   - Program skeleton and exact output layout
#   - PRINT / INPUT / LET emission and first-use declarations
#   - IF / ELSEIF / ELSE chains and WHILE loops, nested indentation
#   - Expression and condition operators
#   - Syntax errors: structure, newlines, undeclared identifiers
# =============================================================================

import io

import pytest

from tiny_translator.language import translate_source
from tiny_translator.language.emitter import CppEmitter
from tiny_translator.language.lexer import TinyLexer
from tiny_translator.language.parser import TinyParser
from tiny_translator.language.symbols import SymbolTable
from tiny_translator.language.errors import (
    TinySyntaxError,
    TinyLexicalError,
    MalformedNumberError,
    MissingNewlineError,
    NestingTooDeepError,
    UndeclaredIdentifierError,
    UnexpectedTokenError,
)


# =============================================================================
# Helper Functions
# =============================================================================

def translate(body: str) -> str:
    """Translate statements wrapped in BEGIN/END."""
    return translate_source(f"BEGIN\n{body}\nEND\n", "test.txt")


def main_body(cpp: str) -> list[str]:
    """Lines of main() between its opening brace and the return."""
    lines = cpp.splitlines()
    start = lines.index("{") + 1
    end = lines.index("\treturn 0;")
    return lines[start:end]


def body_of(statements: str) -> list[str]:
    return main_body(translate(statements))


def nested_loops(depth: int) -> str:
    """depth WHILE loops, each inside the previous one."""
    lines = (
        ["LET i = 0"]
        + ["WHILE i < 1 REPEAT"] * depth
        + ["LET i = 1"]
        + ["ENDWHILE"] * depth
    )
    return "\n".join(lines)


HELLO_CPP = (
    "#include <iostream>\n"
    "\n"
    "using namespace std;\n"
    "\n"
    "int main(int argc, char *argv[])\n"
    "{\n"
    "\tint x = 5;\n"
    "\tcout << x;\n"
    "\treturn 0;\n"
    "}\n"
)


# =============================================================================
# Program Structure Tests
# =============================================================================

class TestProgramStructure:
    """BEGIN/END framing and the emitted skeleton."""

    def test_exact_output(self):
        """A small program produces exactly the expected C++."""
        assert translate_source("BEGIN\nLET x = 5\nPRINT x\nEND") == HELLO_CPP

    def test_trailing_newline_does_not_matter(self):
        """END may be followed by line breaks or be the last bytes."""
        assert translate_source("BEGIN\nLET x = 5\nPRINT x\nEND\n\n") == HELLO_CPP

    def test_empty_program(self):
        """A program with no statements still has main() and return."""
        cpp = translate_source("BEGIN\nEND")
        assert main_body(cpp) == []
        assert cpp.endswith("{\n\treturn 0;\n}\n")

    def test_blank_lines_between_statements(self):
        """Blank lines anywhere inside the block are skipped."""
        cpp = translate_source("\nBEGIN\n\nLET x = 1\n\n\nPRINT x\n\nEND")
        assert main_body(cpp) == ["\tint x = 1;", "\tcout << x;"]

    def test_missing_begin(self):
        """The program must start with BEGIN."""
        with pytest.raises(UnexpectedTokenError, match="Cannot find the beginning of the program"):
            translate_source('PRINT "a"\nEND')

    def test_begin_needs_newline(self):
        """BEGIN must end its line."""
        with pytest.raises(MissingNewlineError, match="BEGIN must be followed by a newline"):
            translate_source('BEGIN PRINT "a"\nEND')

    def test_missing_end(self):
        """Running out of input before END is a syntax error."""
        with pytest.raises(TinySyntaxError, match="Cannot find the end of the program"):
            translate_source('BEGIN\nPRINT "a"\n')

    def test_tokens_after_end(self):
        """Nothing but whitespace may follow END."""
        with pytest.raises(TinySyntaxError, match="Unexpected tokens after END"):
            translate_source('BEGIN\nEND\nPRINT "a"')

    def test_stray_terminator(self):
        """A block terminator at top level cannot close the program."""
        with pytest.raises(TinySyntaxError, match="Cannot find the end of the program"):
            translate_source("BEGIN\nENDIF\nEND")

    def test_statement_needs_newline(self):
        """Two statements cannot share a line."""
        with pytest.raises(MissingNewlineError, match="PRINT statement must be followed by a newline"):
            translate('PRINT "a" PRINT "b"')

    def test_last_statement_needs_newline(self):
        """The last statement also ends its line before END."""
        with pytest.raises(MissingNewlineError):
            translate_source('BEGIN\nPRINT "a" END')


# =============================================================================
# Simple Statement Tests
# =============================================================================

class TestSimpleStatements:
    """PRINT, INPUT and LET."""

    def test_print_string(self):
        """Strings are emitted between quotes, as written."""
        assert body_of('PRINT "hello world"') == ['\tcout << "hello world";']

    def test_print_string_with_backslash(self):
        """Backslashes are doubled so C++ prints them as written."""
        assert body_of('PRINT "C:\\dir"') == ['\tcout << "C:\\\\dir";']

    def test_print_identifier(self):
        """Declared identifiers print their value."""
        assert body_of("LET x = 1\nPRINT x") == ["\tint x = 1;", "\tcout << x;"]

    def test_print_number_rejected(self):
        """PRINT takes a string or an identifier only."""
        with pytest.raises(UnexpectedTokenError, match="Unexpected tokens after PRINT"):
            translate("PRINT 5")

    def test_input_declares(self):
        """INPUT declares its variable on first use."""
        assert body_of("INPUT n") == ["\tint n;", "\tcin >> n;"]

    def test_input_twice(self):
        """A second INPUT re-uses the declaration."""
        assert body_of("INPUT n\nINPUT n") == ["\tint n;", "\tcin >> n;", "\tcin >> n;"]

    def test_input_requires_identifier(self):
        """INPUT needs a variable name."""
        with pytest.raises(UnexpectedTokenError, match="Unexpected tokens after INPUT"):
            translate('INPUT "x"')

    def test_let_declares_once(self):
        """The first LET declares inline; later ones only assign."""
        assert body_of("LET x = 5\nLET x = x + 1") == ["\tint x = 5;", "\tx = x + 1;"]

    def test_let_after_input(self):
        """A variable declared by INPUT is not declared again by LET."""
        assert body_of("INPUT x\nLET x = 2") == ["\tint x;", "\tcin >> x;", "\tx = 2;"]

    def test_let_target_must_be_identifier(self):
        """LET needs a variable name before '='."""
        with pytest.raises(UnexpectedTokenError, match="Target of assignment must be an identifier"):
            translate("LET 5 = 3")

    def test_let_needs_assignment_symbol(self):
        """LET x must be followed by '='."""
        with pytest.raises(UnexpectedTokenError, match="Unexpected token in assignment"):
            translate("LET x 5")

    def test_let_comparison_is_not_assignment(self):
        """'==' is a comparison, not an assignment."""
        with pytest.raises(UnexpectedTokenError, match="Unexpected token in assignment"):
            translate("LET x == 5")

    def test_one_declaration_per_identifier(self):
        """Each distinct identifier is declared exactly once, in first-use order."""
        cpp = translate("INPUT b\nLET a = b\nLET b = a\nINPUT a\nLET c = 1")
        declarations = [line.strip() for line in main_body(cpp) if line.strip().startswith("int ")]
        assert declarations == ["int b;", "int a = b;", "int c = 1;"]


# =============================================================================
# Expression Tests
# =============================================================================

class TestExpressions:
    """Operands, signs and the single binary operator."""

    @pytest.mark.parametrize("source_op,cpp_op", [
        ("+", "+"),
        ("-", "-"),
        ("*", "*"),
        ("/", "/"),
        ("mod", "%"),
    ])
    def test_arithmetic_operators(self, source_op, cpp_op):
        """Each operator maps to its C++ equivalent."""
        assert body_of(f"LET x = 7 {source_op} 3") == [f"\tint x = 7 {cpp_op} 3;"]

    @pytest.mark.parametrize("number", ["-5", "+5", "-2.5e3", ".5", "12.34", "5E10"])
    def test_numbers(self, number):
        """Signed and real literals are emitted as written."""
        assert body_of(f"LET x = {number}") == [f"\tint x = {number};"]

    def test_spaced_sign(self):
        """A sign separated from its number is glued on output."""
        assert body_of("LET x = - 5") == ["\tint x = -5;"]

    def test_identifier_operands(self):
        """Both operands may be identifiers."""
        assert body_of("LET a = 1\nLET b = a mod a") == ["\tint a = 1;", "\tint b = a % a;"]

    def test_chained_operators_rejected(self):
        """Only one operator per expression."""
        with pytest.raises(MissingNewlineError):
            translate("LET x = 1 + 2 + 3")

    def test_undeclared_operand(self):
        """Identifiers in expressions must be declared."""
        with pytest.raises(UndeclaredIdentifierError, match="undeclared identifier 'y'"):
            translate("LET x = y")

    def test_bad_operand(self):
        """An operand must be an identifier or a number."""
        with pytest.raises(UnexpectedTokenError, match="Unexpected tokens in number"):
            translate('LET x = "five"')

    def test_sign_needs_number(self):
        """A sign must be followed by a numeric literal."""
        with pytest.raises(UnexpectedTokenError, match="Unexpected tokens in number"):
            translate("LET a = 1\nLET x = -a")

    def test_lexical_error_propagates(self):
        """Lexical errors abort the parse unchanged."""
        with pytest.raises(MalformedNumberError):
            translate("LET x = 12.")


# =============================================================================
# IF Statement Tests
# =============================================================================

class TestIfStatement:
    """IF / ELSEIF / ELSE / ENDIF chains."""

    def test_if_only(self):
        """A lone IF becomes an if block."""
        assert body_of('LET x = 5\nIF x > 3\nPRINT "big"\nENDIF') == [
            "\tint x = 5;",
            "\tif(x > 3)",
            "\t{",
            '\t\tcout << "big";',
            "\t}",
        ]

    def test_full_chain(self):
        """ELSEIF and ELSE extend the chain in order."""
        source = (
            "LET x = 5\n"
            "IF x > 3\n"
            'PRINT "big"\n'
            "ELSEIF x == 3\n"
            'PRINT "three"\n'
            "ELSEIF x >= 2\n"
            'PRINT "two"\n'
            "ELSE\n"
            'PRINT "small"\n'
            "ENDIF"
        )
        assert body_of(source) == [
            "\tint x = 5;",
            "\tif(x > 3)",
            "\t{",
            '\t\tcout << "big";',
            "\t}",
            "\telse if(x == 3)",
            "\t{",
            '\t\tcout << "three";',
            "\t}",
            "\telse if(x >= 2)",
            "\t{",
            '\t\tcout << "two";',
            "\t}",
            "\telse",
            "\t{",
            '\t\tcout << "small";',
            "\t}",
        ]

    def test_empty_branches(self):
        """Branches may hold no statements."""
        assert body_of("LET x = 1\nIF x < 2\nELSE\nENDIF") == [
            "\tint x = 1;",
            "\tif(x < 2)",
            "\t{",
            "\t}",
            "\telse",
            "\t{",
            "\t}",
        ]

    @pytest.mark.parametrize("op", [">", "<", "==", ">=", "<="])
    def test_comparison_operators(self, op):
        """Every comparison is emitted unchanged."""
        body = body_of(f"LET x = 1\nIF x {op} 2\nENDIF")
        assert body[1] == f"\tif(x {op} 2)"

    def test_condition_with_arithmetic(self):
        """Both sides of a condition may be binary expressions."""
        body = body_of("LET x = 1\nIF x mod 2 == 0 + 1\nENDIF")
        assert body[1] == "\tif(x % 2 == 0 + 1)"

    def test_undeclared_in_condition(self):
        """Using an undeclared variable in IF is a syntax error."""
        with pytest.raises(TinySyntaxError, match="undeclared identifier 'x'"):
            translate_source('BEGIN\nIF x > 1\nPRINT "big"\nENDIF\nEND')

    def test_missing_comparison(self):
        """A condition needs a comparison operator."""
        with pytest.raises(UnexpectedTokenError, match="Unexpected tokens in condition"):
            translate('LET x = 1\nIF x\nPRINT "a"\nENDIF')

    def test_condition_needs_newline(self):
        """The IF condition ends its line."""
        with pytest.raises(MissingNewlineError, match="IF condition must be followed by a newline"):
            translate('LET x = 1\nIF x > 1 PRINT "a"\nENDIF')

    def test_else_needs_newline(self):
        """ELSE stands alone on its line."""
        with pytest.raises(MissingNewlineError, match="ELSE must be followed by a newline"):
            translate('LET x = 1\nIF x > 1\nELSE PRINT "a"\nENDIF')

    def test_missing_endif(self):
        """An IF must be closed by ENDIF."""
        with pytest.raises(UnexpectedTokenError, match="Cannot find the end of if_statement"):
            translate("LET x = 1\nIF x > 0\nPRINT x")

    def test_elseif_after_else(self):
        """ELSE must be the last branch."""
        with pytest.raises(UnexpectedTokenError, match="Cannot find the end of if_statement"):
            translate("LET x = 1\nIF x > 0\nELSE\nELSEIF x < 0\nENDIF")


# =============================================================================
# WHILE Statement Tests
# =============================================================================

class TestWhileStatement:
    """WHILE ... REPEAT ... ENDWHILE loops."""

    def test_loop(self):
        """A loop becomes a while block."""
        source = "LET i = 0\nWHILE i < 3 REPEAT\nPRINT i\nLET i = i + 1\nENDWHILE"
        assert body_of(source) == [
            "\tint i = 0;",
            "\twhile(i < 3)",
            "\t{",
            "\t\tcout << i;",
            "\t\ti = i + 1;",
            "\t}",
        ]

    def test_repeat_on_next_line(self):
        """REPEAT must share the WHILE line."""
        with pytest.raises(UnexpectedTokenError, match="same line"):
            translate("LET i = 0\nWHILE i < 3\nREPEAT\nENDWHILE")

    def test_repeat_required(self):
        """The condition must be followed by REPEAT."""
        with pytest.raises(UnexpectedTokenError, match="same line"):
            translate("LET i = 0\nWHILE i < 3 PRINT i\nENDWHILE")

    def test_repeat_needs_newline(self):
        """REPEAT ends its line."""
        with pytest.raises(MissingNewlineError, match="REPEAT must be followed by a newline"):
            translate("LET i = 0\nWHILE i < 3 REPEAT PRINT i\nENDWHILE")

    def test_missing_endwhile(self):
        """A loop must be closed by ENDWHILE."""
        with pytest.raises(UnexpectedTokenError, match="Cannot find the end of while_statement"):
            translate("LET i = 0\nWHILE i < 3 REPEAT\nLET i = i + 1")

    def test_endif_cannot_close_loop(self):
        """Terminators are not interchangeable."""
        with pytest.raises(UnexpectedTokenError, match="Cannot find the end of while_statement"):
            translate("LET i = 0\nWHILE i < 3 REPEAT\nENDIF")

    def test_nested_indentation(self):
        """Each nesting level adds one indentation unit."""
        source = (
            "INPUT n\n"
            "WHILE n > 0 REPEAT\n"
            "IF n mod 2 == 0\n"
            'PRINT "even"\n'
            "ENDIF\n"
            "LET n = n - 1\n"
            "ENDWHILE"
        )
        assert body_of(source) == [
            "\tint n;",
            "\tcin >> n;",
            "\twhile(n > 0)",
            "\t{",
            "\t\tif(n % 2 == 0)",
            "\t\t{",
            '\t\t\tcout << "even";',
            "\t\t}",
            "\t\tn = n - 1;",
            "\t}",
        ]

    def test_declaration_inside_loop(self):
        """A first use inside a block declares at that level."""
        body = body_of("LET i = 0\nWHILE i < 1 REPEAT\nLET j = i\nLET i = 1\nENDWHILE")
        assert "\t\tint j = i;" in body


# =============================================================================
# Nesting Depth Tests
# =============================================================================

class TestNestingDepth:
    """Limit on IF/WHILE blocks nested inside one another."""

    def test_deepest_allowed(self):
        """Blocks may nest up to the limit."""
        depth = TinyParser.MAX_NESTING_DEPTH
        body = body_of(nested_loops(depth))
        innermost = "\t" * (depth + 1) + "i = 1;"
        assert innermost in body

    def test_one_level_too_deep(self):
        """The block past the limit is reported where it opens."""
        depth = TinyParser.MAX_NESTING_DEPTH + 1
        with pytest.raises(NestingTooDeepError, match="nesting too deep") as exc_info:
            translate(nested_loops(depth))
        # BEGIN and LET take the first two lines
        assert exc_info.value.location.line == depth + 2
        assert exc_info.value.location.column == 1

    def test_very_deep_program(self):
        """Hundreds of levels give a syntax error, not a crash."""
        with pytest.raises(TinySyntaxError):
            translate(nested_loops(400))

    def test_deep_if_chain(self):
        """IF blocks count toward the same limit."""
        depth = TinyParser.MAX_NESTING_DEPTH + 1
        source = "LET i = 0\n" + "IF i < 1\n" * depth + "ENDIF\n" * depth
        with pytest.raises(NestingTooDeepError):
            translate(source.rstrip("\n"))


# =============================================================================
# Undeclared Identifier Tests
# =============================================================================

class TestUndeclaredIdentifiers:
    """Declaration-before-use and its diagnostics."""

    def test_print_undeclared(self):
        """PRINT of an unknown variable fails."""
        with pytest.raises(UndeclaredIdentifierError):
            translate("PRINT x")

    def test_is_syntax_error(self):
        """Undeclared identifiers are reported as syntax errors."""
        with pytest.raises(TinySyntaxError) as exc_info:
            translate("PRINT x")
        assert exc_info.value.kind == "Syntax Error"
        assert not isinstance(exc_info.value, TinyLexicalError)

    def test_declared_in_earlier_branch(self):
        """Declarations are program-wide, not block scoped."""
        body = body_of("LET a = 1\nIF a > 0\nLET b = 2\nENDIF\nPRINT b")
        assert body[-1] == "\tcout << b;"

    def test_suggestion_and_location(self):
        """The error points at the use and suggests similar names."""
        with pytest.raises(UndeclaredIdentifierError) as exc_info:
            translate("LET count = 1\nPRINT cuont")
        error = exc_info.value
        assert error.identifier == "cuont"
        assert error.similar_identifiers == ["count"]
        assert error.location.line == 3
        assert error.location.column == 7
        assert "did you mean 'count'?" in str(error)
        assert str(error).startswith("test.txt:3:7: Syntax Error: undeclared identifier 'cuont'")


# =============================================================================
# Direct Parser Tests
# =============================================================================

class TestParserDirect:
    """Driving TinyParser without the translator."""

    def test_parser_fills_symbol_table(self):
        """The symbol table handed in receives the declarations."""
        symbols = SymbolTable()
        out = io.StringIO()
        parser = TinyParser(TinyLexer("BEGIN\nINPUT a\nLET b = a\nEND"), CppEmitter(out), symbols)
        parser.parse()
        assert symbols.names() == ["a", "b"]
        assert parser.symbols is symbols

    def test_token_count(self):
        """Rolled-back tokens are counted once."""
        parser = TinyParser(TinyLexer("BEGIN\nLET x = 5\nEND"), CppEmitter(io.StringIO()))
        parser.parse()
        # BEGIN NEWLINE LET x = 5 NEWLINE END EOF
        assert parser.token_count == 9

    def test_custom_emitter_settings(self):
        """Indentation and variable type come from the emitter."""
        out = io.StringIO()
        emitter = CppEmitter(out, indent_unit="  ", variable_type="double")
        TinyParser(TinyLexer("BEGIN\nLET x = 1.5\nEND"), emitter).parse()
        assert "  double x = 1.5;\n" in out.getvalue()
        assert "  return 0;\n" in out.getvalue()
