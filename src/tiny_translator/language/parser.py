"""
Tiny Language Recursive Descent Parser
======================================

This module implements a syntax-directed translator for the tiny
language. It pulls tokens from the lexer and, as each production is
recognized, writes the matching C++ through the emitter. There is no
syntax tree: recognition and code emission happen in one traversal.

Grammar
-------
program     ::= 'BEGIN' NEWLINE statements 'END'
statements  ::= (statement NEWLINE)*
statement   ::= print_stmt | input_stmt | let_stmt | if_stmt | while_stmt

print_stmt  ::= 'PRINT' (STRING | IDENTIFIER)
input_stmt  ::= 'INPUT' IDENTIFIER
let_stmt    ::= 'LET' assignment
assignment  ::= IDENTIFIER '=' expression

if_stmt     ::= 'IF' condition NEWLINE statements
                ('ELSEIF' condition NEWLINE statements)*
                ('ELSE' NEWLINE statements)?
                'ENDIF'
while_stmt  ::= 'WHILE' condition 'REPEAT' NEWLINE statements 'ENDWHILE'

condition   ::= expression ('>' | '<' | '==' | '>=' | '<=') expression
expression  ::= exp (('+' | '-' | '*' | '/' | 'mod') exp)?
exp         ::= IDENTIFIER | number
number      ::= ('-' | '+')? NUMBER

An expression holds at most one operator and a condition exactly one
comparison; ``a + b + c`` and ``and``/``or`` are not part of the language.

Token Discipline
----------------
Every production is entered with its first token already current and
returns with its last token current. When a production reads one token
too far (the end of a statement list, an expression without an
operator) it hands that token back with ``rollback()``.

NEWLINE tokens are requested only where a line break is required: after
BEGIN, after each statement, after IF/ELSEIF conditions and ELSE, and
after REPEAT. REPEAT itself is read newline-sensitively so that it must
share the WHILE line.

Declarations
------------
LET targets and INPUT operands declare their identifier on first use;
the C++ declaration is emitted right there. Any other use of an
undeclared identifier is a syntax error.

Example Usage
-------------
>>> import io
>>> from tiny_translator.language.lexer import TinyLexer
>>> from tiny_translator.language.emitter import CppEmitter
>>> from tiny_translator.language.parser import TinyParser
>>> out = io.StringIO()
>>> TinyParser(TinyLexer("BEGIN\\nLET x = 5\\nPRINT x\\nEND"), CppEmitter(out)).parse()
>>> "int x = 5;" in out.getvalue()
True
"""

import logging
from typing import Callable, Optional

from tiny_translator.language.emitter import CppEmitter
from tiny_translator.language.lexer import TinyLexer, Token, TokenType
from tiny_translator.language.symbols import SymbolTable
from tiny_translator.language.errors import (
    MissingNewlineError,
    NestingTooDeepError,
    UndeclaredIdentifierError,
    UnexpectedTokenError,
)

logger = logging.getLogger(__name__)


class TinyParser:
    """
    Recursive descent recognizer and C++ emitter for the tiny language.

    A parser serves a single translation run: it owns the symbol table
    and writes to the emitter it is given. The first lexical or syntax
    error propagates out of parse() and ends the run.

    Attributes:
        symbols: Identifiers declared so far
    """

    # Arithmetic operator token -> C++ operator
    ARITHMETIC_OPERATORS = {
        TokenType.PLUS: "+",
        TokenType.MINUS: "-",
        TokenType.STAR: "*",
        TokenType.SLASH: "/",
        TokenType.MOD: "%",
    }

    # Comparison operator token -> C++ operator
    COMPARISON_OPERATORS = {
        TokenType.GT: ">",
        TokenType.LT: "<",
        TokenType.EQ: "==",
        TokenType.GE: ">=",
        TokenType.LE: "<=",
    }

    # Levels of IF/WHILE blocks, one inside the other
    MAX_NESTING_DEPTH = 64

    def __init__(
        self,
        lexer: TinyLexer,
        emitter: CppEmitter,
        symbols: Optional[SymbolTable] = None,
    ):
        """
        Initialize the parser.

        Args:
            lexer: Token source for the program
            emitter: Destination for the generated C++
            symbols: Symbol table to fill (a fresh one if None)
        """
        self.symbols = symbols if symbols is not None else SymbolTable()

        self._lexer = lexer
        self._emitter = emitter
        self._source_lines = lexer.source.split("\n")

        # Tokens consumed, net of rollbacks
        self._token_count = 0

        self._statement_handlers: dict[TokenType, Callable[[], None]] = {
            TokenType.PRINT: self._print_statement,
            TokenType.INPUT: self._input_statement,
            TokenType.LET: self._let_statement,
            TokenType.IF: self._if_statement,
            TokenType.WHILE: self._while_statement,
        }

    @property
    def token_count(self) -> int:
        return self._token_count

    def parse(self) -> None:
        """
        Translate the whole program.

        Raises:
            TinyLexicalError: If the lexer finds an ill-formed token
            TinySyntaxError: If the program does not match the grammar
        """
        logger.debug(f"Translating {self._lexer.filename}")
        self._program()
        logger.debug(
            f"Finished {self._lexer.filename}: {self._token_count} tokens, "
            f"{len(self.symbols)} variables"
        )

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _next(self, newline_sensitive: bool = False) -> Token:
        self._token_count += 1
        return self._lexer.next(newline_sensitive)

    def _rollback(self) -> None:
        self._token_count -= 1
        self._lexer.rollback()

    def _current(self) -> Token:
        token = self._lexer.current()
        assert token is not None, "parser reads a token before inspecting it"
        return token

    def _newline(self, construct: str) -> None:
        """Require a line break right after construct."""
        token = self._next(newline_sensitive=True)
        if token.type != TokenType.NEWLINE:
            raise MissingNewlineError(
                construct,
                token.location,
                self._get_source_line(token.line),
            )

    def _get_source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < line <= len(self._source_lines):
            return self._source_lines[line - 1]
        return None

    def _unexpected(self, message: str, token: Token, expected: str) -> UnexpectedTokenError:
        return UnexpectedTokenError(
            message,
            token.describe(),
            expected,
            token.location,
            self._get_source_line(token.line),
        )

    # =========================================================================
    # Symbol Handling
    # =========================================================================

    def _declare(self, token: Token) -> bool:
        """Declare the identifier in token; True on its first use."""
        declared = self.symbols.declare(token.text)
        if declared:
            logger.debug(f"Declared '{token.text}' at {token.location}")
        return declared

    def _check_nesting(self, token: Token) -> None:
        """Refuse to open a block at token beyond MAX_NESTING_DEPTH."""
        # depth 1 is the body of main()
        if self._emitter.depth > self.MAX_NESTING_DEPTH:
            raise NestingTooDeepError(
                self.MAX_NESTING_DEPTH,
                token.location,
                self._get_source_line(token.line),
            )

    def _require_declared(self, token: Token) -> None:
        if token.text not in self.symbols:
            raise UndeclaredIdentifierError(
                token.text,
                token.location,
                self._get_source_line(token.line),
                similar_identifiers=self.symbols.find_similar(token.text),
            )

    # =========================================================================
    # Program Structure
    # =========================================================================

    def _program(self) -> None:
        """program ::= 'BEGIN' NEWLINE statements 'END'"""
        self._emitter.emit_prologue()

        token = self._next()
        if token.type != TokenType.BEGIN:
            raise self._unexpected("Cannot find the beginning of the program", token, "'BEGIN'")

        self._newline("BEGIN")

        # An empty body leaves END current straight away
        token = self._next()
        terminator_text = token.text
        if token.type != TokenType.END:
            self._statements()
            terminator_text = self._lexer.current_text()
            token = self._next()

        # END as the last bytes of the input also counts when the lexer
        # already reports end of input for it
        found_end = token.type == TokenType.END or (
            token.type == TokenType.EOF and terminator_text == "END"
        )
        if not found_end:
            raise self._unexpected("Cannot find the end of the program", token, "'END'")

        self._emitter.emit_epilogue()

        token = self._next()
        if token.type != TokenType.EOF:
            raise self._unexpected("Unexpected tokens after END", token, "end of input")

    def _statements(self) -> None:
        """
        statements ::= (statement NEWLINE)*

        Stops at the first token that starts no statement and rolls it
        back for the caller.
        """
        while True:
            token = self._current()
            handler = self._statement_handlers.get(token.type)
            if handler is None:
                self._rollback()
                return

            handler()
            self._newline(f"{token.text} statement")
            self._next()

    def _body(self) -> None:
        """Statements of an IF/ELSEIF/ELSE/WHILE branch inside braces."""
        self._next()  # first token after the NEWLINE
        with self._emitter.block():
            self._statements()

    # =========================================================================
    # Statements
    # =========================================================================

    def _print_statement(self) -> None:
        """print_stmt ::= 'PRINT' (STRING | IDENTIFIER)"""
        token = self._next()

        if token.type == TokenType.STRING:
            text = token.text.replace("\\", "\\\\")
            self._emitter.emit_line(f'cout << "{text}";')
        elif token.type == TokenType.IDENTIFIER:
            self._require_declared(token)
            self._emitter.emit_line(f"cout << {token.text};")
        else:
            raise self._unexpected("Unexpected tokens after PRINT", token, "a string or an identifier")

    def _input_statement(self) -> None:
        """input_stmt ::= 'INPUT' IDENTIFIER"""
        token = self._next()
        if token.type != TokenType.IDENTIFIER:
            raise self._unexpected("Unexpected tokens after INPUT", token, "an identifier")

        if self._declare(token):
            self._emitter.emit_declaration(token.text)
        self._emitter.emit_line(f"cin >> {token.text};")

    def _let_statement(self) -> None:
        """let_stmt ::= 'LET' assignment"""
        token = self._next()
        if token.type != TokenType.IDENTIFIER:
            raise self._unexpected("Target of assignment must be an identifier", token, "an identifier")

        if self._declare(token):
            self._emitter.write(self._emitter.declaration_prefix())
        self._assignment()

    def _assignment(self) -> None:
        """assignment ::= IDENTIFIER '=' expression"""
        target = self._current()
        if target.type != TokenType.IDENTIFIER:
            raise self._unexpected("Target of assignment must be an identifier", target, "an identifier")
        self._require_declared(target)

        self._emitter.write(target.text)

        token = self._next()
        if token.type != TokenType.ASSIGN:
            raise self._unexpected("Unexpected token in assignment", token, "'='")
        self._emitter.write(" = ")

        self._next()
        self._expression()
        self._emitter.write(";")
        self._emitter.end_line()

    def _if_statement(self) -> None:
        """
        if_stmt ::= 'IF' condition NEWLINE statements
                    ('ELSEIF' condition NEWLINE statements)*
                    ('ELSE' NEWLINE statements)?
                    'ENDIF'
        """
        self._check_nesting(self._current())
        self._emitter.write("if(")
        self._next()
        self._condition()
        self._newline("IF condition")
        self._emitter.write(")")
        self._emitter.end_line()
        self._body()

        token = self._next()
        while token.type == TokenType.ELSEIF:
            self._emitter.write("else if(")
            self._next()
            self._condition()
            self._newline("ELSEIF condition")
            self._emitter.write(")")
            self._emitter.end_line()
            self._body()
            token = self._next()

        if token.type == TokenType.ELSE:
            self._newline("ELSE")
            self._emitter.emit_line("else")
            self._body()
            token = self._next()

        if token.type != TokenType.ENDIF:
            raise self._unexpected("Cannot find the end of if_statement", token, "'ENDIF'")

    def _while_statement(self) -> None:
        """while_stmt ::= 'WHILE' condition 'REPEAT' NEWLINE statements 'ENDWHILE'"""
        self._check_nesting(self._current())
        self._emitter.write("while(")
        self._next()
        self._condition()
        self._emitter.write(")")
        self._emitter.end_line()

        token = self._next(newline_sensitive=True)
        if token.type != TokenType.REPEAT:
            raise self._unexpected(
                "a WHILE literal and a REPEAT literal must be on the same line",
                token,
                "'REPEAT'",
            )

        self._newline("REPEAT")
        self._body()

        token = self._next()
        if token.type != TokenType.ENDWHILE:
            raise self._unexpected("Cannot find the end of while_statement", token, "'ENDWHILE'")

    # =========================================================================
    # Conditions and Expressions
    # =========================================================================

    def _condition(self) -> None:
        """condition ::= expression compare_op expression"""
        self._expression()

        token = self._next()
        operator = self.COMPARISON_OPERATORS.get(token.type)
        if operator is None:
            raise self._unexpected(
                "Unexpected tokens in condition",
                token,
                "one of '>', '<', '==', '>=', '<='",
            )
        self._emitter.write(f" {operator} ")

        self._next()
        self._expression()

    def _expression(self) -> None:
        """expression ::= exp (arith_op exp)?"""
        self._exp()

        token = self._next()
        operator = self.ARITHMETIC_OPERATORS.get(token.type)
        if operator is None:
            self._rollback()
            return

        self._emitter.write(f" {operator} ")
        self._next()
        self._exp()

    def _exp(self) -> None:
        """exp ::= IDENTIFIER | number"""
        token = self._current()
        if token.type == TokenType.IDENTIFIER:
            self._require_declared(token)
            self._emitter.write(token.text)
        else:
            self._number()

    def _number(self) -> None:
        """number ::= ('-' | '+')? NUMBER"""
        token = self._current()

        sign = ""
        if token.type in (TokenType.MINUS, TokenType.PLUS):
            sign = token.text
            token = self._next()

        if token.type != TokenType.NUMBER:
            raise self._unexpected("Unexpected tokens in number", token, "an identifier or a number")

        self._emitter.write(f"{sign}{token.text}")
