"""
minijava recursive descent parser.

One method per grammar rule, a single read cursor, and lookahead limited to
the current token. The only backtracking is done by checkpointed
probes: one tells a method declaration from a variable declaration, the
other a method call from an assignment.

Syntax errors never stop the parse. Each one is recorded as a diagnostic and
the parser recovers locally: a missing token costs exactly one consumed
token, a bad expression becomes an ERROR node, an unknown statement start is
skipped, and a declaration missing its ';' resynchronizes to the next
plausible statement.

Grammar (precedence low to high: comparison, additive, multiplicative,
primary):

    Program        := Statement*
    Statement      := Modifiers (ClassDecl | MethodDecl | VarDecl | While
                      | If | Block | MethodCallStmt | Assignment)
    ClassDecl      := 'class' IDENT '{' Statement* '}'
    MethodDecl     := Type IDENT '(' <skipped> ')' '{' Statement* '}'
    VarDecl        := Type IDENT ('=' Expr)? ';'
    While          := 'while' '(' Condition ')' Statement
    If             := 'if' '(' Condition ')' Statement ('else' Statement)?
    Block          := '{' Statement* '}'
    MethodCallStmt := IDENT ('.' IDENT)* '(' (Expr (',' Expr)*)? ')' ';'
    Assignment     := IDENT ('=' Expr | '++' | '--') ';'
    Condition      := Expr (CompareOp Expr)?
    Expr           := Term (('+'|'-') Term)*
    Term           := Factor (('*'|'/'|'%') Factor)*
    Factor         := NUMBER | IDENT ('++'|'--')? | STRING | '(' Condition ')'
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import List, Optional

from ..lexer.tokens import (
    Token, TokenType, SourceLocation, MODIFIERS, TYPE_KEYWORDS, COMPARISON_OPERATORS
)
from ..lexer.errors import Diagnostic
from .ast_nodes import (
    Program, Statement, Expression, ClassDecl, MethodDecl, Declaration,
    Modifier, ReturnType, WhileLoop, IfStatement, Block, MethodCall,
    Assignment, Increment, Decrement, Condition, Body, Then, Else, Argument,
    BinaryOp, Comparison, Identifier, Number, StringLiteral, PostIncrement,
    PostDecrement, ErrorNode
)
from .errors import (
    ParseError, SyntaxErrorRecovery, create_unexpected_token_error,
    create_missing_semicolon_error, create_unrecognized_statement_error,
    create_invalid_expression_error, create_invalid_assignment_error,
    create_fatal_error
)

logger = logging.getLogger(__name__)

ADDITIVE_OPERATORS = frozenset({TokenType.PLUS, TokenType.MINUS})
MULTIPLICATIVE_OPERATORS = frozenset({TokenType.MULTIPLY, TokenType.DIVIDE, TokenType.MODULO})

# Tokens that end an argument list, whether or not the ')' is present
ARGUMENT_TERMINATORS = frozenset({TokenType.RIGHT_PAREN, TokenType.SEMICOLON, TokenType.RIGHT_BRACE})


@dataclass
class ParseResult:
    """
    Outcome of ``Parser.parse``.

    On success ``root`` is the PROGRAM node (possibly containing ERROR nodes)
    and ``diagnostics`` lists every recoverable problem. If the parser hit an
    unexpected internal fault, ``root`` is None, ``fatal`` holds the fault
    message and it is also the last entry of ``diagnostics``.
    """
    root: Optional[Program]
    diagnostics: List[str] = field(default_factory=list)
    errors: List[Diagnostic] = field(default_factory=list)
    fatal: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True when a tree was produced."""
        return self.root is not None

    def has_errors(self) -> bool:
        """Check if parsing reported any diagnostics."""
        return len(self.diagnostics) > 0


class Parser:
    """
    minijava recursive descent parser.

    Single use: construct it with the lexer's token list and call
    ``parse()`` once.
    """

    def __init__(self, tokens: List[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer, ending with EOF
        """
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].type != TokenType.EOF:
            last = self.tokens[-1].location if self.tokens else SourceLocation("<unknown>", 1, 1, 0)
            self.tokens.append(Token(TokenType.EOF, "", "", last))
        self.current = 0
        self.errors: List[Diagnostic] = []

    @property
    def diagnostics(self) -> List[str]:
        return [str(error) for error in self.errors]

    def parse(self) -> ParseResult:
        """
        Parse the token stream into an AST.

        Never raises: an unexpected fault inside the traversal is reported as
        a single fatal diagnostic and yields a result without a tree.
        """
        self.current = 0
        self.errors = []

        try:
            program = self._parse_program()
        except Exception as exc:
            logger.exception("parser failed at token %d", self.current)
            fatal = create_fatal_error(exc, self._peek().location)
            self.errors.append(fatal)
            return ParseResult(None, self.diagnostics, list(self.errors), fatal=str(fatal))

        logger.debug("parsed %d top-level statements with %d diagnostics",
                     len(program.statements), len(self.errors))
        return ParseResult(program, self.diagnostics, list(self.errors))

    def _parse_program(self) -> Program:
        program = Program()
        while not self._is_at_end():
            statement = self._parse_statement()
            if statement is not None:
                program.append(statement)
        return program

    # Statements

    def _parse_statement(self) -> Optional[Statement]:
        """Parse one statement, or report and skip its first token."""
        modifiers = []
        while self._peek().type in MODIFIERS:
            modifiers.append(self._advance())

        token = self._peek()

        if token.type == TokenType.CLASS:
            return self._parse_class(modifiers)

        if token.type in TYPE_KEYWORDS:
            if self._is_likely_method(modifiers, token):
                return self._parse_method(modifiers)
            return self._parse_declaration()

        if token.type == TokenType.WHILE:
            return self._parse_while_statement()
        elif token.type == TokenType.IF:
            return self._parse_if_statement()
        elif token.type == TokenType.IDENTIFIER:
            if self._is_method_call():
                return self._parse_method_call()
            return self._parse_assignment()
        elif token.type == TokenType.LEFT_BRACE:
            return self._parse_block_statement()

        self.errors.append(create_unrecognized_statement_error(token))
        self._advance()
        return None

    def _is_likely_method(self, modifiers: List[Token], type_token: Token) -> bool:
        """
        Decide whether a statement starting with a type is a method.

        It is when modifiers precede it, when the type is ``void``, or when
        the type is followed by ``IDENT (``.
        """
        if modifiers or type_token.type == TokenType.VOID:
            return True

        with self._speculate():
            self._advance()  # type
            if self._match(TokenType.IDENTIFIER) and self._check(TokenType.LEFT_PAREN):
                return True
        return False

    def _is_method_call(self) -> bool:
        """Probe for ``IDENT ('.' IDENT)* '('`` at the cursor."""
        with self._speculate():
            self._advance()  # first name segment
            while self._match(TokenType.DOT):
                if not self._match(TokenType.IDENTIFIER):
                    return False
            return self._check(TokenType.LEFT_PAREN)

    def _parse_class(self, modifiers: List[Token]) -> ClassDecl:
        self._consume(TokenType.CLASS, "Expected 'class' keyword")
        name_token = self._consume(TokenType.IDENTIFIER, "Expected class name")

        class_decl = ClassDecl(
            name_token.lexeme,
            modifiers=self._modifier_nodes(modifiers),
            line=name_token.line
        )

        self._consume(TokenType.LEFT_BRACE, "Expected '{' to start class body")
        self._parse_statements_until_brace(class_decl)
        self._consume(TokenType.RIGHT_BRACE, "Expected '}' to close class body")
        return class_decl

    def _parse_method(self, modifiers: List[Token]) -> MethodDecl:
        return_type = self._advance()
        name_token = self._consume(TokenType.IDENTIFIER, "Expected method name")

        method = MethodDecl(
            name_token.lexeme,
            ReturnType(return_type.lexeme, return_type.line),
            modifiers=self._modifier_nodes(modifiers),
            line=name_token.line
        )

        self._consume(TokenType.LEFT_PAREN, "Expected '(' for method parameters")
        self._skip_parameter_list()
        self._consume(TokenType.RIGHT_PAREN, "Expected ')' after method parameters")

        self._consume(TokenType.LEFT_BRACE, "Expected '{' to start method body")
        self._parse_statements_until_brace(method)
        self._consume(TokenType.RIGHT_BRACE, "Expected '}' to close method body")
        return method

    def _skip_parameter_list(self):
        """Skip parameter tokens up to, not including, the matching ')'."""
        depth = 0
        while not self._is_at_end():
            if self._check(TokenType.RIGHT_PAREN):
                if depth == 0:
                    return
                depth -= 1
            elif self._check(TokenType.LEFT_PAREN):
                depth += 1
            self._advance()

    def _parse_declaration(self) -> Optional[Declaration]:
        """Parse ``Type name [= expr];``."""
        type_token = self._advance()

        if not self._check(TokenType.IDENTIFIER):
            self.errors.append(create_unexpected_token_error("Expected identifier", self._peek()))
            return None

        name_token = self._advance()

        initializer = None
        if self._match(TokenType.ASSIGN):
            initializer = self._parse_expression()

        declaration = Declaration(type_token.lexeme, name_token.lexeme, initializer,
                                  line=type_token.line)

        if not self._match(TokenType.SEMICOLON):
            self.errors.append(create_missing_semicolon_error(
                "declaration", name_token.location, found=self._peek()))
            self._synchronize()

        return declaration

    def _parse_while_statement(self) -> WhileLoop:
        while_token = self._consume(TokenType.WHILE, "Expected 'while'")

        self._consume(TokenType.LEFT_PAREN, "Expected '(' after 'while'")
        condition = self._parse_condition()
        self._consume(TokenType.RIGHT_PAREN, "Expected ')' to close the condition")

        body = self._parse_statement()

        return WhileLoop(
            Condition(condition),
            Body(body) if body is not None else None,
            line=while_token.line
        )

    def _parse_if_statement(self) -> IfStatement:
        if_token = self._consume(TokenType.IF, "Expected 'if'")

        self._consume(TokenType.LEFT_PAREN, "Expected '(' after 'if'")
        condition = self._parse_condition()
        self._consume(TokenType.RIGHT_PAREN, "Expected ')' to close the condition")

        then_branch = self._parse_statement()

        else_branch = None
        if self._match(TokenType.ELSE):
            else_branch = self._parse_statement()

        return IfStatement(
            Condition(condition),
            Then(then_branch) if then_branch is not None else None,
            Else(else_branch) if else_branch is not None else None,
            line=if_token.line
        )

    def _parse_block_statement(self) -> Block:
        start_token = self._consume(TokenType.LEFT_BRACE, "Expected '{'")
        block = Block(line=start_token.line)
        self._parse_statements_until_brace(block)
        self._consume(TokenType.RIGHT_BRACE, "Expected '}'")
        return block

    def _parse_statements_until_brace(self, container):
        """Append statements to ``container`` until '}' or EOF."""
        while not self._is_at_end() and not self._check(TokenType.RIGHT_BRACE):
            statement = self._parse_statement()
            if statement is not None:
                container.append(statement)

    def _parse_method_call(self) -> MethodCall:
        """Parse ``a.b.c(args);`` keeping the dotted name as one string."""
        first_token = self._peek()

        parts = []
        while self._check(TokenType.IDENTIFIER):
            parts.append(self._advance().lexeme)
            if self._check(TokenType.DOT):
                parts.append(self._advance().lexeme)
            else:
                break

        call = MethodCall("".join(parts), line=first_token.line)

        self._consume(TokenType.LEFT_PAREN, "Expected '(' after method name")

        while not self._is_at_end() and self._peek().type not in ARGUMENT_TERMINATORS:
            argument = self._parse_expression()
            call.append(Argument(argument))
            if self._match(TokenType.COMMA):
                continue
            if not self._is_at_end() and self._peek().type not in ARGUMENT_TERMINATORS:
                self.errors.append(create_unexpected_token_error(
                    "Expected ',' between arguments", self._peek()))

        self._consume(TokenType.RIGHT_PAREN, "Expected ')' after method arguments")
        self._expect_semicolon("method call", first_token)
        return call

    def _parse_assignment(self) -> Optional[Statement]:
        """Parse ``name = expr;``, ``name++;`` or ``name--;``."""
        name_token = self._consume(TokenType.IDENTIFIER, "Expected identifier")

        if self._match(TokenType.ASSIGN):
            expression = self._parse_expression()
            assignment = Assignment(name_token.lexeme, expression, line=name_token.line)
            self._expect_semicolon("assignment", name_token)
            return assignment

        if self._match(TokenType.INCREMENT):
            increment = Increment(name_token.lexeme, line=name_token.line)
            self._expect_semicolon("increment", name_token)
            return increment

        if self._match(TokenType.DECREMENT):
            decrement = Decrement(name_token.lexeme, line=name_token.line)
            self._expect_semicolon("decrement", name_token)
            return decrement

        self.errors.append(create_invalid_assignment_error(name_token))
        return None

    # Expressions

    def _parse_condition(self) -> Expression:
        """Parse ``expr [compare-op expr]``."""
        left = self._parse_expression()

        if self._peek().type in COMPARISON_OPERATORS:
            operator = self._advance()
            right = self._parse_expression()
            return Comparison(operator.lexeme, left, right)

        return left

    def _parse_expression(self) -> Expression:
        """Parse additive expressions (left associative)."""
        left = self._parse_term()

        while self._peek().type in ADDITIVE_OPERATORS:
            operator = self._advance()
            right = self._parse_term()
            left = BinaryOp(operator.lexeme, left, right)

        return left

    def _parse_term(self) -> Expression:
        """Parse multiplicative expressions (left associative)."""
        left = self._parse_factor()

        while self._peek().type in MULTIPLICATIVE_OPERATORS:
            operator = self._advance()
            right = self._parse_factor()
            left = BinaryOp(operator.lexeme, left, right)

        return left

    def _parse_factor(self) -> Expression:
        token = self._peek()

        if token.type == TokenType.NUMBER:
            self._advance()
            return Number(token.lexeme, token.line)

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            identifier = Identifier(token.lexeme, token.line)
            if self._match(TokenType.INCREMENT):
                return PostIncrement(identifier)
            if self._match(TokenType.DECREMENT):
                return PostDecrement(identifier)
            return identifier

        if token.type == TokenType.STRING_LITERAL:
            self._advance()
            return StringLiteral(token.value, token.line)

        if token.type == TokenType.LEFT_PAREN:
            self._advance()
            expression = self._parse_condition()
            self._consume(TokenType.RIGHT_PAREN, "Expected ')'")
            return expression

        self.errors.append(create_invalid_expression_error(token))
        self._advance()
        return ErrorNode(token.line)

    # Recovery

    def _expect_semicolon(self, what: str, start_token: Token):
        if not self._match(TokenType.SEMICOLON):
            self.errors.append(create_missing_semicolon_error(what, start_token.location))

    def _synchronize(self):
        """Skip ahead to the next plausible statement start."""
        start = self.current
        self.current = SyntaxErrorRecovery.synchronize_to_statement_boundary(
            self.tokens, self.current
        )
        logger.debug("resynchronized from token %d to %d", start, self.current)

    @contextmanager
    def _speculate(self):
        """
        Checkpoint for lookahead probes.

        Tokens consumed inside the ``with`` block are given back when it
        exits, however it exits.
        """
        saved = self.current
        try:
            yield
        finally:
            self.current = saved

    # Utility methods

    def _modifier_nodes(self, modifiers: List[Token]) -> List[Modifier]:
        return [Modifier(token.lexeme, token.line) for token in modifiers]

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """
        Consume token of expected type.

        On mismatch record ``message`` and consume the offending token anyway
        so the cursor always moves forward.
        """
        if self._check(token_type):
            return self._advance()

        current_token = self._peek()
        self.errors.append(create_unexpected_token_error(message, current_token))
        self._advance()
        return current_token

    def _match(self, token_type: TokenType) -> bool:
        """Check if current token matches type and consume if so."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self._peek().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token; EOF is never consumed."""
        token = self._peek()
        if not self._is_at_end():
            self.current += 1
        return token

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        """Return current token without consuming."""
        return self.tokens[self.current]


def parse_string(source: str, filename: str = "<string>", strict: bool = False) -> ParseResult:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        strict: Raise instead of returning a result with diagnostics

    Returns:
        ParseResult

    Raises:
        ParseError: If ``strict`` and parsing reported any diagnostic
    """
    from ..lexer import tokenize_string

    tokens = tokenize_string(source, filename)
    result = Parser(tokens).parse()

    if strict and result.has_errors():
        raise ParseError(result.fatal or result.diagnostics[0], result.diagnostics)

    return result


def parse_file(filepath: str, strict: bool = False) -> ParseResult:
    """
    Convenience function to parse a source file.

    Raises:
        ParseError: If ``strict`` and parsing reported any diagnostic
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath, strict=strict)
