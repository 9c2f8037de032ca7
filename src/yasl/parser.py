"""Parser that turns YASL tokens into a syntax tree."""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Final, Iterable, Iterator, List, Optional, Union

from . import ast
from .errors import ParseError, SourceLocation, SourceSpan
from .lexer import Lexer
from .token import Token, TokenType

logger = logging.getLogger(__name__)

#tokens that may begin a statement inside `begin ... end`
STATEMENT_STARTERS: Final = frozenset({TokenType.PRINT})

#binding strength of binary operators: Term level over Expression level
PRECEDENCE: Final[dict[TokenType, int]] = {
    TokenType.PLUS: 1,
    TokenType.MINUS: 1,
    TokenType.STAR: 2,
    TokenType.DIV: 2,
    TokenType.MOD: 2,
}


#recursive descent over a token stream with a single token of lookahead
@dataclass(slots=True)
class Parser:
    tokens: Iterable[Token]
    _stream: Iterator[Token] = field(init=False)
    _current: Optional[Token] = field(init=False, default=None)
    _previous_token: Optional[Token] = field(init=False, default=None)

    def __post_init__(self) -> None:
        self._stream = iter(self.tokens)
        self._current = None
        self._previous_token = None

    def parse(self) -> ast.Program:
        program = self._program()
        self._expect_end("after '.'")
        logger.debug(
            "parsed program %r: %d constant(s), %d statement(s)",
            program.name,
            len(program.block.const_decls),
            len(program.block.statements),
        )
        return program

    def parse_expression(self) -> ast.Expr:
        expr = self._expression()
        self._expect_end("after expression")
        return expr

    # Program structure ------------------------------------------------------------

    #`program` header, block, then the closing period
    def _program(self) -> ast.Program:
        keyword = self._consume(TokenType.PROGRAM)
        name_token = self._consume(TokenType.IDENTIFIER, "after 'program'")
        self._consume(TokenType.SEMICOLON, "after program name")
        block = self._block()
        period = self._consume(TokenType.PERIOD, "after program block")
        span = keyword.span.merge(period.span)
        return ast.Program(span=span, name=name_token.lexeme, block=block)

    #constant declarations are only allowed ahead of `begin`
    def _block(self) -> ast.Block:
        first = self._peek()
        const_decls: List[ast.ConstDecl] = []
        while self._check(TokenType.CONST):
            const_decls.append(self._const_decl())
        self._consume(TokenType.BEGIN, "to start block")
        statements: List[ast.Stmt] = []
        while self._peek().type in STATEMENT_STARTERS:
            statements.append(self._statement())
        end_keyword = self._consume(TokenType.END, "to close block")
        span = first.span.merge(end_keyword.span)
        return ast.Block(span=span, const_decls=tuple(const_decls), statements=tuple(statements))

    def _const_decl(self) -> ast.ConstDecl:
        keyword = self._advance()  # consumes 'const'
        name_token = self._consume(TokenType.IDENTIFIER, "after 'const'")
        self._consume(TokenType.ASSIGN, "after constant name")
        value_token = self._consume(TokenType.NUMBER, "as constant value")
        semicolon = self._consume(TokenType.SEMICOLON, "after constant declaration")
        assert value_token.literal is not None
        span = keyword.span.merge(semicolon.span)
        return ast.ConstDecl(span=span, name=name_token.lexeme, value=value_token.literal)

    # Statements ----------------------------------------------------------------

    #directs statements based on leading token kind
    def _statement(self) -> ast.Stmt:
        if self._match(TokenType.PRINT):
            return self._print_stmt()
        raise ParseError("statement", self._peek())

    def _print_stmt(self) -> ast.PrintStmt:
        keyword = self._previous()
        value = self._expression()
        semicolon = self._consume(TokenType.SEMICOLON, "after print statement")
        span = keyword.span.merge(semicolon.span)
        return ast.PrintStmt(span=span, expr=value)

    # Expressions ---------------------------------------------------------------

    #Expression and Term levels on explicit operand/operator stacks; folding
    #every stacked operator of equal or higher binding keeps chains left
    #associative, and parentheses nest without growing the call stack
    def _expression(self) -> ast.Expr:
        operands: List[ast.Expr] = []
        operators: List[Token] = []  # binary operators and open parentheses
        depth = 0
        while True:
            while self._match(TokenType.LEFT_PAREN):
                operators.append(self._previous())
                depth += 1
            operands.append(self._operand())
            while depth and self._match(TokenType.RIGHT_PAREN):
                close_paren = self._previous()
                self._reduce(operands, operators, 0)
                open_paren = operators.pop()
                span = open_paren.span.merge(close_paren.span)
                operands[-1] = dataclasses.replace(operands[-1], span=span)
                depth -= 1
            operator = self._peek()
            if operator.type not in PRECEDENCE:
                break
            self._advance()
            self._reduce(operands, operators, PRECEDENCE[operator.type])
            operators.append(operator)
        if depth:
            raise ParseError(TokenType.RIGHT_PAREN.description, self._peek(), "after expression")
        self._reduce(operands, operators, 0)
        return operands.pop()

    #numbers and names; there is no unary minus
    def _operand(self) -> ast.Expr:
        if self._match(TokenType.NUMBER):
            token = self._previous()
            assert token.literal is not None
            return ast.IntLiteral(span=token.span, value=token.literal)
        if self._match(TokenType.IDENTIFIER):
            token = self._previous()
            return ast.VarExpr(span=token.span, name=token.lexeme)
        raise ParseError("expression", self._peek())

    #folds stacked operators binding at least as tightly as `floor`, down to the nearest '('
    def _reduce(self, operands: List[ast.Expr], operators: List[Token], floor: int) -> None:
        while operators and PRECEDENCE.get(operators[-1].type, -1) >= floor:
            operator = operators.pop()
            right = operands.pop()
            left = operands.pop()
            operands.append(self._binary(left, operator, right))

    def _binary(self, left: ast.Expr, operator: Token, right: ast.Expr) -> ast.BinaryExpr:
        return ast.BinaryExpr(
            span=left.span.merge(right.span),
            left=left,
            operator=ast.BinaryOperator.from_token_type(operator.type),
            right=right,
        )

    # Utilities ----------------------------------------------------------------

    def _match(self, *types: TokenType) -> bool:
        if self._peek().type in types:
            self._advance()
            return True
        return False

    #convenience to assert the upcoming token type
    def _consume(self, token_type: TokenType, context: Optional[str] = None) -> Token:
        if self._check(token_type):
            return self._advance()
        raise ParseError(token_type.description, self._peek(), context)

    def _check(self, token_type: TokenType) -> bool:
        return self._peek().type is token_type

    def _expect_end(self, context: str) -> None:
        token = self._peek()
        if token.type is not TokenType.EOF:
            raise ParseError(TokenType.EOF.description, token, context)

    #moves past the current token; EOF is never consumed
    def _advance(self) -> Token:
        token = self._peek()
        if token.type is not TokenType.EOF:
            self._current = None
        self._previous_token = token
        return token

    #pulls from the stream only when the lookahead slot is empty
    def _peek(self) -> Token:
        if self._current is None:
            self._current = self._pull()
        return self._current

    def _previous(self) -> Token:
        assert self._previous_token is not None
        return self._previous_token

    #a stream that runs dry without EOF is treated as ending there
    def _pull(self) -> Token:
        token = next(self._stream, None)
        if token is not None:
            return token
        if self._previous_token is not None:
            location = self._previous_token.span.end
        else:
            location = SourceLocation(line=1, column=1)
        return Token(TokenType.EOF, "", SourceSpan.at(location))


#parses a program from an already produced token stream
def parse(tokens: Iterable[Token]) -> ast.Program:
    return Parser(tokens).parse()


#lexes on demand while parsing, never materializing the token list
def parse_source(source: str) -> ast.Program:
    return Parser(Lexer(source)).parse()


def parse_expression(source: Union[str, Iterable[Token]]) -> ast.Expr:
    tokens = Lexer(source) if isinstance(source, str) else source
    return Parser(tokens).parse_expression()
