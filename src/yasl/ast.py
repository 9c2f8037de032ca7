"""Syntax tree definitions for YASL."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union

from .errors import SourceSpan
from .token import TokenType


#every node tracks a span for diagnostics, left out of equality
@dataclass(frozen=True, slots=True)
class Node:
    span: SourceSpan = field(compare=False, repr=False)


# Program structure ------------------------------------------------------------


#`program <name>; <block>.`
@dataclass(frozen=True, slots=True)
class Program(Node):
    name: str
    block: "Block"


#constant declarations come first, then the `begin ... end` statements
@dataclass(frozen=True, slots=True)
class Block(Node):
    const_decls: Tuple["ConstDecl", ...] = ()
    statements: Tuple["Stmt", ...] = ()


#`const <name> = <number>;`
@dataclass(frozen=True, slots=True)
class ConstDecl(Node):
    name: str
    value: int


# Statements -------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PrintStmt(Node):
    expr: "Expr"


Stmt = PrintStmt


# Expressions ------------------------------------------------------------------


#operator tags carried by binary expressions
class BinaryOperator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "div"
    MOD = "mod"

    @classmethod
    def from_token_type(cls, token_type: TokenType) -> "BinaryOperator":
        return _OPERATORS_BY_TOKEN[token_type]


_OPERATORS_BY_TOKEN = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.DIV: BinaryOperator.DIV,
    TokenType.MOD: BinaryOperator.MOD,
}


#number literals store their decoded value
@dataclass(frozen=True, slots=True)
class IntLiteral(Node):
    value: int


#a bare identifier used as a value
@dataclass(frozen=True, slots=True)
class VarExpr(Node):
    name: str


#both operands are complete subtrees by the time this is built
@dataclass(frozen=True, slots=True)
class BinaryExpr(Node):
    left: "Expr"
    operator: BinaryOperator
    right: "Expr"


Expr = Union[IntLiteral, VarExpr, BinaryExpr]
