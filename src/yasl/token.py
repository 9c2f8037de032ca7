"""Token definitions for the YASL language."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional

from .errors import SourceSpan


#enumerates every lexical category produced by the lexer
class TokenType(Enum):
    # Literals and identifiers
    IDENTIFIER = "ID"
    NUMBER = "NUM"
    STRING = "STRING"

    # Keywords
    PROGRAM = "program"
    CONST = "const"
    BEGIN = "begin"
    PRINT = "print"
    END = "end"
    DIV = "div"
    MOD = "mod"
    VAR = "var"
    INT = "int"
    BOOL = "bool"
    PROC = "proc"
    IF = "if"
    THEN = "then"
    ELSE = "else"
    WHILE = "while"
    DO = "do"
    PROMPT = "prompt"
    AND = "and"
    OR = "or"
    NOT = "not"
    TRUE = "true"
    FALSE = "false"

    # Punctuation
    SEMICOLON = ";"
    PERIOD = "."
    COLON = ":"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    COMMA = ","

    # Operators, one or two characters
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    ASSIGN = "="
    EQUAL_EQUAL = "=="
    NOT_EQUAL = "<>"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="
    LESS = "<"
    GREATER = ">"

    EOF = "EOF"

    @property
    def is_keyword(self) -> bool:
        return self.value in KEYWORDS

    #how parser diagnostics refer to a token kind they wanted
    @property
    def description(self) -> str:
        match self:
            case TokenType.IDENTIFIER:
                return "identifier"
            case TokenType.NUMBER:
                return "number"
            case TokenType.STRING:
                return "string"
            case TokenType.EOF:
                return "end of file"
            case _:
                return f"'{self.value}'"


#keyword lookup applied after a maximal identifier lexeme has been scanned
KEYWORDS: Final[dict[str, TokenType]] = {
    "program": TokenType.PROGRAM,
    "const": TokenType.CONST,
    "begin": TokenType.BEGIN,
    "print": TokenType.PRINT,
    "end": TokenType.END,
    "div": TokenType.DIV,
    "mod": TokenType.MOD,
    "var": TokenType.VAR,
    "int": TokenType.INT,
    "bool": TokenType.BOOL,
    "proc": TokenType.PROC,
    "if": TokenType.IF,
    "then": TokenType.THEN,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "do": TokenType.DO,
    "prompt": TokenType.PROMPT,
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

PUNCTUATION: Final[dict[str, TokenType]] = {
    ";": TokenType.SEMICOLON,
    ".": TokenType.PERIOD,
    ":": TokenType.COLON,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    ",": TokenType.COMMA,
}


#immutable lexeme/kind/span triple, plus the decoded value of numbers
@dataclass(frozen=True, slots=True)
class Token:
    type: TokenType
    lexeme: str
    span: SourceSpan
    literal: Optional[int] = None

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"Token({self.type.name}, {self.lexeme!r}, {self.span})"
