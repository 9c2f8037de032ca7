"""YASL: lexer and parser front end for a small teaching language."""

#makes package exports explicit for downstream imports
from . import ast, errors, lexer, parser, printer, token
from .errors import LexError, ParseError, YaslError
from .lexer import Lexer, tokenize
from .parser import Parser, parse, parse_expression, parse_source

__all__ = [
    "ast",
    "errors",
    "lexer",
    "parser",
    "printer",
    "token",
    "LexError",
    "Lexer",
    "ParseError",
    "Parser",
    "YaslError",
    "parse",
    "parse_expression",
    "parse_source",
    "tokenize",
]
