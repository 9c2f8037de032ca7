"""Lexical analysis for the YASL language."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from string import ascii_letters, digits
from typing import Iterator, List, Optional

from .errors import LexError, SourceLocation, SourceSpan
from .token import KEYWORDS, PUNCTUATION, Token, TokenType

logger = logging.getLogger(__name__)

WHITESPACE = " \t\r\n"


def _is_letter(char: str) -> bool:
    return char in ascii_letters


def _is_digit(char: str) -> bool:
    return char in digits


#transforms raw characters into tokens, one at a time, on demand
@dataclass(slots=True)
class Lexer:
    source: str
    _length: int = field(init=False)
    _index: int = field(init=False, default=0)
    _line: int = field(init=False, default=1)
    _column: int = field(init=False, default=1)
    _eof: Optional[Token] = field(init=False, default=None)

    def __post_init__(self) -> None:
        self._length = len(self.source)
        self._index = 0
        self._line = 1
        self._column = 1
        self._eof = None

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    def lex(self) -> List[Token]:
        tokens = list(self)
        logger.debug("lexed %d tokens", len(tokens))
        return tokens

    def next_token(self) -> Token:
        """Scan and return the next token; EOF repeats once input is exhausted."""

        if self._eof is not None:
            return self._eof

        self._skip_trivia()
        if self._is_at_end():
            location = self._current_location()
            self._eof = Token(TokenType.EOF, "", SourceSpan.at(location))
            logger.debug("reached end of input at %s", location)
            return self._eof

        start_loc = self._current_location()
        start_index = self._index
        char = self._advance()

        if _is_letter(char):
            return self._identifier(start_loc, start_index)

        if _is_digit(char):
            return self._number(start_loc, start_index, char)

        if char == '"':
            return self._string(start_loc)

        if char in PUNCTUATION:
            return self._make_token(PUNCTUATION[char], start_loc, start_index)

        match char:
            case "+":
                return self._make_token(TokenType.PLUS, start_loc, start_index)
            case "-":
                return self._make_token(TokenType.MINUS, start_loc, start_index)
            case "*":
                return self._make_token(TokenType.STAR, start_loc, start_index)
            case "=":
                token_type = TokenType.EQUAL_EQUAL if self._match("=") else TokenType.ASSIGN
                return self._make_token(token_type, start_loc, start_index)
            case "<":
                if self._match("="):
                    token_type = TokenType.LESS_EQUAL
                elif self._match(">"):
                    token_type = TokenType.NOT_EQUAL
                else:
                    token_type = TokenType.LESS
                return self._make_token(token_type, start_loc, start_index)
            case ">":
                token_type = TokenType.GREATER_EQUAL if self._match("=") else TokenType.GREATER
                return self._make_token(token_type, start_loc, start_index)
            case _:
                span = SourceSpan(start=start_loc, end=self._current_location())
                raise LexError(f"unexpected character {char!r}", span, char=char)

    # Internal helpers -------------------------------------------------

    def _is_at_end(self) -> bool:
        return self._index >= self._length

    def _current_location(self) -> SourceLocation:
        return SourceLocation(line=self._line, column=self._column)

    def _advance(self) -> str:
        char = self.source[self._index]
        self._index += 1
        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return char

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self.source[self._index]

    def _peek_next(self) -> str:
        if self._index + 1 >= self._length:
            return "\0"
        return self.source[self._index + 1]

    def _match(self, expected: str) -> bool:
        if self._is_at_end():
            return False
        if self.source[self._index] != expected:
            return False
        self._advance()
        return True

    #skips whitespace and both comment forms between tokens
    def _skip_trivia(self) -> None:
        while not self._is_at_end():
            char = self._peek()
            if char in WHITESPACE:
                self._advance()
            elif char == "{":
                self._brace_comment()
            elif char == "/" and self._peek_next() == "/":
                self._line_comment()
            else:
                break

    def _make_token(
        self,
        token_type: TokenType,
        start: SourceLocation,
        start_index: int,
        literal: Optional[int] = None,
    ) -> Token:
        end = self._current_location()
        lexeme = self.source[start_index:self._index]
        return Token(token_type, lexeme, SourceSpan(start=start, end=end), literal=literal)

    def _identifier(self, start: SourceLocation, start_index: int) -> Token:
        while _is_letter(self._peek()) or _is_digit(self._peek()):
            self._advance()
        lexeme = self.source[start_index:self._index]
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        return self._make_token(token_type, start, start_index)

    #a leading zero is a complete number on its own
    def _number(self, start: SourceLocation, start_index: int, first_char: str) -> Token:
        if first_char != "0":
            while _is_digit(self._peek()):
                self._advance()
        lexeme = self.source[start_index:self._index]
        return self._make_token(TokenType.NUMBER, start, start_index, literal=int(lexeme))

    #stores the decoded body, a doubled quote stands for one quote
    def _string(self, start: SourceLocation) -> Token:
        chars: List[str] = []
        while True:
            if self._is_at_end():
                span = SourceSpan(start=start, end=self._current_location())
                raise LexError("unterminated string", span)
            char = self._advance()
            if char == '"':
                if self._peek() != '"':
                    break
                self._advance()
            chars.append(char)
        end = self._current_location()
        return Token(TokenType.STRING, "".join(chars), SourceSpan(start=start, end=end))

    def _brace_comment(self) -> None:
        start = self._current_location()
        self._advance()  # consume '{'
        while not self._is_at_end():
            if self._advance() == "}":
                return
        span = SourceSpan(start=start, end=self._current_location())
        raise LexError("unterminated comment", span)

    def _line_comment(self) -> None:
        while not self._is_at_end() and self._peek() != "\n":
            self._advance()


#collects the whole token list for callers that want it materialized
def tokenize(source: str) -> List[Token]:
    return Lexer(source).lex()
