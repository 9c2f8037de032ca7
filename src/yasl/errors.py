"""Common error and source span utilities."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .token import Token


#describes an exact line/column position captured during lexing
@dataclass(frozen=True, slots=True)
class SourceLocation:
    """A 1-based line/column location inside a source file."""

    line: int
    column: int

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.line}:{self.column}"


#start/end positions of a token or tree node
@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Represents a half-open source range [start, end)."""

    start: SourceLocation
    end: SourceLocation

    @classmethod
    def at(cls, location: SourceLocation) -> "SourceSpan":
        """Return an empty span sitting on a single location."""

        return cls(start=location, end=location)

    def merge(self, other: "SourceSpan") -> "SourceSpan":
        """Return the minimal span that covers both spans."""

        if (self.start.line, self.start.column) <= (other.start.line, other.start.column):
            start = self.start
        else:
            start = other.start

        if (self.end.line, self.end.column) >= (other.end.line, other.end.column):
            end = self.end
        else:
            end = other.end
        return SourceSpan(start=start, end=end)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.start}-{self.end}"


#base exception for everything raised by the front end
class YaslError(Exception):
    """Base class for YASL front-end errors."""

    def __init__(self, message: str, span: SourceSpan) -> None:
        super().__init__(message)
        self.span = span
        self.message = message

    @property
    def location(self) -> SourceLocation:
        return self.span.start


#lexer raises this for bad characters and unterminated strings/comments
class LexError(YaslError):
    """Raised when the lexer encounters an invalid character sequence."""

    def __init__(self, message: str, span: SourceSpan, char: Optional[str] = None) -> None:
        super().__init__(message, span)
        self.char = char


#parser raises this on the first token that does not fit the grammar
class ParseError(YaslError):
    """Raised when the parser encounters an invalid construct.

    ``expected`` names the construct the parser wanted and ``found`` is the
    token it got instead.
    """

    def __init__(self, expected: str, found: "Token", context: Optional[str] = None) -> None:
        message = f"expected {expected}"
        if context:
            message += f" {context}"
        message += f", found {describe_token(found)}"
        super().__init__(message, found.span)
        self.expected = expected
        self.found = found


def describe_token(token: "Token") -> str:
    # imported lazily, token.py depends on this module for spans
    from .token import TokenType

    if token.type is TokenType.EOF:
        return "end of file"
    if token.type is TokenType.STRING:
        return f"string {token.lexeme!r}"
    return f"'{token.lexeme}'"
