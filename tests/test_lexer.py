import pytest

from yasl.errors import LexError, SourceLocation
from yasl.lexer import Lexer, tokenize
from yasl.token import KEYWORDS, TokenType


#strips positions so sequences can be compared structurally
def kinds(source: str) -> list[tuple[TokenType, str]]:
    return [(token.type, token.lexeme) for token in tokenize(source)]


#plain identifiers keep their exact spelling
@pytest.mark.parametrize("lexeme", ["x", "abc123", "Program", "BEGIN", "printer", "z9y8"])
def test_identifiers(lexeme: str) -> None:
    assert kinds(lexeme) == [(TokenType.IDENTIFIER, lexeme), (TokenType.EOF, "")]


#every reserved word maps to its own token kind
@pytest.mark.parametrize("word", sorted(KEYWORDS))
def test_keywords(word: str) -> None:
    tokens = tokenize(word)
    assert len(tokens) == 2
    assert tokens[0].type is KEYWORDS[word]
    assert tokens[0].type is not TokenType.IDENTIFIER
    assert tokens[0].lexeme == word


#a lone zero is a number, multi-digit numbers keep their value
def test_numbers() -> None:
    zero = tokenize("0")
    assert [token.type for token in zero] == [TokenType.NUMBER, TokenType.EOF]
    assert zero[0].lexeme == "0"
    assert zero[0].literal == 0

    big = tokenize("1200")
    assert big[0].lexeme == "1200"
    assert big[0].literal == 1200


#leading zeros never accumulate into one number
def test_leading_zero_splits_number() -> None:
    tokens = tokenize("007")
    assert [token.type for token in tokens] == [
        TokenType.NUMBER,
        TokenType.NUMBER,
        TokenType.NUMBER,
        TokenType.EOF,
    ]
    assert [token.lexeme for token in tokens[:-1]] == ["0", "0", "7"]


#doubled quotes collapse into a single quote in the stored lexeme
def test_string_with_doubled_quote() -> None:
    assert kinds('"a""b"') == [(TokenType.STRING, 'a"b'), (TokenType.EOF, "")]
    assert kinds('""') == [(TokenType.STRING, ""), (TokenType.EOF, "")]
    assert kinds('""""') == [(TokenType.STRING, '"'), (TokenType.EOF, "")]


#strings may contain anything but a bare quote, including newlines
def test_string_spanning_lines() -> None:
    tokens = tokenize('"one\ntwo { // }" x')
    assert tokens[0].lexeme == "one\ntwo { // }"
    assert tokens[1].type is TokenType.IDENTIFIER
    assert tokens[1].span.start == SourceLocation(line=2, column=13)


#comments contribute nothing to the token sequence
def test_comment_transparency() -> None:
    assert kinds("1 {ignore me} + 2") == kinds("1 + 2")
    assert kinds("1 // trailing\n+ 2") == kinds("1 + 2")
    assert kinds("1 {multi\nline} + {} 2") == kinds("1 + 2")


#a `{` inside a brace comment does not open a nested one
def test_brace_comments_do_not_nest() -> None:
    assert kinds("{ a { b } 1") == [(TokenType.NUMBER, "1"), (TokenType.EOF, "")]
    with pytest.raises(LexError) as excinfo:
        tokenize("{ a { b } }")
    assert excinfo.value.char == "}"


#two-character operators win over their one-character prefixes
def test_operators_use_maximal_munch() -> None:
    assert [t for t, _ in kinds("+ - * = == <> <= >= < >")] == [
        TokenType.PLUS,
        TokenType.MINUS,
        TokenType.STAR,
        TokenType.ASSIGN,
        TokenType.EQUAL_EQUAL,
        TokenType.NOT_EQUAL,
        TokenType.LESS_EQUAL,
        TokenType.GREATER_EQUAL,
        TokenType.LESS,
        TokenType.GREATER,
        TokenType.EOF,
    ]
    assert kinds("<>=") == [(TokenType.NOT_EQUAL, "<>"), (TokenType.ASSIGN, "="), (TokenType.EOF, "")]
    assert kinds("a<=b") == [
        (TokenType.IDENTIFIER, "a"),
        (TokenType.LESS_EQUAL, "<="),
        (TokenType.IDENTIFIER, "b"),
        (TokenType.EOF, ""),
    ]


def test_punctuation() -> None:
    assert [t for t, _ in kinds("; . : ( ) ,")] == [
        TokenType.SEMICOLON,
        TokenType.PERIOD,
        TokenType.COLON,
        TokenType.LEFT_PAREN,
        TokenType.RIGHT_PAREN,
        TokenType.COMMA,
        TokenType.EOF,
    ]


#tokens record 1-based line and column of their first character
def test_token_positions() -> None:
    tokens = tokenize("program p;\n  begin")
    assert tokens[0].span.start == SourceLocation(line=1, column=1)
    assert tokens[1].span.start == SourceLocation(line=1, column=9)
    assert tokens[2].span.start == SourceLocation(line=1, column=10)
    assert tokens[3].type is TokenType.BEGIN
    assert tokens[3].span.start == SourceLocation(line=2, column=3)
    assert tokens[3].span.end == SourceLocation(line=2, column=8)


#tabs and carriage returns separate tokens like spaces and newlines do
def test_tab_and_carriage_return_are_whitespace() -> None:
    assert kinds("1\t+\r\n2") == kinds("1 + 2")
    assert kinds("begin\r\n\tprint\tx;\r\nend") == kinds("begin print x; end")


#a CRLF line ending starts the next line at column 1
def test_positions_after_crlf() -> None:
    tokens = tokenize("x\r\n\ty\r\n  z")
    assert tokens[0].span.start == SourceLocation(line=1, column=1)
    assert tokens[1].span.start == SourceLocation(line=2, column=2)
    assert tokens[2].span.start == SourceLocation(line=3, column=3)


#characters that cannot start a token are reported with their position
@pytest.mark.parametrize("source, char, column", [("x @", "@", 3), ("/", "/", 1), ("a _b", "_", 3), ("1 }", "}", 3)])
def test_unexpected_character(source: str, char: str, column: int) -> None:
    with pytest.raises(LexError) as excinfo:
        tokenize(source)
    assert excinfo.value.char == char
    assert excinfo.value.location == SourceLocation(line=1, column=column)


def test_unterminated_string() -> None:
    with pytest.raises(LexError, match="unterminated string"):
        tokenize('print "abc')
    with pytest.raises(LexError, match="unterminated string"):
        tokenize('"ends with doubled ""')


def test_unterminated_comment() -> None:
    with pytest.raises(LexError, match="unterminated comment") as excinfo:
        tokenize("1 { never closed")
    assert excinfo.value.location == SourceLocation(line=1, column=3)


#exhausted input keeps answering with the same EOF token
def test_eof_is_idempotent() -> None:
    lexer = Lexer("  x  ")
    assert lexer.next_token().type is TokenType.IDENTIFIER
    eof = lexer.next_token()
    assert eof.type is TokenType.EOF
    assert lexer.next_token() is eof
    assert lexer.next_token() is eof
    assert [token.type for token in tokenize("")] == [TokenType.EOF]


#errors surface only when the offending token is requested
def test_lexing_is_lazy() -> None:
    lexer = Lexer("1 @")
    first = lexer.next_token()
    assert first.type is TokenType.NUMBER
    with pytest.raises(LexError):
        lexer.next_token()
