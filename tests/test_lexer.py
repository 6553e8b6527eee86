import pytest

from sqlpretty import (
    Position,
    TokenKind,
    UnterminatedComment,
    UnterminatedLiteral,
    keywords_for,
    render,
    tokenize,
)


def kinds(tokens):
    return [(t.kind, t.text) for t in tokens if t.kind is not TokenKind.WHITESPACE]


def test_tokenize_is_lossless():
    sql = "SELECT a_1, 'x''y' FROM t -- trailing\r\n/* block\n select */ WHERE x<=1.5 AND y <> \"q\";\n"
    tokens = tokenize(sql)
    assert render(tokens) == sql
    offset = 0
    for t in tokens:
        assert t.offset == offset
        offset += len(t.text)


def test_token_classification():
    sql = "select a_1, 'it''s' from t -- c\n/* b */ where x<=1.5;"
    assert kinds(tokenize(sql)) == [
        (TokenKind.KEYWORD, "select"),
        (TokenKind.IDENTIFIER, "a_1"),
        (TokenKind.PUNCTUATION, ","),
        (TokenKind.STRING_LITERAL, "'it''s'"),
        (TokenKind.KEYWORD, "from"),
        (TokenKind.IDENTIFIER, "t"),
        (TokenKind.LINE_COMMENT, "-- c"),
        (TokenKind.BLOCK_COMMENT, "/* b */"),
        (TokenKind.KEYWORD, "where"),
        (TokenKind.IDENTIFIER, "x"),
        (TokenKind.OPERATOR, "<="),
        (TokenKind.NUMERIC_LITERAL, "1.5"),
        (TokenKind.PUNCTUATION, ";"),
    ]


def test_line_comment_stops_before_line_terminator():
    tokens = tokenize("-- note\r\nSELECT")
    assert [(t.kind, t.text) for t in tokens] == [
        (TokenKind.LINE_COMMENT, "-- note"),
        (TokenKind.WHITESPACE, "\r\n"),
        (TokenKind.KEYWORD, "SELECT"),
    ]


def test_operators_longest_match_first():
    ops = [t.text for t in tokenize("a<>b != c >= d<e !f %g") if t.kind is TokenKind.OPERATOR]
    assert ops == ["<>", "!=", ">=", "<", "!", "%"]


def test_word_after_dot_is_identifier():
    assert kinds(tokenize("t.order")) == [
        (TokenKind.IDENTIFIER, "t"),
        (TokenKind.PUNCTUATION, "."),
        (TokenKind.IDENTIFIER, "order"),
    ]
    # comments between the dot and the word do not change that
    assert kinds(tokenize("t./*c*/from"))[-1] == (TokenKind.IDENTIFIER, "from")


def test_numeric_literals():
    assert kinds(tokenize("12 3.25 7.")) == [
        (TokenKind.NUMERIC_LITERAL, "12"),
        (TokenKind.NUMERIC_LITERAL, "3.25"),
        (TokenKind.NUMERIC_LITERAL, "7"),
        (TokenKind.PUNCTUATION, "."),
    ]


def test_unknown_symbols_never_fail():
    assert kinds(tokenize("@x $1 `c`")) == [
        (TokenKind.UNKNOWN, "@"),
        (TokenKind.IDENTIFIER, "x"),
        (TokenKind.UNKNOWN, "$"),
        (TokenKind.NUMERIC_LITERAL, "1"),
        (TokenKind.UNKNOWN, "`"),
        (TokenKind.IDENTIFIER, "c"),
        (TokenKind.UNKNOWN, "`"),
    ]


def test_double_quoted_literal_with_doubled_quote():
    tokens = tokenize('"a ""b"" c"')
    assert len(tokens) == 1
    assert tokens[0].kind is TokenKind.STRING_LITERAL


def test_unterminated_literal_reports_opening_quote():
    with pytest.raises(UnterminatedLiteral) as exc:
        tokenize("SELECT 'abc FROM t;")
    assert exc.value.offset == 7
    assert exc.value.position == Position(line=1, col=8)
    assert "offset 7" in str(exc.value)


def test_escaped_quote_at_end_is_still_unterminated():
    with pytest.raises(UnterminatedLiteral) as exc:
        tokenize("SELECT 'it''")
    assert exc.value.offset == 7


def test_unterminated_block_comment():
    with pytest.raises(UnterminatedComment) as exc:
        tokenize("SELECT 1;\n/* never closed")
    assert exc.value.offset == 10
    assert exc.value.position == Position(line=2, col=1)


def test_long_unterminated_comment_fails_fast():
    with pytest.raises(UnterminatedComment):
        tokenize("/*" + "x" * 1_000_000)


def test_dialect_keywords():
    ansi = kinds(tokenize("returning id"))
    pg = kinds(tokenize("returning id", keywords_for("postgres")))
    assert ansi[0] == (TokenKind.IDENTIFIER, "returning")
    assert pg[0] == (TokenKind.KEYWORD, "returning")


def test_position_from_offset():
    assert Position.from_offset("ab\ncd", 0) == Position(line=1, col=1)
    assert Position.from_offset("ab\ncd", 4) == Position(line=2, col=2)
