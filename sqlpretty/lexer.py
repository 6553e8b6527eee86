"""
sqlpretty/lexer.py

Lossless SQL tokenizer (lexer) for the sqlpretty formatter.

Responsibilities:
- Convert an input SQL string into an ordered list of classified tokens
- Keep every character of the input: whitespace and comments are tokens too,
  so concatenating the token texts reproduces the source exactly
- Report unterminated string literals and block comments, the only inputs whose
  span end is ambiguous

Notes:
- The scan is a single left-to-right loop (no recursion), with five states:
  normal, single-quoted, double-quoted, line comment and block comment.
- Quotes inside a literal are escaped by doubling them: 'it''s'.
- Unrecognized characters never fail; they become UNKNOWN tokens.
- A word directly after '.' is always an identifier (t.order, s.from).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable

from .errors import Position, UnterminatedComment, UnterminatedLiteral
from .keywords import ANSI_KEYWORDS, is_keyword


class TokenKind(Enum):
    """Token categories recognized by the lexer."""
    KEYWORD = auto()
    IDENTIFIER = auto()
    OPERATOR = auto()
    PUNCTUATION = auto()
    STRING_LITERAL = auto()
    NUMERIC_LITERAL = auto()
    LINE_COMMENT = auto()
    BLOCK_COMMENT = auto()
    WHITESPACE = auto()
    UNKNOWN = auto()


PUNCTUATION: frozenset[str] = frozenset({",", "(", ")", ";", "."})

OPERATORS: frozenset[str] = frozenset({"=", "<", ">", "!", "+", "-", "*", "/", "%"})

# Longest match first.
COMPOUND_OPERATORS: tuple[str, ...] = ("<=", ">=", "<>", "!=")

WORD_KINDS: frozenset[TokenKind] = frozenset({
    TokenKind.KEYWORD,
    TokenKind.IDENTIFIER,
    TokenKind.NUMERIC_LITERAL,
})

COMMENT_KINDS: frozenset[TokenKind] = frozenset({TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT})


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    Attributes:
        kind: TokenKind
        text: The exact source substring, unmodified
        offset: 0-based character offset of the token in the source
    """
    kind: TokenKind
    text: str
    offset: int

    @property
    def is_significant(self) -> bool:
        return self.kind is not TokenKind.WHITESPACE

    @property
    def is_comment(self) -> bool:
        return self.kind in COMMENT_KINDS

    @property
    def normalized(self) -> str:
        """Uppercased text for keywords, original text otherwise."""
        if self.kind is TokenKind.KEYWORD:
            return self.text.upper()
        return self.text

    def is_punct(self, ch: str) -> bool:
        return self.kind is TokenKind.PUNCTUATION and self.text == ch


def _is_word_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_word_char(ch: str) -> bool:
    return _is_word_start(ch) or ("0" <= ch <= "9")


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def tokenize(source: str, keywords: frozenset[str] = ANSI_KEYWORDS) -> list[Token]:
    """
    Tokenize a SQL string into a lossless list of Token objects.

    Args:
        source: Raw SQL input string.
        keywords: Uppercase keyword set used to tell KEYWORD from IDENTIFIER.

    Returns:
        List of Token in source order. render(tokens) == source.

    Raises:
        UnterminatedLiteral: for a quote with no matching close.
        UnterminatedComment: for a /* with no matching */.
    """
    tokens: list[Token] = []
    n = len(source)
    i = 0
    # Last token that is neither whitespace nor comment, used to spot qualified names.
    prev: Token | None = None

    def peek(offset: int = 0) -> str:
        j = i + offset
        if j >= n:
            return ""
        return source[j]

    def emit(kind: TokenKind, end: int) -> None:
        nonlocal i, prev
        tok = Token(kind, source[i:end], i)
        tokens.append(tok)
        if kind is not TokenKind.WHITESPACE and kind not in COMMENT_KINDS:
            prev = tok
        i = end

    while i < n:
        ch = peek(0)

        # Whitespace run
        if ch.isspace():
            j = i
            while j < n and source[j].isspace():
                j += 1
            emit(TokenKind.WHITESPACE, j)
            continue

        # Line comment: up to, not including, the line terminator
        if ch == "-" and peek(1) == "-":
            j = i + 2
            while j < n and source[j] not in "\r\n":
                j += 1
            emit(TokenKind.LINE_COMMENT, j)
            continue

        # Block comment: up to the first */
        if ch == "/" and peek(1) == "*":
            end = source.find("*/", i + 2)
            if end < 0:
                raise UnterminatedComment(i, Position.from_offset(source, i))
            emit(TokenKind.BLOCK_COMMENT, end + 2)
            continue

        # Quoted literal: '...' or "...", doubled quote escapes
        if ch == "'" or ch == '"':
            j = i + 1
            while True:
                j = source.find(ch, j)
                if j < 0:
                    raise UnterminatedLiteral(i, Position.from_offset(source, i))
                if j + 1 < n and source[j + 1] == ch:
                    j += 2
                    continue
                break
            emit(TokenKind.STRING_LITERAL, j + 1)
            continue

        # Identifier / keyword
        if _is_word_start(ch):
            j = i + 1
            while j < n and _is_word_char(source[j]):
                j += 1
            qualified = prev is not None and prev.is_punct(".")
            if not qualified and is_keyword(source[i:j], keywords):
                emit(TokenKind.KEYWORD, j)
            else:
                emit(TokenKind.IDENTIFIER, j)
            continue

        # Numeric literal: digits with an optional fractional part
        if _is_digit(ch):
            j = i + 1
            while j < n and _is_digit(source[j]):
                j += 1
            if j + 1 < n and source[j] == "." and _is_digit(source[j + 1]):
                j += 1
                while j < n and _is_digit(source[j]):
                    j += 1
            emit(TokenKind.NUMERIC_LITERAL, j)
            continue

        if ch in PUNCTUATION:
            emit(TokenKind.PUNCTUATION, i + 1)
            continue

        if ch in OPERATORS:
            pair = source[i:i + 2]
            if pair in COMPOUND_OPERATORS:
                emit(TokenKind.OPERATOR, i + 2)
            else:
                emit(TokenKind.OPERATOR, i + 1)
            continue

        # Anything else keeps the scan total
        emit(TokenKind.UNKNOWN, i + 1)

    return tokens


def render(tokens: Iterable[Token]) -> str:
    """Concatenate token texts; the inverse of tokenize()."""
    return "".join(t.text for t in tokens)


def significant(tokens: Iterable[Token]) -> list[Token]:
    """Return the tokens that are not whitespace."""
    return [t for t in tokens if t.is_significant]
