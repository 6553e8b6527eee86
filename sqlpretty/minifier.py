"""
sqlpretty/minifier.py

Minifier: comments stripped, whitespace collapsed to the minimum that keeps the
token sequence intact.

The decision to keep a space is made from the two adjacent tokens alone; the
output is never re-lexed.
"""

from __future__ import annotations

from typing import Iterable

from .lexer import COMMENT_KINDS, Token, TokenKind, WORD_KINDS


# Character pairs that would lex as one token (or open a comment) if glued.
FUSING_PAIRS: frozenset[str] = frozenset({"--", "/*", "<=", ">=", "<>", "!="})


def needs_separator(left: Token, right: Token) -> bool:
    """
    Decide whether two adjacent tokens need a space between them.

    Args:
        left: Token emitted first.
        right: Token emitted directly after it.

    Returns:
        True if gluing the two texts would change how they lex.
    """
    if left.kind in WORD_KINDS and right.kind in WORD_KINDS:
        return True
    # 1 .5 would read back as 1.5
    if left.kind is TokenKind.NUMERIC_LITERAL and "." not in left.text and right.is_punct("."):
        return True
    if left.text[-1:] + right.text[:1] in FUSING_PAIRS:
        return True
    # 'a' 'b' would read back as one literal with an escaped quote
    if (
        left.kind is TokenKind.STRING_LITERAL
        and right.kind is TokenKind.STRING_LITERAL
        and left.text[-1] == right.text[0]
    ):
        return True
    return False


def minify_tokens(tokens: Iterable[Token]) -> str:
    """
    Minify a token stream.

    Args:
        tokens: Tokens produced by tokenize().

    Returns:
        Compact SQL text without comments or redundant whitespace.
    """
    out: list[str] = []
    prev: Token | None = None
    for tok in tokens:
        if tok.kind is TokenKind.WHITESPACE or tok.kind in COMMENT_KINDS:
            continue
        if prev is not None and needs_separator(prev, tok):
            out.append(" ")
        out.append(tok.text)
        prev = tok
    return "".join(out)
