"""
sqlpretty/driver.py

Public API of the sqlpretty formatter.

Responsibilities:
- Provide a simple library interface:
    - run(source, mode, options) -> FormatResult
    - format_sql(source, options) -> str
    - minify_sql(source, options) -> str
    - analyze(source, options) -> SqlStats
- Validate options before any lexing happens
- Map lexer failures to a typed FormatResult; never return partial output

Every call is a pure function of its arguments: a fresh token list is built per
call and nothing is cached between calls.
"""

from __future__ import annotations

import logging
from enum import Enum

from .errors import FormatError
from .formatter import format_tokens
from .lexer import TokenKind, tokenize
from .minifier import minify_tokens
from .options import FormatOptions
from .results import FormatResult, SqlStats

logger = logging.getLogger(__name__)


class Mode(Enum):
    """What run() does with the token stream."""
    FORMAT = "format"
    MINIFY = "minify"


def _transform(source: str, mode: Mode, options: FormatOptions) -> str:
    options.validate()
    tokens = tokenize(source, options.dialect_keywords)
    if mode is Mode.MINIFY:
        output = minify_tokens(tokens)
    else:
        output = format_tokens(tokens, options)
    if source:
        logger.debug(
            "%s: %d tokens, %d -> %d chars",
            mode.value, len(tokens), len(source), len(output),
        )
    return output


def run(source: str, mode: Mode = Mode.FORMAT, options: FormatOptions | None = None) -> FormatResult:
    """
    Format or minify SQL text.

    Args:
        source: SQL text.
        mode: Mode.FORMAT or Mode.MINIFY.
        options: FormatOptions; defaults are used when omitted.

    Returns:
        FormatResult holding either the output text or the FormatError.
    """
    try:
        return FormatResult.success(_transform(source, mode, options or FormatOptions()))
    except FormatError as e:
        logger.debug("%s failed: %s", mode.value, e)
        return FormatResult.failure(e)


def format_sql(source: str, options: FormatOptions | None = None) -> str:
    """
    Pretty-print SQL text.

    Raises:
        UnterminatedLiteral / UnterminatedComment: on lexical errors.
        InvalidOption: on invalid options.
    """
    return _transform(source, Mode.FORMAT, options or FormatOptions())


def minify_sql(source: str, options: FormatOptions | None = None) -> str:
    """
    Minify SQL text. Only options.dialect_keywords affects the result.

    Raises:
        UnterminatedLiteral / UnterminatedComment: on lexical errors.
    """
    return _transform(source, Mode.MINIFY, options or FormatOptions())


def analyze(source: str, options: FormatOptions | None = None) -> SqlStats:
    """
    Compute lexical statistics for SQL text.

    Args:
        source: SQL text.
        options: FormatOptions; only dialect_keywords is used.

    Returns:
        SqlStats for the input.

    Raises:
        UnterminatedLiteral / UnterminatedComment: on lexical errors.
    """
    options = (options or FormatOptions()).validate()
    tokens = tokenize(source, options.dialect_keywords)
    statements = sum(1 for t in tokens if t.is_punct(";"))
    keywords = sorted({t.normalized for t in tokens if t.kind is TokenKind.KEYWORD})
    return SqlStats(
        characters=len(source),
        words=len(source.split()),
        statements=statements,
        keywords=tuple(keywords),
    )
