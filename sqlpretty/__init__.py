"""
sqlpretty: lexical SQL formatter and minifier.

    >>> from sqlpretty import format_sql, minify_sql
    >>> print(format_sql("select id from users where active=1;"))
    SELECT
      id
    FROM
      users
    WHERE
      active = 1;
"""

from __future__ import annotations

from .driver import Mode, analyze, format_sql, minify_sql, run
from .errors import (
    FormatError,
    InvalidOption,
    Position,
    SqlPrettyError,
    UnterminatedComment,
    UnterminatedLiteral,
)
from .keywords import ANSI_KEYWORDS, DIALECTS, keywords_for
from .lexer import Token, TokenKind, render, tokenize
from .options import FormatOptions, KeywordCase
from .results import FormatResult, SqlStats

__all__ = [
    "ANSI_KEYWORDS",
    "DIALECTS",
    "FormatError",
    "FormatOptions",
    "FormatResult",
    "InvalidOption",
    "KeywordCase",
    "Mode",
    "Position",
    "SqlPrettyError",
    "SqlStats",
    "Token",
    "TokenKind",
    "UnterminatedComment",
    "UnterminatedLiteral",
    "analyze",
    "format_sql",
    "keywords_for",
    "minify_sql",
    "render",
    "run",
    "tokenize",
]
