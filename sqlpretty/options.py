"""
sqlpretty/options.py

Formatting configuration.

FormatOptions is a plain value passed into every format/minify call; nothing in
the package keeps configuration in module-level state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from .errors import InvalidOption
from .keywords import ANSI_KEYWORDS, keywords_for


DEFAULT_INDENT_SIZE = 2


class KeywordCase(Enum):
    """How keyword tokens are re-cased in formatted output."""
    UPPER = "upper"
    LOWER = "lower"
    PRESERVE = "preserve"

    @classmethod
    def parse(cls, value: "str | KeywordCase") -> "KeywordCase":
        """
        Parse a keyword case from its name, any case.

        Raises:
            InvalidOption: for an unknown name.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidOption("keyword_case", value) from None

    def apply(self, text: str) -> str:
        if self is KeywordCase.UPPER:
            return text.upper()
        if self is KeywordCase.LOWER:
            return text.lower()
        return text


@dataclass(frozen=True)
class FormatOptions:
    """
    Options for format/minify.

    Attributes:
        indent_size: Spaces per indentation level (>= 1).
        keyword_case: Re-casing applied to keyword tokens.
        dialect_keywords: Uppercase keyword set used by the lexer.
    """
    indent_size: int = DEFAULT_INDENT_SIZE
    keyword_case: KeywordCase = KeywordCase.UPPER
    dialect_keywords: frozenset[str] = field(default=ANSI_KEYWORDS, repr=False)

    def __post_init__(self) -> None:
        # Accept any iterable of words; the lexer compares uppercase text.
        if self.dialect_keywords is not ANSI_KEYWORDS:
            words = frozenset(str(w).upper() for w in self.dialect_keywords)
            object.__setattr__(self, "dialect_keywords", words)

    @classmethod
    def for_dialect(cls, dialect: str, **overrides) -> "FormatOptions":
        """Build options using the keyword set of a named dialect."""
        return cls(dialect_keywords=keywords_for(dialect), **overrides)

    def validate(self) -> "FormatOptions":
        """
        Check every field, returning self so calls can be chained.

        Raises:
            InvalidOption: naming the first offending field.
        """
        if isinstance(self.indent_size, bool) or not isinstance(self.indent_size, int):
            raise InvalidOption("indent_size", self.indent_size)
        if self.indent_size < 1:
            raise InvalidOption("indent_size", self.indent_size)
        if not isinstance(self.keyword_case, KeywordCase):
            raise InvalidOption("keyword_case", self.keyword_case)
        return self

    def with_changes(self, **changes) -> "FormatOptions":
        return replace(self, **changes)

    def indent(self, level: int) -> str:
        return " " * (self.indent_size * level)
