"""
sqlpretty/results.py

Result objects returned by the driver.

The driver returns one of:
- FormatResult: output text of a format/minify call, or the FormatError that stopped it
- SqlStats: the statistics shown next to formatted output

These are intentionally simple, immutable Python objects so they can be used by
both the REPL and the one-shot CLI without extra dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import FormatError


@dataclass(frozen=True)
class FormatResult:
    """
    Outcome of a single format/minify call.

    Exactly one of output/error is set: on error no partial output is returned.

    Attributes:
        output: Transformed SQL text on success.
        error: The FormatError that stopped the call.
    """
    output: str | None = None
    error: FormatError | None = None

    @classmethod
    def success(cls, output: str) -> "FormatResult":
        return cls(output=output)

    @classmethod
    def failure(cls, error: FormatError) -> "FormatResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """
        Return the output text.

        Raises:
            FormatError: the stored error, if the call failed.
        """
        if self.error is not None:
            raise self.error
        return self.output or ""


@dataclass(frozen=True)
class SqlStats:
    """
    Lexical statistics of a SQL text.

    Attributes:
        characters: Length of the input.
        words: Number of whitespace-separated words.
        statements: Number of ';' terminators outside literals and comments.
        keywords: Distinct keywords used, uppercase and sorted.
    """
    characters: int
    words: int
    statements: int
    keywords: tuple[str, ...]

    def as_dict(self) -> dict[str, object]:
        return {
            "characters": self.characters,
            "words": self.words,
            "statements": self.statements,
            "keywords": len(self.keywords),
        }
