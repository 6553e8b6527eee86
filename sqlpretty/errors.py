"""
sqlpretty/errors.py

Centralized exception types for the sqlpretty formatter.

This module defines:
- A common base exception for all sqlpretty errors
- A lightweight Position structure for reporting lexical errors with line/column context
- The typed FormatError taxonomy returned by the driver:
    - UnterminatedLiteral: a quote opened a literal that never closes
    - UnterminatedComment: a /* opened a block comment that never closes
    - InvalidOption: a FormatOptions field holds a value the engine rejects
"""

from __future__ import annotations

from dataclasses import dataclass


class SqlPrettyError(Exception):
    """
    Base class for all sqlpretty errors.

    Catching this exception allows callers (REPL/CLI) to handle all formatter errors
    without accidentally swallowing unrelated system exceptions.
    """


@dataclass(frozen=True)
class Position:
    """
    Represents a location in an input SQL string.

    Attributes:
        line: 1-based line number
        col:  1-based column number
    """
    line: int
    col: int

    @classmethod
    def from_offset(cls, source: str, offset: int) -> "Position":
        """
        Compute the line/column of a character offset.

        Args:
            source: The full source string.
            offset: 0-based character index into source.

        Returns:
            Position of that character.
        """
        line = source.count("\n", 0, offset) + 1
        last_nl = source.rfind("\n", 0, offset)
        return cls(line=line, col=offset - last_nl)


class FormatError(SqlPrettyError):
    """Base class of the errors surfaced by format/minify."""


class UnterminatedLiteral(FormatError):
    """
    Raised when a ' or " opened a literal and no matching close was found.

    Args:
        offset: Character offset of the opening quote.
        position: Optional Position of the opening quote.
    """

    def __init__(self, offset: int, position: Position | None = None):
        self.offset = offset
        self.position = position
        super().__init__(self.__str__())

    def __str__(self) -> str:
        where = f"offset {self.offset}"
        if self.position is not None:
            where += f" (line {self.position.line}, col {self.position.col})"
        return f"Unterminated string literal starting at {where}"


class UnterminatedComment(FormatError):
    """
    Raised when a /* opened a block comment with no matching */.

    Args:
        offset: Character offset of the opening /*.
        position: Optional Position of the opening /*.
    """

    def __init__(self, offset: int, position: Position | None = None):
        self.offset = offset
        self.position = position
        super().__init__(self.__str__())

    def __str__(self) -> str:
        where = f"offset {self.offset}"
        if self.position is not None:
            where += f" (line {self.position.line}, col {self.position.col})"
        return f"Unterminated block comment starting at {where}"


class InvalidOption(FormatError):
    """
    Raised when a formatting option holds a value the engine rejects.

    Examples:
      - indent_size < 1
      - unknown keyword case or dialect name
    """

    def __init__(self, field: str, value: object = None):
        self.field = field
        self.value = value
        super().__init__(self.__str__())

    def __str__(self) -> str:
        return f"Invalid option {self.field}: {self.value!r}"
