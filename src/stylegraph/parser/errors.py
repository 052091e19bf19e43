"""Parser error types."""

from __future__ import annotations


class GradientParseError(Exception):
    """Raised when a gradient value cannot be parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)
