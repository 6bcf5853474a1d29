"""
Exceptions raised while loading and querying catalog tables.
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for catalog loading and lookup errors."""


class MalformedInputError(CatalogError, ValueError):
    """The source could not be read as a tab-delimited table."""


class RowShapeMismatchError(MalformedInputError):
    """A data line has a different number of fields than the header."""

    def __init__(self, line_number: int, expected: int, found: int, source: Optional[str] = None):
        self.line_number = line_number
        self.expected = expected
        self.found = found
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(
            f"Line {line_number}{where} has {found} fields, expected {expected}"
        )


class UnknownColumnError(CatalogError, KeyError):
    """A column name is not present in the table header."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(column)

    def __str__(self) -> str:
        return f"Unknown column: {self.column!r}"
