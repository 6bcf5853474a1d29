"""
In-memory tab-delimited table.

A FlatTable holds a header, an ordered list of rows and the mapping from
column name to column index. Rows are stored as tuples and never modified
after loading; filtering returns a new table.
"""

import logging
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Set, Tuple, Union

from .errors import MalformedInputError, RowShapeMismatchError, UnknownColumnError
from ..utils.file_handlers import read_lines

logger = logging.getLogger(__name__)

Row = Tuple[str, ...]
Column = Union[int, str]


def split_fields(line: str) -> List[str]:
    """Split one line on tabs. Fields are not quoted or escaped."""
    return line.split('\t')


class FlatTable:
    """A header plus rows of string cells, one cell per column."""

    def __init__(
        self,
        header: Sequence[str],
        rows: Iterable[Sequence[str]] = (),
        source: Optional[str] = None,
        line_numbers: Optional[Sequence[int]] = None
    ):
        """
        Build a table from an already split header and rows.

        Args:
            header: Column names in display order
            rows: Data rows, each with exactly len(header) cells
            source: Name of the source, used in error messages
            line_numbers: Source line of each row; rows are assumed to
                follow the header directly if omitted

        Raises:
            RowShapeMismatchError: If a row's length differs from the header's
        """
        self._header: Row = tuple(header)
        self._rows: List[Row] = []
        for i, row in enumerate(rows):
            row = tuple(row)
            if len(row) != len(self._header):
                # 1-based, after the header line
                line_number = line_numbers[i] if line_numbers is not None else i + 2
                raise RowShapeMismatchError(line_number, len(self._header), len(row), source)
            self._rows.append(row)
        self._index_of = self._build_index(self._header)

    @staticmethod
    def _build_index(header: Row) -> Dict[str, int]:
        index_of = {}
        for i, name in enumerate(header):
            index_of[name] = i

        if len(index_of) < len(header):
            duplicates = sorted(n for n, c in Counter(header).items() if c > 1)
            logger.warning(f"Duplicate column names {duplicates}; using the last occurrence of each")

        return index_of

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: Optional[str] = None) -> "FlatTable":
        """
        Load a table from a line source.

        The first line is the header; every following line is a data row.
        Empty lines are skipped unless the header has a single column.

        Args:
            lines: Lines in file order, without line terminators
            source: Name of the source, used in error messages

        Returns:
            A new FlatTable

        Raises:
            MalformedInputError: If the source yields no lines
            RowShapeMismatchError: If a data line has the wrong number of fields
        """
        lines = iter(lines)
        try:
            header = split_fields(next(lines))
        except StopIteration:
            raise MalformedInputError(f"No lines could be read from {source or 'source'}") from None

        rows = []
        line_numbers = []
        for line_number, line in enumerate(lines, start=2):
            # An empty line is a row only for a single-column table
            if not line and len(header) > 1:
                continue
            rows.append(split_fields(line))
            line_numbers.append(line_number)

        table = cls(header, rows, source=source, line_numbers=line_numbers)

        logger.info(f"Loaded {len(table)} rows x {len(header)} columns from {source or 'source'}")
        return table

    @classmethod
    def from_path(cls, file_path: Union[str, Path]) -> "FlatTable":
        """Load a table from a TSV file (optionally gzip-compressed)."""
        return cls.from_lines(read_lines(file_path), source=str(file_path))

    @property
    def header(self) -> Row:
        return self._header

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"FlatTable({len(self._header)} columns, {len(self._rows)} rows)"

    def row_count(self) -> int:
        """Number of data rows."""
        return len(self._rows)

    def column_index(self, name: str) -> int:
        """
        Resolve a column name to its index.

        Raises:
            UnknownColumnError: If no column has this exact name
        """
        try:
            return self._index_of[name]
        except KeyError:
            raise UnknownColumnError(name) from None

    def resolve(self, column: Column) -> int:
        """Return the index for a column given by name or index."""
        if isinstance(column, str):
            return self.column_index(column)
        assert 0 <= column < len(self._header), f"column {column} out of range"
        return column

    def row(self, i: int) -> Row:
        assert 0 <= i < len(self._rows), f"row {i} out of range"
        return self._rows[i]

    def cell(self, row: int, col: int) -> str:
        assert 0 <= row < len(self._rows), f"row {row} out of range"
        assert 0 <= col < len(self._header), f"column {col} out of range"
        return self._rows[row][col]

    def column(self, col: Column) -> List[str]:
        """All cells of one column, in row order."""
        col = self.resolve(col)
        return [row[col] for row in self._rows]

    def unique_values(self, col: Column) -> Set[str]:
        """Distinct cell values in a column."""
        return set(self.column(col))

    def value_counts(self, col: Column) -> Dict[str, int]:
        """Number of rows holding each distinct value of a column."""
        return dict(Counter(self.column(col)))

    def filter_rows(self, col: Column, value: str) -> "FlatTable":
        """
        Keep the rows whose cell in ``col`` equals ``value`` exactly.

        Args:
            col: Column name or index
            value: Value to match (case-sensitive string equality)

        Returns:
            A new table with the same header; empty if nothing matches
        """
        col = self.resolve(col)
        return self._with_rows([row for row in self._rows if row[col] == value])

    def select(self, criteria: Mapping[Column, str]) -> "FlatTable":
        """Keep the rows matching every ``{column: value}`` pair."""
        checks = [(self.resolve(col), value) for col, value in criteria.items()]
        return self._with_rows([
            row for row in self._rows
            if all(row[col] == value for col, value in checks)
        ])

    def _with_rows(self, rows: List[Row]) -> "FlatTable":
        table = self.__class__.__new__(self.__class__)
        table._header = self._header
        table._rows = rows
        table._index_of = dict(self._index_of)
        return table

    def to_lines(self) -> Iterator[str]:
        """Yield the header and rows as tab-joined lines, the inverse of from_lines."""
        yield "\t".join(self._header)
        for row in self._rows:
            yield "\t".join(row)
