"""
Validity masks over table columns.

A mask is the set of row indices whose cell in a column parses as a
required numeric type.
"""

from typing import Iterable, Set

from .parsers import CellParser
from .table import FlatTable


def valid_indices(
    table: FlatTable,
    col: int,
    parse: CellParser,
    require_positive: bool = True
) -> Set[int]:
    """
    Find the rows holding a parseable value in a column.

    Args:
        table: Table to scan
        col: Column index
        parse: Cell parser returning None for invalid cells
        require_positive: Also exclude values <= 0

    Returns:
        Set of row indices
    """
    mask = set()
    for i in range(table.row_count()):
        value = parse(table.cell(i, col))
        if value is None:
            continue
        if require_positive and not value > 0:
            continue
        mask.add(i)
    return mask


def intersect(a: Iterable[int], b: Iterable[int]) -> Set[int]:
    """Row indices present in both masks."""
    lookup = set(a)
    return {i for i in b if i in lookup}
