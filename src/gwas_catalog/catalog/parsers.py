"""
Strict numeric parsing of raw catalog cells.

A parser takes the raw string of a cell and returns the parsed number, or
``None`` when the whole string is not a valid value of the requested type.
Parsers never raise on bad input.
"""

import logging
import math
import re
from typing import Callable, NamedTuple, Optional, Union

logger = logging.getLogger(__name__)

Number = Union[int, float]
CellParser = Callable[[str], Optional[Number]]

UNSIGNED_MAX = 2 ** 64 - 1

# No more digits than UNSIGNED_MAX has
_UNSIGNED_RE = re.compile(r'[0-9]{1,%d}' % len(str(UNSIGNED_MAX)))
_FLOAT_RE = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')


def parse_unsigned(cell: str) -> Optional[int]:
    """
    Parse a cell as an unsigned 64-bit integer.

    Args:
        cell: Raw cell text (e.g., '1234567')

    Returns:
        The integer value, or None if the cell is empty, signed,
        non-numeric or larger than 2**64 - 1
    """
    if not _UNSIGNED_RE.fullmatch(cell):
        logger.debug(f"{cell!r} is not a valid unsigned integer")
        return None

    value = int(cell)
    if value > UNSIGNED_MAX:
        logger.debug(f"{cell!r} is out of range for an unsigned integer")
        return None

    return value


def parse_float(cell: str) -> Optional[float]:
    """
    Parse a cell as a finite floating point number.

    Args:
        cell: Raw cell text (e.g., '1.25', '-0.3', '2e-4')

    Returns:
        The float value, or None if the cell is empty, non-numeric,
        NaN/infinite or overflows
    """
    if not _FLOAT_RE.fullmatch(cell):
        logger.debug(f"{cell!r} is not a valid number")
        return None

    value = float(cell)
    if not math.isfinite(value):
        logger.debug(f"{cell!r} is out of range for a float")
        return None

    return value


class NumericKind(NamedTuple):
    """A named numeric column type and its parser."""

    name: str
    parse: CellParser


UNSIGNED = NumericKind("unsigned integer", parse_unsigned)
FLOAT = NumericKind("float", parse_float)
