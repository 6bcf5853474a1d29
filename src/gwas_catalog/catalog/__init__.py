"""
GWAS Catalog core: tab-delimited table, cell parsers, validity masks and
the catalog view.
"""

from .errors import (
    CatalogError,
    MalformedInputError,
    RowShapeMismatchError,
    UnknownColumnError,
)
from .parsers import parse_unsigned, parse_float, NumericKind, UNSIGNED, FLOAT
from .table import FlatTable
from .masks import valid_indices, intersect
from .gwas import GWASCatalog, REQUIRED_COLUMNS

__all__ = [
    "CatalogError",
    "MalformedInputError",
    "RowShapeMismatchError",
    "UnknownColumnError",
    "parse_unsigned",
    "parse_float",
    "NumericKind",
    "UNSIGNED",
    "FLOAT",
    "FlatTable",
    "valid_indices",
    "intersect",
    "GWASCatalog",
    "REQUIRED_COLUMNS",
]
