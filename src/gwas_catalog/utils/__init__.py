"""
GWAS Catalog Utilities Package
"""

from .file_handlers import (
    read_lines,
    write_lines,
    write_results,
)
from .validators import (
    validate_file_path,
    validate_rsid,
    validate_chromosome,
    validate_count,
)

__all__ = [
    "read_lines",
    "write_lines",
    "write_results",
    "validate_file_path",
    "validate_rsid",
    "validate_chromosome",
    "validate_count",
]
