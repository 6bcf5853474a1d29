"""
Input validation utilities for the GWAS Catalog server and CLI.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

CATALOG_EXTENSIONS = ['tsv', 'tsv.gz', 'txt', 'txt.gz']

# Chromosome labels as written in the catalog's CHR_ID column
CATALOG_CHROMOSOMES = [str(i) for i in range(1, 23)] + ['X', 'Y']


def validate_file_path(
    file_path: str,
    must_exist: bool = True,
    allowed_extensions: Optional[List[str]] = None,
    base_dir: Optional[str] = None
) -> Path:
    """
    Validate and sanitize a file path.

    Args:
        file_path: Path to validate
        must_exist: Whether the file must exist
        allowed_extensions: List of allowed file extensions
        base_dir: Optional base directory to restrict access

    Returns:
        Validated Path object

    Raises:
        ValueError: If path is invalid
        FileNotFoundError: If file doesn't exist and must_exist=True
    """
    path = Path(file_path).resolve()

    if base_dir:
        base = Path(base_dir).resolve()
        if base not in path.parents and path != base:
            raise ValueError("Access denied: path outside allowed directory")

    suspicious_patterns = ['..', '~', '$', '|', ';', '&']
    for pattern in suspicious_patterns:
        if pattern in str(file_path):
            raise ValueError(f"Invalid path: contains suspicious pattern '{pattern}'")

    if allowed_extensions:
        ext = path.suffix.lower().lstrip('.')
        # Double extensions like .tsv.gz
        double_ext = ''.join(path.suffixes[-2:]).lower().lstrip('.')

        if ext not in allowed_extensions and double_ext not in allowed_extensions:
            raise ValueError(
                f"Invalid file extension: {path.suffix}. "
                f"Allowed: {allowed_extensions}"
            )

    if must_exist and not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    return path


def validate_rsid(rsid: str) -> str:
    """
    Validate an rsID (SNP identifier).

    Args:
        rsid: rsID to validate (e.g., 'rs12345' or 'RS12345')

    Returns:
        Normalized rsID in lower case

    Raises:
        ValueError: If rsID format is invalid
    """
    normalized = rsid.strip().lower()

    if re.fullmatch(r'rs\d+', normalized):
        return normalized

    raise ValueError(
        f"Invalid rsID format: {rsid}. "
        "Expected format: rs followed by numbers (e.g., rs12345)"
    )


def validate_chromosome(chrom: str) -> str:
    """
    Validate a chromosome name and normalize it to the catalog's CHR_ID form.

    Args:
        chrom: Chromosome name (e.g., '6', 'chr6', 'x', 'chrX')

    Returns:
        Chromosome label as used in CHR_ID ('1'-'22', 'X', 'Y')
    """
    chrom = str(chrom).strip().upper()

    if chrom.startswith('CHR'):
        chrom = chrom[3:]

    if chrom not in CATALOG_CHROMOSOMES:
        raise ValueError(
            f"Invalid chromosome: {chrom}. "
            f"Valid values: 1-22, X, Y"
        )

    return chrom


def validate_count(
    value: int,
    name: str,
    min_value: Optional[int] = 0
) -> int:
    """
    Validate a non-negative integer parameter such as a threshold or limit.

    Args:
        value: Value to validate
        name: Parameter name (for error messages)
        min_value: Minimum allowed value

    Returns:
        Validated value as int
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid {name}: {value}. Must be an integer.")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {name}: {value}. Must be an integer.")

    if number != value and not isinstance(value, str):
        raise ValueError(f"Invalid {name}: {value}. Must be an integer.")

    if min_value is not None and number < min_value:
        raise ValueError(f"Invalid {name}: {value}. Must be >= {min_value}.")

    return number
