"""
Pytest fixtures for GWAS Catalog tests.
"""

import gzip
import tempfile
from pathlib import Path

import pytest


CATALOG_HEADER = [
    "DATE ADDED TO CATALOG",
    "PUBMEDID",
    "DISEASE/TRAIT",
    "CHR_ID",
    "CHR_POS",
    "SNPS",
    "OR or BETA",
    "P-VALUE",
]

# DISEASE/TRAIT, CHR_ID, CHR_POS, SNPS, OR or BETA
CATALOG_ROWS = [
    ("Type 2 diabetes", "6", "100", "rs123", "1.5"),
    ("Type 2 diabetes", "6", "abc", "rs1; rs2", "1.5"),
    ("Type 2 diabetes", "6", "-5", "nors1", "1.5"),
    ("Type 2 diabetes", "6", "0", "rs1 rs2", "1.5"),
    ("Type 2 diabetes", "1", "2500", "rs555", "0.8"),
    ("Asthma", "6", "300", "rs777", ""),
    ("Asthma", "6", "200", "rs888", "1.2"),
    ("Type 2 diabetes", "6", "50", "rs999", "NR"),
    ("Type 2 diabetes", "6", "40", "rs123", "2.25"),
]


def catalog_lines(rows, header=CATALOG_HEADER):
    """Render (disease, chr, pos, snps, effect) tuples as catalog TSV lines."""
    lines = ["\t".join(header)]
    for i, (disease, chrom, pos, snps, effect) in enumerate(rows):
        lines.append("\t".join([
            "2021-02-25", str(30000000 + i), disease, chrom, pos, snps, effect, "1E-8",
        ]))
    return lines


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_catalog(temp_dir):
    """Create a small GWAS Catalog associations file."""
    catalog_path = temp_dir / "associations.tsv"
    catalog_path.write_text("\n".join(catalog_lines(CATALOG_ROWS)) + "\n")
    return catalog_path


@pytest.fixture
def sample_catalog_gz(temp_dir):
    """Create the same catalog, gzip-compressed."""
    catalog_path = temp_dir / "associations.tsv.gz"
    with gzip.open(catalog_path, "wt") as f:
        f.write("\n".join(catalog_lines(CATALOG_ROWS)) + "\n")
    return catalog_path
