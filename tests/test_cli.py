"""
Tests for the command line driver.
"""

import pytest
from pathlib import Path
import sys

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gwas_catalog.cli import main, parse_args


def test_defaults(sample_catalog):
    args = parse_args([str(sample_catalog)])
    assert args.disease == "Type 2 diabetes"
    assert args.chromosome == "6"
    assert args.sort_by_position is False


def test_chromosome_normalized(sample_catalog):
    assert parse_args([str(sample_catalog), "--chromosome", "chrX"]).chromosome == "X"
    with pytest.raises(SystemExit):
        parse_args([str(sample_catalog), "--chromosome", "chr30"])


def test_run_writes_pairs(sample_catalog, temp_dir, capsys):
    output = temp_dir / "pairs.csv"

    assert main([str(sample_catalog), "--output", str(output), "--sort-by-position", "--scan"]) == 0

    assert output.read_text().splitlines() == ["CHR_POS,OR or BETA", "40,2.25", "100,1.5"]
    out = capsys.readouterr().out
    assert "catalog: associations: 9" in out
    assert "Unique RSIDs for Type 2 diabetes: 3" in out
    assert "Type 2 diabetes:6 size is 2" in out


def test_missing_catalog(temp_dir):
    assert main([str(temp_dir / "missing.tsv"), "--output", str(temp_dir / "p.csv")]) == 1


def test_malformed_catalog(temp_dir):
    path = temp_dir / "bad.tsv"
    path.write_text("")
    assert main([str(path), "--output", str(temp_dir / "p.csv")]) == 1
