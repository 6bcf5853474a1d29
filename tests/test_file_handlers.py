"""
Tests for file handlers.
"""

import json
import pytest
from pathlib import Path
import sys

import pandas as pd

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gwas_catalog.utils.file_handlers import read_lines, write_lines, write_results


class TestReadLines:
    """Tests for reading catalog lines."""

    def test_plain(self, sample_catalog):
        lines = read_lines(sample_catalog)
        assert lines[0].startswith("DATE ADDED TO CATALOG\t")
        assert not any(line.endswith("\n") for line in lines)

    def test_gzip_matches_plain(self, sample_catalog, sample_catalog_gz):
        assert read_lines(sample_catalog_gz) == read_lines(sample_catalog)

    def test_keeps_inner_whitespace(self, temp_dir):
        path = temp_dir / "spaces.tsv"
        path.write_text("A\tB\n x \t\n")
        assert read_lines(path) == ["A\tB", " x \t"]

    def test_crlf_terminators_removed(self, temp_dir):
        path = temp_dir / "crlf.tsv"
        path.write_bytes(b"A\tB\r\n1\tx\r\n")
        assert read_lines(path) == ["A\tB", "1\tx"]

    def test_lone_carriage_return_kept_in_field(self, temp_dir):
        path = temp_dir / "cr.tsv"
        path.write_bytes(b"A\tB\n1\tx\ry\n")
        assert read_lines(path) == ["A\tB", "1\tx\ry"]

    def test_missing(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            read_lines(temp_dir / "missing.tsv")


class TestWriteLines:
    """Tests for writing lines verbatim."""

    def test_no_quoting(self, temp_dir):
        lines = ["DISEASE\tCHR", "Height \"adult\"\t6", "a,b\t1"]
        out = write_lines(lines, temp_dir / "out" / "subset.tsv")
        assert Path(out).read_bytes() == "\n".join(lines).encode() + b"\n"
        assert read_lines(out) == lines


class TestWriteResults:
    """Tests for writing report files."""

    def test_csv(self, temp_dir):
        frame = pd.DataFrame({"CHR_POS": [100, 40], "OR or BETA": [1.5, 2.25]})
        out = write_results(frame, temp_dir / "out" / "pairs.csv", format="csv")
        assert Path(out).read_text().splitlines() == ["CHR_POS,OR or BETA", "100,1.5", "40,2.25"]

    def test_json_from_list(self, temp_dir):
        out = write_results([{"disease": "Asthma", "n_pairs": 1}], temp_dir / "scan.json", format="json")
        assert json.loads(Path(out).read_text()) == [{"disease": "Asthma", "n_pairs": 1}]

    def test_unsupported_format(self, temp_dir):
        with pytest.raises(ValueError):
            write_results(pd.DataFrame({"a": [1]}), temp_dir / "x.parquet", format="parquet")
