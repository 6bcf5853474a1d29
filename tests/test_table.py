"""
Tests for the tab-delimited table.
"""

import pytest
from pathlib import Path
import sys

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gwas_catalog.catalog import (
    CatalogError,
    FlatTable,
    MalformedInputError,
    RowShapeMismatchError,
    UnknownColumnError,
)


@pytest.fixture
def table():
    return FlatTable.from_lines([
        "NAME\tCHR\tVALUE",
        "a\t1\tx",
        "b\t2\ty",
        "c\t1\tx",
        "d\t1\tz",
    ])


class TestLoad:
    """Tests for loading tables from lines and files."""

    def test_single_row(self):
        table = FlatTable.from_lines(["A\tB", "1\tx"])
        assert table.row_count() == 1
        assert table.cell(0, 0) == "1"
        assert table.unique_values(1) == {"x"}

    def test_empty_source(self):
        with pytest.raises(MalformedInputError):
            FlatTable.from_lines([])

    def test_header_only(self):
        table = FlatTable.from_lines(["A\tB"])
        assert table.row_count() == 0
        assert table.header == ("A", "B")

    def test_row_shape_mismatch(self):
        with pytest.raises(RowShapeMismatchError) as excinfo:
            FlatTable.from_lines(["A\tB", "1\tx", "2"], source="catalog.tsv")
        assert excinfo.value.line_number == 3
        assert excinfo.value.expected == 2
        assert excinfo.value.found == 1
        assert "catalog.tsv" in str(excinfo.value)

    def test_row_shape_mismatch_in_constructor(self):
        with pytest.raises(RowShapeMismatchError):
            FlatTable(["A", "B"], [["1", "x", "extra"]])

    def test_empty_trailing_field_kept(self):
        table = FlatTable.from_lines(["A\tB", "1\t"])
        assert table.cell(0, 1) == ""

    def test_blank_lines_skipped(self):
        table = FlatTable.from_lines(["A\tB", "1\tx", "", "2\ty"])
        assert table.row_count() == 2

    def test_blank_line_is_row_in_single_column_table(self):
        table = FlatTable.from_lines(["A", "x", "", "y"])
        assert table.row_count() == 3
        assert table.column("A") == ["x", "", "y"]

    def test_line_number_counts_skipped_blank_lines(self):
        with pytest.raises(RowShapeMismatchError) as excinfo:
            FlatTable.from_lines(["A\tB", "", "1\tx", "2"], source="catalog.tsv")
        assert excinfo.value.line_number == 4
        assert excinfo.value.source == "catalog.tsv"

    def test_duplicate_header_last_wins(self):
        table = FlatTable.from_lines(["A\tA\tB", "1\t2\t3"])
        assert table.column_index("A") == 1
        assert table.cell(0, table.column_index("A")) == "2"

    def test_from_path(self, temp_dir):
        path = temp_dir / "table.tsv"
        path.write_text("A\tB\r\n1\tx y\r\n")
        table = FlatTable.from_path(path)
        assert table.row_count() == 1
        assert table.cell(0, 1) == "x y"

    def test_from_missing_path(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            FlatTable.from_path(temp_dir / "missing.tsv")


class TestAccess:
    """Tests for column lookup and cell access."""

    def test_column_index(self, table):
        assert table.column_index("NAME") == 0
        assert table.column_index("VALUE") == 2

    def test_unknown_column(self, table):
        with pytest.raises(UnknownColumnError) as excinfo:
            table.column_index("value")
        assert isinstance(excinfo.value, KeyError)
        assert isinstance(excinfo.value, CatalogError)
        assert excinfo.value.column == "value"
        assert "value" in str(excinfo.value)

    def test_len_and_row(self, table):
        assert len(table) == 4
        assert table.row(1) == ("b", "2", "y")

    def test_cell_out_of_range(self, table):
        with pytest.raises(AssertionError):
            table.cell(10, 0)
        with pytest.raises(AssertionError):
            table.cell(0, 3)

    def test_unique_values(self, table):
        assert table.unique_values("VALUE") == {"x", "y", "z"}
        assert len(table.unique_values(0)) <= table.row_count()

    def test_value_counts(self, table):
        assert table.value_counts("CHR") == {"1": 3, "2": 1}


class TestFilter:
    """Tests for row filtering."""

    def test_filter_rows(self, table):
        subset = table.filter_rows("CHR", "1")
        assert subset.row_count() == 3
        assert [subset.cell(i, 0) for i in range(subset.row_count())] == ["a", "c", "d"]
        assert all(subset.cell(i, 1) == "1" for i in range(subset.row_count()))
        assert subset.header == table.header

    def test_filter_by_index(self, table):
        assert table.filter_rows(2, "x").row_count() == 2

    def test_filter_no_match(self, table):
        subset = table.filter_rows("CHR", "X")
        assert subset.row_count() == 0
        assert subset.header == table.header

    def test_filter_case_sensitive(self, table):
        assert table.filter_rows("NAME", "A").row_count() == 0

    def test_filter_unknown_column(self, table):
        with pytest.raises(UnknownColumnError):
            table.filter_rows("POS", "1")

    def test_filter_is_independent(self, table):
        subset = table.filter_rows("CHR", "1")
        again = subset.filter_rows("VALUE", "x")
        assert again.row_count() == 2
        assert subset.row_count() == 3
        assert table.row_count() == 4

    def test_select_matches_chained_filters(self, table):
        chained = table.filter_rows("CHR", "1").filter_rows("VALUE", "x")
        combined = table.select({"CHR": "1", "VALUE": "x"})
        assert [chained.row(i) for i in range(chained.row_count())] == \
            [combined.row(i) for i in range(combined.row_count())]


def test_to_lines(table):
    lines = list(table.to_lines())
    assert lines[0] == "NAME\tCHR\tVALUE"
    assert lines[2] == "b\t2\ty"
    assert len(lines) == 5


def test_to_lines_keeps_cells_verbatim():
    lines = ["DISEASE\tCHR", "Height \"adult\"\t6", "a,b\t"]
    table = FlatTable.from_lines(lines)
    assert list(table.to_lines()) == lines


def test_empty_to_lines(table):
    assert list(table.filter_rows("CHR", "9").to_lines()) == ["NAME\tCHR\tVALUE"]
