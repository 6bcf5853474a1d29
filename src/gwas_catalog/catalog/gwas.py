"""
GWAS Catalog view.

Wraps a FlatTable shaped like the GWAS Catalog associations export and
answers disease, chromosome, RSID and position/effect-size queries over it.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Set, Tuple, Union

import numpy as np
import pandas as pd

from .masks import intersect, valid_indices
from .parsers import FLOAT, UNSIGNED
from .table import Column, FlatTable

logger = logging.getLogger(__name__)

DISEASE_COLUMN = "DISEASE/TRAIT"
POSITION_COLUMN = "CHR_POS"
EFFECT_SIZE_COLUMN = "OR or BETA"
CHROMOSOME_COLUMN = "CHR_ID"
SNP_COLUMN = "SNPS"

REQUIRED_COLUMNS = (
    DISEASE_COLUMN,
    POSITION_COLUMN,
    EFFECT_SIZE_COLUMN,
    CHROMOSOME_COLUMN,
    SNP_COLUMN,
)

# Diseases with more associations than this are counted in summaries
SUMMARY_THRESHOLD = 9

# Characters that mark a SNPS cell holding several merged identifiers
_MULTI_SNP_CHARS = (' ', '\t', ';')


class GWASCatalog:
    """Analytical view over GWAS Catalog association records."""

    def __init__(self, table: FlatTable):
        """
        Wrap a loaded table.

        Args:
            table: Table whose header contains the GWAS Catalog columns

        Raises:
            UnknownColumnError: If a required column is missing
        """
        self.table = table
        self.disease_i = table.column_index(DISEASE_COLUMN)
        self.position_i = table.column_index(POSITION_COLUMN)
        self.effect_size_i = table.column_index(EFFECT_SIZE_COLUMN)
        self.chromosome_i = table.column_index(CHROMOSOME_COLUMN)
        self.snp_i = table.column_index(SNP_COLUMN)

    @classmethod
    def from_path(cls, file_path: Union[str, Path]) -> "GWASCatalog":
        """Load a GWAS Catalog associations TSV."""
        return cls(FlatTable.from_path(file_path))

    def __len__(self) -> int:
        return self.table.row_count()

    def __repr__(self) -> str:
        return f"GWASCatalog({self.size()} associations)"

    def size(self) -> int:
        """Number of associations."""
        return self.table.row_count()

    def unique_diseases(self) -> Set[str]:
        return self.table.unique_values(self.disease_i)

    def disease_counts(self) -> Dict[str, int]:
        """Number of associations for each disease/trait."""
        return self.table.value_counts(self.disease_i)

    def filter_by(self, column: Column, value: str) -> "GWASCatalog":
        """
        Subset to associations whose ``column`` equals ``value``.

        Args:
            column: Column name or index
            value: Exact value to match

        Returns:
            A new GWASCatalog; empty if nothing matches
        """
        return GWASCatalog(self.table.filter_rows(column, value))

    def select(self, criteria: Mapping[Column, str]) -> "GWASCatalog":
        """Subset to associations matching every ``{column: value}`` pair."""
        return GWASCatalog(self.table.select(criteria))

    def for_disease(self, disease: str) -> "GWASCatalog":
        return self.filter_by(self.disease_i, disease)

    def for_chromosome(self, chromosome: str) -> "GWASCatalog":
        return self.filter_by(self.chromosome_i, chromosome)

    def positions_and_effect_sizes(self, sort_by_position: bool = False) -> List[Tuple[int, float]]:
        """
        Get (position, effect size) for every association where both are valid.

        A row is kept only if its CHR_POS parses as a positive unsigned
        integer and its OR or BETA parses as a positive float. Rows failing
        either test are skipped silently.

        Args:
            sort_by_position: Sort pairs by position instead of row order

        Returns:
            List of (position, effect_size) in ascending row order, or in
            ascending position order (stable) if sort_by_position is set
        """
        positions = valid_indices(self.table, self.position_i, UNSIGNED.parse)
        effect_sizes = valid_indices(self.table, self.effect_size_i, FLOAT.parse)
        rows = sorted(intersect(positions, effect_sizes))

        excluded = self.size() - len(rows)
        if excluded:
            logger.debug(
                f"Excluded {excluded} rows without a valid {UNSIGNED.name} position "
                f"and {FLOAT.name} effect size"
            )

        pairs = [
            (
                UNSIGNED.parse(self.table.cell(i, self.position_i)),
                FLOAT.parse(self.table.cell(i, self.effect_size_i)),
            )
            for i in rows
        ]

        if sort_by_position:
            pairs.sort(key=lambda pair: pair[0])
        return pairs

    def pairs_frame(self, sort_by_position: bool = False) -> pd.DataFrame:
        """Position/effect-size pairs as a two-column DataFrame."""
        pairs = self.positions_and_effect_sizes(sort_by_position=sort_by_position)
        return pd.DataFrame({
            POSITION_COLUMN: np.array([p for p, _ in pairs], dtype=np.uint64),
            EFFECT_SIZE_COLUMN: np.array([es for _, es in pairs], dtype=np.float64),
        })

    def unique_rsids(self) -> Set[str]:
        """
        Get the distinct single-variant rsIDs.

        SNPS cells that do not start with 'rs', or that contain a space,
        tab or semicolon (several merged identifiers), are left out.
        """
        rsids = set()
        for rsid in self.table.unique_values(self.snp_i):
            if rsid.startswith('rs') and not any(c in rsid for c in _MULTI_SNP_CHARS):
                rsids.add(rsid)
        return rsids

    def summary_count(self, threshold: int = SUMMARY_THRESHOLD) -> int:
        """Number of diseases with more than ``threshold`` associations."""
        return sum(1 for count in self.disease_counts().values() if count > threshold)

    def scan_pairs(self, chromosomes: Iterable[str], min_pairs: int = 1) -> List[Tuple[str, str, int]]:
        """
        Count position/effect-size pairs for each disease and chromosome.

        Args:
            chromosomes: CHR_ID values to visit for every disease
            min_pairs: Smallest pair count to report

        Returns:
            (disease, chromosome, n_pairs) in disease then chromosome order
        """
        chromosomes = list(chromosomes)
        found = []
        for disease in sorted(self.unique_diseases()):
            by_disease = self.for_disease(disease)
            for chromosome in chromosomes:
                n_pairs = len(by_disease.for_chromosome(chromosome).positions_and_effect_sizes())
                if n_pairs >= min_pairs:
                    found.append((disease, chromosome, n_pairs))
        return found

    def summary(self, threshold: int = SUMMARY_THRESHOLD) -> Dict[str, Any]:
        counts = self.disease_counts()
        return {
            "associations": self.size(),
            "diseases": len(counts),
            "diseases_over_threshold": sum(1 for c in counts.values() if c > threshold),
            "threshold": threshold,
        }
