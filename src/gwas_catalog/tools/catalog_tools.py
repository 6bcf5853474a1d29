"""
GWAS Catalog Tools for MCP Server.

Tools for summarizing, subsetting and extracting positions and effect sizes
from a GWAS Catalog associations file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from mcp.types import Tool

from ..catalog import CatalogError, GWASCatalog
from ..catalog.gwas import EFFECT_SIZE_COLUMN, SUMMARY_THRESHOLD
from ..utils.validators import (
    CATALOG_CHROMOSOMES,
    CATALOG_EXTENSIONS,
    validate_chromosome,
    validate_count,
    validate_file_path,
)
from ..utils.file_handlers import write_lines, write_results

logger = logging.getLogger(__name__)

PREVIEW_SIZE = 20

_CATALOG_PATH_PROPERTY = {
    "type": "string",
    "description": "Path to GWAS Catalog associations TSV (defaults to GWAS_CATALOG_PATH)"
}
_DISEASE_PROPERTY = {
    "type": "string",
    "description": "Optional DISEASE/TRAIT value to restrict to (exact match)"
}
_CHROMOSOME_PROPERTY = {
    "type": "string",
    "description": "Optional chromosome to restrict to (1-22, X, Y)"
}


# Define Catalog tools
CATALOG_TOOLS = [
    Tool(
        name="catalog_summary",
        description="Summarize a GWAS Catalog file: number of associations, distinct diseases/traits, and diseases with more than a minimum number of associations.",
        inputSchema={
            "type": "object",
            "properties": {
                "catalog_path": _CATALOG_PATH_PROPERTY,
                "disease": _DISEASE_PROPERTY,
                "chromosome": _CHROMOSOME_PROPERTY,
                "min_associations": {
                    "type": "integer",
                    "description": f"Count diseases with more associations than this (default: {SUMMARY_THRESHOLD})",
                    "default": SUMMARY_THRESHOLD
                }
            },
            "required": []
        }
    ),
    Tool(
        name="disease_counts",
        description="Count associations per disease/trait in a GWAS Catalog file, most frequent first.",
        inputSchema={
            "type": "object",
            "properties": {
                "catalog_path": _CATALOG_PATH_PROPERTY,
                "chromosome": _CHROMOSOME_PROPERTY,
                "min_associations": {
                    "type": "integer",
                    "description": "Only list diseases with more associations than this (default: 0)",
                    "default": 0
                },
                "limit": {
                    "type": "integer",
                    "description": "Maximum number of diseases to list (default: 50)",
                    "default": 50
                }
            },
            "required": []
        }
    ),
    Tool(
        name="unique_rsids",
        description="List distinct single-variant rsIDs (SNPS entries starting with 'rs' and not merged with other identifiers).",
        inputSchema={
            "type": "object",
            "properties": {
                "catalog_path": _CATALOG_PATH_PROPERTY,
                "disease": _DISEASE_PROPERTY,
                "chromosome": _CHROMOSOME_PROPERTY,
                "limit": {
                    "type": "integer",
                    "description": "Maximum number of rsIDs to list (default: 100)",
                    "default": 100
                }
            },
            "required": []
        }
    ),
    Tool(
        name="positions_and_effect_sizes",
        description="Extract (CHR_POS, OR or BETA) pairs for associations where both are valid positive numbers. Optionally save them as CSV.",
        inputSchema={
            "type": "object",
            "properties": {
                "catalog_path": _CATALOG_PATH_PROPERTY,
                "disease": _DISEASE_PROPERTY,
                "chromosome": _CHROMOSOME_PROPERTY,
                "sort_by_position": {
                    "type": "boolean",
                    "description": "Sort pairs by position instead of file order (default: false)",
                    "default": False
                },
                "output_path": {
                    "type": "string",
                    "description": "Optional path to save the pairs as CSV"
                }
            },
            "required": []
        }
    ),
    Tool(
        name="scan_disease_chromosomes",
        description="For every disease/trait and chromosome, count associations with a valid position and effect size. Reports combinations with at least min_pairs pairs.",
        inputSchema={
            "type": "object",
            "properties": {
                "catalog_path": _CATALOG_PATH_PROPERTY,
                "min_pairs": {
                    "type": "integer",
                    "description": "Minimum number of pairs for a combination to be reported (default: 1)",
                    "default": 1
                },
                "output_path": {
                    "type": "string",
                    "description": "Optional path to save the scan as JSON"
                }
            },
            "required": []
        }
    ),
    Tool(
        name="subset_catalog",
        description="Write the associations matching every column=value filter to a TSV file.",
        inputSchema={
            "type": "object",
            "properties": {
                "catalog_path": _CATALOG_PATH_PROPERTY,
                "filters": {
                    "type": "object",
                    "description": "Column name to exact value, e.g. {\"DISEASE/TRAIT\": \"Type 2 diabetes\", \"CHR_ID\": \"6\"}",
                    "additionalProperties": {"type": "string"}
                },
                "output_path": {
                    "type": "string",
                    "description": "Path to save the subset TSV"
                }
            },
            "required": ["filters", "output_path"]
        }
    ),
]


async def handle_catalog_tool(name: str, arguments: Dict[str, Any]) -> str:
    """Handle catalog tool calls."""

    if name == "catalog_summary":
        return await catalog_summary(
            catalog_path=arguments.get("catalog_path"),
            disease=arguments.get("disease"),
            chromosome=arguments.get("chromosome"),
            min_associations=arguments.get("min_associations", SUMMARY_THRESHOLD)
        )

    elif name == "disease_counts":
        return await disease_counts(
            catalog_path=arguments.get("catalog_path"),
            chromosome=arguments.get("chromosome"),
            min_associations=arguments.get("min_associations", 0),
            limit=arguments.get("limit", 50)
        )

    elif name == "unique_rsids":
        return await unique_rsids(
            catalog_path=arguments.get("catalog_path"),
            disease=arguments.get("disease"),
            chromosome=arguments.get("chromosome"),
            limit=arguments.get("limit", 100)
        )

    elif name == "positions_and_effect_sizes":
        return await positions_and_effect_sizes(
            catalog_path=arguments.get("catalog_path"),
            disease=arguments.get("disease"),
            chromosome=arguments.get("chromosome"),
            sort_by_position=arguments.get("sort_by_position", False),
            output_path=arguments.get("output_path")
        )

    elif name == "scan_disease_chromosomes":
        return await scan_disease_chromosomes(
            catalog_path=arguments.get("catalog_path"),
            min_pairs=arguments.get("min_pairs", 1),
            output_path=arguments.get("output_path")
        )

    elif name == "subset_catalog":
        return await subset_catalog(
            catalog_path=arguments.get("catalog_path"),
            filters=arguments["filters"],
            output_path=arguments["output_path"]
        )

    raise ValueError(f"Unknown catalog tool: {name}")


_catalog_cache: Dict[Path, tuple] = {}


def load_catalog(catalog_path: Optional[str] = None) -> GWASCatalog:
    """
    Load a catalog, reusing the previous load while the file is unchanged.

    Args:
        catalog_path: Path to the catalog; GWAS_CATALOG_PATH if omitted

    Returns:
        GWASCatalog over the whole file
    """
    catalog_path = catalog_path or os.getenv('GWAS_CATALOG_PATH')
    if not catalog_path:
        raise ValueError("No catalog_path given and GWAS_CATALOG_PATH is not set")

    path = validate_file_path(catalog_path, allowed_extensions=CATALOG_EXTENSIONS)
    mtime = path.stat().st_mtime

    cached = _catalog_cache.get(path)
    if cached and cached[0] == mtime:
        return cached[1]

    logger.info(f"Loading GWAS Catalog: {path}")
    catalog = GWASCatalog.from_path(path)
    _catalog_cache[path] = (mtime, catalog)
    return catalog


def open_view(
    catalog_path: Optional[str] = None,
    disease: Optional[str] = None,
    chromosome: Optional[str] = None
) -> GWASCatalog:
    """Load a catalog and apply the optional disease and chromosome filters."""
    view = load_catalog(catalog_path)
    if disease:
        view = view.for_disease(disease)
    if chromosome:
        view = view.for_chromosome(validate_chromosome(chromosome))
    return view


def _error(e: Exception) -> str:
    logger.error(f"Catalog query failed: {e}")
    return json.dumps({
        "error": str(e),
        "type": type(e).__name__
    }, indent=2)


async def catalog_summary(
    catalog_path: Optional[str] = None,
    disease: Optional[str] = None,
    chromosome: Optional[str] = None,
    min_associations: int = SUMMARY_THRESHOLD
) -> str:
    """
    Summarize associations and diseases in a (filtered) catalog.
    """
    min_associations = validate_count(min_associations, "min_associations")

    try:
        view = open_view(catalog_path, disease, chromosome)
        result = view.summary(threshold=min_associations)
        result["filters"] = {"disease": disease, "chromosome": chromosome}
        result["columns"] = list(view.table.header)
        return json.dumps(result, indent=2)

    except CatalogError as e:
        return _error(e)


async def disease_counts(
    catalog_path: Optional[str] = None,
    chromosome: Optional[str] = None,
    min_associations: int = 0,
    limit: int = 50
) -> str:
    """
    Count associations per disease, most frequent first.
    """
    min_associations = validate_count(min_associations, "min_associations")
    limit = validate_count(limit, "limit", min_value=1)

    try:
        view = open_view(catalog_path, chromosome=chromosome)
        counts = [
            (disease, n) for disease, n in view.disease_counts().items()
            if n > min_associations
        ]
        counts.sort(key=lambda item: (-item[1], item[0]))

        result = {
            "n_diseases": len(counts),
            "min_associations": min_associations,
            "diseases": [
                {"disease": disease, "associations": n}
                for disease, n in counts[:limit]
            ],
        }
        if len(counts) > limit:
            result["truncated"] = True

        return json.dumps(result, indent=2)

    except CatalogError as e:
        return _error(e)


async def unique_rsids(
    catalog_path: Optional[str] = None,
    disease: Optional[str] = None,
    chromosome: Optional[str] = None,
    limit: int = 100
) -> str:
    """
    List distinct single-variant rsIDs.
    """
    limit = validate_count(limit, "limit", min_value=1)

    try:
        view = open_view(catalog_path, disease, chromosome)
        rsids = sorted(view.unique_rsids())

        return json.dumps({
            "n_rsids": len(rsids),
            "n_associations": view.size(),
            "rsids": rsids[:limit],
            "truncated": len(rsids) > limit,
        }, indent=2)

    except CatalogError as e:
        return _error(e)


async def positions_and_effect_sizes(
    catalog_path: Optional[str] = None,
    disease: Optional[str] = None,
    chromosome: Optional[str] = None,
    sort_by_position: bool = False,
    output_path: Optional[str] = None
) -> str:
    """
    Extract position and effect size pairs.

    Rows whose CHR_POS or OR or BETA is missing, non-numeric or not
    positive are left out.
    """
    logger.info(f"Extracting positions and effect sizes (disease={disease}, chromosome={chromosome})")

    try:
        view = open_view(catalog_path, disease, chromosome)
        pairs = view.pairs_frame(sort_by_position=bool(sort_by_position))

        result = {
            "n_associations": view.size(),
            "n_pairs": len(pairs),
            "n_excluded": view.size() - len(pairs),
            "sorted_by_position": bool(sort_by_position),
        }

        if len(pairs):
            effect_sizes = pairs[EFFECT_SIZE_COLUMN].to_numpy()
            result["effect_size"] = {
                "min": float(np.min(effect_sizes)),
                "median": float(np.median(effect_sizes)),
                "max": float(np.max(effect_sizes)),
                "n_below_one": int(np.sum(effect_sizes < 1)),
            }
            result["preview"] = [
                {"position": int(pos), "effect_size": float(es)}
                for pos, es in pairs.head(PREVIEW_SIZE).itertuples(index=False)
            ]

        if output_path:
            write_results(pairs, output_path, format='csv')
            result["pairs_saved_to"] = output_path

        return json.dumps(result, indent=2)

    except CatalogError as e:
        return _error(e)


async def scan_disease_chromosomes(
    catalog_path: Optional[str] = None,
    min_pairs: int = 1,
    output_path: Optional[str] = None
) -> str:
    """
    Count valid position/effect-size pairs for every disease and chromosome.
    """
    min_pairs = validate_count(min_pairs, "min_pairs", min_value=1)

    try:
        catalog = load_catalog(catalog_path)
        logger.info(f"Scanning {len(catalog.unique_diseases())} diseases x {len(CATALOG_CHROMOSOMES)} chromosomes")

        combos = [
            {"disease": disease, "chromosome": chromosome, "n_pairs": n_pairs}
            for disease, chromosome, n_pairs in catalog.scan_pairs(CATALOG_CHROMOSOMES, min_pairs)
        ]

        combos.sort(key=lambda c: -c["n_pairs"])
        result = {
            "n_combinations": len(combos),
            "min_pairs": min_pairs,
            "top_combinations": combos[:PREVIEW_SIZE],
        }

        if output_path:
            write_results(combos, output_path, format='json')
            result["scan_saved_to"] = output_path

        return json.dumps(result, indent=2)

    except CatalogError as e:
        return _error(e)


async def subset_catalog(
    filters: Dict[str, str],
    output_path: str,
    catalog_path: Optional[str] = None
) -> str:
    """
    Write the associations matching all filters to a TSV file.
    """
    if not filters:
        raise ValueError("At least one filter is required")

    try:
        catalog = load_catalog(catalog_path)
        subset = catalog.select({column: str(value) for column, value in filters.items()})

        write_lines(subset.table.to_lines(), output_path)

        return json.dumps({
            "filters": filters,
            "n_associations": subset.size(),
            "subset_saved_to": output_path,
        }, indent=2)

    except CatalogError as e:
        return _error(e)
