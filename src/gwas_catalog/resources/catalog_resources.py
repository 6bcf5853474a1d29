"""
Catalog Resources for GWAS Catalog MCP Server.

Exposes the catalog configured by GWAS_CATALOG_PATH as MCP resources.
"""

import json
import logging
from urllib.parse import urlparse, unquote

from mcp.types import Resource

from ..catalog.gwas import (
    CHROMOSOME_COLUMN,
    DISEASE_COLUMN,
    EFFECT_SIZE_COLUMN,
    POSITION_COLUMN,
    SNP_COLUMN,
)
from ..tools.catalog_tools import load_catalog
from ..utils.validators import validate_rsid

logger = logging.getLogger(__name__)

MAX_SNP_ASSOCIATIONS = 50


# Only static resources; rsID lookups use the gwas://catalog/snp/{rsid} form
RESOURCES = [
    Resource(
        uri="gwas://catalog/traits",
        name="GWAS Catalog Traits",
        description="List of all diseases/traits in the configured GWAS Catalog file",
        mimeType="application/json"
    ),
]


async def handle_resource(uri: str) -> str:
    """Handle resource read requests."""
    logger.info(f"Reading resource: {uri}")

    parsed = urlparse(str(uri))
    scheme = parsed.scheme
    path = unquote(parsed.netloc + parsed.path)

    if scheme == "gwas":
        return await handle_gwas_resource(path)

    raise ValueError(f"Unknown resource scheme: {scheme}")


async def handle_gwas_resource(path: str) -> str:
    """Handle gwas:// resource requests."""

    parts = path.strip('/').split('/')

    if parts[0] == "catalog":
        if len(parts) == 2 and parts[1] == "traits":
            return await read_traits()
        elif len(parts) == 3 and parts[1] == "snp":
            return await read_snp(parts[2])

    raise ValueError(f"Invalid GWAS Catalog resource path: {path}")


async def read_traits() -> str:
    """List the diseases/traits of the configured catalog with their counts."""
    catalog = load_catalog()
    counts = catalog.disease_counts()

    return json.dumps({
        "source": "GWAS Catalog",
        "n_traits": len(counts),
        "traits": [
            {"trait": trait, "associations": counts[trait]}
            for trait in sorted(counts)
        ]
    }, indent=2)


async def read_snp(rsid: str) -> str:
    """List the associations reported for one rsID."""
    try:
        rsid = validate_rsid(rsid)
    except ValueError as e:
        # Template URIs such as gwas://catalog/snp/{rsid} arrive unfilled
        return json.dumps({"error": str(e)}, indent=2)

    hits = load_catalog().filter_by(SNP_COLUMN, rsid)
    table = hits.table
    columns = [DISEASE_COLUMN, CHROMOSOME_COLUMN, POSITION_COLUMN, EFFECT_SIZE_COLUMN]
    indices = [table.column_index(c) for c in columns]

    associations = [
        {c: table.cell(i, col) for c, col in zip(columns, indices)}
        for i in range(min(hits.size(), MAX_SNP_ASSOCIATIONS))
    ]

    return json.dumps({
        "rsid": rsid,
        "source": "GWAS Catalog",
        "n_associations": hits.size(),
        "associations": associations
    }, indent=2)
