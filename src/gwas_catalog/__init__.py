"""
GWAS Catalog MCP Server

In-memory queries over GWAS Catalog association exports, served over MCP
and from the command line.
"""

from .catalog import FlatTable, GWASCatalog

__version__ = "0.1.0"

__all__ = ["FlatTable", "GWASCatalog", "__version__"]
