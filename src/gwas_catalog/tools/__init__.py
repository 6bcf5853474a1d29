"""
GWAS Catalog MCP Tools Package
"""

from .catalog_tools import CATALOG_TOOLS, handle_catalog_tool

__all__ = [
    "CATALOG_TOOLS",
    "handle_catalog_tool",
]
