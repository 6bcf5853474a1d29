"""
GWAS Catalog MCP Resources Package
"""

from .catalog_resources import RESOURCES, handle_resource

__all__ = [
    "RESOURCES",
    "handle_resource",
]
