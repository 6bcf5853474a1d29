"""
GWAS Catalog MCP Server - Main Entry Point

An MCP server answering questions about a local GWAS Catalog associations
file, compatible with Claude Desktop and other MCP clients.
"""

import asyncio
import logging
import os
import sys
from typing import Any

from dotenv import load_dotenv
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool, Resource

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=getattr(logging, os.getenv('LOG_LEVEL', 'INFO').upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr),
    ]
)
logger = logging.getLogger(__name__)

# Create the MCP server instance
server = Server("gwas-catalog")

# Import and register tools
from gwas_catalog.catalog import CatalogError
from gwas_catalog.tools.catalog_tools import CATALOG_TOOLS, handle_catalog_tool
from gwas_catalog.resources.catalog_resources import RESOURCES, handle_resource


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available catalog tools."""
    logger.info(f"Listing {len(CATALOG_TOOLS)} available tools")
    return CATALOG_TOOLS


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls by routing to the catalog handler."""
    logger.info(f"Tool called: {name} with args: {arguments}")

    try:
        if name in [t.name for t in CATALOG_TOOLS]:
            result = await handle_catalog_tool(name, arguments or {})
        else:
            raise ValueError(f"Unknown tool: {name}")

        return [TextContent(type="text", text=result)]

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return [TextContent(type="text", text=f"Error: File not found - {e}")]
    except CatalogError as e:
        logger.error(f"Catalog error: {e}")
        return [TextContent(type="text", text=f"Error: Invalid catalog - {e}")]
    except KeyError as e:
        logger.error(f"Missing argument: {e}")
        return [TextContent(type="text", text=f"Error: Missing required argument - {e}")]
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return [TextContent(type="text", text=f"Error: Invalid input - {e}")]
    except Exception as e:
        logger.exception(f"Tool execution failed: {e}")
        return [TextContent(type="text", text=f"Error: {type(e).__name__} - {e}")]


@server.list_resources()
async def list_resources() -> list[Resource]:
    """List available catalog resources."""
    logger.info(f"Listing {len(RESOURCES)} available resources")
    return RESOURCES


@server.read_resource()
async def read_resource(uri: str) -> str:
    """Read data from a resource URI."""
    logger.info(f"Reading resource: {uri}")

    try:
        return await handle_resource(str(uri))
    except Exception as e:
        logger.exception(f"Resource read failed: {e}")
        raise


async def run_server():
    """Run the MCP server using stdio transport."""
    logger.info("Starting GWAS Catalog MCP Server...")

    catalog_path = os.getenv('GWAS_CATALOG_PATH')
    if catalog_path:
        logger.info(f"Default catalog: {catalog_path}")
    else:
        logger.warning("GWAS_CATALOG_PATH is not set; tools need an explicit catalog_path")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def main():
    """Main entry point."""
    try:
        # Windows-specific fix for asyncio pipes
        if sys.platform == 'win32':
            asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

        asyncio.run(run_server())
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.exception(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
