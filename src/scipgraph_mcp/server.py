"""MCP server for scipgraph-mcp."""

import asyncio
import json
import logging
import os
import sys

from mcp.server import Server
from mcp.types import Tool, TextContent

from .tools.index_scip import index_scip
from .tools.list_indexes import list_indexes
from .tools.get_dependency_tree import get_dependency_tree
from .tools.fetch_dependency_tree import fetch_dependency_tree
from .tools.get_document_symbols import get_document_symbols
from .tools.parse_symbol import parse_symbol


logger = logging.getLogger(__name__)

# Create server
server = Server("scipgraph-mcp")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    return [
        Tool(
            name="index_scip",
            description="Load a SCIP index in JSON form (e.g. from `scip print --json`) and save it to local storage.",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to the SCIP JSON file (supports ~ for home directory)"
                    },
                    "name": {
                        "type": "string",
                        "description": "Name to store the index under. Defaults to the file name."
                    }
                },
                "required": ["path"]
            }
        ),
        Tool(
            name="list_indexes",
            description="List all stored SCIP indexes.",
            inputSchema={
                "type": "object",
                "properties": {}
            }
        ),
        Tool(
            name="get_dependency_tree",
            description="Get the dependency tree of a file: the external namespaces it references and the containing types/terms of each referenced member.",
            inputSchema={
                "type": "object",
                "properties": {
                    "index": {
                        "type": "string",
                        "description": "Name of a stored index"
                    },
                    "file_path": {
                        "type": "string",
                        "description": "Path of the file within the index (e.g., 'src/insights.ts')"
                    },
                    "flat": {
                        "type": "boolean",
                        "description": "Also return an indented text rendering of the tree",
                        "default": False
                    }
                },
                "required": ["index", "file_path"]
            }
        ),
        Tool(
            name="fetch_dependency_tree",
            description="Fetch a file's SCIP document from the remote service (SCIPGRAPH_REMOTE_URL) and build its dependency tree.",
            inputSchema={
                "type": "object",
                "properties": {
                    "file_path": {
                        "type": "string",
                        "description": "Path of the file"
                    },
                    "base_url": {
                        "type": "string",
                        "description": "Override the remote service URL"
                    }
                },
                "required": ["file_path"]
            }
        ),
        Tool(
            name="get_document_symbols",
            description="List the distinct symbols referenced by a file, decoded into scheme, package and descriptors.",
            inputSchema={
                "type": "object",
                "properties": {
                    "index": {
                        "type": "string",
                        "description": "Name of a stored index"
                    },
                    "file_path": {
                        "type": "string",
                        "description": "Path of the file within the index"
                    },
                    "include_local": {
                        "type": "boolean",
                        "description": "Include document-local symbols",
                        "default": False
                    }
                },
                "required": ["index", "file_path"]
            }
        ),
        Tool(
            name="parse_symbol",
            description="Decode one SCIP symbol string into scheme, package and descriptors.",
            inputSchema={
                "type": "object",
                "properties": {
                    "symbol": {
                        "type": "string",
                        "description": "SCIP symbol, e.g. 'scip-typescript npm lodash 4.17.21 lodash/uniqBy().'"
                    }
                },
                "required": ["symbol"]
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    storage_path = os.environ.get("SCIP_INDEX_PATH")

    try:
        if name == "index_scip":
            result = index_scip(
                path=arguments["path"],
                name=arguments.get("name"),
                storage_path=storage_path
            )
        elif name == "list_indexes":
            result = list_indexes(storage_path=storage_path)
        elif name == "get_dependency_tree":
            result = get_dependency_tree(
                index=arguments["index"],
                file_path=arguments["file_path"],
                flat=arguments.get("flat", False),
                storage_path=storage_path
            )
        elif name == "fetch_dependency_tree":
            result = await fetch_dependency_tree(
                file_path=arguments["file_path"],
                base_url=arguments.get("base_url")
            )
        elif name == "get_document_symbols":
            result = get_document_symbols(
                index=arguments["index"],
                file_path=arguments["file_path"],
                include_local=arguments.get("include_local", False),
                storage_path=storage_path
            )
        elif name == "parse_symbol":
            result = parse_symbol(symbol=arguments["symbol"])
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        logger.exception("Tool %s failed", name)
        return [TextContent(type="text", text=json.dumps({"error": str(e)}, indent=2))]


def configure_logging():
    """Log to stderr; stdout carries the MCP stream."""
    level = os.environ.get("SCIPGRAPH_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def run_server():
    """Run the MCP server."""
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def main():
    """Main entry point."""
    configure_logging()
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
