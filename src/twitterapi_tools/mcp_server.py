#!/usr/bin/env python3
"""
TwitterAPI Tools MCP Server

Exposes the TwitterAPI.io tools via Model Context Protocol using FastMCP.

Usage:
    # Run with STDIO transport (for MCP clients such as desktop agents)
    python -m twitterapi_tools.mcp_server --stdio

    # Run with HTTP transport
    python -m twitterapi_tools.mcp_server --port 8001

Environment Variables:
    TWITTERAPI_API_KEY    - TwitterAPI.io API key (a warning is logged if unset)
    TWITTERAPI_BASE_URL   - Override the upstream base URL
    TWITTERAPI_TIMEOUT    - Upstream timeout in seconds (default: 30)
    PROXY_URL             - Outbound proxy (falls back to HTTP_PROXY / HTTPS_PROXY)
    MCP_PORT              - HTTP server port (default: 4001)
"""

import argparse
import os

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from twitterapi_tools.credentials import CredentialError, CredentialManager
from twitterapi_tools.tools import register_all_tools
from twitterapi_tools.utils.logging import get_logger

logger = get_logger(__name__)


def create_server(credentials: CredentialManager | None = None) -> FastMCP:
    """Build the FastMCP server with every tool registered."""
    credentials = credentials or CredentialManager()
    mcp = FastMCP("twitterapi")

    tools = register_all_tools(mcp, credentials=credentials)
    logger.info("Registered %d tools: %s", len(tools), tools)

    # Non-fatal: requests go out without x-api-key and upstream decides.
    try:
        credentials.validate_for_tools(tools)
    except CredentialError as e:
        logger.warning(str(e))

    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint for container orchestration."""
        return PlainTextResponse("OK")

    return mcp


def main() -> None:
    """Entry point for the MCP server."""
    parser = argparse.ArgumentParser(description="TwitterAPI Tools MCP Server")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("MCP_PORT", "4001")),
        help="HTTP server port (default: 4001)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="HTTP server host (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--stdio",
        action="store_true",
        help="Use STDIO transport instead of HTTP",
    )
    args = parser.parse_args()

    mcp = create_server()

    if args.stdio:
        # Logging goes to stderr; stdout carries only JSON-RPC.
        logger.info("TwitterAPI.io MCP server running on stdio")
        mcp.run(transport="stdio", show_banner=False)
    else:
        logger.info("Starting HTTP server on %s:%s", args.host, args.port)
        mcp.run(transport="http", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
