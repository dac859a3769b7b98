"""
TwitterAPI Tools - TwitterAPI.io operations exposed as MCP tools.

Usage:
    from fastmcp import FastMCP
    from twitterapi_tools import register_all_tools

    mcp = FastMCP("twitterapi")
    register_all_tools(mcp)
"""

__version__ = "1.0.0"

from .tools import register_all_tools  # noqa: E402

__all__ = ["__version__", "register_all_tools"]
