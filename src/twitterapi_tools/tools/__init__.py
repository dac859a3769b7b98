"""
TwitterAPI Tools - Tool implementations for FastMCP.

Usage:
    from fastmcp import FastMCP
    from twitterapi_tools.tools import register_all_tools
    from twitterapi_tools.credentials import CredentialManager

    mcp = FastMCP("my-server")
    credentials = CredentialManager()
    register_all_tools(mcp, credentials=credentials)
"""
from typing import List, Optional, TYPE_CHECKING

from fastmcp import FastMCP

if TYPE_CHECKING:
    from twitterapi_tools.credentials import CredentialManager

from .twitterapi_tool import list_operations
from .twitterapi_tool import register_tools as register_twitterapi


def register_all_tools(
    mcp: FastMCP,
    credentials: Optional["CredentialManager"] = None,
) -> List[str]:
    """
    Register all tools with a FastMCP server.

    Args:
        mcp: FastMCP server instance
        credentials: Optional CredentialManager for centralized credential access.
                     If not provided, tools fall back to direct os.getenv() calls.

    Returns:
        List of registered tool names
    """
    register_twitterapi(mcp, credentials=credentials)

    return [op.name for op in list_operations()]
