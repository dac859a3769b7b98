"""
TwitterAPI.io tool package.

The FastMCP wiring lives in twitterapi_tool.py; the catalog, validation and
dispatcher can be used without an MCP server.
"""

from .client import TwitterAPIClient, UpstreamEndpoint
from .dispatcher import ResultEnvelope, Session, TwitterAPIDispatcher, build_endpoint
from .errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    InvalidParamsError,
    MethodNotFoundError,
    PreconditionFailedError,
    TwitterAPIToolError,
    UpstreamError,
)
from .registry import OperationDescriptor, ParameterSpec, get_operation, list_operations
from .twitterapi_tool import add_catalog_tool, create_dispatcher, register_tools

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "METHOD_NOT_FOUND",
    "InvalidParamsError",
    "MethodNotFoundError",
    "OperationDescriptor",
    "ParameterSpec",
    "PreconditionFailedError",
    "ResultEnvelope",
    "Session",
    "TwitterAPIClient",
    "TwitterAPIDispatcher",
    "TwitterAPIToolError",
    "UpstreamEndpoint",
    "UpstreamError",
    "add_catalog_tool",
    "build_endpoint",
    "create_dispatcher",
    "get_operation",
    "list_operations",
    "register_tools",
]
