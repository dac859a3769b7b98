"""
Failure types raised by the TwitterAPI.io dispatcher.

Each carries the JSON-RPC error code a protocol layer should report. Failed
logins are not represented here: they come back as a normal result payload.
"""

from __future__ import annotations

METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class TwitterAPIToolError(Exception):
    """Base exception for TwitterAPI tool failures."""

    code = INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def tool_message(self) -> str:
        """Text reported to MCP clients. Internal failures carry a service prefix."""
        if self.code == INTERNAL_ERROR:
            return f"TwitterAPI.io error: {self.message}"
        return self.message


class MethodNotFoundError(TwitterAPIToolError):
    """Raised when the requested operation is not in the catalog."""

    code = METHOD_NOT_FOUND


class InvalidParamsError(TwitterAPIToolError):
    """Raised when arguments are missing or do not match the operation schema."""

    code = INVALID_PARAMS


class PreconditionFailedError(TwitterAPIToolError):
    """Raised when a write operation is attempted without a login session."""


class UpstreamError(TwitterAPIToolError):
    """
    Raised when TwitterAPI.io answers with a non-2xx status or cannot be reached.

    Attributes:
        status_code: HTTP status of the upstream response, None for transport failures.
        detail: Message taken from the upstream error body or the transport error.
    """

    def __init__(self, status_code: int | None, detail: str):
        self.status_code = status_code
        self.detail = detail
        if status_code is None:
            message = f"TwitterAPI.io API error: {detail}"
        else:
            message = f"TwitterAPI.io API error ({status_code}): {detail}"
        super().__init__(message)
