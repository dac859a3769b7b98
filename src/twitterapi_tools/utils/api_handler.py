from typing import Any

import httpx


def extract_error_detail(response: httpx.Response) -> str:
    """
    Pull a human-readable message out of an upstream error response.

    TwitterAPI.io reports failures as ``{"error": ...}`` or ``{"status": "error",
    "msg": ...}``; other gateways in front of it answer with plain text.

    Args:
        response: The HTTP response object with a non-2xx status.

    Returns:
        The most specific message available, never empty.
    """
    try:
        data: Any = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        for key in ("error", "message", "msg", "detail"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value
            if isinstance(value, dict) and value:
                return str(value)

    text = response.text.strip()
    if text:
        return text
    return response.reason_phrase or f"HTTP {response.status_code}"
