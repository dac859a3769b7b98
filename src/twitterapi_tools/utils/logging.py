"""
Logging setup for twitterapi_tools.

All output goes to stderr so stdout carries nothing but JSON-RPC in STDIO mode.
Every line passes through RedactingFormatter, which masks passwords, session
cookies and API keys wherever they show up in a formatted message, including
tracebacks and upstream error bodies echoed into a warning.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from typing import IO

LOGGER_NAME = "twitterapi_tools"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
REDACTED = "***"

# Matches `key=value`, `key: value`, `"key": "value"` and dict reprs. An
# unquoted value runs through `; `-separated cookie pairs.
_SECRET_RE = re.compile(
    r"""(?P<key>["']?\b(?:password|login_cookies?|cookie|x-api-key|api_key)["']?\s*[:=]\s*)"""
    r"""(?P<value>"[^"]*"|'[^']*'|[^\s,;}]+(?:;\s*[^\s,;}]+)*)""",
    re.IGNORECASE,
)


def _mask(match: re.Match[str]) -> str:
    value = match.group("value")
    quote = value[0] if value[0] in "\"'" else ""
    return f"{match.group('key')}{quote}{REDACTED}{quote}"


def redact(text: str) -> str:
    """Replace secret values in ``text`` with ``***``."""
    return _SECRET_RE.sub(_mask, text)


class RedactingFormatter(logging.Formatter):
    """Formatter that redacts secrets from the fully rendered record."""

    def format(self, record: logging.LogRecord) -> str:
        return redact(super().format(record))


class _ToolsHandler(logging.StreamHandler):
    """The single handler configure_logging installs on the package logger."""


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv("TWITTERAPI_TOOLS_LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    level: str | None = None,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """
    Install the stderr handler on the ``twitterapi_tools`` logger.

    Calling it again is a no-op that returns the existing handler. Level and
    format fall back to TWITTERAPI_TOOLS_LOG_LEVEL and TWITTERAPI_TOOLS_LOG_FORMAT.
    """
    base_logger = logging.getLogger(LOGGER_NAME)
    for existing in base_logger.handlers:
        if isinstance(existing, _ToolsHandler):
            return existing

    handler = _ToolsHandler(stream or sys.stderr)
    handler.setFormatter(
        RedactingFormatter(fmt or os.getenv("TWITTERAPI_TOOLS_LOG_FORMAT") or DEFAULT_FORMAT)
    )
    base_logger.addHandler(handler)
    base_logger.setLevel(_resolve_level(level))
    base_logger.propagate = False
    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger; pass ``__name__`` so it inherits the package handler."""
    configure_logging()
    return logging.getLogger(name or LOGGER_NAME)
