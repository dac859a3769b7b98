"""
Utility functions for TwitterAPI Tools.
"""

from .api_handler import extract_error_detail
from .logging import RedactingFormatter, configure_logging, get_logger, redact

__all__ = [
    "RedactingFormatter",
    "configure_logging",
    "extract_error_detail",
    "get_logger",
    "redact",
]
