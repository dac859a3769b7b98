"""
Centralized credential management for TwitterAPI Tools.

Usage:
    from twitterapi_tools.credentials import CredentialManager

    credentials = CredentialManager()
    api_key = credentials.get("twitterapi")

    # In tests
    credentials = CredentialManager.for_testing({"twitterapi": "test-key"})

Credential specs live in category files (twitterapi.py) and are merged into
CREDENTIAL_SPECS here.
"""

from .base import CredentialError, CredentialManager, CredentialSpec
from .twitterapi import TWITTERAPI_CREDENTIALS

CREDENTIAL_SPECS = {
    **TWITTERAPI_CREDENTIALS,
}

__all__ = [
    "CREDENTIAL_SPECS",
    "CredentialError",
    "CredentialManager",
    "CredentialSpec",
    "TWITTERAPI_CREDENTIALS",
]
