"""Runtime configuration for the TwitterAPI.io client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from twitterapi_tools.credentials import CredentialManager

TWITTERAPI_BASE_URL = "https://api.twitterapi.io/twitter"
DEFAULT_TIMEOUT = 30.0

# Checked in order; the first non-empty value wins.
PROXY_ENV_VARS = ("PROXY_URL", "HTTP_PROXY", "HTTPS_PROXY")


@dataclass(frozen=True)
class TwitterAPIConfig:
    """Settings fixed at process start and shared by every upstream call."""

    api_key: str = ""
    base_url: str = TWITTERAPI_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    proxy_url: str | None = None

    @classmethod
    def from_env(cls, credentials: CredentialManager | None = None) -> TwitterAPIConfig:
        """
        Resolve configuration from the credential manager and environment.

        Without a credential manager the API key is read from TWITTERAPI_API_KEY
        directly. A missing key yields an empty string, never an error.
        """
        if credentials is not None:
            api_key = credentials.get("twitterapi") or ""
        else:
            api_key = os.getenv("TWITTERAPI_API_KEY", "")

        timeout_raw = os.getenv("TWITTERAPI_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
        except ValueError:
            timeout = DEFAULT_TIMEOUT

        proxy_url = next((os.environ[v] for v in PROXY_ENV_VARS if os.getenv(v)), None)

        return cls(
            api_key=api_key,
            base_url=os.getenv("TWITTERAPI_BASE_URL") or TWITTERAPI_BASE_URL,
            timeout=timeout,
            proxy_url=proxy_url,
        )
