"""
Async HTTP client for TwitterAPI.io.

Sends one request per call and turns every failure into UpstreamError. It never
retries and keeps no state between calls; the login cookie is passed in by
the dispatcher that owns it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from twitterapi_tools import __version__
from twitterapi_tools.config import TwitterAPIConfig
from twitterapi_tools.utils.api_handler import extract_error_detail
from twitterapi_tools.utils.logging import get_logger

from .errors import UpstreamError

logger = get_logger(__name__)

USER_AGENT = f"twitterapi-tools/{__version__}"


@dataclass(frozen=True)
class UpstreamEndpoint:
    """A resolved upstream request: query params for GET, JSON body for POST."""

    method: str
    path: str
    params: dict[str, Any] | None = None
    body: dict[str, Any] | None = None


class TwitterAPIClient:
    """Thin wrapper around httpx.AsyncClient configured for TwitterAPI.io."""

    def __init__(
        self,
        config: TwitterAPIConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or TwitterAPIConfig()
        self._transport = transport

    def _headers(self, api_key: str, cookie: str | None) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        if api_key:
            headers["x-api-key"] = api_key
        if cookie:
            headers["Cookie"] = cookie
        return headers

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "base_url": self.config.base_url,
            "timeout": self.config.timeout,
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport
        elif self.config.proxy_url:
            kwargs["proxy"] = self.config.proxy_url
        return kwargs

    async def send(
        self,
        endpoint: UpstreamEndpoint,
        *,
        api_key: str = "",
        cookie: str | None = None,
    ) -> Any:
        """
        Issue the request and return the decoded JSON body.

        Args:
            endpoint: Method, path and arguments of the call.
            api_key: Sent as x-api-key when non-empty.
            cookie: Session cookie to attach, if one is held.

        Raises:
            UpstreamError: Non-2xx status, timeout, network failure or a body
                that is not JSON.
        """
        async with httpx.AsyncClient(**self._client_kwargs()) as client:
            try:
                response = await client.request(
                    endpoint.method,
                    endpoint.path,
                    params=endpoint.params,
                    json=endpoint.body,
                    headers=self._headers(api_key, cookie),
                )
            except httpx.TimeoutException:
                raise UpstreamError(
                    None, f"Request timed out after {self.config.timeout:g}s"
                ) from None
            except httpx.HTTPError as e:
                raise UpstreamError(None, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise UpstreamError(response.status_code, extract_error_detail(response))

        try:
            return response.json()
        except ValueError:
            raise UpstreamError(
                response.status_code, "Invalid JSON in upstream response"
            ) from None
