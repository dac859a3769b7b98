"""Shared fixtures for TwitterAPI tools tests."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest
from fastmcp import FastMCP

from twitterapi_tools.config import TwitterAPIConfig
from twitterapi_tools.credentials import CredentialManager
from twitterapi_tools.tools.twitterapi_tool import TwitterAPIClient, TwitterAPIDispatcher


class FakeUpstream:
    """Records every request and answers from a per-path route table."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def route(self, path: str, status: int = 200, json_body: Any = None, **kwargs):
        """Answer requests ending in ``path`` with a fixed response."""

        def _respond(request: httpx.Request) -> httpx.Response:
            if json_body is not None:
                return httpx.Response(status, json=json_body)
            return httpx.Response(status, **kwargs)

        self._routes[path] = _respond

    def fail(self, path: str, exc: Exception):
        """Raise ``exc`` for requests ending in ``path``."""

        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc

        self._routes[path] = _raise

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for path, respond in self._routes.items():
            if request.url.path.endswith(path):
                return respond(request)
        return httpx.Response(200, json={"status": "success"})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def config() -> TwitterAPIConfig:
    return TwitterAPIConfig(api_key="test-api-key")


@pytest.fixture
def dispatcher(upstream: FakeUpstream, config: TwitterAPIConfig) -> TwitterAPIDispatcher:
    client = TwitterAPIClient(config, transport=httpx.MockTransport(upstream.handler))
    return TwitterAPIDispatcher(client)


@pytest.fixture
def mcp() -> FastMCP:
    """Create a FastMCP instance for testing."""
    return FastMCP("test-server")


@pytest.fixture
def mock_credentials() -> CredentialManager:
    return CredentialManager.for_testing({"twitterapi": "test-api-key"})
