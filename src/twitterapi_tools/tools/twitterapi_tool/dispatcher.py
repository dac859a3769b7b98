"""
Dispatcher for the TwitterAPI.io tools.

Validates a tool call against the catalog, builds the upstream request, and
wraps the result in a ResultEnvelope. Each dispatcher owns one Session; the
login cookie it stores is attached to every later request.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping

from twitterapi_tools.utils.logging import get_logger

from .client import TwitterAPIClient, UpstreamEndpoint
from .errors import (
    InvalidParamsError,
    MethodNotFoundError,
    PreconditionFailedError,
    UpstreamError,
)
from .registry import OperationDescriptor, get_operation, list_operations
from .validation import normalize_arguments

logger = get_logger(__name__)

# Login responses have used each of these keys for the session cookie.
COOKIE_FIELDS = ("cookie", "login_cookie", "login_cookies")


@dataclass
class Session:
    """Login state: the API key never changes, the cookie is set by login_user."""

    api_key: str = ""
    cookie: str | None = None

    @property
    def authenticated(self) -> bool:
        return bool(self.cookie)


@dataclass(frozen=True)
class ResultEnvelope:
    """A successful tool result: one text block holding a JSON document."""

    content: list[dict[str, str]] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> ResultEnvelope:
        text = json.dumps(payload, indent=2, ensure_ascii=False)
        return cls(content=[{"type": "text", "text": text}])

    @property
    def text(self) -> str:
        return self.content[0]["text"] if self.content else ""

    def to_dict(self) -> dict[str, Any]:
        return {"content": [dict(block) for block in self.content]}


Handler = Callable[[OperationDescriptor, dict[str, Any]], Awaitable[ResultEnvelope]]


def build_endpoint(descriptor: OperationDescriptor, values: Mapping[str, Any]) -> UpstreamEndpoint:
    """Map normalized argument values onto the descriptor's upstream request."""
    fields = {
        spec.forwarded_as: values[spec.name]
        for spec in descriptor.parameters
        if spec.name in values
    }
    if descriptor.method == "GET":
        return UpstreamEndpoint(descriptor.method, descriptor.path, params=fields)
    return UpstreamEndpoint(descriptor.method, descriptor.path, body=fields)


def _extract_cookie(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    for key in COOKIE_FIELDS:
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return None


class TwitterAPIDispatcher:
    """
    Routes tool calls to TwitterAPI.io.

    Usage:
        dispatcher = TwitterAPIDispatcher(TwitterAPIClient(config))
        envelope = await dispatcher.invoke("search_tweets", {"query": "python"})
    """

    def __init__(self, client: TwitterAPIClient, session: Session | None = None):
        self._client = client
        self.session = session or Session(api_key=client.config.api_key)
        self._handlers: dict[str, Handler] = {
            op.name: self._forward for op in list_operations()
        }
        self._handlers["login_user"] = self._login

    def list_operations(self) -> tuple[OperationDescriptor, ...]:
        return list_operations()

    async def invoke(self, name: str, arguments: Mapping[str, Any] | None) -> ResultEnvelope:
        """
        Run one tool call.

        Raises:
            InvalidParamsError: ``arguments`` is None or fails validation.
            MethodNotFoundError: ``name`` is not in the catalog.
            PreconditionFailedError: A write operation was called before login.
            UpstreamError: TwitterAPI.io rejected the request or was unreachable.
        """
        if arguments is None:
            raise InvalidParamsError("Missing arguments")

        descriptor = get_operation(name)
        handler = self._handlers.get(name)
        if descriptor is None or handler is None:
            raise MethodNotFoundError(f"Unknown tool: {name}")

        values = normalize_arguments(descriptor, arguments)
        if descriptor.requires_session and not self.session.authenticated:
            raise PreconditionFailedError(
                f"Must login first: {name} requires an authenticated session"
            )
        logger.debug("Invoking %s (%s %s)", name, descriptor.method, descriptor.path)
        return await handler(descriptor, values)

    async def _send(self, descriptor: OperationDescriptor, values: dict[str, Any]) -> Any:
        endpoint = build_endpoint(descriptor, values)
        try:
            return await self._client.send(
                endpoint, api_key=self.session.api_key, cookie=self.session.cookie
            )
        except UpstreamError as e:
            logger.warning("%s failed: %s", descriptor.name, e)
            raise

    async def _forward(
        self, descriptor: OperationDescriptor, values: dict[str, Any]
    ) -> ResultEnvelope:
        data = await self._send(descriptor, values)
        return ResultEnvelope.from_payload(data)

    async def _login(
        self, descriptor: OperationDescriptor, values: dict[str, Any]
    ) -> ResultEnvelope:
        try:
            data = await self._send(descriptor, values)
        except UpstreamError as e:
            return ResultEnvelope.from_payload({"success": False, "error": str(e)})

        cookie = _extract_cookie(data)
        if cookie:
            if self.session.authenticated:
                logger.info("Login session replaced")
            else:
                logger.info("Login session established")
            self.session.cookie = cookie
        else:
            logger.warning("Login response carried no cookie; session unchanged")

        user = data.get("user") if isinstance(data, dict) else None
        return ResultEnvelope.from_payload(
            {
                "success": True,
                "message": "Login successful",
                "user": user or {},
            }
        )

