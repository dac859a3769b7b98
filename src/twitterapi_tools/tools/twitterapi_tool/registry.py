"""
Operation catalog for the TwitterAPI.io tools.

The catalog is plain data: one OperationDescriptor per tool, each naming the
upstream method and path and listing its parameters in declaration order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

STRING = "string"
NUMBER = "number"
ENUM = "enum"


@dataclass(frozen=True)
class ParameterSpec:
    """One argument of an operation."""

    name: str
    kind: str
    description: str
    required: bool = False
    default: Any = None
    minimum: int | None = None
    maximum: int | None = None
    choices: tuple[str, ...] = ()
    max_length: int | None = None
    upstream_name: str | None = None
    """Field name sent to TwitterAPI.io when it differs from ``name``."""

    @property
    def forwarded_as(self) -> str:
        return self.upstream_name or self.name

    def to_schema(self) -> dict[str, Any]:
        """Render this parameter as a JSON Schema property."""
        schema: dict[str, Any] = {
            "type": "number" if self.kind == NUMBER else "string",
            "description": self.description,
        }
        if self.choices:
            schema["enum"] = list(self.choices)
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        if self.max_length is not None:
            schema["maxLength"] = self.max_length
        return schema


@dataclass(frozen=True)
class OperationDescriptor:
    """A named tool and the upstream endpoint it proxies."""

    name: str
    description: str
    method: str
    path: str
    parameters: tuple[ParameterSpec, ...]
    requires_session: bool = False

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.parameters if p.required)

    def get_parameter(self, name: str) -> ParameterSpec | None:
        return next((p for p in self.parameters if p.name == name), None)

    def to_tool(self) -> dict[str, Any]:
        """Render as an MCP tool definition (name, description, inputSchema)."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": {
                "type": "object",
                "properties": {p.name: p.to_schema() for p in self.parameters},
                "required": list(self.required),
            },
        }


def _username(description: str = "Twitter username (without @)") -> ParameterSpec:
    return ParameterSpec(
        "username", STRING, description, required=True, upstream_name="userName"
    )


def _count(noun: str, default: int, maximum: int) -> ParameterSpec:
    return ParameterSpec(
        "count",
        NUMBER,
        f"Number of {noun} to retrieve (default: {default}, max: {maximum})",
        default=default,
        minimum=1,
        maximum=maximum,
    )


OPERATIONS: tuple[OperationDescriptor, ...] = (
    OperationDescriptor(
        name="get_user_by_username",
        description="Get Twitter user information by username",
        method="GET",
        path="/user/info",
        parameters=(_username(),),
    ),
    OperationDescriptor(
        name="get_user_by_id",
        description="Get Twitter user information by user ID",
        method="GET",
        path="/user/info",
        parameters=(ParameterSpec("user_id", STRING, "Twitter user ID", required=True),),
    ),
    OperationDescriptor(
        name="get_user_tweets",
        description="Get tweets from a specific user",
        method="GET",
        path="/user/last_tweets",
        parameters=(_username(), _count("tweets", 10, 100)),
    ),
    OperationDescriptor(
        name="search_tweets",
        description="Search for tweets using keywords",
        method="GET",
        path="/tweet/advanced_search",
        parameters=(
            ParameterSpec("query", STRING, "Search query for tweets", required=True),
            _count("tweets", 10, 100),
            ParameterSpec(
                "result_type",
                ENUM,
                "Type of search results",
                default="recent",
                choices=("recent", "popular", "mixed"),
            ),
        ),
    ),
    OperationDescriptor(
        name="get_tweet_by_id",
        description="Get a specific tweet by its ID",
        method="GET",
        path="/tweets",
        parameters=(ParameterSpec("tweet_id", STRING, "Twitter tweet ID", required=True),),
    ),
    OperationDescriptor(
        name="get_tweet_replies",
        description="Get replies to a specific tweet",
        method="GET",
        path="/tweet/replies",
        parameters=(
            ParameterSpec(
                "tweet_id", STRING, "Twitter tweet ID", required=True, upstream_name="id"
            ),
            _count("replies", 10, 100),
        ),
    ),
    OperationDescriptor(
        name="get_user_followers",
        description="Get followers of a specific user",
        method="GET",
        path="/user/followers",
        parameters=(_username(), _count("followers", 20, 100)),
    ),
    OperationDescriptor(
        name="get_user_following",
        description="Get users that a specific user is following",
        method="GET",
        path="/user/followings",
        parameters=(_username(), _count("following", 20, 100)),
    ),
    OperationDescriptor(
        name="search_users",
        description="Search for Twitter users",
        method="GET",
        path="/user/search",
        parameters=(
            ParameterSpec("query", STRING, "Search query for users", required=True),
            _count("users", 10, 50),
        ),
    ),
    OperationDescriptor(
        name="login_user",
        description="Login to Twitter account for write actions (requires username and password)",
        method="POST",
        path="/user_login_v2",
        parameters=(
            _username("Twitter username or email"),
            ParameterSpec("password", STRING, "Twitter password", required=True),
        ),
    ),
    OperationDescriptor(
        name="create_tweet",
        description="Create a new tweet (requires login)",
        method="POST",
        path="/create_tweet_v2",
        parameters=(
            ParameterSpec(
                "text",
                STRING,
                "Tweet text (max 280 characters)",
                required=True,
                max_length=280,
            ),
            ParameterSpec("reply_to", STRING, "Tweet ID to reply to (optional)"),
        ),
        requires_session=True,
    ),
)

_BY_NAME: dict[str, OperationDescriptor] = {op.name: op for op in OPERATIONS}


def list_operations() -> tuple[OperationDescriptor, ...]:
    """Return the full catalog in its fixed order."""
    return OPERATIONS


def get_operation(name: str) -> OperationDescriptor | None:
    """Look up a descriptor by tool name."""
    return _BY_NAME.get(name)
