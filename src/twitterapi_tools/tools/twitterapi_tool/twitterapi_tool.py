"""
TwitterAPI.io Tool - Read Twitter data and post tweets through TwitterAPI.io.

Supports:
- API key authentication (TWITTERAPI_API_KEY)
- Login sessions for write actions (login_user, then create_tweet)

Use Cases:
- Look up users by username or ID
- Read a user's tweets, followers and following
- Search tweets and users
- Read a tweet and its replies
- Post tweets and replies

API Reference: https://docs.twitterapi.io/
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool

from twitterapi_tools.config import TwitterAPIConfig
from twitterapi_tools.utils.logging import get_logger

from .client import TwitterAPIClient
from .dispatcher import TwitterAPIDispatcher
from .errors import TwitterAPIToolError
from .registry import get_operation

if TYPE_CHECKING:
    from twitterapi_tools.credentials import CredentialManager

logger = get_logger(__name__)

ToolFn = Callable[..., Awaitable[str]]


def create_dispatcher(credentials: CredentialManager | None = None) -> TwitterAPIDispatcher:
    """Build a dispatcher from credentials and environment."""
    config = TwitterAPIConfig.from_env(credentials)
    if config.proxy_url:
        logger.info("Using proxy: %s", config.proxy_url)
    return TwitterAPIDispatcher(TwitterAPIClient(config))


def add_catalog_tool(mcp: FastMCP, fn: ToolFn) -> Tool:
    """
    Register ``fn`` as the catalog operation of the same name.

    The advertised input schema is the catalog's, so clients see count bounds,
    result_type choices and the tweet length limit.

    Raises:
        ValueError: No catalog operation is named ``fn.__name__``.
    """
    descriptor = get_operation(fn.__name__)
    if descriptor is None:
        raise ValueError(f"No catalog entry for tool {fn.__name__!r}")
    tool = Tool.from_function(fn, name=descriptor.name, description=descriptor.description)
    return mcp.add_tool(
        tool.model_copy(update={"parameters": descriptor.to_tool()["inputSchema"]})
    )


def register_tools(
    mcp: FastMCP,
    credentials: CredentialManager | None = None,
    dispatcher: TwitterAPIDispatcher | None = None,
) -> TwitterAPIDispatcher:
    """
    Register the TwitterAPI.io tools with the MCP server.

    All tools share one dispatcher, so a login_user call authorizes later
    create_tweet calls made through the same server.

    Returns:
        The dispatcher backing the registered tools.
    """
    if dispatcher is None:
        dispatcher = create_dispatcher(credentials)

    async def _invoke(name: str, arguments: dict[str, Any]) -> str:
        try:
            envelope = await dispatcher.invoke(
                name, {k: v for k, v in arguments.items() if v is not None}
            )
        except TwitterAPIToolError as e:
            raise ToolError(e.tool_message) from e
        return envelope.text

    def _tool(fn: ToolFn) -> ToolFn:
        add_catalog_tool(mcp, fn)
        return fn

    # --- Users ---

    @_tool
    async def get_user_by_username(username: str) -> str:
        """
        Args:
            username: Twitter username (without @)

        Example:
            get_user_by_username(username="jack")
        """
        return await _invoke("get_user_by_username", {"username": username})

    @_tool
    async def get_user_by_id(user_id: str) -> str:
        return await _invoke("get_user_by_id", {"user_id": user_id})

    @_tool
    async def get_user_tweets(username: str, count: int | None = None) -> str:
        """
        Args:
            username: Twitter username (without @)
            count: Number of tweets (default 10, capped at 100)
        """
        return await _invoke("get_user_tweets", {"username": username, "count": count})

    @_tool
    async def get_user_followers(username: str, count: int | None = None) -> str:
        """
        Args:
            username: Twitter username (without @)
            count: Number of followers (default 20, capped at 100)
        """
        return await _invoke("get_user_followers", {"username": username, "count": count})

    @_tool
    async def get_user_following(username: str, count: int | None = None) -> str:
        """
        Args:
            username: Twitter username (without @)
            count: Number of accounts (default 20, capped at 100)
        """
        return await _invoke("get_user_following", {"username": username, "count": count})

    @_tool
    async def search_users(query: str, count: int | None = None) -> str:
        """
        Args:
            query: Search query for users
            count: Number of users (default 10, capped at 50)
        """
        return await _invoke("search_users", {"query": query, "count": count})

    # --- Tweets ---

    @_tool
    async def search_tweets(
        query: str,
        count: int | None = None,
        result_type: str | None = None,
    ) -> str:
        """
        Args:
            query: Search query (supports advanced search operators)
            count: Number of tweets (default 10, capped at 100)
            result_type: One of "recent", "popular", "mixed" (default "recent")

        Example:
            search_tweets(query="from:jack python", result_type="popular")
        """
        return await _invoke(
            "search_tweets",
            {"query": query, "count": count, "result_type": result_type},
        )

    @_tool
    async def get_tweet_by_id(tweet_id: str) -> str:
        return await _invoke("get_tweet_by_id", {"tweet_id": tweet_id})

    @_tool
    async def get_tweet_replies(tweet_id: str, count: int | None = None) -> str:
        """
        Args:
            tweet_id: Twitter tweet ID
            count: Number of replies (default 10, capped at 100)
        """
        return await _invoke("get_tweet_replies", {"tweet_id": tweet_id, "count": count})

    # --- Session ---

    @_tool
    async def login_user(username: str, password: str) -> str:
        """
        Log in so that create_tweet can be used. A failed login returns
        {"success": false, "error": ...} instead of raising.

        Args:
            username: Twitter username or email
            password: Twitter password
        """
        return await _invoke("login_user", {"username": username, "password": password})

    @_tool
    async def create_tweet(text: str, reply_to: str | None = None) -> str:
        """
        Args:
            text: Tweet text (max 280 characters)
            reply_to: Optional tweet ID to reply to

        Example:
            create_tweet(text="Hello from my agent!")
            create_tweet(text="Great point!", reply_to="1234567890")
        """
        return await _invoke("create_tweet", {"text": text, "reply_to": reply_to})

    return dispatcher
