"""
TwitterAPI.io credentials.

One API key authorizes every tool; the login cookie is obtained at runtime
through the login_user tool and is not a configured credential.
"""

from .base import CredentialSpec

TWITTERAPI_CREDENTIALS = {
    "twitterapi": CredentialSpec(
        env_var="TWITTERAPI_API_KEY",
        tools=[
            "get_user_by_username",
            "get_user_by_id",
            "get_user_tweets",
            "search_tweets",
            "get_tweet_by_id",
            "get_tweet_replies",
            "get_user_followers",
            "get_user_following",
            "search_users",
            "login_user",
            "create_tweet",
        ],
        required=True,
        help_url="https://twitterapi.io/dashboard",
        description="API key for TwitterAPI.io (sent as the x-api-key header)",
    ),
}
