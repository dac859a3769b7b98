"""Tests for the TwitterAPI.io dispatcher and session handling."""

import json

import httpx
import pytest

from twitterapi_tools.config import TwitterAPIConfig
from twitterapi_tools.tools.twitterapi_tool import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    InvalidParamsError,
    MethodNotFoundError,
    PreconditionFailedError,
    ResultEnvelope,
    TwitterAPIClient,
    TwitterAPIDispatcher,
    UpstreamError,
    build_endpoint,
    get_operation,
)


async def _login(dispatcher, upstream, cookie="auth_token=abc; ct0=xyz"):
    upstream.route("/user_login_v2", json_body={"cookie": cookie, "user": {"id": "1"}})
    return await dispatcher.invoke("login_user", {"username": "jack", "password": "pw"})


@pytest.mark.asyncio
class TestValidation:
    async def test_missing_arguments(self, dispatcher, upstream):
        with pytest.raises(InvalidParamsError) as exc_info:
            await dispatcher.invoke("search_tweets", None)

        assert exc_info.value.code == INVALID_PARAMS
        assert upstream.requests == []

    async def test_unknown_tool(self, dispatcher, upstream):
        with pytest.raises(MethodNotFoundError) as exc_info:
            await dispatcher.invoke("delete_tweet", {"tweet_id": "1"})

        assert exc_info.value.code == METHOD_NOT_FOUND
        assert "delete_tweet" in str(exc_info.value)
        assert upstream.requests == []

    async def test_missing_required_field(self, dispatcher, upstream):
        with pytest.raises(InvalidParamsError, match="query"):
            await dispatcher.invoke("search_tweets", {"count": 5})

        assert upstream.requests == []


@pytest.mark.asyncio
class TestReadOperations:
    @pytest.mark.parametrize(
        "name, arguments, path, expected_params",
        [
            ("get_user_by_username", {"username": "jack"}, "/twitter/user/info", {"userName": "jack"}),
            ("get_user_by_id", {"user_id": "12"}, "/twitter/user/info", {"user_id": "12"}),
            (
                "get_user_tweets",
                {"username": "jack"},
                "/twitter/user/last_tweets",
                {"userName": "jack", "count": "10"},
            ),
            (
                "search_tweets",
                {"query": "python", "result_type": "popular"},
                "/twitter/tweet/advanced_search",
                {"query": "python", "count": "10", "result_type": "popular"},
            ),
            ("get_tweet_by_id", {"tweet_id": "99"}, "/twitter/tweets", {"tweet_id": "99"}),
            (
                "get_tweet_replies",
                {"tweet_id": "99", "count": 3},
                "/twitter/tweet/replies",
                {"id": "99", "count": "3"},
            ),
            (
                "get_user_following",
                {"username": "jack"},
                "/twitter/user/followings",
                {"userName": "jack", "count": "20"},
            ),
            (
                "search_users",
                {"query": "python"},
                "/twitter/user/search",
                {"query": "python", "count": "10"},
            ),
        ],
    )
    async def test_request_construction(
        self, dispatcher, upstream, name, arguments, path, expected_params
    ):
        await dispatcher.invoke(name, arguments)

        request = upstream.last
        assert request.method == "GET"
        assert request.url.host == "api.twitterapi.io"
        assert request.url.path == path
        assert dict(request.url.params) == expected_params

    async def test_followers_count_capped(self, dispatcher, upstream):
        await dispatcher.invoke("get_user_followers", {"username": "jack", "count": 500})

        assert upstream.last.url.params["count"] == "100"

    async def test_followers_default_count(self, dispatcher, upstream):
        await dispatcher.invoke("get_user_followers", {"username": "jack"})

        assert upstream.last.url.params["count"] == "20"

    async def test_search_users_capped_at_fifty(self, dispatcher, upstream):
        await dispatcher.invoke("search_users", {"query": "python", "count": 75})

        assert upstream.last.url.params["count"] == "50"

    async def test_response_passthrough(self, dispatcher, upstream):
        body = {
            "tweets": [{"id": "1", "text": "héllo", "author": {"userName": "jack"}}],
            "has_next_page": False,
            "next_cursor": "",
            "status": "success",
        }
        upstream.route("/tweet/advanced_search", json_body=body)

        envelope = await dispatcher.invoke("search_tweets", {"query": "hello"})

        assert isinstance(envelope, ResultEnvelope)
        assert len(envelope.content) == 1
        assert envelope.content[0]["type"] == "text"
        assert json.loads(envelope.text) == body
        assert list(json.loads(envelope.text)) == list(body)
        assert envelope.text == json.dumps(body, indent=2, ensure_ascii=False)

    async def test_headers(self, dispatcher, upstream):
        await dispatcher.invoke("get_user_by_id", {"user_id": "12"})

        headers = upstream.last.headers
        assert headers["x-api-key"] == "test-api-key"
        assert headers["content-type"] == "application/json"
        assert headers["user-agent"].startswith("twitterapi-tools/")
        assert "cookie" not in headers

    async def test_no_api_key_header_when_unset(self, upstream):
        client = TwitterAPIClient(
            TwitterAPIConfig(api_key=""), transport=httpx.MockTransport(upstream.handler)
        )
        dispatcher = TwitterAPIDispatcher(client)

        await dispatcher.invoke("get_user_by_id", {"user_id": "12"})

        assert "x-api-key" not in upstream.last.headers


@pytest.mark.asyncio
class TestUpstreamErrors:
    async def test_error_status_and_message(self, dispatcher, upstream):
        upstream.route("/user/info", status=404, json_body={"error": "User not found"})

        with pytest.raises(UpstreamError) as exc_info:
            await dispatcher.invoke("get_user_by_username", {"username": "ghost"})

        err = exc_info.value
        assert err.code == INTERNAL_ERROR
        assert err.status_code == 404
        assert err.detail == "User not found"
        assert str(err) == "TwitterAPI.io API error (404): User not found"

    async def test_error_plain_text_body(self, dispatcher, upstream):
        upstream.route("/user/info", status=502, text="Bad Gateway from edge")

        with pytest.raises(UpstreamError, match=r"\(502\): Bad Gateway from edge"):
            await dispatcher.invoke("get_user_by_username", {"username": "jack"})

    async def test_network_failure(self, dispatcher, upstream):
        upstream.fail("/user/info", httpx.ConnectError("connection refused"))

        with pytest.raises(UpstreamError) as exc_info:
            await dispatcher.invoke("get_user_by_username", {"username": "jack"})

        assert exc_info.value.status_code is None
        assert "connection refused" in str(exc_info.value)

    async def test_timeout(self, dispatcher, upstream):
        upstream.fail("/user/info", httpx.ReadTimeout("read timed out"))

        with pytest.raises(UpstreamError, match="timed out after 30s"):
            await dispatcher.invoke("get_user_by_username", {"username": "jack"})

    async def test_invalid_json(self, dispatcher, upstream):
        upstream.route("/user/info", status=200, text="<html>oops</html>")

        with pytest.raises(UpstreamError, match="Invalid JSON"):
            await dispatcher.invoke("get_user_by_username", {"username": "jack"})

    async def test_dispatcher_keeps_serving_after_error(self, dispatcher, upstream):
        upstream.route("/user/info", status=500, json_body={"error": "boom"})
        with pytest.raises(UpstreamError):
            await dispatcher.invoke("get_user_by_username", {"username": "jack"})

        upstream.route("/user/info", json_body={"data": {"id": "1"}})
        envelope = await dispatcher.invoke("get_user_by_username", {"username": "jack"})
        assert json.loads(envelope.text) == {"data": {"id": "1"}}


@pytest.mark.asyncio
class TestSession:
    async def test_create_tweet_requires_login(self, dispatcher, upstream):
        with pytest.raises(PreconditionFailedError, match="login"):
            await dispatcher.invoke("create_tweet", {"text": "hello"})

        assert upstream.requests == []
        assert not dispatcher.session.authenticated

    async def test_login_success_stores_cookie(self, dispatcher, upstream):
        envelope = await _login(dispatcher, upstream)

        payload = json.loads(envelope.text)
        assert payload == {"success": True, "message": "Login successful", "user": {"id": "1"}}
        assert dispatcher.session.cookie == "auth_token=abc; ct0=xyz"

        request = upstream.last
        assert request.method == "POST"
        assert request.url.path == "/twitter/user_login_v2"
        assert upstream.last_json() == {"userName": "jack", "password": "pw"}

    async def test_login_then_create_tweet_sends_cookie(self, dispatcher, upstream):
        await _login(dispatcher, upstream)
        upstream.route("/create_tweet_v2", json_body={"status": "success", "tweet_id": "7"})

        envelope = await dispatcher.invoke("create_tweet", {"text": "hello"})

        request = upstream.last
        assert request.url.path == "/twitter/create_tweet_v2"
        assert request.headers["cookie"] == "auth_token=abc; ct0=xyz"
        assert upstream.last_json() == {"text": "hello"}
        assert json.loads(envelope.text) == {"status": "success", "tweet_id": "7"}

    async def test_create_tweet_reply_to(self, dispatcher, upstream):
        await _login(dispatcher, upstream)

        await dispatcher.invoke("create_tweet", {"text": "agreed", "reply_to": "123"})

        assert upstream.last_json() == {"text": "agreed", "reply_to": "123"}

    async def test_cookie_sent_on_reads_after_login(self, dispatcher, upstream):
        await _login(dispatcher, upstream)

        await dispatcher.invoke("get_tweet_by_id", {"tweet_id": "1"})

        assert upstream.last.headers["cookie"] == "auth_token=abc; ct0=xyz"

    async def test_relogin_overwrites_cookie(self, dispatcher, upstream):
        await _login(dispatcher, upstream, cookie="first")
        await _login(dispatcher, upstream, cookie="second")

        assert dispatcher.session.cookie == "second"

    async def test_login_cookie_under_alternate_key(self, dispatcher, upstream):
        upstream.route("/user_login_v2", json_body={"status": "success", "login_cookie": "lc"})

        await dispatcher.invoke("login_user", {"username": "jack", "password": "pw"})

        assert dispatcher.session.cookie == "lc"

    async def test_login_failure_returns_payload(self, dispatcher, upstream):
        upstream.route("/user_login_v2", status=401, json_body={"error": "Invalid credentials"})

        envelope = await dispatcher.invoke("login_user", {"username": "jack", "password": "bad"})

        payload = json.loads(envelope.text)
        assert payload["success"] is False
        assert payload["error"] == "TwitterAPI.io API error (401): Invalid credentials"
        assert dispatcher.session.cookie is None

    async def test_login_network_failure_returns_payload(self, dispatcher, upstream):
        upstream.fail("/user_login_v2", httpx.ConnectError("no route to host"))

        envelope = await dispatcher.invoke("login_user", {"username": "jack", "password": "pw"})

        payload = json.loads(envelope.text)
        assert payload["success"] is False
        assert "no route to host" in payload["error"]

    async def test_failed_relogin_keeps_previous_cookie(self, dispatcher, upstream):
        await _login(dispatcher, upstream, cookie="first")
        upstream.route("/user_login_v2", status=401, json_body={"error": "nope"})

        await dispatcher.invoke("login_user", {"username": "jack", "password": "bad"})

        assert dispatcher.session.cookie == "first"

    async def test_login_without_cookie_leaves_session_unauthenticated(self, dispatcher, upstream):
        upstream.route("/user_login_v2", json_body={"status": "success"})

        envelope = await dispatcher.invoke("login_user", {"username": "jack", "password": "pw"})

        assert json.loads(envelope.text)["success"] is True
        assert json.loads(envelope.text)["user"] == {}
        with pytest.raises(PreconditionFailedError):
            await dispatcher.invoke("create_tweet", {"text": "hello"})

    async def test_login_missing_password_is_invalid_params(self, dispatcher, upstream):
        with pytest.raises(InvalidParamsError):
            await dispatcher.invoke("login_user", {"username": "jack"})

        assert upstream.requests == []

    async def test_stale_cookie_surfaces_as_upstream_error(self, dispatcher, upstream):
        await _login(dispatcher, upstream)
        upstream.route("/create_tweet_v2", status=403, json_body={"error": "cookie expired"})

        with pytest.raises(UpstreamError, match="cookie expired"):
            await dispatcher.invoke("create_tweet", {"text": "hello"})

        assert dispatcher.session.authenticated

    async def test_sessions_are_per_dispatcher(self, upstream, config):
        transport = httpx.MockTransport(upstream.handler)
        first = TwitterAPIDispatcher(TwitterAPIClient(config, transport=transport))
        second = TwitterAPIDispatcher(TwitterAPIClient(config, transport=transport))

        await _login(first, upstream)

        assert first.session.authenticated
        assert not second.session.authenticated


def test_build_endpoint_uses_body_for_post():
    endpoint = build_endpoint(get_operation("login_user"), {"username": "a", "password": "b"})

    assert endpoint.method == "POST"
    assert endpoint.path == "/user_login_v2"
    assert endpoint.params is None
    assert endpoint.body == {"userName": "a", "password": "b"}


def test_result_envelope_to_dict():
    envelope = ResultEnvelope.from_payload({"b": 1, "a": 2})

    assert envelope.to_dict() == {
        "content": [{"type": "text", "text": '{\n  "b": 1,\n  "a": 2\n}'}]
    }
