"""Tests for the shared HTTP client and status mapping."""

from __future__ import annotations

import httpx
import pytest

from docscout.core.errors import (
    AuthenticationFailedError,
    NetworkError,
    NotFoundError,
    RateLimitExceededError,
)
from docscout.infrastructure.http import SAFARI_USER_AGENTS, parse_retry_after

URL = "https://developer.apple.com/documentation/swift/array"


class TestParseRetryAfter:
    @pytest.mark.parametrize(
        "value, expected",
        [("30", 30.0), (" 1.5 ", 1.5), ("0", 0.0), ("-1", None), ("", None), (None, None)],
    )
    def test_numeric(self, value, expected):
        assert parse_retry_after(value) == expected

    def test_http_date_is_ignored(self):
        assert parse_retry_after("Wed, 21 Oct 2015 07:28:00 GMT") is None


@pytest.mark.asyncio
class TestDocsHttpClient:
    async def test_success_sends_safari_user_agent(self, make_http):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.headers)
            return httpx.Response(200, text="ok")

        http = make_http(handler)
        response = await http.get(URL, headers={"Accept": "text/html"})

        assert response.text == "ok"
        assert seen["user-agent"] in SAFARI_USER_AGENTS
        assert seen["accept"] == "text/html"

    async def test_404(self, make_http):
        http = make_http(lambda request: httpx.Response(404))
        with pytest.raises(NotFoundError) as exc:
            await http.get(URL)
        assert exc.value.url == URL

    async def test_429_carries_retry_after(self, make_http):
        http = make_http(lambda request: httpx.Response(429, headers={"Retry-After": "30"}))
        with pytest.raises(RateLimitExceededError) as exc:
            await http.get(URL)
        assert exc.value.retry_after == 30.0

    @pytest.mark.parametrize("status", [401, 403])
    async def test_auth_failures(self, make_http, status):
        http = make_http(lambda request: httpx.Response(status))
        with pytest.raises(AuthenticationFailedError):
            await http.get(URL)

    async def test_other_status_is_network_error(self, make_http):
        http = make_http(lambda request: httpx.Response(503))
        with pytest.raises(NetworkError) as exc:
            await http.get(URL)
        assert exc.value.status_code == 503

    async def test_transport_failure(self, make_http):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        http = make_http(handler)
        with pytest.raises(NetworkError, match="connection refused"):
            await http.get(URL)

    async def test_timeout(self, make_http):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        http = make_http(handler)
        with pytest.raises(NetworkError, match="timed out"):
            await http.get(URL)

    async def test_context_manager_closes_client(self, make_http):
        http = make_http(lambda request: httpx.Response(200))
        async with http:
            await http.get(URL)
        with pytest.raises(RuntimeError):
            await http._client.get(URL)
