"""Tests for the httpx transport and URL rewriting."""

from __future__ import annotations

import logging

import httpx
import pytest

from gtbatch.config import cors_proxy, identity_url
from gtbatch.core.errors import TransportFailure, UnexpectedShape
from gtbatch.transport import HttpTransport, build_url


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestBuildUrl:
    def test_repeated_keys_for_lists(self):
        url = build_url("https://example.test/t", {"q": ["a", "b"], "sl": "en"})
        assert url == "https://example.test/t?q=a&q=b&sl=en"

    def test_values_are_encoded(self):
        url = build_url("https://example.test/t", {"q": "a b&c"})
        assert httpx.URL(url).params["q"] == "a b&c"


class TestHttpTransport:
    @pytest.mark.asyncio
    async def test_get_returns_json(self):
        transport = HttpTransport(_client(lambda r: httpx.Response(200, json=[["x"]])))
        assert await transport.get("https://example.test/t") == [["x"]]

    @pytest.mark.asyncio
    async def test_post_sends_body_and_headers(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=["ok"])

        transport = HttpTransport(_client(handler))
        await transport.post("https://example.test/t", "&q=a", headers={"X-A": "1"})

        assert seen[0].method == "POST"
        assert seen[0].content == b"&q=a"
        assert seen[0].headers["x-a"] == "1"

    @pytest.mark.asyncio
    async def test_url_rewriter_applied(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=["ok"])

        transport = HttpTransport(
            _client(handler), url_rewriter=cors_proxy("https://proxy.test/"),
        )
        await transport.get("https://translate.googleapis.com/translate_a/t?q=a")

        assert seen[0].url.host == "proxy.test"
        assert "translate.googleapis.com" in str(seen[0].url)

    @pytest.mark.asyncio
    async def test_status_error_raises_transport_failure(self):
        transport = HttpTransport(_client(lambda r: httpx.Response(500, text="oops")))
        with pytest.raises(TransportFailure) as exc_info:
            await transport.get("https://example.test/t")
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    async def test_network_error_raises_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        transport = HttpTransport(_client(handler))
        with pytest.raises(TransportFailure):
            await transport.get("https://example.test/t")

    @pytest.mark.asyncio
    async def test_invalid_json_raises_unexpected_shape(self):
        transport = HttpTransport(_client(lambda r: httpx.Response(200, text="not json")))
        with pytest.raises(UnexpectedShape) as exc_info:
            await transport.get("https://example.test/t")
        assert exc_info.value.raw_reply == "not json"

    @pytest.mark.asyncio
    async def test_invalid_json_logs_body(self, caplog):
        transport = HttpTransport(_client(lambda r: httpx.Response(200, text="not json")))
        with caplog.at_level(logging.WARNING, logger="gtbatch.transport"):
            with pytest.raises(UnexpectedShape):
                await transport.get("https://example.test/t")
        assert [r.getMessage() for r in caplog.records] == ["Got response 'not json'"]

    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self):
        client = _client(lambda r: httpx.Response(200, json=[]))
        transport = HttpTransport(client)
        await transport.aclose()
        assert not client.is_closed

    @pytest.mark.asyncio
    async def test_owned_client_opens_lazily_and_is_closed(self):
        transport = HttpTransport()
        assert not transport.is_open
        client = transport._get_client()
        assert transport.is_open
        await transport.aclose()
        assert client.is_closed
        assert not transport.is_open

    @pytest.mark.asyncio
    async def test_close_without_requests_is_noop(self):
        transport = HttpTransport()
        await transport.aclose()
        assert transport._client is None


class TestUrlRewriters:
    def test_identity(self):
        assert identity_url("https://a.test/b?c=1") == "https://a.test/b?c=1"

    def test_cors_proxy_prefixes(self):
        rewrite = cors_proxy("https://proxy.test/")
        assert rewrite("https://a.test/b?c=1") == "https://proxy.test/https://a.test/b?c=1"
