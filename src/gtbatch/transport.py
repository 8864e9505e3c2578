"""HTTP transport for the translate endpoints, built on httpx."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from gtbatch.config import DEFAULT_TIMEOUT, UrlRewriter, identity_url
from gtbatch.core.errors import TransportFailure, UnexpectedShape

logger = logging.getLogger(__name__)


def build_url(api_path: str, params: Mapping[str, Any]) -> str:
    """Append ``params`` as a query string. List values become repeated keys."""
    return str(httpx.URL(api_path, params=params))


class HttpTransport:
    """Issues GET/POST requests and returns the parsed JSON reply.

    The URL rewriter is applied to the complete URL, query included, right
    before each request. Without an injected client, one is opened on the
    first request and closed by aclose().
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        url_rewriter: UrlRewriter = identity_url,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._owns_client = client is None
        self._client = client
        self._timeout = timeout
        self._rewrite = url_rewriter

    @property
    def is_open(self) -> bool:
        return self._client is not None and not self._client.is_closed

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))
        return self._client

    async def get(self, url: str, headers: Mapping[str, str] | None = None) -> Any:
        return await self._request("GET", url, None, headers)

    async def post(
        self, url: str, body: str, headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self._request("POST", url, body, headers)

    async def _request(
        self,
        method: str,
        url: str,
        body: str | None,
        headers: Mapping[str, str] | None,
    ) -> Any:
        target = self._rewrite(url)
        logger.debug("%s %s", method, target)
        try:
            response = await self._get_client().request(
                method, target, content=body, headers=dict(headers or {}),
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportFailure(f"{method} {url} failed: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("Got response %r", response.text)
            raise UnexpectedShape("Response body is not JSON", response.text) from exc

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
