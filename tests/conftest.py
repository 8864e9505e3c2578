"""Shared test fixtures for gtbatch tests."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from gtbatch.transport import HttpTransport


def make_transport(
    payload: Any = None,
    *,
    status: int = 200,
    text: str | None = None,
) -> tuple[HttpTransport, list[httpx.Request]]:
    """Build a transport answering every request with ``payload`` as JSON.

    Returns:
        Tuple of (transport, list that records every request sent).
    """
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=payload)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTransport(client), requests


def fragment(text: str, index: int) -> str:
    """A reply fragment as the batch endpoint returns it in HTML mode."""
    return f'<pre><a i="{index}">{text}</a></pre>'


@pytest.fixture
def recording_token():
    """Token provider that records every text it is asked to sign."""
    seen: list[str] = []

    async def provide(text: str) -> str:
        seen.append(text)
        return "123456.654321"

    provide.seen = seen  # type: ignore[attr-defined]
    return provide
