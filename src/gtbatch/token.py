"""Request token providers.

The token-authorized endpoints expect a ``tk`` parameter derived from the
submitted text. The derivation itself lives outside this package; a backend
only needs an async callable that turns the text into a token.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from gtbatch.core.errors import TokenFailure

TokenProvider = Callable[[str], Awaitable[str]]


def static_token(value: str) -> TokenProvider:
    """Build a provider that answers every text with the same token."""
    if not value:
        raise TokenFailure("A static token must not be empty")

    async def provide(text: str) -> str:
        return value

    return provide


async def missing_token(text: str) -> str:
    """Provider used when none is configured: always fails."""
    raise TokenFailure(
        "No token provider configured. "
        "Pass token_provider= or use the token-free backend."
    )
