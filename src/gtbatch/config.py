"""Backend configuration."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from gtbatch.core.languages import DEFAULT_LANGUAGES, LanguageCodeTable

# Seconds before an HTTP round trip is abandoned
DEFAULT_TIMEOUT = 30.0

# Characters per request accepted by the Google endpoints
GOOGLE_LENGTH_LIMIT = 4000

UrlRewriter = Callable[[str], str]


def identity_url(url: str) -> str:
    return url


def cors_proxy(prefix: str) -> UrlRewriter:
    """Rewrite every outbound URL to go through a CORS proxy.

    Example: cors_proxy("https://proxy.example/")("https://a/b?c=1")
    gives "https://proxy.example/https://a/b?c=1".
    """
    def rewrite(url: str) -> str:
        return prefix + url

    return rewrite


@dataclass(frozen=True)
class TranslatorOptions:
    """Per-backend settings. Immutable so one instance can be shared freely."""

    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    url_rewriter: UrlRewriter = identity_url
    timeout: float = DEFAULT_TIMEOUT
    languages: LanguageCodeTable = DEFAULT_LANGUAGES
