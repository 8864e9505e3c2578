"""Google Translate web endpoint backends.

Two variants of the undocumented ``translate_a`` API are supported:

- GoogleBackend calls the token-authorized endpoints. Batch segments are
  wrapped in markup so the translated fragments can be told apart from the
  metadata strings mixed into the reply.
- GoogleTokenFreeBackend calls the ``dict-chrome-ex`` client endpoint, which
  needs no token but echoes originals next to translations for some batches.

Neither endpoint returns a typed reply: both send arbitrarily nested JSON
arrays, so results are recovered from the flattened leaves and checked
against the number of inputs before being returned.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from gtbatch.backends.base import TranslationBackend, resolve_source
from gtbatch.config import GOOGLE_LENGTH_LIMIT, TranslatorOptions
from gtbatch.core.errors import UnexpectedShape
from gtbatch.core.markup import encode_for_batch, unwrap
from gtbatch.core.reconcile import ParityPolicy, interleaved_pairs, reconcile
from gtbatch.core.tree import Leaf, RawReply, string_leaves, visit_leaves
from gtbatch.token import TokenProvider, missing_token
from gtbatch.transport import HttpTransport, build_url

logger = logging.getLogger(__name__)

SINGLE_API_PATH = "https://translate.google.com/translate_a/single"
BATCH_API_PATH = "https://translate.googleapis.com/translate_a/t"

# Data types requested from the single-text endpoint
_SINGLE_DATA_TYPES = ["at", "bd", "ex", "ld", "md", "qca", "rw", "rm", "ss", "t"]

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _require_nonempty_list(raw: Any) -> list[RawReply]:
    if not isinstance(raw, list) or not raw:
        logger.warning("Got response %r", raw)
        raise UnexpectedShape("Unexpected response", raw)
    return raw


class AbstractGoogleBackend(TranslationBackend):
    """Shared configuration of the Google backends."""

    def __init__(
        self,
        options: TranslatorOptions | None = None,
        *,
        transport: HttpTransport | None = None,
    ) -> None:
        self._options = options or TranslatorOptions()
        self._transport = transport or HttpTransport(
            url_rewriter=self._options.url_rewriter,
            timeout=self._options.timeout,
        )

    def get_length_limit(self) -> int:
        return GOOGLE_LENGTH_LIMIT

    def supported_languages(self) -> list[str]:
        return self._options.languages.supported_languages()

    def _lang(self, code: str) -> str:
        return self._options.languages.to_provider(code)

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        return {**(extra or {}), **self._options.headers}

    async def aclose(self) -> None:
        await self._transport.aclose()


class GoogleBackend(AbstractGoogleBackend):
    """Token-authorized Google Translate backend."""

    def __init__(
        self,
        token_provider: TokenProvider = missing_token,
        options: TranslatorOptions | None = None,
        *,
        transport: HttpTransport | None = None,
    ) -> None:
        super().__init__(options, transport=transport)
        self._get_token = token_provider

    def check_limit_exceeding(self, text: str | list[str]) -> int:
        """Batches are measured by their wrapped length, as sent on the wire."""
        if isinstance(text, list):
            text = "".join(encode_for_batch(text))
        return super().check_limit_exceeding(text)

    async def translate(
        self,
        text: str,
        target_lang: str,
        source_lang: str | None = None,
    ) -> str:
        tk = await self._get_token(text)
        params = {
            "client": "t",
            "sl": self._lang(resolve_source(source_lang)),
            "tl": self._lang(target_lang),
            "hl": self._lang(target_lang),
            "dt": _SINGLE_DATA_TYPES,
            "ie": "UTF-8",
            "oe": "UTF-8",
            "otf": 1,
            "ssel": 0,
            "tsel": 0,
            "kc": 7,
            "q": text,
            "tk": tk,
        }
        raw = await self._transport.get(
            build_url(SINGLE_API_PATH, params), headers=self._headers(),
        )
        if not isinstance(raw, list) or not raw or not isinstance(raw[0], list):
            logger.warning("Got response %r", raw)
            raise UnexpectedShape("Unexpected response", raw)

        return "".join(
            chunk[0]
            for chunk in raw[0]
            if isinstance(chunk, list) and chunk and isinstance(chunk[0], str)
        )

    async def translate_batch(
        self,
        texts: list[str],
        target_lang: str,
        source_lang: str | None = None,
    ) -> list[str]:
        """Translate ``texts`` in one markup-mode request.

        Blank segments are returned unchanged and left out of the request:
        the service answers an empty ``<pre>`` block with no text node, so it
        could never be matched back to its position.
        """
        if not texts:
            return []

        filled = [i for i, text in enumerate(texts) if text.strip()]
        if len(filled) < len(texts):
            results = list(texts)
            translated = await self.translate_batch(
                [texts[i] for i in filled], target_lang, source_lang,
            )
            for i, idx in enumerate(filled):
                results[idx] = translated[i]
            return results

        prepared = encode_for_batch(texts)
        tk = await self._get_token("".join(prepared))

        params = {
            "anno": 3,
            "client": "te",
            "v": "1.0",
            "format": "html",
            "sl": self._lang(resolve_source(source_lang)),
            "tl": self._lang(target_lang),
            "tk": tk,
        }
        body = "".join(f"&q={quote(fragment, safe='')}" for fragment in prepared)
        raw = await self._transport.post(
            build_url(BATCH_API_PATH, params),
            body,
            headers=self._headers({"Content-Type": _FORM_CONTENT_TYPE}),
        )
        return self.decode_batch_reply(raw, len(texts))

    @staticmethod
    def decode_batch_reply(raw: Any, count: int) -> list[str]:
        """Recover ``count`` translations from a markup-mode batch reply."""
        reply = _require_nonempty_list(raw)
        result: list[str] = []

        if count == 1:
            # Metadata strings may surround the content; the first string wins
            def take_first(leaf: Leaf) -> bool | None:
                if not isinstance(leaf, str):
                    return None
                result.append(unwrap(leaf) or leaf)
                return False

            visit_leaves(reply, take_first)
            if not result:
                logger.warning("Got response %r", raw)
                raise UnexpectedShape("Response holds no text", raw)
        else:
            strings = string_leaves(reply)
            if not strings:
                logger.warning("Got response %r", raw)
                raise UnexpectedShape("Response holds no text", raw)
            for leaf in strings:
                parsed = unwrap(leaf)
                if parsed is not None:
                    result.append(parsed)

        return reconcile(result, count, raw)


class GoogleTokenFreeBackend(AbstractGoogleBackend):
    """Google Translate backend that needs no token."""

    def __init__(
        self,
        options: TranslatorOptions | None = None,
        *,
        parity_policy: ParityPolicy = interleaved_pairs,
        transport: HttpTransport | None = None,
    ) -> None:
        super().__init__(options, transport=transport)
        self._parity_policy = parity_policy

    async def translate_batch(
        self,
        texts: list[str],
        target_lang: str,
        source_lang: str | None = None,
    ) -> list[str]:
        if not texts:
            return []

        params = {
            "client": "dict-chrome-ex",
            "sl": self._lang(resolve_source(source_lang)),
            "tl": self._lang(target_lang),
            "q": texts,
        }
        raw = await self._transport.get(
            build_url(BATCH_API_PATH, params),
            headers=self._headers({"Content-Type": _FORM_CONTENT_TYPE}),
        )
        return self.decode_batch_reply(raw, len(texts))

    def decode_batch_reply(self, raw: Any, count: int) -> list[str]:
        """Recover ``count`` translations from a plain-text batch reply."""
        reply = _require_nonempty_list(raw)
        collected = string_leaves(reply)
        if not collected:
            logger.warning("Got response %r", raw)
            raise UnexpectedShape("Response holds no text", raw)

        if count == 1:
            result = collected[:1]
        else:
            result = self._parity_policy(collected, count)

        return reconcile(result, count, raw)

