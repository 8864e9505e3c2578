"""Dummy translation backend for offline runs: prefixes strings with a [XX] tag."""

from __future__ import annotations

from gtbatch.backends.base import TranslationBackend


class DummyBackend(TranslationBackend):
    """Offline backend that prefixes each string with the target language tag.

    Example: "Hello" → "[ES] Hello"
    """

    async def translate_batch(
        self,
        texts: list[str],
        target_lang: str,
        source_lang: str | None = None,
    ) -> list[str]:
        tag = f"[{target_lang.upper()}]"
        return [f"{tag} {text}" for text in texts]
