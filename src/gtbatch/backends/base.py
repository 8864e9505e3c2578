"""Abstract base class for translation backends."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gtbatch.core.languages import AUTO


class TranslationBackend(ABC):
    """Interface for translation backends.

    Every call is independent: backends keep configuration only, so several
    batches may be translated concurrently on the same instance.
    """

    @abstractmethod
    async def translate_batch(
        self,
        texts: list[str],
        target_lang: str,
        source_lang: str | None = None,
    ) -> list[str]:
        """Translate a batch of texts in one request.

        Args:
            texts: List of strings to translate.
            target_lang: Target language code (e.g. "es").
            source_lang: Source language code, or None for auto-detect.

        Returns:
            List of translated strings, same length and order as input.
        """
        ...

    async def translate(
        self,
        text: str,
        target_lang: str,
        source_lang: str | None = None,
    ) -> str:
        """Translate a single text. Default implementation uses translate_batch."""
        results = await self.translate_batch([text], target_lang, source_lang)
        return results[0]

    def get_length_limit(self) -> int | None:
        """Maximum characters accepted per request, or None when unlimited."""
        return None

    def check_limit_exceeding(self, text: str | list[str]) -> int:
        """Return by how many characters ``text`` exceeds the length limit (0 if it fits)."""
        limit = self.get_length_limit()
        if limit is None:
            return 0
        length = len(text) if isinstance(text, str) else sum(len(t) for t in text)
        return max(length - limit, 0)

    def is_supported_auto_from(self) -> bool:
        return True

    async def aclose(self) -> None:
        """Release network resources. Backends without any need nothing here."""

    async def __aenter__(self) -> TranslationBackend:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def resolve_source(source_lang: str | None) -> str:
    return source_lang or AUTO


def split_batches(backend: TranslationBackend, texts: list[str]) -> list[list[str]]:
    """Group consecutive texts so each group fits the backend's length limit.

    A text that is too long on its own still gets a group of its own; the
    remote service decides what to do with it.
    """
    batches: list[list[str]] = []
    current: list[str] = []
    for text in texts:
        candidate = [*current, text]
        if current and backend.check_limit_exceeding(candidate) > 0:
            batches.append(current)
            current = [text]
        else:
            current = candidate
    if current:
        batches.append(current)
    return batches
