"""Exceptions raised by translation backends.

Every failure that aborts a call derives from TranslationError, so callers can
fall back or retry at a higher layer with a single except clause.
"""

from __future__ import annotations

from typing import Any


class TranslationError(Exception):
    """Base class for all fatal translation failures."""


class TokenFailure(TranslationError):
    """The request token could not be derived."""


class TransportFailure(TranslationError):
    """The HTTP round trip failed (network error, timeout or non-2xx status)."""


class UnexpectedShape(TranslationError):
    """The reply is not a usable nested list."""

    def __init__(self, message: str, raw_reply: Any = None) -> None:
        super().__init__(message)
        self.raw_reply = raw_reply


class LengthMismatch(TranslationError):
    """The number of recovered translations differs from the number of inputs."""

    def __init__(self, expected: int, actual: int, raw_reply: Any = None) -> None:
        super().__init__(
            f"Mismatching lengths of original and translated arrays: "
            f"expected {expected}, got {actual}"
        )
        self.expected = expected
        self.actual = actual
        self.raw_reply = raw_reply
