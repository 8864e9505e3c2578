"""Recovering the per-segment translations from a flattened reply."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from gtbatch.core.errors import LengthMismatch

logger = logging.getLogger(__name__)

# (collected strings, segment count) -> translations
ParityPolicy = Callable[[list[str], int], list[str]]


def interleaved_pairs(collected: list[str], count: int) -> list[str]:
    """Default policy for the token-free endpoint.

    When the reply holds exactly one string per segment, each string is a
    translation. Otherwise the service is assumed to have interleaved every
    translation with its echoed original, so only even positions are kept.
    This mirrors observed replies, not a documented contract.
    """
    if len(collected) == count:
        return list(collected)
    return collected[::2]


def one_to_one(collected: list[str], count: int) -> list[str]:
    """Policy that treats every collected string as a translation."""
    return list(collected)


def reconcile(translations: list[str], expected: int, raw_reply: Any = None) -> list[str]:
    """Return ``translations`` unchanged if it holds exactly ``expected`` items.

    Raises:
        LengthMismatch: carrying both counts and the raw reply. Missing
            entries are never padded and extra ones never dropped.
    """
    if len(translations) != expected:
        logger.warning("Translation result %r does not match %d inputs", translations, expected)
        logger.warning("Got response %r", raw_reply)
        raise LengthMismatch(expected, len(translations), raw_reply)
    return translations
