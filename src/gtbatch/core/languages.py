"""Language codes accepted by the Google Translate endpoints.

Google still uses legacy ISO 639 codes for a few languages (``iw`` for Hebrew,
``jw`` for Javanese). Callers use the current codes; the table maps them to the
provider's codes before a request is built.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

AUTO = "auto"

# Codes as the provider knows them
SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "af", "ak", "am", "ar", "as", "ay", "az", "be", "bg", "bho",
    "bm", "bn", "bs", "ca", "ceb", "ckb", "co", "cs", "cy", "da",
    "de", "doi", "dv", "ee", "el", "en", "eo", "es", "et", "eu",
    "fa", "fi", "fr", "fy", "ga", "gd", "gl", "gn", "gom", "gu",
    "ha", "haw", "hi", "hmn", "hr", "ht", "hu", "hy", "id", "ig",
    "ilo", "is", "it", "iw", "ja", "jw", "ka", "kk", "km", "kn",
    "ko", "kri", "ku", "ky", "la", "lb", "lg", "ln", "lo", "lt",
    "lus", "lv", "mai", "mg", "mi", "mk", "ml", "mn", "mni-Mtei", "mr",
    "ms", "mt", "my", "ne", "nl", "no", "nso", "ny", "om", "or",
    "pa", "pl", "ps", "pt", "qu", "ro", "ru", "rw", "sa", "sd",
    "si", "sk", "sl", "sm", "sn", "so", "sq", "sr", "st", "su",
    "sv", "sw", "ta", "te", "tg", "th", "ti", "tk", "tl", "tr",
    "ts", "tt", "ug", "uk", "ur", "uz", "vi", "xh", "yi", "yo",
    "zh-CN", "zh-TW", "zu",
)

_DEFAULT_ALIASES = {
    "he": "iw",
    "jv": "jw",
}

# Applied only when translating to the provider, never reversed
_DEFAULT_SHORTCUTS = {
    "zh": "zh-CN",
}


def _frozen(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class LanguageCodeTable:
    """Immutable mapping between user-facing and provider language codes."""

    aliases: Mapping[str, str] = field(default_factory=lambda: _frozen(_DEFAULT_ALIASES))
    shortcuts: Mapping[str, str] = field(default_factory=lambda: _frozen(_DEFAULT_SHORTCUTS))
    provider_codes: tuple[str, ...] = SUPPORTED_LANGUAGES

    def to_provider(self, code: str) -> str:
        """Map a user-facing code (or ``auto``) to the code sent to Google."""
        if code in self.shortcuts:
            return self.shortcuts[code]
        return self.aliases.get(code, code)

    def to_user(self, code: str) -> str:
        """Map a provider code back to the current ISO code."""
        for user_code, provider_code in self.aliases.items():
            if provider_code == code:
                return user_code
        return code

    def supported_languages(self) -> list[str]:
        """User-facing codes for every language the provider supports."""
        return [self.to_user(code) for code in self.provider_codes]

    def is_supported(self, code: str) -> bool:
        return self.to_provider(code) in self.provider_codes


DEFAULT_LANGUAGES = LanguageCodeTable()
