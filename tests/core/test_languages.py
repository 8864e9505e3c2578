"""Tests for the language code table."""

from types import MappingProxyType

import pytest

from gtbatch.core.languages import (
    AUTO,
    DEFAULT_LANGUAGES,
    SUPPORTED_LANGUAGES,
    LanguageCodeTable,
)


class TestToProvider:
    @pytest.mark.parametrize(("code", "expected"), [
        ("he", "iw"),
        ("jv", "jw"),
        ("zh", "zh-CN"),
        ("zh-TW", "zh-TW"),
        ("fr", "fr"),
        (AUTO, AUTO),
    ])
    def test_default_mapping(self, code, expected):
        assert DEFAULT_LANGUAGES.to_provider(code) == expected


class TestToUser:
    def test_legacy_codes_are_reversed(self):
        assert DEFAULT_LANGUAGES.to_user("iw") == "he"
        assert DEFAULT_LANGUAGES.to_user("jw") == "jv"

    def test_shortcuts_are_not_reversed(self):
        assert DEFAULT_LANGUAGES.to_user("zh-CN") == "zh-CN"


class TestSupportedLanguages:
    def test_uses_current_codes(self):
        codes = DEFAULT_LANGUAGES.supported_languages()
        assert "he" in codes
        assert "jv" in codes
        assert "iw" not in codes
        assert len(codes) == len(SUPPORTED_LANGUAGES)

    def test_is_supported(self):
        assert DEFAULT_LANGUAGES.is_supported("he")
        assert DEFAULT_LANGUAGES.is_supported("zh")
        assert not DEFAULT_LANGUAGES.is_supported("xx")


class TestCustomTable:
    def test_custom_aliases(self):
        table = LanguageCodeTable(aliases=MappingProxyType({"nb": "no"}))
        assert table.to_provider("nb") == "no"
        assert table.to_provider("he") == "he"

    def test_table_is_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_LANGUAGES.aliases = {}  # type: ignore[misc]

    def test_default_aliases_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_LANGUAGES.aliases["xx"] = "yy"  # type: ignore[index]
