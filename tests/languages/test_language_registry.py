#!/usr/bin/env python3
"""Tests for the language registry and script-based detection."""

import pytest

from lingochunk.languages.profiles import EnglishLanguageProfile, KoreanLanguageProfile
from lingochunk.languages.registry import LanguageProfileRegistry, detect_language, get_registry


class TestDetectLanguage:
    """Test suite for detect_language."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Hello, how are you today?", "en"),
            ("안녕하세요, 만나서 반갑습니다.", "ko"),
            ("今天天气很好。", "zh"),
            ("今日はいい天気ですね。", "ja"),
            ("Привет, как дела?", "ru"),
            ("مرحبا كيف حالك", "ar"),
            ("नमस्ते आप कैसे हैं", "hi"),
            ("สวัสดีครับ", "th"),
            ("Tiếng Việt rất đẹp và phong phú.", "vi"),
        ],
    )
    def test_dominant_script(self, text, expected):
        assert detect_language(text) == expected

    def test_latin_with_french_accents_is_not_vietnamese(self):
        assert detect_language("Bonjour, ça va très bien à Paris.") == "en"

    @pytest.mark.parametrize("text", ["", None, "   \n\t", "12345 67890", "!!! ??? ..."])
    def test_degenerate_input_defaults_to_english(self, text):
        assert detect_language(text) == "en"

    def test_korean_wins_over_embedded_latin(self):
        """Mixed text goes to the script with the most characters."""
        assert detect_language("API 문서를 참고하여 설정을 변경하세요.") == "ko"

    def test_tie_is_broken_by_priority(self):
        """Equal Hangul and Latin counts resolve to Korean, which comes first."""
        assert detect_language("가나 ab") == "ko"


class TestLanguageProfileRegistry:
    """Test suite for LanguageProfileRegistry."""

    def test_all_builtin_profiles_registered(self, registry):
        assert len(registry) == 13
        assert registry.supported_languages == sorted(
            ["en", "ko", "zh", "ja", "es", "fr", "de", "pt", "ru", "ar", "hi", "vi", "th"]
        )

    @pytest.mark.parametrize("code", ["ko", "KO", "ko-KR", "ko_kr", " ko "])
    def test_get_profile_is_tolerant(self, registry, code):
        assert isinstance(registry.get_profile(code), KoreanLanguageProfile)

    @pytest.mark.parametrize("code", [None, "", "xx", "klingon"])
    def test_unknown_codes_fall_back_to_default(self, registry, code):
        assert isinstance(registry.get_profile(code), EnglishLanguageProfile)

    def test_profiles_are_shared_instances(self, registry):
        assert registry.get_profile("de") is registry.get_profile("de-AT")

    def test_membership(self, registry):
        assert "fr" in registry
        assert "fr-CA" in registry
        assert "xx" not in registry
        assert 42 not in registry

    def test_get_profile_for_text(self, registry):
        profile = registry.get_profile_for_text("Это пример текста на русском языке.")

        assert profile.language_code == "ru"

    def test_custom_default_language(self):
        # Arrange
        registry = LanguageProfileRegistry(default_language="ko")

        # Act
        profile = registry.get_profile("xx")

        # Assert
        assert profile.language_code == "ko"
        assert registry.detect_language("") == "ko"

    def test_default_must_be_registered(self):
        with pytest.raises(ValueError, match="no registered profile"):
            LanguageProfileRegistry(profiles=[EnglishLanguageProfile()], default_language="ko")

    def test_detection_restricted_to_registered_profiles(self):
        registry = LanguageProfileRegistry(profiles=[EnglishLanguageProfile()])

        assert registry.detect_language("안녕하세요") == "en"

    def test_process_wide_registry_is_a_singleton(self):
        assert get_registry() is get_registry()
