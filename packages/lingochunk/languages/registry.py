#!/usr/bin/env python3
"""
Language profile registry and script-based language detection.

The registry is populated once when it is created and exposes no write
access afterwards, so concurrent readers need no synchronization.
"""

import logging
import unicodedata
from collections import Counter
from collections.abc import Iterable
from functools import lru_cache
from types import MappingProxyType

from lingochunk.languages.base import LanguageProfile
from lingochunk.languages.profiles import ALL_PROFILES

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

# Script families in tie-breaking priority order
SCRIPT_PRIORITY = ("ko", "ja", "zh", "ru", "ar", "hi", "th", "vi", "en")

# Share of kana among ideographic characters that marks a text as Japanese
_KANA_SHARE_FOR_JAPANESE = 0.1
# Share of Vietnamese-specific letters among Latin letters that marks Vietnamese
_VIETNAMESE_MARK_SHARE = 0.05

# Letters that only occur in Vietnamese among the languages we support
_VIETNAMESE_LETTERS = frozenset("ăđơưĂĐƠƯ")


def classify_char(char: str) -> str | None:
    """
    Map a character to a script family.

    Returns:
        One of ``hangul``, ``kana``, ``han``, ``cyrillic``, ``arabic``,
        ``devanagari``, ``thai``, ``vietnamese``, ``latin`` or None for
        characters that carry no script signal.
    """
    code = ord(char)
    if 0xAC00 <= code <= 0xD7A3 or 0x1100 <= code <= 0x11FF or 0x3130 <= code <= 0x318F:
        return "hangul"
    if 0x3040 <= code <= 0x30FF:
        return "kana"
    if 0x4E00 <= code <= 0x9FFF or 0x3400 <= code <= 0x4DBF:
        return "han"
    if 0x0400 <= code <= 0x04FF:
        return "cyrillic"
    if 0x0600 <= code <= 0x06FF or 0x0750 <= code <= 0x077F:
        return "arabic"
    if 0x0900 <= code <= 0x097F:
        return "devanagari"
    if 0x0E00 <= code <= 0x0E7F:
        return "thai"
    if 0x1EA0 <= code <= 0x1EF9 or char in _VIETNAMESE_LETTERS:
        return "vietnamese"
    if ("a" <= char <= "z") or ("A" <= char <= "Z") or 0x00C0 <= code <= 0x024F:
        return "latin"
    return None


def _is_signal_char(char: str) -> bool:
    """Whitespace, digits, punctuation and symbols say nothing about the language."""
    if char.isspace() or char.isdigit():
        return False
    return unicodedata.category(char)[0] not in ("P", "S", "Z", "C", "N")


def detect_language(text: str | None, default: str = DEFAULT_LANGUAGE) -> str:
    """
    Detect the language of text from its dominant script.

    Args:
        text: Text to classify
        default: Code returned when no script dominates

    Returns:
        ISO 639-1 language code
    """
    if not text:
        return default

    scripts = Counter(classify_char(c) for c in text if _is_signal_char(c))
    scripts.pop(None, None)
    if not scripts:
        return default

    ideographic = scripts["han"] + scripts["kana"]
    is_japanese = ideographic > 0 and scripts["kana"] / ideographic >= _KANA_SHARE_FOR_JAPANESE

    latin = scripts["latin"] + scripts["vietnamese"]
    is_vietnamese = latin > 0 and scripts["vietnamese"] / latin >= _VIETNAMESE_MARK_SHARE

    families = {
        "ko": scripts["hangul"],
        "ja": ideographic if is_japanese else 0,
        "zh": 0 if is_japanese else ideographic,
        "ru": scripts["cyrillic"],
        "ar": scripts["arabic"],
        "hi": scripts["devanagari"],
        "th": scripts["thai"],
        "vi": latin if is_vietnamese else 0,
        "en": 0 if is_vietnamese else latin,
    }

    best = default
    best_count = 0
    for code in SCRIPT_PRIORITY:
        if families[code] > best_count:
            best = code
            best_count = families[code]
    return best


class LanguageProfileRegistry:
    """
    Registry holding one profile per supported language code.

    Lookups never raise: unknown codes resolve to the default profile.
    """

    def __init__(
        self,
        profiles: Iterable[LanguageProfile] | None = None,
        default_language: str = DEFAULT_LANGUAGE,
    ) -> None:
        """
        Initialize the registry.

        Args:
            profiles: Profiles to register, every built-in profile by default
            default_language: Code of the fallback profile
        """
        if profiles is None:
            profiles = [profile_cls() for profile_cls in ALL_PROFILES]

        registered = {profile.language_code.lower(): profile for profile in profiles}
        if default_language.lower() not in registered:
            raise ValueError(f"Default language '{default_language}' has no registered profile")

        self._profiles = MappingProxyType(registered)
        self._default_language = default_language.lower()

        logger.debug(f"Language registry initialized with {len(registered)} profiles")

    @property
    def default_profile(self) -> LanguageProfile:
        return self._profiles[self._default_language]

    @property
    def default_language(self) -> str:
        return self._default_language

    @property
    def supported_languages(self) -> list[str]:
        """Registered language codes, sorted."""
        return sorted(self._profiles)

    def is_supported(self, language_code: str | None) -> bool:
        return self._normalize(language_code) in self._profiles

    def get_profile(self, language_code: str | None) -> LanguageProfile:
        """
        Resolve a profile by language code.

        Matching ignores case and region suffixes (``en-US`` resolves to ``en``).

        Args:
            language_code: ISO 639-1 code

        Returns:
            The matching profile, or the default profile
        """
        return self._profiles.get(self._normalize(language_code), self.default_profile)

    def detect_language(self, text: str | None) -> str:
        """Detect the language of text, restricted to registered profiles."""
        code = detect_language(text, self._default_language)
        return code if code in self._profiles else self._default_language

    def get_profile_for_text(self, text: str | None) -> LanguageProfile:
        """Resolve the profile matching the detected language of text."""
        return self._profiles[self.detect_language(text)]

    @staticmethod
    def _normalize(language_code: str | None) -> str:
        if not language_code:
            return ""
        return language_code.strip().lower().replace("_", "-").split("-")[0]

    def __contains__(self, language_code: object) -> bool:
        return isinstance(language_code, str) and self.is_supported(language_code)

    def __len__(self) -> int:
        return len(self._profiles)

    def __repr__(self) -> str:
        return f"LanguageProfileRegistry(languages={self.supported_languages}, default='{self._default_language}')"


@lru_cache(maxsize=1)
def get_registry() -> LanguageProfileRegistry:
    """Process-wide registry with every built-in profile."""
    return LanguageProfileRegistry()
