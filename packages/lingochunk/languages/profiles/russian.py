#!/usr/bin/env python3
"""Russian language profile."""

from typing import ClassVar

from lingochunk.languages.base import LanguageProfile, line_pattern

_NUMBER = r"(?:\d+(?:\.\d+)*|[IVXLCDM]+)\b"


class RussianLanguageProfile(LanguageProfile):
    """Language profile for Russian."""

    language_code: ClassVar[str] = "ru"
    language_name: ClassVar[str] = "Russian"
    chars_per_token: ClassVar[float] = 4.0

    sentence_end_pattern: ClassVar[str] = r"[.!?]+(?:\s|$)|[.!?]+(?=[\"'\)\]}>«»])"
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = (
        (line_pattern(rf"(?i:часть)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?i:глава)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?i:раздел)\s+{_NUMBER}"), 2),
    )
    abbreviations: ClassVar[frozenset[str]] = frozenset(
        {
            "г.", "гг.", "др.", "проф.",
            "т.д.", "т.е.", "т.п.",
            "и т.д.", "и т.п.", "и др.",
            "см.", "ср.", "напр.",
            "ул.", "пр.", "д.", "корп.", "кв.",
        }
    )
