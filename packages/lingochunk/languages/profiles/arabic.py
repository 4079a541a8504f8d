#!/usr/bin/env python3
"""Arabic language profile."""

from typing import ClassVar

from lingochunk.languages.base import LanguageProfile, line_pattern


class ArabicLanguageProfile(LanguageProfile):
    """Language profile for Arabic, including the Arabic question mark and full stop."""

    language_code: ClassVar[str] = "ar"
    language_name: ClassVar[str] = "Arabic"
    chars_per_token: ClassVar[float] = 3.0

    sentence_end_pattern: ClassVar[str] = r"[.。۔؟!！？]+(?:\s|$)"
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = (
        (line_pattern(r"(?:الباب|الجزء)\s+\S+"), 1),
        (line_pattern(r"الفصل\s+\S+"), 1),
        (line_pattern(r"(?:القسم|المبحث)\s+\S+"), 2),
    )
