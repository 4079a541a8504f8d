#!/usr/bin/env python3
"""Hindi language profile."""

from typing import ClassVar

from lingochunk.languages.base import LanguageProfile, line_pattern


class HindiLanguageProfile(LanguageProfile):
    """Language profile for Hindi; the danda (।) and double danda (॥) end sentences."""

    language_code: ClassVar[str] = "hi"
    language_name: ClassVar[str] = "Hindi"
    chars_per_token: ClassVar[float] = 3.0

    sentence_end_pattern: ClassVar[str] = r"[।॥]+(?:\s|$)|[.!?]+(?:\s|$)"
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = (
        (line_pattern(r"(?:भाग)\s+[\d०-९]+"), 1),
        (line_pattern(r"(?:अध्याय)\s+[\d०-९]+"), 1),
        (line_pattern(r"(?:खंड|खण्ड)\s+[\d०-९]+"), 2),
    )
