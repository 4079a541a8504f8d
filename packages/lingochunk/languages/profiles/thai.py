#!/usr/bin/env python3
"""Thai language profile."""

from typing import ClassVar

from lingochunk.languages.base import LanguageProfile, line_pattern


class ThaiLanguageProfile(LanguageProfile):
    """
    Language profile for Thai.

    Thai does not put spaces between words; a run of two or more spaces is
    the conventional sentence separator.
    """

    language_code: ClassVar[str] = "th"
    language_name: ClassVar[str] = "Thai"
    chars_per_token: ClassVar[float] = 2.0

    sentence_end_pattern: ClassVar[str] = r"[.!?]+(?:\s|$)|[ \t]{2,}|[。！？]+"
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = (
        (line_pattern(r"(?:ภาค|บทที่)\s*[\d๐-๙]+"), 1),
        (line_pattern(r"(?:ตอนที่|ส่วนที่|หมวด)\s*[\d๐-๙]+"), 2),
        (line_pattern(r"ข้อ\s*[\d๐-๙]+"), 3),
    )
