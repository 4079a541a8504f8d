#!/usr/bin/env python3
"""Chinese language profile."""

from typing import ClassVar

from lingochunk.languages.base import LanguageProfile, line_pattern

CJK_NUMERALS = "一二三四五六七八九十百千零〇"


class ChineseLanguageProfile(LanguageProfile):
    """
    Language profile for Chinese (Simplified and Traditional).

    Full-width terminators close a sentence without requiring whitespace,
    including after enumeration endings such as 等.
    """

    language_code: ClassVar[str] = "zh"
    language_name: ClassVar[str] = "Chinese"
    chars_per_token: ClassVar[float] = 1.5

    sentence_end_pattern: ClassVar[str] = r"[。！？；]+[」』”’）]*|[.!?;]+(?:\s|$)"
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = (
        (line_pattern(rf"第[{CJK_NUMERALS}\d]+[编部章]"), 1),
        (line_pattern(rf"第[{CJK_NUMERALS}\d]+节"), 2),
        (line_pattern(rf"[{CJK_NUMERALS}]+[、．.]"), 2),
        (line_pattern(rf"第[{CJK_NUMERALS}\d]+[条款]"), 3),
        (line_pattern(rf"（[{CJK_NUMERALS}\d]+）"), 3),
        (line_pattern(r"[①-⑳]"), 3),
    )
