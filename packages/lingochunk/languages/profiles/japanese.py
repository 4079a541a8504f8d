#!/usr/bin/env python3
"""Japanese language profile."""

from typing import ClassVar

from lingochunk.languages.base import LanguageProfile, line_pattern
from lingochunk.languages.profiles.chinese import CJK_NUMERALS


class JapaneseLanguageProfile(LanguageProfile):
    """
    Language profile for Japanese.

    Besides full-width terminators, polite verb endings followed by a line
    break close a sentence.
    """

    language_code: ClassVar[str] = "ja"
    language_name: ClassVar[str] = "Japanese"
    chars_per_token: ClassVar[float] = 1.5

    sentence_end_pattern: ClassVar[str] = (
        r"[。！？]+[」』）]*|[.!?]+(?:\s|$)|(?:です|ます|でした|ました)(?=\s*$)"
    )
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = (
        (line_pattern(rf"第[{CJK_NUMERALS}\d]+[編部章]"), 1),
        (line_pattern(rf"第[{CJK_NUMERALS}\d]+節"), 2),
        (line_pattern(rf"第[{CJK_NUMERALS}\d]+[条項]"), 3),
        (line_pattern(rf"（[{CJK_NUMERALS}\d]+）"), 3),
        (line_pattern(r"[①-⑳]"), 3),
    )
