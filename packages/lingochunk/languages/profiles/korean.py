#!/usr/bin/env python3
"""Korean language profile."""

import re
from bisect import bisect_right
from collections.abc import Callable
from typing import ClassVar

from lingochunk.languages.base import LanguageProfile, line_pattern

# Polite, formal and plain verb endings that close a sentence
_ENDINGS = (
    "습니다|입니다|됩니다|셨습니다|였습니다|"
    "습니까|입니까|"
    "세요|에요|아요|어요|여요|이에요|예요|"
    "었다|았다|였다|"
    "거든요|잖아요|던데요"
)

_OPENERS = {"「": "」", "『": "』", "(": ")", "（": "）"}
_CLOSERS = "".join(_OPENERS.values())
# Quote marks, brackets and blank lines, which close any mark left open
_QUOTE_MARK_RE = re.compile('["' + re.escape("".join(_OPENERS) + _CLOSERS) + r"]|\n[ \t]*\n")


def is_hangul(char: str) -> bool:
    """Hangul syllables, jamo and compatibility jamo."""
    code = ord(char)
    return 0xAC00 <= code <= 0xD7A3 or 0x1100 <= code <= 0x11FF or 0x3130 <= code <= 0x318F


class KoreanLanguageProfile(LanguageProfile):
    """
    Language profile for Korean text.

    Supports formal (합니다체), polite (해요체) and plain (반말) endings.
    Terminators inside quotes or parentheses do not close a sentence, and the
    token estimate weighs Hangul syllables separately from other characters.
    """

    language_code: ClassVar[str] = "ko"
    language_name: ClassVar[str] = "Korean"
    chars_per_token: ClassVar[float] = 2.0

    # Hangul syllables run about 1.5 characters per token, everything else 4
    hangul_chars_per_token: ClassVar[float] = 1.5
    other_chars_per_token: ClassVar[float] = 4.0

    sentence_end_pattern: ClassVar[str] = (
        rf"(?<=[가-힣])(?:{_ENDINGS})[.?!]*(?=\s|$)"
        r"|(?<=[가-힣])[다라까나요죠네군][.?!]+(?=\s|$)"
        r"|[.!?。！？]+(?=\s|$)"
    )
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = (
        (line_pattern(r"제\s*\d+\s*[편부장](?=\s|$)"), 1),
        (line_pattern(r"\d+\s*장(?=\s|$)"), 1),
        (line_pattern(r"제\s*\d+\s*절(?=\s|$)"), 2),
        (line_pattern(r"제\s*\d+\s*[조항](?=\s|$)"), 3),
    )
    abbreviations: ClassVar[frozenset[str]] = frozenset(
        {
            "씨.", "님.", "선생님.", "박사님.", "교수님.",
            "Dr.", "Mr.", "Mrs.", "Ms.", "Prof.",
            "등.", "외.", "예.", "cf.", "vs.",
        }
    )

    def token_weight(self, text: str) -> float:
        """Weigh Hangul and non-Hangul characters with separate ratios."""
        if not text:
            return 0.0
        hangul = 0
        other = 0
        for char in text:
            if is_hangul(char):
                hangul += 1
            elif not char.isspace():
                other += 1
        return hangul / self.hangul_chars_per_token + other / self.other_chars_per_token

    def _boundary_filter(self, text: str) -> Callable[[re.Match[str]], bool]:
        """Reject terminators that sit inside quotes or parentheses."""
        spans = quoted_spans(text)
        starts = [start for start, _ in spans]

        def accept(match: re.Match[str]) -> bool:
            i = bisect_right(starts, match.start()) - 1
            return i < 0 or match.start() >= spans[i][1]

        return accept


def quoted_spans(text: str) -> list[tuple[int, int]]:
    """
    Outermost spans enclosed by balanced quotes or parentheses.

    Marks are paired within a paragraph. A straight double quote or an opener
    still unclosed at the next blank line (or the end of the text) is treated
    as a stray mark, such as an inch sign, and encloses nothing.

    Args:
        text: Text to scan

    Returns:
        Sorted, non-overlapping ``(start, end)`` spans
    """
    spans: list[tuple[int, int]] = []
    depth = 0
    bracket_start = quote_start = -1

    for match in _QUOTE_MARK_RE.finditer(text):
        mark = match.group(0)
        if mark[0] == "\n":
            depth = 0
            bracket_start = quote_start = -1
        elif mark == '"':
            if quote_start < 0:
                quote_start = match.start()
            else:
                spans.append((quote_start, match.end()))
                quote_start = -1
        elif mark in _OPENERS:
            if depth == 0:
                bracket_start = match.start()
            depth += 1
        elif depth:
            depth -= 1
            if depth == 0:
                spans.append((bracket_start, match.end()))

    # Quotes and brackets may nest in each other; keep the outermost spans only
    merged: list[tuple[int, int]] = []
    for start, end in sorted(spans):
        if merged and start < merged[-1][1]:
            merged[-1] = (merged[-1][0], max(end, merged[-1][1]))
        else:
            merged.append((start, end))
    return merged
