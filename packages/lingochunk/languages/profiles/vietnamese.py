#!/usr/bin/env python3
"""Vietnamese language profile."""

from typing import ClassVar

from lingochunk.languages.base import LanguageProfile, line_pattern

_NUMBER = r"(?:\d+|[IVXLCDM]+)\b"


class VietnameseLanguageProfile(LanguageProfile):
    """
    Language profile for Vietnamese.

    Vietnamese is written in Latin script with tone marks; whitespace
    separates syllables rather than words.
    """

    language_code: ClassVar[str] = "vi"
    language_name: ClassVar[str] = "Vietnamese"
    chars_per_token: ClassVar[float] = 4.0

    sentence_end_pattern: ClassVar[str] = r"[.!?]+(?:\s|$)|[.!?]+(?=[\"'\)\]}>”])"
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = (
        (line_pattern(rf"(?:Phần|PHẦN)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?:Chương|CHƯƠNG)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?:Mục|MỤC|Bài|BÀI)\s+{_NUMBER}"), 2),
        (line_pattern(rf"(?:Điều|ĐIỀU)\s+{_NUMBER}"), 3),
    )
    abbreviations: ClassVar[frozenset[str]] = frozenset(
        {
            "TP.", "Q.", "P.", "TX.", "TT.",
            "Ths.", "TS.", "PGS.", "GS.",
            "v.v.", "vv.",
            "tr.", "NXB.",
        }
    )
