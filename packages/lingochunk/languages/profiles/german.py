#!/usr/bin/env python3
"""German language profile."""

from typing import ClassVar

from lingochunk.languages.base import LanguageProfile, line_pattern

_NUMBER = r"(?:\d+(?:\.\d+)*|[IVXLCDM]+)\b"


class GermanLanguageProfile(LanguageProfile):
    """
    Language profile for German.

    Compound words make German tokens longer than English ones, hence the
    higher characters-per-token ratio.
    """

    language_code: ClassVar[str] = "de"
    language_name: ClassVar[str] = "German"
    chars_per_token: ClassVar[float] = 5.0

    sentence_end_pattern: ClassVar[str] = r"[.!?]+(?:\s|$)|[.!?]+(?=[\"'\)\]}>«»“])"
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = (
        (line_pattern(rf"(?i:teil)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?i:kapitel)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?i:abschnitt)\s+{_NUMBER}"), 2),
    )
    abbreviations: ClassVar[frozenset[str]] = frozenset(
        {
            "Dr.", "Hr.", "Fr.", "Prof.",
            "z.B.", "d.h.", "u.a.", "usw.", "etc.",
            "Nr.", "Bd.", "S.", "Aufl.",
            "bzw.", "ca.", "evtl.", "ggf.", "vgl.",
            "GmbH.", "AG.", "e.V.",
        }
    )
