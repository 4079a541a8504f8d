#!/usr/bin/env python3
"""English language profile."""

from typing import ClassVar

from lingochunk.languages.base import LanguageProfile, line_pattern

_NUMBER = r"(?:\d+(?:\.\d+)*|[IVXLCDM]+)\b"


class EnglishLanguageProfile(LanguageProfile):
    """
    Language profile for English text.

    A terminator only closes a sentence when it follows a letter or digit and
    the next word starts with a capital letter (or the line ends). Closing
    quotes and brackets directly after the terminator stay in the sentence.
    """

    language_code: ClassVar[str] = "en"
    language_name: ClassVar[str] = "English"
    chars_per_token: ClassVar[float] = 4.0

    sentence_end_pattern: ClassVar[str] = (
        r"(?<=[a-zA-Z0-9])[.!?]+[\"'”’)\]]*(?=\s+[\"'“‘(\[]?[A-Z]|\s*$)"
    )
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = (
        (line_pattern(rf"(?:PART|Part)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?:CHAPTER|Chapter)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?:APPENDIX|Appendix)\s+(?:[A-Z]|\d+)\b"), 1),
        (line_pattern(rf"(?:SECTION|Section)\s+{_NUMBER}"), 2),
    )
    abbreviations: ClassVar[frozenset[str]] = frozenset(
        {
            # Titles
            "Mr.", "Mrs.", "Ms.", "Dr.", "Prof.", "Rev.", "Gen.", "Col.", "Lt.", "Sgt.",
            "Jr.", "Sr.", "Ph.D.", "M.D.", "B.A.", "M.A.", "B.S.", "M.S.",
            # Common abbreviations
            "etc.", "e.g.", "i.e.", "vs.", "viz.", "cf.", "et al.",
            "Inc.", "Corp.", "Ltd.", "Co.", "LLC.",
            "Jan.", "Feb.", "Mar.", "Apr.", "Jun.", "Jul.", "Aug.", "Sep.", "Sept.", "Oct.", "Nov.", "Dec.",
            "Mon.", "Tue.", "Wed.", "Thu.", "Fri.", "Sat.", "Sun.",
            "St.", "Ave.", "Blvd.", "Rd.", "Ln.", "Ct.",
            "No.", "Vol.", "pp.", "p.", "ed.", "eds.", "Fig.", "Eq.",
            "approx.", "est.", "min.", "max.", "avg.",
            "U.S.", "U.K.", "E.U.", "U.N.",
        }
    )
