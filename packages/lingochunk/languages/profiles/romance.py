#!/usr/bin/env python3
"""Spanish, French and Portuguese language profiles."""

from typing import ClassVar

from lingochunk.languages.base import LanguageProfile, line_pattern

_NUMBER = r"(?:\d+(?:\.\d+)*|[IVXLCDM]+)\b"

# Terminator followed by whitespace, or directly by a closing quote/bracket
_LATIN_SENTENCE_END = r"[.!?]+(?:\s|$)|[.!?]+(?=[\"'\)\]}>»”])"


class SpanishLanguageProfile(LanguageProfile):
    """Language profile for Spanish."""

    language_code: ClassVar[str] = "es"
    language_name: ClassVar[str] = "Spanish"
    chars_per_token: ClassVar[float] = 4.5

    sentence_end_pattern: ClassVar[str] = _LATIN_SENTENCE_END
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = (
        (line_pattern(rf"(?i:parte)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?i:capítulo)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?i:sección)\s+{_NUMBER}"), 2),
    )
    abbreviations: ClassVar[frozenset[str]] = frozenset(
        {
            "Dr.", "Dra.", "Sr.", "Sra.", "Srta.", "Prof.",
            "etc.", "Ej.", "pág.", "págs.", "núm.", "tel.",
            "Ud.", "Uds.", "Vd.", "Vds.",
            "Av.", "Avda.", "Ctra.",
            "S.A.", "S.L.",
        }
    )


class FrenchLanguageProfile(LanguageProfile):
    """
    Language profile for French.

    French typography puts a space before ``?`` and ``!``, so the space is
    allowed inside the terminator.
    """

    language_code: ClassVar[str] = "fr"
    language_name: ClassVar[str] = "French"
    chars_per_token: ClassVar[float] = 4.5

    sentence_end_pattern: ClassVar[str] = r"\.+(?:\s|$)|[ \u00a0\u202f]?[!?]+(?:\s|$)|[.!?]+(?=[\"'\)\]}>«»”])"
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = (
        (line_pattern(rf"(?i:partie)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?i:chapitre)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?i:section)\s+{_NUMBER}"), 2),
    )
    abbreviations: ClassVar[frozenset[str]] = frozenset(
        {
            "Dr.", "M.", "Mme.", "Mlle.", "Prof.",
            "etc.", "ex.", "p.", "pp.", "vol.",
            "cf.", "fig.", "chap.", "éd.",
            "S.A.", "S.A.R.L.",
        }
    )


class PortugueseLanguageProfile(LanguageProfile):
    """Language profile for Portuguese."""

    language_code: ClassVar[str] = "pt"
    language_name: ClassVar[str] = "Portuguese"
    chars_per_token: ClassVar[float] = 4.5

    sentence_end_pattern: ClassVar[str] = _LATIN_SENTENCE_END
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = (
        (line_pattern(rf"(?i:parte)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?i:capítulo)\s+{_NUMBER}"), 1),
        (line_pattern(rf"(?i:seção|secção)\s+{_NUMBER}"), 2),
    )
    abbreviations: ClassVar[frozenset[str]] = frozenset(
        {
            "Dr.", "Dra.", "Sr.", "Sra.", "Srta.", "Prof.",
            "etc.", "ex.", "pág.", "págs.", "núm.", "tel.",
            "V.Ex.", "V.S.",
            "Av.", "R.",
            "Ltda.", "S.A.",
        }
    )
