#!/usr/bin/env python3
"""
Language profile base class.

A language profile bundles the boundary-detection rules and the token-ratio
constant for one language. Profiles are pure: every method is a function of
its input string, never raises for malformed input and never mutates the
profile, so a single instance can be shared across concurrent chunking calls.
"""

import logging
import math
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, ClassVar

logger = logging.getLogger(__name__)

# Markdown ATX headings; the heading depth is the number of leading hashes
MARKDOWN_HEADER_PATTERN = r"^[ \t]{0,3}(?P<marks>#{1,6})[ \t]+(?P<title>[^\n]+?)(?:[ \t]+#+)?[ \t]*$"

# Tolerance for float accumulation before rounding token estimates up
_EPSILON = 1e-9


@dataclass(frozen=True)
class SectionHeader:
    """A section header found in a text."""

    start: int
    end: int
    text: str
    level: int


@dataclass(frozen=True)
class HeaderRule:
    """
    Compiled section-header rule.

    A ``level`` of 0 means the level is derived from the ``marks`` group
    (markdown heading depth).
    """

    pattern: re.Pattern[str]
    level: int


def weight_to_tokens(weight: float) -> int:
    """Round an accumulated token weight up to a whole token count."""
    if weight <= 0:
        return 0
    return max(1, math.ceil(weight - _EPSILON))


class LanguageProfile:
    """
    Base class for all language profiles.

    Subclasses only declare constants; languages with special rules override
    ``token_weight`` or ``_boundary_filter``.
    """

    language_code: ClassVar[str] = ""
    language_name: ClassVar[str] = ""
    chars_per_token: ClassVar[float] = 4.0

    sentence_end_pattern: ClassVar[str] = r"[.!?]+(?:\s|$)"
    paragraph_pattern: ClassVar[str] = r"\n\s*\n"
    # (regex, level) pairs for chapter/section idioms, matched with MULTILINE
    header_patterns: ClassVar[tuple[tuple[str, int], ...]] = ()
    abbreviations: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, extra_header_rules: Iterable[HeaderRule] = ()) -> None:
        """
        Compile the profile's rules.

        Args:
            extra_header_rules: Already compiled caller supplied header rules
        """
        self._sentence_re = re.compile(self.sentence_end_pattern, re.MULTILINE)
        self._paragraph_re = re.compile(self.paragraph_pattern)
        self._header_rules: tuple[HeaderRule, ...] = (
            HeaderRule(re.compile(MARKDOWN_HEADER_PATTERN, re.MULTILINE), 0),
            *(HeaderRule(re.compile(pattern, re.MULTILINE), level) for pattern, level in self.header_patterns),
            *extra_header_rules,
        )
        self._abbreviations_lower = frozenset(a.lower() for a in self.abbreviations)

    @property
    def header_rules(self) -> tuple[HeaderRule, ...]:
        return self._header_rules

    def find_sentence_boundaries(self, text: str | None) -> list[int]:
        """
        Find sentence boundaries in text.

        Each boundary is the offset immediately after a sentence terminator.
        Terminators that close a known abbreviation are skipped. The text
        length is always the final boundary.

        Args:
            text: Text to analyze

        Returns:
            Ordered list of offsets, empty for empty input
        """
        if not text:
            return []

        accept = self._boundary_filter(text)
        boundaries: list[int] = []
        for match in self._sentence_re.finditer(text):
            position = match.end()
            if position == 0 or (boundaries and position <= boundaries[-1]):
                continue
            if self._ends_with_abbreviation(text, match):
                continue
            if accept is not None and not accept(match):
                continue
            boundaries.append(position)

        if not boundaries or boundaries[-1] != len(text):
            boundaries.append(len(text))

        return boundaries

    def find_paragraph_boundaries(self, text: str | None) -> list[int]:
        """
        Find paragraph boundaries (end offsets of blank-line runs).

        Args:
            text: Text to analyze

        Returns:
            Ordered list of offsets ending with the text length
        """
        if not text:
            return []

        boundaries = [m.end() for m in self._paragraph_re.finditer(text) if 0 < m.end() < len(text)]
        boundaries.append(len(text))
        return boundaries

    def find_section_headers(self, text: str | None) -> list[SectionHeader]:
        """
        Find section headers.

        Markdown headings take precedence; language idioms such as chapter
        markers are matched afterwards. When two rules match at the same
        position the earlier rule wins.

        Args:
            text: Text to analyze

        Returns:
            Headers ordered by position
        """
        if not text:
            return []

        found: dict[int, SectionHeader] = {}
        for rule in self._header_rules:
            for match in rule.pattern.finditer(text):
                if match.start() in found or not match.group(0).strip():
                    continue
                found[match.start()] = self._build_header(match, rule)

        headers = sorted(found.values(), key=lambda h: h.start)

        # Drop headers nested inside a previous header's line
        result: list[SectionHeader] = []
        for header in headers:
            if result and header.start < result[-1].end:
                continue
            result.append(header)
        return result

    def token_weight(self, text: str) -> float:
        """
        Fractional token volume of text.

        Weights are additive over concatenation which lets chunkers keep a
        running total instead of re-estimating a growing buffer.
        """
        if not text:
            return 0.0
        non_whitespace = sum(1 for c in text if not c.isspace())
        return non_whitespace / self.chars_per_token

    def estimate_token_count(self, text: str | None) -> int:
        """
        Estimate the token count of text.

        Args:
            text: Text to estimate

        Returns:
            ``ceil(non-whitespace characters / chars_per_token)``, 0 for empty input
        """
        if not text:
            return 0
        return weight_to_tokens(self.token_weight(text))

    def count_sentences(self, text: str | None) -> int:
        """Number of non-blank sentences in text."""
        return self._count_units(text, self.find_sentence_boundaries(text))

    def count_paragraphs(self, text: str | None) -> int:
        """Number of non-blank paragraphs in text."""
        return self._count_units(text, self.find_paragraph_boundaries(text))

    def is_abbreviation(self, word: str) -> bool:
        """Check a word against the abbreviation set, ignoring case."""
        return word.lower() in self._abbreviations_lower

    def with_extra_header_patterns(self, patterns: Iterable[tuple[str, int]]) -> "LanguageProfile":
        """
        Return a copy of this profile with additional header rules.

        Patterns that fail to compile are logged and skipped; the remaining
        rules still apply.

        Args:
            patterns: ``(regex, level)`` pairs

        Returns:
            A new profile of the same class
        """
        rules: list[HeaderRule] = []
        for pattern, level in patterns:
            try:
                rules.append(HeaderRule(re.compile(pattern, re.MULTILINE), max(1, int(level))))
            except re.error as e:
                logger.warning(f"Skipping invalid header pattern {pattern!r} for {self.language_code}: {e}")
        extra = self._header_rules[1 + len(self.header_patterns) :]
        return type(self)(extra_header_rules=(*extra, *rules))

    def describe(self) -> dict[str, Any]:
        """Diagnostic description of the profile."""
        return {
            "language_code": self.language_code,
            "language_name": self.language_name,
            "chars_per_token": self.chars_per_token,
            "abbreviations": len(self.abbreviations),
            "header_rules": len(self._header_rules),
        }

    def _ends_with_abbreviation(self, text: str, match: re.Match[str]) -> bool:
        """Check whether the terminator closes a known abbreviation."""
        if not self._abbreviations_lower:
            return False

        end = match.end()
        while end > match.start() and text[end - 1].isspace():
            end -= 1

        words = text[max(0, end - 24) : end].split()
        if not words:
            return False

        candidates = [words[-1].lstrip("([{\"'“‘«")]
        if len(words) > 1:
            candidates.append(f"{words[-2]} {words[-1]}")
        return any(self.is_abbreviation(candidate) for candidate in candidates)

    def _boundary_filter(self, text: str) -> Callable[[re.Match[str]], bool] | None:  # noqa: ARG002
        """
        Hook for language specific boundary filters.

        Called once per text; the returned predicate receives the terminator
        matches in document order. ``None`` accepts every match.
        """
        return None

    def _build_header(self, match: re.Match[str], rule: HeaderRule) -> SectionHeader:
        groups = match.groupdict()
        title = (groups.get("title") or match.group(0)).strip()
        if rule.level == 0 and groups.get("marks"):
            level = len(groups["marks"])
        else:
            level = max(1, rule.level)
        return SectionHeader(start=match.start(), end=match.end(), text=title, level=level)

    @staticmethod
    def _count_units(text: str | None, boundaries: list[int]) -> int:
        if not text:
            return 0
        count = 0
        previous = 0
        for boundary in boundaries:
            if text[previous:boundary].strip():
                count += 1
            previous = boundary
        return count

    def __repr__(self) -> str:
        """String representation of the profile."""
        return f"{self.__class__.__name__}(code='{self.language_code}', chars_per_token={self.chars_per_token})"


def line_pattern(idiom: str) -> str:
    """Build a header rule matching a whole line that starts with ``idiom``."""
    return rf"^[ \t]*(?P<title>(?:{idiom})[^\n]*?)[ \t]*$"
