#!/usr/bin/env python3
"""
Chunking strategy base class.

This module provides the abstract base class for all chunking strategies.
Strategies first plan their output as spans over the original text
(``ChunkSegment``) and only then materialize ``Chunk`` records, which lets
the streaming API build one chunk at a time from a lightweight plan.
"""

import asyncio
import logging
import re
import uuid
from abc import ABC, abstractmethod
from bisect import bisect_left
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar

from lingochunk.domain.entities.chunk import Chunk
from lingochunk.domain.value_objects.chunk_metadata import ChunkLocation, ChunkMetadata
from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.languages.base import LanguageProfile, weight_to_tokens
from lingochunk.languages.registry import LanguageProfileRegistry, get_registry
from lingochunk.types import ChunkingStrategy

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"\S+")
_BLANK_LINES_RE = re.compile(r"\n\s*\n")


@dataclass(frozen=True)
class TextUnit:
    """A sentence, paragraph or word span of the original text with its token weight."""

    start: int
    end: int
    weight: float
    sentence_start: bool = True
    sentence_end: bool = True


@dataclass
class ChunkSegment:
    """
    A planned chunk.

    ``start``/``end`` delimit the chunk in the original text, including any
    overlap carried from the previous chunk; ``fresh_start`` is where the
    content not seen in the previous chunk begins.
    """

    start: int
    end: int
    fresh_start: int | None = None
    starts_at_sentence_boundary: bool = True
    ends_at_sentence_boundary: bool = True
    chunk_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    # Hierarchical chunking
    hierarchy_level: int | None = None
    parent_id: str | None = None
    section_path: str = ""
    section_title: str | None = None
    child_ids: list[str] = field(default_factory=list)

    quality_score: float | None = None
    embedding: tuple[float, ...] | None = None

    @property
    def overlap_start(self) -> int:
        return self.start if self.fresh_start is None else self.fresh_start


@dataclass(frozen=True)
class UnitGroup:
    """Indices into a unit list: ``[first, end)`` with fresh units from ``fresh``."""

    first: int
    fresh: int
    end: int


class UnitRun:
    """Units with prefix sums so that any range weight is O(1)."""

    def __init__(self, units: list[TextUnit]) -> None:
        self.units = units
        self._prefix = [0.0]
        for unit in units:
            self._prefix.append(self._prefix[-1] + unit.weight)

    def __len__(self) -> int:
        return len(self.units)

    def weight(self, first: int, end: int) -> float:
        return self._prefix[end] - self._prefix[first]

    def tokens(self, first: int, end: int) -> int:
        return weight_to_tokens(self.weight(first, end))


def normalize_whitespace(text: str) -> str:
    """Collapse blank-line runs to one blank line and other whitespace to a single space."""
    paragraphs = _BLANK_LINES_RE.split(text)
    return "\n\n".join(" ".join(p.split()) for p in paragraphs if p.strip())


class ChunkBuilder:
    """Materializes chunk segments of one text into ``Chunk`` records."""

    def __init__(
        self,
        text: str,
        profile: LanguageProfile,
        options: ChunkOptions,
        strategy: ChunkingStrategy,
    ) -> None:
        self._text = text
        self._profile = profile
        self._options = options
        self._strategy = strategy
        self._newlines = [m.start() for m in re.finditer("\n", text)]
        self._created_at = datetime.now(UTC)

    def line_of(self, position: int) -> int:
        """1-based line number of a character offset."""
        return bisect_left(self._newlines, position) + 1

    def span(self, segment: ChunkSegment) -> tuple[int, int]:
        """Chunk span after optional trimming."""
        start, end = segment.start, segment.end
        if self._options.trim_whitespace:
            while start < end and self._text[start].isspace():
                start += 1
            while end > start and self._text[end - 1].isspace():
                end -= 1
        return start, end

    def build(self, segment: ChunkSegment, index: int, total: int) -> Chunk:
        """
        Create a chunk from a segment.

        Args:
            segment: Planned segment
            index: Position in the final sequence
            total: Length of the final sequence

        Returns:
            The materialized chunk
        """
        start, end = self.span(segment)
        content = self._text[start:end]
        if self._options.normalize_whitespace:
            content = normalize_whitespace(content)

        include = self._options.include_metadata
        metadata = ChunkMetadata(
            estimated_token_count=self._profile.estimate_token_count(content),
            strategy=self._strategy,
            language_code=self._profile.language_code,
            starts_at_sentence_boundary=include and segment.starts_at_sentence_boundary,
            ends_at_sentence_boundary=include and segment.ends_at_sentence_boundary,
            contains_section_header=include and bool(self._profile.find_section_headers(content)),
            overlap_from_previous=max(0, segment.overlap_start - start),
            quality_score=segment.quality_score if include else None,
            hierarchy_level=segment.hierarchy_level,
            parent_id=segment.parent_id,
            section_title=segment.section_title,
            child_ids=tuple(segment.child_ids),
            created_at=self._created_at,
        )
        location = ChunkLocation(
            start_position=start,
            end_position=end,
            start_line=self.line_of(start),
            end_line=self.line_of(max(start, end - 1)),
            section_path=segment.section_path,
        )
        return Chunk(
            content=content,
            index=index,
            total_chunks=total,
            metadata=metadata,
            location=location,
            chunk_id=segment.chunk_id,
            embedding=segment.embedding,
        )


class BaseChunkingStrategy(ABC):
    """
    Abstract base class for all chunking strategies.

    Strategies are stateless: every call receives its text, options and
    language profile, so one instance can serve concurrent calls.
    """

    strategy_type: ClassVar[ChunkingStrategy]
    requires_similarity_oracle: ClassVar[bool] = False

    def __init__(self, registry: LanguageProfileRegistry | None = None) -> None:
        """
        Initialize the strategy.

        Args:
            registry: Language registry used to resolve profiles
        """
        self._registry = registry or get_registry()

    @property
    def name(self) -> str:
        """Get the strategy name."""
        return self.strategy_type.value

    @property
    def registry(self) -> LanguageProfileRegistry:
        return self._registry

    def resolve_profile(self, text: str, options: ChunkOptions) -> LanguageProfile:
        """Explicit language code first, script detection otherwise."""
        if options.language_code:
            return self._registry.get_profile(options.language_code)
        return self._registry.get_profile_for_text(text)

    @abstractmethod
    async def plan_segments(
        self,
        text: str,
        options: ChunkOptions,
        profile: LanguageProfile,
    ) -> list[ChunkSegment]:
        """
        Plan the chunks of a text.

        Args:
            text: Non-blank text to chunk
            options: Chunking options
            profile: Language profile for boundary detection

        Returns:
            Ordered segments over ``text``
        """

    async def chunk(
        self,
        text: str | None,
        options: ChunkOptions,
        progress_callback: Callable[[float], None] | None = None,
        profile: LanguageProfile | None = None,
    ) -> list[Chunk]:
        """
        Apply the strategy to break text into chunks.

        Args:
            text: The text to chunk
            options: Chunking options
            progress_callback: Optional callback receiving progress (0-100)
            profile: Language profile, resolved from options or text when omitted

        Returns:
            Ordered chunks; empty for empty or whitespace-only text

        Raises:
            asyncio.CancelledError: If the surrounding task is cancelled
        """
        return [chunk async for chunk in self.stream(text, options, progress_callback, profile)]

    async def stream(
        self,
        text: str | None,
        options: ChunkOptions,
        progress_callback: Callable[[float], None] | None = None,
        profile: LanguageProfile | None = None,
    ) -> AsyncIterator[Chunk]:
        """
        Yield chunks one at a time.

        The plan is computed up front; chunk records are created lazily, one
        per pull, with a cancellation checkpoint after each.
        """
        if not text or not text.strip():
            return

        profile = profile or self.resolve_profile(text, options)
        segments = await self.plan_segments(text, options, profile)
        segments = [s for s in segments if s.end > s.start and text[s.start : s.end].strip()]

        logger.debug(
            f"{self.name} strategy planned {len(segments)} chunks for {len(text)} characters "
            f"(language: {profile.language_code})"
        )

        builder = ChunkBuilder(text, profile, options, self.strategy_type)
        total = len(segments)
        for index, segment in enumerate(segments):
            yield builder.build(segment, index, total)
            if progress_callback:
                progress_callback((index + 1) / total * 100.0)
            await asyncio.sleep(0)

    def estimate_chunk_count(self, text: str | None, options: ChunkOptions) -> int:
        """
        Estimate the number of chunks without materializing them.

        Args:
            text: Text to estimate
            options: Chunking options

        Returns:
            Estimated chunk count, 0 for blank text
        """
        if not text or not text.strip():
            return 0
        profile = self.resolve_profile(text, options)
        return options.estimate_chunks(profile.estimate_token_count(text))

    # Unit helpers shared by the strategies

    def units_from_boundaries(
        self,
        text: str,
        boundaries: list[int],
        profile: LanguageProfile,
        offset: int = 0,
    ) -> list[TextUnit]:
        """
        Turn boundary offsets into non-blank units.

        Args:
            text: Text the boundaries refer to
            boundaries: Ordered end offsets within ``text``
            profile: Profile used to weigh units
            offset: Added to every position, for texts cut from a larger document
        """
        units: list[TextUnit] = []
        previous = 0
        for boundary in boundaries:
            piece = text[previous:boundary]
            if piece.strip():
                units.append(TextUnit(previous + offset, boundary + offset, profile.token_weight(piece)))
            previous = boundary
        return units

    def sentence_units(self, text: str, start: int, end: int, profile: LanguageProfile) -> list[TextUnit]:
        """Sentence units of ``text[start:end]`` with positions in ``text``."""
        region = text[start:end]
        return self.units_from_boundaries(region, profile.find_sentence_boundaries(region), profile, start)

    def paragraph_units(self, text: str, start: int, end: int, profile: LanguageProfile) -> list[TextUnit]:
        """Paragraph units of ``text[start:end]`` with positions in ``text``."""
        region = text[start:end]
        return self.units_from_boundaries(region, profile.find_paragraph_boundaries(region), profile, start)

    def word_units(self, text: str, unit: TextUnit, profile: LanguageProfile) -> list[TextUnit]:
        """Split a unit into whitespace-delimited word units."""
        matches = list(_WORD_RE.finditer(text, unit.start, unit.end))
        last = len(matches) - 1
        return [
            TextUnit(
                m.start(),
                m.end(),
                profile.token_weight(m.group(0)),
                sentence_start=unit.sentence_start and i == 0,
                sentence_end=unit.sentence_end and i == last,
            )
            for i, m in enumerate(matches)
        ]

    def explode_oversized(
        self,
        text: str,
        units: list[TextUnit],
        options: ChunkOptions,
        profile: LanguageProfile,
    ) -> list[TextUnit]:
        """Replace units larger than the maximum chunk size by their words."""
        result: list[TextUnit] = []
        for unit in units:
            if weight_to_tokens(unit.weight) > options.max_chunk_size:
                result.extend(self.word_units(text, unit, profile))
            else:
                result.append(unit)
        return result

    def pack_units(self, run: UnitRun, options: ChunkOptions, overlap: int | None = None) -> list[UnitGroup]:
        """
        Greedily accumulate units into groups bounded by the maximum size.

        A group is flushed when the next unit would push it past
        ``max_chunk_size``. A single unit larger than the maximum forms its own
        group. With overlap, trailing units of the flushed group worth at most
        ``overlap`` tokens are carried into the next group; carried units never
        include the first fresh unit of the flushed group.

        Args:
            run: Units to pack
            options: Chunking options
            overlap: Overlap in tokens, ``options.effective_overlap`` by default

        Returns:
            Groups in document order
        """
        overlap = options.effective_overlap if overlap is None else overlap
        groups: list[UnitGroup] = []
        n = len(run)
        first = fresh = i = 0

        while i < n:
            if i > first and run.tokens(first, i + 1) > options.max_chunk_size:
                if fresh == i:
                    # Only carried-over units in the buffer: drop them instead of emitting a duplicate
                    first = i
                    continue
                groups.append(UnitGroup(first, fresh, i))
                first = self._overlap_start(run, fresh, i, overlap)
                fresh = i
                continue
            i += 1

        if fresh < n:
            groups.append(UnitGroup(first, fresh, n))
        return groups

    def merge_small_groups(self, run: UnitRun, groups: list[UnitGroup], options: ChunkOptions) -> list[UnitGroup]:
        """
        Merge groups below ``min_chunk_size`` with their right neighbour.

        A merge only happens when the combined group stays within
        ``max_chunk_size``; a trailing undersized group is folded into the
        previous one under the same condition.
        """
        if len(groups) <= 1:
            return groups

        result: list[UnitGroup] = []
        pending: UnitGroup | None = None

        for group in groups:
            if pending is None:
                if run.tokens(group.first, group.end) < options.min_chunk_size:
                    pending = group
                else:
                    result.append(group)
                continue

            merged = UnitGroup(pending.first, pending.fresh, group.end)
            if run.tokens(merged.first, merged.end) <= options.max_chunk_size:
                if run.tokens(merged.first, merged.end) < options.min_chunk_size:
                    pending = merged
                else:
                    result.append(merged)
                    pending = None
                continue

            result.append(pending)
            if run.tokens(group.first, group.end) < options.min_chunk_size:
                pending = group
            else:
                result.append(group)
                pending = None

        if pending is not None:
            if result and run.tokens(result[-1].first, pending.end) <= options.max_chunk_size:
                previous = result.pop()
                result.append(UnitGroup(previous.first, previous.fresh, pending.end))
            else:
                result.append(pending)

        return result

    def groups_to_segments(self, run: UnitRun, groups: list[UnitGroup]) -> list[ChunkSegment]:
        """Convert unit groups into chunk segments."""
        segments: list[ChunkSegment] = []
        for group in groups:
            first_unit = run.units[group.first]
            last_unit = run.units[group.end - 1]
            segments.append(
                ChunkSegment(
                    start=first_unit.start,
                    end=last_unit.end,
                    fresh_start=run.units[group.fresh].start,
                    starts_at_sentence_boundary=first_unit.sentence_start,
                    ends_at_sentence_boundary=last_unit.sentence_end,
                )
            )
        return segments

    @staticmethod
    def _overlap_start(run: UnitRun, fresh: int, end: int, overlap: int) -> int:
        """First unit index of the trailing overlap of group ``[.., end)``."""
        if overlap <= 0:
            return end
        k = end
        while k - 1 > fresh and run.tokens(k - 1, end) <= overlap:
            k -= 1
        return k

    def __repr__(self) -> str:
        """String representation of the strategy."""
        return f"{self.__class__.__name__}(name='{self.name}')"
