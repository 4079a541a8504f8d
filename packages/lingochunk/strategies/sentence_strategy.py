#!/usr/bin/env python3
"""
Sentence chunking strategy.

Accumulates sentences detected by the language profile into chunks bounded by
the maximum chunk size. The same algorithm is reused by the paragraph,
hierarchical and balancing code paths to re-split oversized text without
cutting sentences.
"""

import logging
from typing import ClassVar

from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.languages.base import LanguageProfile
from lingochunk.strategies.base import BaseChunkingStrategy, ChunkSegment, UnitRun
from lingochunk.types import ChunkingStrategy

logger = logging.getLogger(__name__)


class SentenceChunkingStrategy(BaseChunkingStrategy):
    """
    Sentence-based chunking strategy.

    A chunk is flushed when appending the next sentence would exceed
    ``max_chunk_size``. A sentence that alone exceeds the maximum becomes its
    own chunk when ``preserve_sentences`` is set, and is cut at word
    boundaries otherwise. Chunks left below ``min_chunk_size`` are merged with
    a neighbour when the result still fits.
    """

    strategy_type: ClassVar[ChunkingStrategy] = ChunkingStrategy.SENTENCE

    async def plan_segments(
        self,
        text: str,
        options: ChunkOptions,
        profile: LanguageProfile,
    ) -> list[ChunkSegment]:
        return self.plan_region(text, 0, len(text), options, profile)

    def plan_region(
        self,
        text: str,
        start: int,
        end: int,
        options: ChunkOptions,
        profile: LanguageProfile,
        overlap: int | None = None,
    ) -> list[ChunkSegment]:
        """
        Plan sentence chunks for ``text[start:end]``.

        Args:
            text: Full text; positions in the result refer to it
            start: Region start offset
            end: Region end offset
            options: Chunking options
            profile: Language profile
            overlap: Overlap in tokens, ``options.effective_overlap`` by default

        Returns:
            Segments covering the non-blank sentences of the region
        """
        units = self.sentence_units(text, start, end, profile)
        if not units:
            return []

        if not options.preserve_sentences:
            units = self.explode_oversized(text, units, options, profile)

        run = UnitRun(units)
        groups = self.pack_units(run, options, overlap)
        groups = self.merge_small_groups(run, groups, options)

        logger.debug(f"Packed {len(units)} sentences into {len(groups)} chunks")
        return self.groups_to_segments(run, groups)

    def estimate_chunk_count(self, text: str | None, options: ChunkOptions) -> int:
        """Estimate based on total tokens, never more than the number of sentences."""
        estimate = super().estimate_chunk_count(text, options)
        if estimate <= 1 or not options.preserve_sentences:
            return estimate
        profile = self.resolve_profile(text or "", options)
        return max(1, min(estimate, profile.count_sentences(text)))
