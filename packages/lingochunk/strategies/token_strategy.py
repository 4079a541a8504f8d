#!/usr/bin/env python3
"""
Token chunking strategy.

Accumulates whitespace-delimited words until the target chunk size is reached,
optionally snapping the cut back to the nearest sentence end.
"""

import logging
from bisect import bisect_right
from typing import ClassVar

from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.languages.base import LanguageProfile
from lingochunk.strategies.base import (
    BaseChunkingStrategy,
    ChunkSegment,
    TextUnit,
    UnitGroup,
    UnitRun,
)
from lingochunk.types import ChunkingStrategy

logger = logging.getLogger(__name__)


class TokenChunkingStrategy(BaseChunkingStrategy):
    """
    Fixed-size token chunking strategy.

    Chunks are flushed once they reach ``target_chunk_size`` and never exceed
    ``max_chunk_size`` (unless a single word does). Overlap re-includes the
    trailing words of the previous chunk verbatim, so with overlap enabled the
    chunks deliberately do not partition the text.
    """

    strategy_type: ClassVar[ChunkingStrategy] = ChunkingStrategy.TOKEN

    async def plan_segments(
        self,
        text: str,
        options: ChunkOptions,
        profile: LanguageProfile,
    ) -> list[ChunkSegment]:
        words = self._words(text, profile)
        if not words:
            return []

        run = UnitRun(words)
        n = len(run)
        if run.tokens(0, n) <= options.max_chunk_size:
            return self.groups_to_segments(run, [UnitGroup(0, 0, n)])

        overlap = options.effective_overlap
        groups: list[UnitGroup] = []
        first = fresh = 0

        while fresh < n:
            end = fresh
            while end < n:
                if end > first and run.tokens(first, end + 1) > options.max_chunk_size:
                    break
                end += 1
                if run.tokens(first, end) >= options.target_chunk_size:
                    break

            if end == fresh:
                # The carried-over words leave no room for the next word
                first = fresh
                continue

            cut = end
            if options.preserve_sentences and end < n:
                cut = self._snap_to_sentence(run, first, fresh, end, options.min_chunk_size)

            groups.append(UnitGroup(first, fresh, cut))
            if cut >= n:
                break

            first = self._overlap_start(run, fresh, cut, overlap)
            fresh = cut

        logger.debug(f"Token strategy cut {n} words into {len(groups)} chunks")
        return self.groups_to_segments(run, groups)

    def _words(self, text: str, profile: LanguageProfile) -> list[TextUnit]:
        """Word units flagged with the sentence boundaries found by the profile."""
        whole = TextUnit(0, len(text), profile.token_weight(text))
        words = self.word_units(text, whole, profile)
        boundaries = profile.find_sentence_boundaries(text)

        flagged: list[TextUnit] = []
        previous_end = True
        for i, word in enumerate(words):
            next_start = words[i + 1].start if i + 1 < len(words) else len(text)
            position = bisect_right(boundaries, word.start)
            ends = position < len(boundaries) and boundaries[position] <= next_start
            flagged.append(TextUnit(word.start, word.end, word.weight, previous_end, ends))
            previous_end = ends
        return flagged

    @staticmethod
    def _snap_to_sentence(run: UnitRun, first: int, fresh: int, end: int, min_size: int) -> int:
        """
        Move the cut back to the closest sentence end.

        The raw cut is kept when no sentence ends inside the fresh words or
        when snapping would leave the chunk below ``min_size``.
        """
        for k in range(end, fresh, -1):
            if run.units[k - 1].sentence_end:
                if run.tokens(first, k) >= min_size:
                    return k
                break
        return end
