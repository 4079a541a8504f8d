#!/usr/bin/env python3
"""
Paragraph chunking strategy.

Accumulates blank-line separated paragraphs into chunks. Paragraphs larger
than the maximum chunk size are handed to the sentence algorithm.
"""

import logging
from typing import ClassVar

from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.languages.base import LanguageProfile, weight_to_tokens
from lingochunk.languages.registry import LanguageProfileRegistry
from lingochunk.strategies.base import BaseChunkingStrategy, ChunkSegment, TextUnit, UnitRun
from lingochunk.strategies.sentence_strategy import SentenceChunkingStrategy
from lingochunk.types import ChunkingStrategy

logger = logging.getLogger(__name__)


class ParagraphChunkingStrategy(BaseChunkingStrategy):
    """
    Paragraph-based chunking strategy.

    With ``preserve_paragraphs`` an oversized paragraph is chunked on its own
    so that no chunk mixes part of it with a neighbouring paragraph. Without
    it, the oversized paragraph's sentences join the regular accumulation.
    """

    strategy_type: ClassVar[ChunkingStrategy] = ChunkingStrategy.PARAGRAPH

    def __init__(self, registry: LanguageProfileRegistry | None = None) -> None:
        super().__init__(registry)
        self._sentences = SentenceChunkingStrategy(self.registry)

    async def plan_segments(
        self,
        text: str,
        options: ChunkOptions,
        profile: LanguageProfile,
    ) -> list[ChunkSegment]:
        paragraphs = self.paragraph_units(text, 0, len(text), profile)
        segments: list[ChunkSegment] = []
        pending: list[TextUnit] = []

        def flush() -> None:
            if pending:
                segments.extend(self._pack(pending, options))
                pending.clear()

        for paragraph in paragraphs:
            if weight_to_tokens(paragraph.weight) <= options.max_chunk_size:
                pending.append(paragraph)
                continue

            if options.preserve_paragraphs:
                flush()
                logger.debug(
                    f"Paragraph at {paragraph.start} exceeds {options.max_chunk_size} tokens, splitting by sentences"
                )
                segments.extend(
                    self._sentences.plan_region(text, paragraph.start, paragraph.end, options, profile)
                )
            else:
                sentences = self.sentence_units(text, paragraph.start, paragraph.end, profile)
                if not options.preserve_sentences:
                    sentences = self.explode_oversized(text, sentences, options, profile)
                pending.extend(sentences)

        flush()
        return segments

    def _pack(self, units: list[TextUnit], options: ChunkOptions) -> list[ChunkSegment]:
        run = UnitRun(list(units))
        groups = self.merge_small_groups(run, self.pack_units(run, options), options)
        return self.groups_to_segments(run, groups)

    def estimate_chunk_count(self, text: str | None, options: ChunkOptions) -> int:
        """Estimate from the average paragraph size."""
        if not text or not text.strip():
            return 0

        profile = self.resolve_profile(text, options)
        total_tokens = profile.estimate_token_count(text)
        if total_tokens <= options.max_chunk_size:
            return 1

        paragraphs = max(1, profile.count_paragraphs(text))
        average = max(1, total_tokens // paragraphs)
        if average >= options.max_chunk_size:
            return options.estimate_chunks(total_tokens)

        per_chunk = max(1, options.max_chunk_size // average)
        return -(-paragraphs // per_chunk)
