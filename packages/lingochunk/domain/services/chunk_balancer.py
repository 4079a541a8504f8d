#!/usr/bin/env python3
"""
Chunk balancer.

Post-processes an already produced, ordered chunk sequence so that chunk sizes
fall within the configured bounds, independent of the strategy that produced
the sequence.
"""

import asyncio
import logging
import uuid
from bisect import bisect_left, bisect_right
from dataclasses import replace

import numpy as np

from lingochunk.domain.entities.chunk import Chunk
from lingochunk.domain.value_objects.balance_stats import ChunkBalanceStats
from lingochunk.domain.value_objects.chunk_metadata import ChunkLocation
from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.languages.base import LanguageProfile
from lingochunk.languages.registry import LanguageProfileRegistry, get_registry
from lingochunk.strategies.base import ChunkSegment
from lingochunk.strategies.sentence_strategy import SentenceChunkingStrategy

logger = logging.getLogger(__name__)

# Joins merged contents when the source text is not available
MERGE_SEPARATOR = "\n\n"

# (offset in chunk content, offset in source text) for each part a chunk was merged from
Anchors = list[tuple[int, int]]


def to_source_offset(anchors: Anchors, offset: int, is_end: bool = False) -> int:
    """
    Map an offset in chunk content to an offset in the source text.

    Args:
        anchors: Part anchors of the chunk, ordered by content offset
        offset: Offset in the chunk content
        is_end: Resolve the offset as the end of the part before it

    Returns:
        Offset in the source text
    """
    starts = [content_offset for content_offset, _ in anchors]
    i = (bisect_left(starts, offset) if is_end else bisect_right(starts, offset)) - 1
    content_offset, source_offset = anchors[max(0, i)]
    return source_offset + offset - content_offset


class ChunkBalancer:
    """
    Two-pass chunk size balancer.

    Pass 1 merges every chunk below ``min_chunk_size`` into its right
    neighbour (the last chunk merges to the left) until no undersized chunk
    remains. Pass 2 re-splits chunks above ``max_chunk_size`` with the
    sentence algorithm. Indices and totals are rewritten afterwards.

    Given the source text, merged content is the source slice the merged
    chunks cover, so every location keeps pointing at its content. Without
    it, contents are joined with a blank line and split pieces are still
    mapped back to their source offsets.
    """

    def __init__(self, registry: LanguageProfileRegistry | None = None) -> None:
        self._registry = registry or get_registry()
        self._sentences = SentenceChunkingStrategy(self._registry)

    async def balance(
        self,
        chunks: list[Chunk],
        options: ChunkOptions,
        profile: LanguageProfile | None = None,
        text: str | None = None,
    ) -> list[Chunk]:
        """
        Rebalance a chunk sequence.

        Args:
            chunks: Ordered chunks, left untouched
            options: Size bounds to enforce
            profile: Profile for token estimates, taken from the chunks' language by default
            text: Source text the chunks were cut from, if available

        Returns:
            A new, re-indexed chunk sequence

        Raises:
            asyncio.CancelledError: If the surrounding task is cancelled
        """
        if not chunks:
            return []

        profile = profile or self._registry.get_profile(chunks[0].metadata.language_code)

        anchors: dict[str, Anchors] = {}
        merged = self._merge_undersized(list(chunks), options, profile, text, anchors)
        await asyncio.sleep(0)

        result: list[Chunk] = []
        for chunk in merged:
            if chunk.token_count > options.max_chunk_size:
                await asyncio.sleep(0)
                result.extend(self._split_oversized(chunk, options, profile, text, anchors.get(chunk.id)))
            else:
                result.append(chunk)

        total = len(result)
        logger.debug(f"Balanced {len(chunks)} chunks into {total}")
        return [chunk.with_position(index, total) for index, chunk in enumerate(result)]

    def calculate_stats(self, chunks: list[Chunk], options: ChunkOptions | None = None) -> ChunkBalanceStats:
        """
        Summarize the token-size distribution of a chunk sequence.

        Args:
            chunks: Chunks to analyze, never mutated
            options: Bounds used to count under/oversized chunks; omitted means no counting

        Returns:
            Balance statistics
        """
        if not chunks:
            return ChunkBalanceStats()

        counts = np.array([chunk.token_count for chunk in chunks], dtype=np.float64)
        undersized = oversized = 0
        if options is not None:
            undersized = int(np.sum(counts < options.min_chunk_size))
            oversized = int(np.sum(counts > options.max_chunk_size))

        return ChunkBalanceStats(
            chunk_count=len(chunks),
            min_token_count=int(counts.min()),
            max_token_count=int(counts.max()),
            average_token_count=float(counts.mean()),
            standard_deviation=float(counts.std()),
            undersized_chunk_count=undersized,
            oversized_chunk_count=oversized,
        )

    def _merge_undersized(
        self,
        chunks: list[Chunk],
        options: ChunkOptions,
        profile: LanguageProfile,
        text: str | None,
        anchors: dict[str, Anchors],
    ) -> list[Chunk]:
        result: list[Chunk] = []
        current = chunks[0]
        for following in chunks[1:]:
            if current.token_count < options.min_chunk_size:
                current = self._merge(current, following, profile, text, anchors)
            else:
                result.append(current)
                current = following

        if current.token_count < options.min_chunk_size and result:
            current = self._merge(result.pop(), current, profile, text, anchors)
        result.append(current)
        return result

    def merge(self, left: Chunk, right: Chunk, profile: LanguageProfile, text: str | None = None) -> Chunk:
        """
        Merge two adjacent chunks.

        Content carried over from ``left`` as overlap is not repeated. The
        merged chunk keeps the left chunk's id and hierarchy metadata.

        Args:
            left: Earlier chunk
            right: Following chunk
            profile: Profile for the token estimate
            text: Source text; when given, the merged content is its slice

        Returns:
            The merged chunk, not yet placed in a sequence
        """
        return self._merge(left, right, profile, text, {})

    def _merge(
        self,
        left: Chunk,
        right: Chunk,
        profile: LanguageProfile,
        text: str | None,
        anchors: dict[str, Anchors],
    ) -> Chunk:
        left_location, right_location = left.location, right.location
        left_anchors = anchors.pop(left.id, None) or [(0, left_location.start_position)]
        right_anchors = anchors.pop(right.id, None) or [(0, right_location.start_position)]

        if (
            text is not None
            and left_location.start_position <= right_location.start_position
            and self._mirrors_source(left, text)
            and self._mirrors_source(right, text)
        ):
            start = left_location.start_position
            content = text[start : max(left_location.end_position, right_location.end_position)]
            anchors[left.id] = [(0, start)]
        else:
            content, anchors[left.id] = self._join(left, right, left_anchors, right_anchors)

        metadata = replace(
            left.metadata,
            estimated_token_count=profile.estimate_token_count(content),
            ends_at_sentence_boundary=right.metadata.ends_at_sentence_boundary,
            contains_section_header=left.metadata.contains_section_header or right.metadata.contains_section_header,
            custom=dict(left.metadata.custom),
        )
        location = replace(
            left_location,
            end_position=max(left_location.end_position, right_location.end_position),
            end_line=max(left_location.end_line, right_location.end_line),
        )

        logger.debug(f"Merged chunk {right.index} into chunk {left.index} ({metadata.estimated_token_count} tokens)")
        return Chunk(
            content=content,
            index=left.index,
            total_chunks=0,
            metadata=metadata,
            location=location,
            chunk_id=left.id,
        )

    @staticmethod
    def _join(left: Chunk, right: Chunk, left_anchors: Anchors, right_anchors: Anchors) -> tuple[str, Anchors]:
        """Join two contents with the separator, dropping the overlap the right one repeats."""
        right_content = right.content
        overlap = right.metadata.overlap_from_previous
        if 0 < overlap < len(right_content):
            right_content = right_content[overlap:].lstrip()
        if not right_content:
            return left.content, left_anchors

        skipped = len(right.content) - len(right_content)
        offset = len(left.content) + len(MERGE_SEPARATOR)
        joined = [(offset, to_source_offset(right_anchors, skipped))]
        joined.extend((offset + c - skipped, s) for c, s in right_anchors if c > skipped)
        return f"{left.content}{MERGE_SEPARATOR}{right_content}", left_anchors + joined

    @staticmethod
    def _mirrors_source(chunk: Chunk, text: str) -> bool:
        location = chunk.location
        return text[location.start_position : location.end_position] == chunk.content

    def _split_oversized(
        self,
        chunk: Chunk,
        options: ChunkOptions,
        profile: LanguageProfile,
        text: str | None = None,
        anchors: Anchors | None = None,
    ) -> list[Chunk]:
        """Re-split a chunk with the sentence algorithm, cutting at words if a sentence alone is too large."""
        content = chunk.content
        segments = self._sentences.plan_region(content, 0, len(content), options, profile, overlap=0)
        if len(segments) <= 1:
            segments = self._sentences.plan_region(
                content, 0, len(content), options.with_changes(preserve_sentences=False), profile, overlap=0
            )
        if len(segments) <= 1:
            return [chunk]

        anchors = anchors or [(0, chunk.location.start_position)]
        logger.debug(f"Split oversized chunk {chunk.index} ({chunk.token_count} tokens) into {len(segments)}")
        return [self._piece(chunk, segment, i, profile, text, anchors) for i, segment in enumerate(segments)]

    def _piece(
        self,
        chunk: Chunk,
        segment: ChunkSegment,
        position: int,
        profile: LanguageProfile,
        text: str | None,
        anchors: Anchors,
    ) -> Chunk:
        content = chunk.content
        start, end = segment.start, segment.end
        while start < end and content[start].isspace():
            start += 1
        while end > start and content[end - 1].isspace():
            end -= 1

        piece = content[start:end]
        origin = chunk.location
        absolute_start = min(to_source_offset(anchors, start), origin.end_position)
        absolute_end = min(max(to_source_offset(anchors, end, is_end=True), absolute_start), origin.end_position)

        if text is not None:
            start_line = origin.start_line + text.count("\n", origin.start_position, absolute_start)
            last = max(absolute_start, absolute_end - 1)
            end_line = origin.start_line + text.count("\n", origin.start_position, last)
        else:
            # Counted in the content, which may hold merge separators
            start_line = min(origin.end_line, origin.start_line + content.count("\n", 0, start))
            end_line = max(start_line, min(origin.end_line, origin.start_line + content.count("\n", 0, end)))

        metadata = replace(
            chunk.metadata,
            estimated_token_count=profile.estimate_token_count(piece),
            starts_at_sentence_boundary=segment.starts_at_sentence_boundary,
            ends_at_sentence_boundary=segment.ends_at_sentence_boundary,
            contains_section_header=bool(profile.find_section_headers(piece)),
            overlap_from_previous=chunk.metadata.overlap_from_previous if position == 0 else 0,
            child_ids=chunk.metadata.child_ids if position == 0 else (),
            custom=dict(chunk.metadata.custom),
        )
        location = ChunkLocation(
            start_position=absolute_start,
            end_position=absolute_end,
            start_line=start_line,
            end_line=end_line,
            section_path=origin.section_path,
        )
        return Chunk(
            content=piece,
            index=chunk.index,
            total_chunks=0,
            metadata=metadata,
            location=location,
            # The first piece keeps the id so references to the chunk stay valid
            chunk_id=chunk.id if position == 0 else uuid.uuid4().hex,
        )
