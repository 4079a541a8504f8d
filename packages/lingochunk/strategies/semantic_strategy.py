#!/usr/bin/env python3
"""
Semantic chunking strategy.

Groups adjacent sentences while they stay similar to the running mean
embedding of the chunk being built. Embeddings come from an external
similarity oracle.
"""

import asyncio
import logging
from typing import ClassVar

import numpy as np
from numpy.typing import NDArray

from lingochunk.domain.exceptions import SimilarityOracleRequiredError
from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.embedding.base import SimilarityOracle
from lingochunk.languages.base import LanguageProfile
from lingochunk.languages.registry import LanguageProfileRegistry
from lingochunk.strategies.base import BaseChunkingStrategy, ChunkSegment, UnitGroup, UnitRun
from lingochunk.types import ChunkingStrategy

logger = logging.getLogger(__name__)


class SemanticChunkingStrategy(BaseChunkingStrategy):
    """
    Embedding-driven chunking strategy.

    Sentences are embedded in one batch. Each sentence joins the current chunk
    while its similarity to the chunk's mean embedding is at least
    ``semantic_similarity_threshold``; a drop below the threshold closes the
    chunk once it holds ``min_chunk_size`` tokens. A chunk is always closed
    before it would exceed ``max_chunk_size``.
    """

    strategy_type: ClassVar[ChunkingStrategy] = ChunkingStrategy.SEMANTIC
    requires_similarity_oracle: ClassVar[bool] = True

    def __init__(
        self,
        similarity_oracle: SimilarityOracle | None = None,
        registry: LanguageProfileRegistry | None = None,
    ) -> None:
        """
        Initialize the semantic chunking strategy.

        Args:
            similarity_oracle: Oracle providing embeddings and similarity
            registry: Language registry used to resolve profiles
        """
        super().__init__(registry)
        self._oracle = similarity_oracle

    @property
    def similarity_oracle(self) -> SimilarityOracle | None:
        return self._oracle

    async def plan_segments(
        self,
        text: str,
        options: ChunkOptions,
        profile: LanguageProfile,
    ) -> list[ChunkSegment]:
        if self._oracle is None:
            raise SimilarityOracleRequiredError(self.name)

        units = self.sentence_units(text, 0, len(text), profile)
        if not units:
            return []

        run = UnitRun(units)
        if len(units) == 1:
            return self.groups_to_segments(run, [UnitGroup(0, 0, 1)])

        embeddings = await self._oracle.embed_batch([text[u.start : u.end].strip() for u in units])
        await asyncio.sleep(0)

        groups = self._group_by_similarity(run, embeddings, options)
        groups = self.merge_small_groups(run, groups, options)

        segments = self.groups_to_segments(run, groups)
        for segment, group in zip(segments, groups, strict=True):
            members = embeddings[group.first : group.end]
            centroid = members.mean(axis=0)
            segment.embedding = tuple(float(x) for x in centroid)
            segment.quality_score = self._cohesion(members, centroid)

        logger.debug(f"Semantic strategy grouped {len(units)} sentences into {len(segments)} chunks")
        return segments

    def _group_by_similarity(
        self,
        run: UnitRun,
        embeddings: NDArray[np.float32],
        options: ChunkOptions,
    ) -> list[UnitGroup]:
        """Greedy grouping against the running mean embedding."""
        groups: list[UnitGroup] = []
        first = 0
        mean = embeddings[0].astype(np.float64)
        count = 1

        for i in range(1, len(run)):
            too_large = run.tokens(first, i + 1) > options.max_chunk_size
            score = self._oracle.similarity(mean, embeddings[i])
            drifted = score < options.semantic_similarity_threshold and (
                run.tokens(first, i) >= options.min_chunk_size
            )

            if too_large or drifted:
                groups.append(UnitGroup(first, first, i))
                first = i
                mean = embeddings[i].astype(np.float64)
                count = 1
                continue

            mean = (mean * count + embeddings[i]) / (count + 1)
            count += 1

        groups.append(UnitGroup(first, first, len(run)))
        return groups

    def _cohesion(self, members: NDArray[np.float32], centroid: NDArray[np.float32]) -> float:
        """Average member similarity to the centroid mapped to [0, 1]."""
        scores = [self._oracle.similarity(member, centroid) for member in members]
        return float(np.clip((np.mean(scores) + 1.0) / 2.0, 0.0, 1.0))

    def estimate_chunk_count(self, text: str | None, options: ChunkOptions) -> int:
        """Semantic breaks cannot be predicted; estimate from size, bounded by sentences."""
        estimate = super().estimate_chunk_count(text, options)
        if estimate <= 1:
            return estimate
        profile = self.resolve_profile(text or "", options)
        return max(1, min(estimate, profile.count_sentences(text)))
