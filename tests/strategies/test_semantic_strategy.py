#!/usr/bin/env python3
"""Tests for the semantic chunking strategy."""

from unittest.mock import AsyncMock, MagicMock

import numpy as np
import pytest

from lingochunk.domain.exceptions import SimilarityOracleRequiredError
from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.embedding.base import SimilarityOracle, cosine_similarity
from lingochunk.embedding.mock import MockSimilarityOracle
from lingochunk.strategies.semantic_strategy import SemanticChunkingStrategy
from lingochunk.types import ChunkingStrategy


@pytest.fixture()
def options():
    return ChunkOptions(
        strategy=ChunkingStrategy.SEMANTIC,
        target_chunk_size=50,
        min_chunk_size=1,
        max_chunk_size=100,
        overlap_size=0,
        semantic_similarity_threshold=0.5,
        language_code="en",
    )


def stub_oracle(vectors):
    """Oracle returning fixed vectors and cosine similarity."""
    oracle = MagicMock(spec=SimilarityOracle)
    oracle.embed_batch = AsyncMock(return_value=np.asarray(vectors, dtype=np.float32))
    oracle.similarity.side_effect = cosine_similarity
    return oracle


class TestSemanticChunkingStrategy:
    """Test suite for SemanticChunkingStrategy."""

    @pytest.mark.asyncio()
    async def test_similarity_drop_closes_chunk(self, registry, options):
        # Arrange
        oracle = stub_oracle([[1, 0], [1, 0], [0, 1], [0, 1]])
        strategy = SemanticChunkingStrategy(oracle, registry)
        text = "Alpha one here. Alpha two here. Beta three here. Beta four here."

        # Act
        chunks = await strategy.chunk(text, options)

        # Assert
        oracle.embed_batch.assert_awaited_once()
        assert oracle.embed_batch.await_args.args[0] == [
            "Alpha one here.",
            "Alpha two here.",
            "Beta three here.",
            "Beta four here.",
        ]
        assert [c.content for c in chunks] == ["Alpha one here. Alpha two here.", "Beta three here. Beta four here."]
        assert chunks[0].embedding == pytest.approx((1.0, 0.0))
        assert chunks[1].embedding == pytest.approx((0.0, 1.0))
        assert chunks[0].metadata.quality_score == pytest.approx(1.0)

    @pytest.mark.asyncio()
    async def test_minimum_size_delays_the_break(self, registry, options):
        # Arrange
        oracle = stub_oracle([[1, 0], [0, 1], [0, 1]])
        strategy = SemanticChunkingStrategy(oracle, registry)
        options = options.with_changes(min_chunk_size=10, target_chunk_size=50)

        # Act
        chunks = await strategy.chunk("Alpha one here. Beta two here. Beta three here.", options)

        # Assert
        assert len(chunks) == 1

    @pytest.mark.asyncio()
    async def test_maximum_size_closes_similar_chunks(self, registry, sentences):
        # Arrange
        oracle = stub_oracle(np.ones((12, 4)))
        strategy = SemanticChunkingStrategy(oracle, registry)
        options = ChunkOptions(
            strategy=ChunkingStrategy.SEMANTIC,
            target_chunk_size=30,
            min_chunk_size=10,
            max_chunk_size=40,
            language_code="en",
        )

        # Act
        chunks = await strategy.chunk(sentences(12), options)

        # Assert
        assert len(chunks) >= 3
        assert all(chunk.token_count <= 40 for chunk in chunks)

    @pytest.mark.asyncio()
    async def test_topic_shift_with_mock_oracle(self, registry, options):
        # Arrange
        oracle = MockSimilarityOracle(dimension=384)
        strategy = SemanticChunkingStrategy(oracle, registry)
        cats = "Cats cats cats purr loudly. Cats cats cats nap daily. Cats cats cats chase mice."
        stocks = "Stocks stocks stocks fell sharply. Stocks stocks stocks rose later. Stocks stocks stocks trade widely."

        # Act
        chunks = await strategy.chunk(f"{cats} {stocks}", options)

        # Assert
        assert [c.content for c in chunks] == [cats, stocks]
        assert all(c.has_embedding() and len(c.embedding) == 384 for c in chunks)
        assert all(0.0 <= c.metadata.quality_score <= 1.0 for c in chunks)

    @pytest.mark.asyncio()
    async def test_single_sentence_skips_embedding(self, registry, options):
        # Arrange
        oracle = MockSimilarityOracle()
        strategy = SemanticChunkingStrategy(oracle, registry)

        # Act
        chunks = await strategy.chunk("Only one sentence here.", options)

        # Assert
        assert len(chunks) == 1
        assert oracle.calls == 0

    @pytest.mark.asyncio()
    async def test_missing_oracle_is_a_configuration_error(self, registry, options):
        strategy = SemanticChunkingStrategy(registry=registry)

        with pytest.raises(SimilarityOracleRequiredError):
            await strategy.chunk("Some text. More text.", options)

    @pytest.mark.asyncio()
    async def test_blank_text_needs_no_oracle(self, registry, options):
        strategy = SemanticChunkingStrategy(registry=registry)

        assert await strategy.chunk("  ", options) == []


class TestCosineSimilarity:
    """Test suite for cosine_similarity."""

    def test_values(self):
        assert cosine_similarity([1, 0], [1, 0]) == pytest.approx(1.0)
        assert cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)
        assert cosine_similarity([1, 0], [-1, 0]) == pytest.approx(-1.0)

    def test_zero_vector(self):
        assert cosine_similarity([0, 0], [1, 0]) == 0.0

    def test_shape_mismatch(self):
        with pytest.raises(ValueError, match="shapes differ"):
            cosine_similarity([1, 0], [1, 0, 0])

    @pytest.mark.asyncio()
    async def test_mock_oracle_is_deterministic(self):
        # Arrange
        first = MockSimilarityOracle(dimension=32)
        second = MockSimilarityOracle(dimension=32)

        # Act
        a = await first.embed("same words here")
        b = await second.embed("same words here")
        batch = await first.embed_batch(["same words here", "other"])

        # Assert
        assert np.allclose(a, b)
        assert batch.shape == (2, 32)
        assert first.similarity(a, batch[0]) == pytest.approx(1.0)
