#!/usr/bin/env python3
"""Tests for the ChunkBalancer service and balance statistics."""

import math

import pytest

from lingochunk.domain.services.chunk_balancer import ChunkBalancer
from lingochunk.domain.value_objects.balance_stats import ChunkBalanceStats
from lingochunk.domain.value_objects.chunk_options import ChunkOptions


@pytest.fixture()
def balancer(registry):
    return ChunkBalancer(registry)


@pytest.fixture()
def options():
    return ChunkOptions(
        target_chunk_size=50,
        min_chunk_size=20,
        max_chunk_size=100,
        overlap_size=0,
        language_code="en",
    )


class TestChunkBalancer:
    """Test suite for ChunkBalancer.balance."""

    @pytest.mark.asyncio()
    async def test_merges_small_chunks_and_splits_large_one(self, balancer, options, chunk_factory, sentences):
        """Token counts [5, 5, ~200] become chunks within the maximum, the small ones merged."""
        # Arrange
        first = chunk_factory("Short intro text here.", index=0, total_chunks=3)
        second = chunk_factory("Another brief note.", index=1, total_chunks=3, start=30)
        third = chunk_factory(sentences(22), index=2, total_chunks=3, start=60)
        assert (first.token_count, second.token_count) == (5, 5)
        assert third.token_count > 2 * options.max_chunk_size - 10

        # Act
        result = await balancer.balance([first, second, third], options)

        # Assert
        assert len(result) >= 2
        assert all(chunk.token_count <= options.max_chunk_size for chunk in result)
        assert "Short intro text here." in result[0].content
        assert "Another brief note." in result[0].content
        assert result[0].token_count >= options.min_chunk_size
        assert [chunk.index for chunk in result] == list(range(len(result)))
        assert all(chunk.total_chunks == len(result) for chunk in result)

    @pytest.mark.asyncio()
    async def test_input_is_not_mutated(self, balancer, options, chunk_factory):
        chunks = [chunk_factory("Tiny.", 0, 2), chunk_factory("Also tiny.", 1, 2, start=6)]

        await balancer.balance(chunks, options)

        assert [chunk.content for chunk in chunks] == ["Tiny.", "Also tiny."]
        assert [chunk.total_chunks for chunk in chunks] == [2, 2]

    @pytest.mark.asyncio()
    async def test_trailing_small_chunk_merges_left(self, balancer, options, chunk_factory):
        # Arrange
        chunks = [
            chunk_factory("x" * 120, index=0, total_chunks=2),
            chunk_factory("The end.", index=1, total_chunks=2, start=121),
        ]

        # Act
        result = await balancer.balance(chunks, options)

        # Assert
        assert len(result) == 1
        assert result[0].content == "x" * 120 + "\n\nThe end."
        assert result[0].id == chunks[0].id
        assert result[0].location.end_position == chunks[1].location.end_position

    @pytest.mark.asyncio()
    async def test_merge_keeps_earlier_hierarchy_metadata(self, balancer, options, chunk_factory):
        # Arrange
        chunks = [
            chunk_factory("Intro.", 0, 2, hierarchy_level=1, parent_id=None, section_title="Intro"),
            chunk_factory("y" * 100, 1, 2, start=7, hierarchy_level=2, parent_id="p", section_title="Body"),
        ]

        # Act
        result = await balancer.balance(chunks, options)

        # Assert
        assert len(result) == 1
        assert result[0].metadata.hierarchy_level == 1
        assert result[0].metadata.section_title == "Intro"

    def test_merge_does_not_repeat_overlap(self, balancer, registry, chunk_factory):
        # Arrange
        left = chunk_factory("Alpha beta gamma delta.", 0, 2)
        right = chunk_factory("delta. Epsilon zeta.", 1, 2, start=17, overlap_from_previous=7)

        # Act
        merged = balancer.merge(left, right, registry.get_profile("en"))

        # Assert
        assert merged.content == "Alpha beta gamma delta.\n\nEpsilon zeta."

    @pytest.mark.asyncio()
    async def test_balanced_sequence_is_only_reindexed(self, balancer, options, chunk_factory):
        # Arrange
        chunks = [chunk_factory("z" * 120, index=i, total_chunks=0, start=i * 121) for i in range(4)]

        # Act
        result = await balancer.balance(chunks, options)

        # Assert
        assert [chunk.id for chunk in result] == [chunk.id for chunk in chunks]
        assert [(c.index, c.total_chunks) for c in result] == [(i, 4) for i in range(4)]
        assert balancer.calculate_stats(result, options).is_balanced

    @pytest.mark.asyncio()
    async def test_single_oversized_sentence_is_cut_at_words(self, balancer, options, chunk_factory):
        # Arrange
        text = " ".join(f"word{i}" for i in range(150))
        chunk = chunk_factory(text)
        assert chunk.token_count > options.max_chunk_size

        # Act
        result = await balancer.balance([chunk], options)

        # Assert
        assert len(result) >= 2
        assert all(c.token_count <= options.max_chunk_size for c in result)
        assert result[0].id == chunk.id
        assert " ".join(c.content for c in result).split() == text.split()

    @pytest.mark.asyncio()
    async def test_empty_sequence(self, balancer, options):
        assert await balancer.balance([], options) == []


class TestChunkBalancerSourceOffsets:
    """Locations of balanced chunks keep pointing at their content in the source text."""

    @pytest.fixture()
    def tight_options(self):
        return ChunkOptions(
            target_chunk_size=15,
            min_chunk_size=15,
            max_chunk_size=15,
            overlap_size=0,
            language_code="en",
        )

    @pytest.mark.asyncio()
    @pytest.mark.parametrize("with_text", [True, False])
    async def test_merged_then_split_chunks_map_back_to_source(
        self, balancer, tight_options, chunk_factory, sentences, with_text
    ):
        """Pairs merged above the maximum are re-split into pieces located exactly in the text."""
        # Arrange
        text = sentences(6)
        parts = text.split(" This")
        parts = [parts[0]] + [f"This{part}" for part in parts[1:]]
        chunks = [
            chunk_factory(part, index=i, total_chunks=len(parts), start=text.index(part))
            for i, part in enumerate(parts)
        ]
        assert all(chunk.token_count < tight_options.min_chunk_size for chunk in chunks)

        # Act
        result = await balancer.balance(chunks, tight_options, text=text if with_text else None)

        # Assert
        assert [chunk.content for chunk in result] == parts
        for chunk in result:
            assert text[chunk.location.start_position : chunk.location.end_position] == chunk.content

    @pytest.mark.asyncio()
    async def test_merge_uses_source_slice(self, balancer, options, chunk_factory):
        # Arrange
        text = "Tiny. Also tiny."
        chunks = [chunk_factory("Tiny.", 0, 2), chunk_factory("Also tiny.", 1, 2, start=6)]

        # Act
        result = await balancer.balance(chunks, options, text=text)

        # Assert
        assert len(result) == 1
        assert result[0].content == text
        assert (result[0].location.start_position, result[0].location.end_position) == (0, len(text))

    def test_overlapping_merge_uses_source_slice(self, balancer, registry, chunk_factory):
        # Arrange
        text = "Alpha beta gamma delta. Epsilon zeta."
        left = chunk_factory("Alpha beta gamma delta.", 0, 2)
        right = chunk_factory("delta. Epsilon zeta.", 1, 2, start=17, overlap_from_previous=7)

        # Act
        merged = balancer.merge(left, right, registry.get_profile("en"), text=text)

        # Assert
        assert merged.content == text
        assert merged.location.end_position == len(text)

    def test_chunks_not_matching_the_text_are_joined(self, balancer, registry, chunk_factory):
        """Chunks whose content was rewritten fall back to the blank-line join."""
        left = chunk_factory("Alpha.", 0, 2)
        right = chunk_factory("Beta.", 1, 2, start=7)

        merged = balancer.merge(left, right, registry.get_profile("en"), text="alpha. beta.")

        assert merged.content == "Alpha.\n\nBeta."


class TestChunkBalancerMetadata:
    """Balanced chunks never share mutable metadata with their inputs."""

    @pytest.mark.asyncio()
    async def test_merged_chunk_copies_custom_metadata(self, balancer, options, chunk_factory):
        # Arrange
        chunks = [
            chunk_factory("Tiny.", 0, 2, custom={"source": "a"}),
            chunk_factory("Also tiny.", 1, 2, start=6, custom={"source": "b"}),
        ]

        # Act
        result = await balancer.balance(chunks, options)

        # Assert
        assert result[0].metadata.custom == {"source": "a"}
        assert result[0].metadata.custom is not chunks[0].metadata.custom

    @pytest.mark.asyncio()
    async def test_split_pieces_copy_custom_metadata(self, balancer, options, chunk_factory):
        # Arrange
        chunk = chunk_factory(" ".join(f"word{i}" for i in range(150)), custom={"source": "a"})

        # Act
        result = await balancer.balance([chunk], options)

        # Assert
        assert len(result) >= 2
        assert all(piece.metadata.custom == {"source": "a"} for piece in result)
        customs = [chunk.metadata.custom, *(piece.metadata.custom for piece in result)]
        assert len({id(custom) for custom in customs}) == len(customs)


class TestChunkBalanceStats:
    """Test suite for ChunkBalancer.calculate_stats and ChunkBalanceStats."""

    def test_stats_with_bounds(self, balancer, options, chunk_factory):
        # Arrange
        chunks = [chunk_factory(f"chunk {i}", i, 3, tokens=t) for i, t in enumerate([10, 20, 30])]

        # Act
        stats = balancer.calculate_stats(chunks, options)

        # Assert
        assert stats.chunk_count == 3
        assert (stats.min_token_count, stats.max_token_count) == (10, 30)
        assert stats.average_token_count == pytest.approx(20.0)
        assert stats.standard_deviation == pytest.approx(math.sqrt(200 / 3))
        assert stats.variance_ratio == pytest.approx(3.0)
        assert stats.undersized_chunk_count == 1
        assert stats.oversized_chunk_count == 0
        assert not stats.is_balanced

    def test_stats_without_options_do_not_count_bounds(self, balancer, chunk_factory):
        chunks = [chunk_factory("a", tokens=1), chunk_factory("b", tokens=500)]

        stats = balancer.calculate_stats(chunks)

        assert stats.undersized_chunk_count == 0
        assert stats.oversized_chunk_count == 0
        assert stats.variance_ratio == pytest.approx(500.0)
        assert not stats.is_balanced

    def test_empty_stats(self, balancer):
        stats = balancer.calculate_stats([])

        assert stats == ChunkBalanceStats()
        assert stats.variance_ratio == 0.0

    def test_zero_minimum_gives_zero_ratio(self):
        stats = ChunkBalanceStats(chunk_count=2, min_token_count=0, max_token_count=10)

        assert stats.variance_ratio == 0.0

    def test_summary_and_dict(self):
        # Arrange
        stats = ChunkBalanceStats(
            chunk_count=2,
            min_token_count=40,
            max_token_count=60,
            average_token_count=50.0,
            standard_deviation=10.0,
        )

        # Act
        summary = str(stats)
        data = stats.to_dict()

        # Assert
        assert "Chunks: 2" in summary
        assert "Balanced: True" in summary
        assert data["variance_ratio"] == pytest.approx(1.5)
        assert data["is_balanced"] is True
