#!/usr/bin/env python3
"""Tests for the batch processor."""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from lingochunk.batch import MAX_CONCURRENCY, BatchProcessor, BatchResult
from lingochunk.domain.exceptions import ChunkingDomainError
from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.orchestrator import ChunkingOrchestrator


@pytest.fixture()
def orchestrator(settings, registry):
    return ChunkingOrchestrator(settings=settings, registry=registry)


@pytest.fixture()
def fake_orchestrator(settings):
    """Orchestrator double whose chunk() echoes the text back and tracks concurrency."""
    orchestrator = MagicMock(spec=ChunkingOrchestrator)
    orchestrator.settings = settings
    orchestrator.options = ChunkOptions()
    orchestrator.active = 0
    orchestrator.peak = 0

    async def fake_chunk(text, options):
        orchestrator.active += 1
        orchestrator.peak = max(orchestrator.peak, orchestrator.active)
        # Longer texts finish first so that completion order differs from input order
        await asyncio.sleep(0.001 * (20 - len(text)))
        orchestrator.active -= 1
        if text.startswith("boom"):
            raise ChunkingDomainError(f"cannot chunk {text}")
        return [text]

    orchestrator.chunk = AsyncMock(side_effect=fake_chunk)
    return orchestrator


class TestBatchProcessorQueue:
    """Test suite for queueing texts."""

    def test_blank_texts_are_skipped(self, orchestrator):
        # Act
        processor = BatchProcessor(orchestrator).add_text("First.").add_texts(["", "   ", None, "Second."])

        # Assert
        assert processor.pending_count == 2

    def test_clear(self, orchestrator):
        processor = BatchProcessor(orchestrator).add_texts(["One.", "Two."])

        assert processor.clear().pending_count == 0

    def test_default_concurrency_comes_from_settings(self, orchestrator, settings):
        assert BatchProcessor(orchestrator).max_concurrency == settings.BATCH_MAX_CONCURRENCY

    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(0, 1), (-3, 1), (1, 1), (8, 8), (32, 32), (100, MAX_CONCURRENCY)],
    )
    def test_concurrency_is_clamped(self, orchestrator, requested, expected):
        processor = BatchProcessor(orchestrator).with_max_concurrency(requested)

        assert processor.max_concurrency == expected

    def test_clamping_logs_warning(self, orchestrator, caplog):
        with caplog.at_level(logging.WARNING, logger="lingochunk.batch"):
            BatchProcessor(orchestrator).with_max_concurrency(100)

        assert "clamped to 32" in caplog.text

    def test_total_estimated_chunks(self, orchestrator, sentences):
        # Arrange
        options = ChunkOptions(target_chunk_size=30, min_chunk_size=10, max_chunk_size=40, overlap_size=0)
        processor = BatchProcessor(orchestrator, options).add_texts(["Short text.", sentences(12)])

        # Act
        total = processor.total_estimated_chunks()

        # Assert
        assert total == 1 + orchestrator.estimate_chunk_count(sentences(12), options)


class TestBatchProcessing:
    """Test suite for concurrent batch processing."""

    @pytest.mark.asyncio()
    async def test_results_keep_input_order(self, fake_orchestrator):
        # Arrange
        texts = [f"text {'x' * i}" for i in range(10)]
        processor = BatchProcessor(fake_orchestrator).add_texts(texts)

        # Act
        results = await processor.process()

        # Assert
        assert results == [[text] for text in texts]

    @pytest.mark.asyncio()
    async def test_concurrency_is_bounded(self, fake_orchestrator):
        texts = [f"text {i}" for i in range(12)]
        processor = BatchProcessor(fake_orchestrator).add_texts(texts).with_max_concurrency(3)

        await processor.process()

        assert fake_orchestrator.chunk.await_count == 12
        assert 1 <= fake_orchestrator.peak <= 3

    @pytest.mark.asyncio()
    async def test_process_raises_first_error(self, fake_orchestrator):
        processor = BatchProcessor(fake_orchestrator).add_texts(["fine", "boom 1", "also fine"])

        with pytest.raises(ChunkingDomainError, match="boom 1"):
            await processor.process()

    @pytest.mark.asyncio()
    async def test_process_with_results_captures_errors(self, fake_orchestrator):
        # Arrange
        processor = BatchProcessor(fake_orchestrator).add_texts(["fine", "boom 1", "also fine"])

        # Act
        results = await processor.process_with_results()

        # Assert
        assert [r.index for r in results] == [0, 1, 2]
        assert [r.succeeded for r in results] == [True, False, True]
        assert results[0].chunks == ["fine"]
        assert isinstance(results[1].error, ChunkingDomainError)
        assert results[1].chunks == []

    @pytest.mark.asyncio()
    async def test_options_are_passed_through(self, fake_orchestrator):
        options = ChunkOptions(target_chunk_size=64, min_chunk_size=16, max_chunk_size=128)

        await BatchProcessor(fake_orchestrator, options).add_text("text").process()

        fake_orchestrator.chunk.assert_awaited_once_with("text", options)

    @pytest.mark.asyncio()
    async def test_empty_batch(self, orchestrator):
        assert await BatchProcessor(orchestrator).process() == []

    @pytest.mark.asyncio()
    async def test_real_chunking(self, orchestrator, sentences):
        # Arrange
        texts = [sentences(3), "안녕하세요. 반갑습니다.", "Один. Два. Три."]

        # Act
        results = await BatchProcessor(orchestrator).add_texts(texts).with_max_concurrency(2).process()

        # Assert
        assert [chunks[0].metadata.language_code for chunks in results] == ["en", "ko", "ru"]

    def test_batch_result_defaults(self):
        result = BatchResult(index=4)

        assert result.succeeded
        assert result.chunks == []
