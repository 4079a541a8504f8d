"""
Batch processing of independent texts.

Each text is chunked as its own task; a semaphore bounds how many run at the
same time and results are kept at their input index.
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from lingochunk.domain.entities.chunk import Chunk
from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.orchestrator import ChunkingOrchestrator

logger = logging.getLogger(__name__)

MIN_CONCURRENCY = 1
MAX_CONCURRENCY = 32


@dataclass(frozen=True)
class BatchResult:
    """Outcome of chunking one text of a batch."""

    index: int
    chunks: list[Chunk] = field(default_factory=list)
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class BatchProcessor:
    """
    Chunks many texts with bounded concurrency.

    Example:
        processor = BatchProcessor(orchestrator).with_max_concurrency(8)
        results = await processor.add_texts(texts).process()
    """

    def __init__(self, orchestrator: ChunkingOrchestrator, options: ChunkOptions | None = None) -> None:
        self._orchestrator = orchestrator
        self._options = options or orchestrator.options
        self._texts: list[str] = []
        self._max_concurrency = self._clamp(orchestrator.settings.BATCH_MAX_CONCURRENCY)

    @property
    def pending_count(self) -> int:
        return len(self._texts)

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    def add_text(self, text: str | None) -> "BatchProcessor":
        """Queue a text; blank texts are skipped."""
        if text and text.strip():
            self._texts.append(text)
        return self

    def add_texts(self, texts: Iterable[str | None]) -> "BatchProcessor":
        """Queue several texts; blank texts are skipped."""
        for text in texts:
            self.add_text(text)
        return self

    def with_max_concurrency(self, max_concurrency: int) -> "BatchProcessor":
        """
        Set how many texts may be chunked at the same time.

        Args:
            max_concurrency: Requested limit, clamped into [1, 32]

        Returns:
            This processor, for chaining
        """
        self._max_concurrency = self._clamp(max_concurrency)
        return self

    def clear(self) -> "BatchProcessor":
        self._texts.clear()
        return self

    def total_estimated_chunks(self) -> int:
        """Sum of the chunk estimates of every queued text."""
        return sum(self._orchestrator.estimate_chunk_count(text, self._options) for text in self._texts)

    async def process(self) -> list[list[Chunk]]:
        """
        Chunk every queued text.

        Returns:
            One chunk list per queued text, in input order

        Raises:
            ChunkingDomainError: The first error raised by any text
        """
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def process_with_limit(text: str) -> list[Chunk]:
            async with semaphore:
                return await self._orchestrator.chunk(text, self._options)

        logger.info(f"Processing batch of {len(self._texts)} texts (max concurrency: {self._max_concurrency})")
        return list(await asyncio.gather(*(process_with_limit(text) for text in self._texts)))

    async def process_with_results(self) -> list[BatchResult]:
        """
        Chunk every queued text, capturing failures per text.

        Returns:
            One result per queued text, in input order
        """
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def process_with_limit(index: int, text: str) -> BatchResult:
            async with semaphore:
                try:
                    chunks = await self._orchestrator.chunk(text, self._options)
                except Exception as e:
                    logger.error(f"Failed to chunk batch text {index}: {e}")
                    return BatchResult(index=index, error=e)
                return BatchResult(index=index, chunks=chunks)

        return list(await asyncio.gather(*(process_with_limit(i, text) for i, text in enumerate(self._texts))))

    @staticmethod
    def _clamp(max_concurrency: int) -> int:
        clamped = max(MIN_CONCURRENCY, min(MAX_CONCURRENCY, max_concurrency))
        if clamped != max_concurrency:
            logger.warning(f"Max concurrency {max_concurrency} clamped to {clamped}")
        return clamped
