"""
Chunking orchestrator.

Main entry point of the engine: resolves the effective strategy, owns the
registered chunkers, validates their preconditions and runs the optional
balancing pass.
"""

import asyncio
import logging
from collections.abc import AsyncIterator

from lingochunk.config import ChunkingSettings
from lingochunk.config import settings as default_settings
from lingochunk.domain.entities.chunk import Chunk
from lingochunk.domain.exceptions import SimilarityOracleRequiredError, StrategyNotFoundError
from lingochunk.domain.services.chunk_balancer import ChunkBalancer
from lingochunk.domain.value_objects.balance_stats import ChunkBalanceStats
from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.embedding.base import SimilarityOracle
from lingochunk.languages.base import LanguageProfile
from lingochunk.languages.registry import DEFAULT_LANGUAGE, LanguageProfileRegistry, get_registry
from lingochunk.strategies.base import BaseChunkingStrategy
from lingochunk.strategies.factory import ChunkingStrategyFactory
from lingochunk.types import ChunkingStrategy

logger = logging.getLogger(__name__)

# Auto resolution thresholds
SMALL_TEXT_TARGET_MULTIPLIER = 2
AUTO_PARAGRAPH_THRESHOLD = 3
AUTO_SENTENCE_THRESHOLD = 5


class ChunkingOrchestrator:
    """Orchestrates chunking across strategies, language profiles and the balancer."""

    def __init__(
        self,
        options: ChunkOptions | None = None,
        similarity_oracle: SimilarityOracle | None = None,
        balancer: ChunkBalancer | None = None,
        registry: LanguageProfileRegistry | None = None,
        settings: ChunkingSettings | None = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            options: Default options, built from settings when omitted
            similarity_oracle: Oracle enabling semantic chunking
            balancer: Balancer used after chunking
            registry: Language registry shared by every chunker
            settings: Settings supplying the defaults
        """
        self._settings = settings or default_settings
        self._options = options or self._settings.to_chunk_options()

        if registry is None:
            language = self._settings.DEFAULT_LANGUAGE
            registry = get_registry() if language == DEFAULT_LANGUAGE else LanguageProfileRegistry(
                default_language=language
            )
        self._registry = registry
        self._balancer = balancer or ChunkBalancer(self._registry)
        self._similarity_oracle: SimilarityOracle | None = None
        self._strategies = ChunkingStrategyFactory.create_default_strategies(registry=self._registry)

        if similarity_oracle is not None:
            self.use_similarity_oracle(similarity_oracle)

    @property
    def options(self) -> ChunkOptions:
        return self._options

    @property
    def settings(self) -> ChunkingSettings:
        return self._settings

    @property
    def registry(self) -> LanguageProfileRegistry:
        return self._registry

    @property
    def similarity_oracle(self) -> SimilarityOracle | None:
        return self._similarity_oracle

    @property
    def available_strategies(self) -> list[ChunkingStrategy]:
        """Strategies that currently have a chunker registered."""
        return list(self._strategies)

    def use_similarity_oracle(self, oracle: SimilarityOracle) -> "ChunkingOrchestrator":
        """
        Wire a similarity oracle and enable semantic chunking.

        Args:
            oracle: Oracle used by semantic chunking

        Returns:
            This orchestrator, for chaining
        """
        self._similarity_oracle = oracle
        self._strategies[ChunkingStrategy.SEMANTIC] = ChunkingStrategyFactory.create_strategy(
            ChunkingStrategy.SEMANTIC, oracle, self._registry
        )
        return self

    def register_strategy(
        self, strategy_type: ChunkingStrategy | str, chunker: BaseChunkingStrategy
    ) -> "ChunkingOrchestrator":
        """
        Register or replace the chunker for a strategy.

        Raises:
            StrategyNotFoundError: If the type is unknown or ``auto``
        """
        try:
            strategy_type = ChunkingStrategy(str(getattr(strategy_type, "value", strategy_type)).lower())
        except ValueError as e:
            raise StrategyNotFoundError(str(strategy_type)) from e
        if strategy_type == ChunkingStrategy.AUTO:
            raise StrategyNotFoundError(strategy_type.value)

        logger.info(f"Registered {chunker.__class__.__name__} for {strategy_type.value} chunking")
        self._strategies[strategy_type] = chunker
        return self

    def detect_language(self, text: str | None) -> str:
        """Detect the language code of a text."""
        return self._registry.detect_language(text)

    def resolve_profile(self, text: str | None, options: ChunkOptions) -> LanguageProfile:
        if options.language_code:
            return self._registry.get_profile(options.language_code)
        return self._registry.get_profile_for_text(text)

    def resolve_strategy(self, text: str | None, options: ChunkOptions | None = None) -> ChunkingStrategy:
        """
        Resolve the concrete strategy for a text.

        Explicit strategies are returned unchanged. ``auto`` picks sentence
        chunking for short texts, then paragraph chunking for texts with more
        than three paragraphs, sentence chunking for texts with more than five
        sentences and token chunking otherwise.

        Args:
            text: Text to chunk
            options: Options, orchestrator defaults when omitted

        Returns:
            A concrete strategy
        """
        options = options or self._options
        if options.strategy != ChunkingStrategy.AUTO:
            return options.strategy

        if not text or not text.strip():
            return ChunkingStrategy.SENTENCE

        profile = self.resolve_profile(text, options)
        if profile.estimate_token_count(text) <= SMALL_TEXT_TARGET_MULTIPLIER * options.target_chunk_size:
            resolved = ChunkingStrategy.SENTENCE
        elif profile.count_paragraphs(text) > AUTO_PARAGRAPH_THRESHOLD:
            resolved = ChunkingStrategy.PARAGRAPH
        elif profile.count_sentences(text) > AUTO_SENTENCE_THRESHOLD:
            resolved = ChunkingStrategy.SENTENCE
        else:
            resolved = ChunkingStrategy.TOKEN

        logger.info(f"Auto strategy resolved to {resolved.value} (language: {profile.language_code})")
        return resolved

    def get_strategy(self, strategy_type: ChunkingStrategy) -> BaseChunkingStrategy:
        """
        Return the registered chunker for a concrete strategy.

        Raises:
            SimilarityOracleRequiredError: If semantic chunking has no oracle wired
            StrategyNotFoundError: If no chunker is registered
        """
        chunker = self._strategies.get(strategy_type)
        if chunker is None:
            if strategy_type == ChunkingStrategy.SEMANTIC:
                raise SimilarityOracleRequiredError(strategy_type.value)
            raise StrategyNotFoundError(strategy_type.value)
        return chunker

    async def chunk(self, text: str | None, options: ChunkOptions | None = None) -> list[Chunk]:
        """
        Chunk a text.

        Args:
            text: Text to chunk
            options: Options, orchestrator defaults when omitted

        Returns:
            Ordered chunks with contiguous indices; empty for blank text

        Raises:
            SimilarityOracleRequiredError: If semantic chunking has no oracle wired
            StrategyNotFoundError: If no chunker is registered for the strategy
            asyncio.CancelledError: If the surrounding task is cancelled
        """
        options = options or self._options
        strategy_type = self.resolve_strategy(text, options)
        chunker = self.get_strategy(strategy_type)

        if not text or not text.strip():
            return []

        profile = self.resolve_profile(text, options)
        chunks = await chunker.chunk(text, options, profile=profile)

        if self._should_balance(strategy_type, options) and chunks:
            await asyncio.sleep(0)
            chunks = await self._balancer.balance(chunks, options, profile, text=text)

        logger.info(
            f"Chunked {len(text)} characters into {len(chunks)} chunks "
            f"(strategy: {strategy_type.value}, language: {profile.language_code})"
        )
        return chunks

    async def chunk_stream(self, text: str | None, options: ChunkOptions | None = None) -> AsyncIterator[Chunk]:
        """
        Yield the chunks of a text one at a time.

        Without balancing, each chunk is built only when the consumer pulls
        it. Balancing needs the whole sequence, so in that case chunks are
        computed up front and then yielded one by one.

        Raises:
            SimilarityOracleRequiredError: If semantic chunking has no oracle wired
            StrategyNotFoundError: If no chunker is registered for the strategy
        """
        options = options or self._options
        strategy_type = self.resolve_strategy(text, options)
        chunker = self.get_strategy(strategy_type)

        if not text or not text.strip():
            return

        if self._should_balance(strategy_type, options):
            for chunk in await self.chunk(text, options):
                yield chunk
                await asyncio.sleep(0)
            return

        profile = self.resolve_profile(text, options)
        async for chunk in chunker.stream(text, options, profile=profile):
            yield chunk

    def estimate_chunk_count(self, text: str | None, options: ChunkOptions | None = None) -> int:
        """
        Estimate the chunk count without producing chunks.

        Returns:
            Estimated count, 0 for blank text
        """
        if not text or not text.strip():
            return 0
        options = options or self._options
        strategy_type = self.resolve_strategy(text, options)
        chunker = self._strategies.get(strategy_type)
        if chunker is None:
            profile = self.resolve_profile(text, options)
            return options.estimate_chunks(profile.estimate_token_count(text))
        return chunker.estimate_chunk_count(text, options)

    async def balance(
        self, chunks: list[Chunk], options: ChunkOptions | None = None, text: str | None = None
    ) -> list[Chunk]:
        """Run the balancer over an existing chunk sequence, optionally with the text it was cut from."""
        return await self._balancer.balance(chunks, options or self._options, text=text)

    def calculate_stats(self, chunks: list[Chunk], options: ChunkOptions | None = None) -> ChunkBalanceStats:
        """Compute balance statistics, counting bounds from the given or default options."""
        return self._balancer.calculate_stats(chunks, options or self._options)

    @staticmethod
    def _should_balance(strategy_type: ChunkingStrategy, options: ChunkOptions) -> bool:
        # Merging hierarchical chunks across sections would break parent links
        return options.enable_chunk_balancing and strategy_type != ChunkingStrategy.HIERARCHICAL

    def __repr__(self) -> str:
        names = ", ".join(s.value for s in self._strategies)
        return f"ChunkingOrchestrator(strategies=[{names}], languages={len(self._registry)})"
