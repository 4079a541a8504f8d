#!/usr/bin/env python3
"""
Factory for chunking strategies.

This module maps strategy types to their implementations and creates the
default set of chunkers owned by the orchestrator.
"""

import logging

from lingochunk.domain.exceptions import SimilarityOracleRequiredError, StrategyNotFoundError
from lingochunk.embedding.base import SimilarityOracle
from lingochunk.languages.registry import LanguageProfileRegistry
from lingochunk.strategies.base import BaseChunkingStrategy
from lingochunk.strategies.hierarchical_strategy import HierarchicalChunkingStrategy
from lingochunk.strategies.paragraph_strategy import ParagraphChunkingStrategy
from lingochunk.strategies.semantic_strategy import SemanticChunkingStrategy
from lingochunk.strategies.sentence_strategy import SentenceChunkingStrategy
from lingochunk.strategies.token_strategy import TokenChunkingStrategy
from lingochunk.types import ChunkingStrategy

logger = logging.getLogger(__name__)


class ChunkingStrategyFactory:
    """
    Factory for creating chunking strategies.

    Semantic chunking is only created when a similarity oracle is supplied.
    """

    @staticmethod
    def create_strategy(
        strategy_type: str | ChunkingStrategy,
        similarity_oracle: SimilarityOracle | None = None,
        registry: LanguageProfileRegistry | None = None,
    ) -> BaseChunkingStrategy:
        """
        Create a chunking strategy.

        Args:
            strategy_type: Type of strategy to create
            similarity_oracle: Oracle required by semantic chunking
            registry: Language registry shared by the strategies

        Returns:
            Strategy instance

        Raises:
            StrategyNotFoundError: If the type is unknown or ``auto``
            SimilarityOracleRequiredError: If semantic chunking lacks an oracle
        """
        try:
            strategy_type = ChunkingStrategy(str(getattr(strategy_type, "value", strategy_type)).lower())
        except ValueError as e:
            raise StrategyNotFoundError(str(strategy_type)) from e

        logger.info(f"Creating {strategy_type.value} chunking strategy")

        if strategy_type == ChunkingStrategy.SENTENCE:
            return SentenceChunkingStrategy(registry)
        elif strategy_type == ChunkingStrategy.PARAGRAPH:
            return ParagraphChunkingStrategy(registry)
        elif strategy_type == ChunkingStrategy.TOKEN:
            return TokenChunkingStrategy(registry)
        elif strategy_type == ChunkingStrategy.HIERARCHICAL:
            return HierarchicalChunkingStrategy(registry)
        elif strategy_type == ChunkingStrategy.SEMANTIC:
            if similarity_oracle is None:
                raise SimilarityOracleRequiredError(strategy_type.value)
            return SemanticChunkingStrategy(similarity_oracle, registry)
        else:
            # AUTO is resolved by the orchestrator, never instantiated
            raise StrategyNotFoundError(strategy_type.value)

    @staticmethod
    def create_default_strategies(
        similarity_oracle: SimilarityOracle | None = None,
        registry: LanguageProfileRegistry | None = None,
    ) -> dict[ChunkingStrategy, BaseChunkingStrategy]:
        """
        Create every strategy that can run with the given collaborators.

        Returns:
            Mapping from strategy type to instance
        """
        strategies: dict[ChunkingStrategy, BaseChunkingStrategy] = {}
        for strategy_type in ChunkingStrategy.concrete():
            if strategy_type == ChunkingStrategy.SEMANTIC and similarity_oracle is None:
                continue
            strategies[strategy_type] = ChunkingStrategyFactory.create_strategy(
                strategy_type, similarity_oracle, registry
            )
        return strategies

    @staticmethod
    def get_available_strategies() -> list[str]:
        """
        Get list of available strategy types.

        Returns:
            List of strategy type names
        """
        return [s.value for s in ChunkingStrategy]
