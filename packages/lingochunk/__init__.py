#!/usr/bin/env python3
"""
Multilingual text chunking for retrieval-augmented generation.

This package splits documents into size-bounded chunks using
language-aware sentence, paragraph, token, semantic and hierarchical
strategies, with optional post-hoc size balancing.
"""

from lingochunk.batch import BatchProcessor, BatchResult
from lingochunk.domain.entities.chunk import Chunk
from lingochunk.domain.exceptions import (
    ChunkingDomainError,
    InvalidChunkError,
    InvalidConfigurationError,
    SimilarityOracleRequiredError,
    StrategyNotFoundError,
)
from lingochunk.domain.services.chunk_balancer import ChunkBalancer
from lingochunk.domain.value_objects.balance_stats import ChunkBalanceStats
from lingochunk.domain.value_objects.chunk_metadata import ChunkLocation, ChunkMetadata
from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.embedding import MockSimilarityOracle, SimilarityOracle
from lingochunk.languages import LanguageProfile, LanguageProfileRegistry, get_registry
from lingochunk.orchestrator import ChunkingOrchestrator
from lingochunk.types import ChunkingStrategy

__version__ = "0.1.0"

__all__ = [
    "BatchProcessor",
    "BatchResult",
    "Chunk",
    "ChunkBalanceStats",
    "ChunkBalancer",
    "ChunkLocation",
    "ChunkMetadata",
    "ChunkOptions",
    "ChunkingDomainError",
    "ChunkingOrchestrator",
    "ChunkingStrategy",
    "InvalidChunkError",
    "InvalidConfigurationError",
    "LanguageProfile",
    "LanguageProfileRegistry",
    "MockSimilarityOracle",
    "SimilarityOracle",
    "SimilarityOracleRequiredError",
    "StrategyNotFoundError",
    "get_registry",
]
