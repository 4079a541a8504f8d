#!/usr/bin/env python3
"""
Domain layer for the chunking engine.

This package contains the chunk entity, the immutable option and metadata
value objects and the exception taxonomy. The chunk balancer lives in
``lingochunk.domain.services``.
"""

from lingochunk.domain.entities import Chunk
from lingochunk.domain.exceptions import (
    ChunkingDomainError,
    InvalidChunkError,
    InvalidConfigurationError,
    SimilarityOracleRequiredError,
    StrategyNotFoundError,
)
from lingochunk.domain.value_objects import ChunkBalanceStats, ChunkLocation, ChunkMetadata, ChunkOptions

__all__ = [
    "Chunk",
    "ChunkBalanceStats",
    "ChunkLocation",
    "ChunkMetadata",
    "ChunkOptions",
    "ChunkingDomainError",
    "InvalidChunkError",
    "InvalidConfigurationError",
    "SimilarityOracleRequiredError",
    "StrategyNotFoundError",
]
