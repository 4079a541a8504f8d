#!/usr/bin/env python3
"""
Domain-specific exceptions for chunking operations.

These exceptions represent contract violations surfaced to callers. Degenerate
input (empty or whitespace-only text) is never an error, and cancellation is
signalled with ``asyncio.CancelledError`` so it stays distinguishable from
everything defined here.
"""

from typing import Any


class ChunkingDomainError(Exception):
    """Base exception for all chunking domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error with message and optional details."""
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidConfigurationError(ChunkingDomainError):
    """Raised when chunking options violate their contract."""


class SimilarityOracleRequiredError(InvalidConfigurationError):
    """Raised when a strategy needs a similarity oracle and none is wired."""

    def __init__(self, strategy_name: str) -> None:
        """Initialize with the strategy that required the oracle."""
        super().__init__(
            f"Strategy '{strategy_name}' requires a similarity oracle. "
            "Call use_similarity_oracle() first or choose a different strategy.",
            {"strategy_name": strategy_name},
        )
        self.strategy_name = strategy_name


class InvalidChunkError(ChunkingDomainError):
    """Raised when a chunk record violates its own invariants."""


class StrategyNotFoundError(ChunkingDomainError, ValueError):
    """Raised when no chunker is registered for a requested strategy."""

    def __init__(self, strategy_name: str) -> None:
        """Initialize with strategy name."""
        super().__init__(
            f"Strategy '{strategy_name}' not found",
            {"strategy_name": strategy_name},
        )
        self.strategy_name = strategy_name
