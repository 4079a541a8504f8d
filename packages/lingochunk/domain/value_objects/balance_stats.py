#!/usr/bin/env python3
"""
Chunk balance statistics value object.

A read-only summary of the token-size distribution of a chunk sequence.
"""

from dataclasses import dataclass
from typing import Any

# Largest max/min token ratio still considered balanced
BALANCED_VARIANCE_RATIO = 5.0


@dataclass(frozen=True)
class ChunkBalanceStats:
    """Distribution of estimated token counts across a chunk sequence."""

    chunk_count: int = 0
    min_token_count: int = 0
    max_token_count: int = 0
    average_token_count: float = 0.0
    standard_deviation: float = 0.0
    undersized_chunk_count: int = 0
    oversized_chunk_count: int = 0

    @property
    def variance_ratio(self) -> float:
        """Ratio between the largest and the smallest chunk, 0 when undefined."""
        if self.min_token_count <= 0:
            return 0.0
        return self.max_token_count / self.min_token_count

    @property
    def is_balanced(self) -> bool:
        """True when sizes are within bounds and the spread is acceptable."""
        return (
            self.variance_ratio <= BALANCED_VARIANCE_RATIO
            and self.undersized_chunk_count == 0
            and self.oversized_chunk_count == 0
        )

    def summary(self) -> str:
        """Single line human readable description."""
        return (
            f"Chunks: {self.chunk_count}, Tokens: {self.min_token_count}-{self.max_token_count} "
            f"(avg: {self.average_token_count:.1f}, std: {self.standard_deviation:.1f}), "
            f"Variance: {self.variance_ratio:.2f}x, "
            f"Undersized: {self.undersized_chunk_count}, Oversized: {self.oversized_chunk_count}, "
            f"Balanced: {self.is_balanced}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "chunk_count": self.chunk_count,
            "min_token_count": self.min_token_count,
            "max_token_count": self.max_token_count,
            "average_token_count": self.average_token_count,
            "standard_deviation": self.standard_deviation,
            "variance_ratio": self.variance_ratio,
            "undersized_chunk_count": self.undersized_chunk_count,
            "oversized_chunk_count": self.oversized_chunk_count,
            "is_balanced": self.is_balanced,
        }

    def __str__(self) -> str:
        return self.summary()
