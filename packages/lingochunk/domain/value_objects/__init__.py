#!/usr/bin/env python3
"""Value objects for the chunking domain."""

from lingochunk.domain.value_objects.balance_stats import ChunkBalanceStats
from lingochunk.domain.value_objects.chunk_metadata import ChunkLocation, ChunkMetadata
from lingochunk.domain.value_objects.chunk_options import ChunkOptions

__all__ = [
    "ChunkBalanceStats",
    "ChunkLocation",
    "ChunkMetadata",
    "ChunkOptions",
]
