#!/usr/bin/env python3
"""Domain entities for chunking."""

from lingochunk.domain.entities.chunk import Chunk

__all__ = ["Chunk"]
