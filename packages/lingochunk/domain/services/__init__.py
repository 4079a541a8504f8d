#!/usr/bin/env python3
"""Domain services for chunking."""

from lingochunk.domain.services.chunk_balancer import ChunkBalancer

__all__ = ["ChunkBalancer"]
