#!/usr/bin/env python3
"""
Chunking strategies module.

Every strategy shares the span-planning base class and can therefore be
consumed both as a batch (``chunk``) and lazily (``stream``).
"""

from lingochunk.strategies.base import BaseChunkingStrategy, ChunkSegment
from lingochunk.strategies.factory import ChunkingStrategyFactory
from lingochunk.strategies.hierarchical_strategy import HierarchicalChunkingStrategy
from lingochunk.strategies.paragraph_strategy import ParagraphChunkingStrategy
from lingochunk.strategies.semantic_strategy import SemanticChunkingStrategy
from lingochunk.strategies.sentence_strategy import SentenceChunkingStrategy
from lingochunk.strategies.token_strategy import TokenChunkingStrategy

__all__ = [
    "BaseChunkingStrategy",
    "ChunkSegment",
    "ChunkingStrategyFactory",
    "HierarchicalChunkingStrategy",
    "ParagraphChunkingStrategy",
    "SemanticChunkingStrategy",
    "SentenceChunkingStrategy",
    "TokenChunkingStrategy",
]
