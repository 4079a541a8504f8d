#!/usr/bin/env python3
"""
Shared enums for the chunking engine.

This module is kept free of heavy imports so that it can be referenced from
settings, value objects and strategies alike.
"""

from enum import Enum


class ChunkingStrategy(str, Enum):
    """Available chunking strategies.

    ``AUTO`` is never executed directly; the orchestrator resolves it to one of
    the concrete strategies before any chunker runs.
    """

    AUTO = "auto"
    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"
    TOKEN = "token"
    SEMANTIC = "semantic"
    HIERARCHICAL = "hierarchical"

    @classmethod
    def concrete(cls) -> list["ChunkingStrategy"]:
        """Return every strategy that maps to a real chunker."""
        return [strategy for strategy in cls if strategy is not cls.AUTO]
