# lingochunk/config/__init__.py
"""
Configuration module for chunking defaults.
Instantiates a default settings object read from the environment.
"""

from .base import ChunkingSettings

# Instantiate settings once and export
settings = ChunkingSettings()

__all__ = ["ChunkingSettings", "settings"]
