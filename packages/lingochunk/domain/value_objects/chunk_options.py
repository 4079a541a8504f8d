#!/usr/bin/env python3
"""
Immutable chunking options value object.

This module defines the configuration handed to every chunking call, with
built-in validation of the size contract and a set of ready-made presets.
"""

from dataclasses import asdict, dataclass, replace
from typing import Any

from lingochunk.domain.exceptions import InvalidConfigurationError
from lingochunk.types import ChunkingStrategy


@dataclass(frozen=True)
class ChunkOptions:
    """
    Immutable configuration for chunking operations.

    All sizes are estimated token counts as computed by the active language
    profile. Violated configurations raise ``InvalidConfigurationError`` at
    construction time, before any chunking work begins.
    """

    strategy: ChunkingStrategy = ChunkingStrategy.AUTO
    target_chunk_size: int = 512
    min_chunk_size: int = 100
    max_chunk_size: int = 1024
    overlap_size: int = 50
    language_code: str | None = None

    preserve_sentences: bool = True
    preserve_paragraphs: bool = True
    preserve_section_headers: bool = True

    semantic_similarity_threshold: float = 0.5
    enable_chunk_balancing: bool = True

    include_metadata: bool = True
    trim_whitespace: bool = True
    normalize_whitespace: bool = False

    def __post_init__(self) -> None:
        """Coerce the strategy and validate the size contract."""
        if not isinstance(self.strategy, ChunkingStrategy):
            try:
                object.__setattr__(self, "strategy", ChunkingStrategy(str(self.strategy).lower()))
            except ValueError as e:
                raise InvalidConfigurationError(
                    f"Unknown chunking strategy '{self.strategy}'",
                    {"strategy": self.strategy},
                ) from e

        self._validate()

    def _validate(self) -> None:
        """Validate configuration after initialization."""
        for name in ("target_chunk_size", "min_chunk_size", "max_chunk_size"):
            value = getattr(self, name)
            if value <= 0:
                raise InvalidConfigurationError(f"{name} must be positive", {name: value})

        if self.min_chunk_size > self.target_chunk_size:
            raise InvalidConfigurationError(
                "min_chunk_size cannot be greater than target_chunk_size",
                {"min_chunk_size": self.min_chunk_size, "target_chunk_size": self.target_chunk_size},
            )

        if self.target_chunk_size > self.max_chunk_size:
            raise InvalidConfigurationError(
                "target_chunk_size cannot be greater than max_chunk_size",
                {"target_chunk_size": self.target_chunk_size, "max_chunk_size": self.max_chunk_size},
            )

        if self.overlap_size < 0:
            raise InvalidConfigurationError(
                "overlap_size cannot be negative",
                {"overlap_size": self.overlap_size},
            )

        if not -1.0 <= self.semantic_similarity_threshold <= 1.0:
            raise InvalidConfigurationError(
                f"Semantic similarity threshold must be between -1.0 and 1.0, got {self.semantic_similarity_threshold}",
                {"semantic_similarity_threshold": self.semantic_similarity_threshold},
            )

        if self.language_code is not None and not self.language_code.strip():
            raise InvalidConfigurationError(
                "language_code cannot be blank; use None for auto-detection",
                {"language_code": self.language_code},
            )

    @property
    def effective_overlap(self) -> int:
        """
        Overlap actually carried between chunks.

        Capped at half the target size so that every chunk still advances
        through the text by a meaningful amount.
        """
        return min(self.overlap_size, self.target_chunk_size // 2)

    def with_changes(self, **changes: Any) -> "ChunkOptions":
        """Return a validated copy with the given fields replaced."""
        unknown = set(changes) - set(self.__dataclass_fields__)
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown option(s): {', '.join(sorted(unknown))}",
                {"options": sorted(unknown)},
            )
        return replace(self, **changes)

    def estimate_chunks(self, total_tokens: int) -> int:
        """
        Estimate the number of chunks for a given token count.

        Args:
            total_tokens: Total estimated tokens in the document

        Returns:
            Estimated number of chunks
        """
        if total_tokens <= 0:
            return 0

        if total_tokens <= self.max_chunk_size:
            return 1

        effective_size = self.target_chunk_size - self.overlap_size
        if effective_size <= 0:
            effective_size = max(1, self.target_chunk_size // 2)

        return -(-total_tokens // effective_size)

    def to_dict(self) -> dict[str, Any]:
        """Convert options to a dictionary."""
        result = asdict(self)
        result["strategy"] = self.strategy.value
        return result

    @classmethod
    def default(cls) -> "ChunkOptions":
        """Options with every field at its default."""
        return cls()

    @classmethod
    def for_rag(cls) -> "ChunkOptions":
        """Semantic chunking tuned for retrieval-augmented generation."""
        return cls(
            strategy=ChunkingStrategy.SEMANTIC,
            target_chunk_size=512,
            min_chunk_size=128,
            max_chunk_size=1024,
            overlap_size=64,
        )

    @classmethod
    def for_korean(cls) -> "ChunkOptions":
        """Sentence chunking with sizes suited to Korean text."""
        return cls(
            strategy=ChunkingStrategy.SENTENCE,
            target_chunk_size=400,
            min_chunk_size=80,
            max_chunk_size=800,
            overlap_size=40,
            language_code="ko",
        )

    @classmethod
    def for_large_document(cls) -> "ChunkOptions":
        """Hierarchical chunking for long, structured documents."""
        return cls(
            strategy=ChunkingStrategy.HIERARCHICAL,
            target_chunk_size=768,
            min_chunk_size=200,
            max_chunk_size=1536,
            overlap_size=128,
        )

    @classmethod
    def fixed_size(cls, token_size: int, overlap: int = 50) -> "ChunkOptions":
        """
        Token chunking at a fixed size without structural preservation.

        Args:
            token_size: Target chunk size in tokens
            overlap: Tokens carried into the next chunk

        Returns:
            Token-strategy options
        """
        return cls(
            strategy=ChunkingStrategy.TOKEN,
            target_chunk_size=token_size,
            min_chunk_size=max(1, token_size // 4),
            max_chunk_size=token_size * 2,
            overlap_size=overlap,
            preserve_sentences=False,
            preserve_paragraphs=False,
        )
