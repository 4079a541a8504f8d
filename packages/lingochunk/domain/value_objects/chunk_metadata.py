#!/usr/bin/env python3
"""
Chunk metadata and location value objects.

This module defines the immutable records attached to each chunk: where the
chunk sits in the original text and what the producing strategy knows about it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from lingochunk.types import ChunkingStrategy


@dataclass(frozen=True)
class ChunkLocation:
    """
    Position of a chunk inside the original text.

    Offsets are character offsets into the text handed to the chunker, lines are
    1-based. ``section_path`` is only populated by hierarchical chunking.
    """

    start_position: int
    end_position: int
    start_line: int = 1
    end_line: int = 1
    section_path: str = ""

    def __post_init__(self) -> None:
        """Validate location after initialization."""
        if self.start_position < 0:
            raise ValueError(f"Start position must be non-negative, got {self.start_position}")

        if self.end_position < self.start_position:
            raise ValueError(
                f"End position ({self.end_position}) must not precede start position ({self.start_position})"
            )

        if self.start_line < 1 or self.end_line < self.start_line:
            raise ValueError(f"Invalid line range {self.start_line}-{self.end_line}")

    @property
    def character_count(self) -> int:
        """Number of original-text characters spanned by the chunk."""
        return self.end_position - self.start_position

    @property
    def section_titles(self) -> list[str]:
        """Split the section path into its heading titles."""
        return [part for part in self.section_path.split("/") if part] if self.section_path else []

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_position": self.start_position,
            "end_position": self.end_position,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "section_path": self.section_path,
        }


@dataclass(frozen=True)
class ChunkMetadata:
    """
    Immutable metadata for a text chunk.

    Hierarchy information is carried by explicit optional fields which only the
    hierarchical strategy fills in. ``custom`` is an open string mapping left to
    callers for their own tags.
    """

    estimated_token_count: int
    strategy: ChunkingStrategy
    language_code: str = "en"

    starts_at_sentence_boundary: bool = False
    ends_at_sentence_boundary: bool = False
    contains_section_header: bool = False
    overlap_from_previous: int = 0  # characters carried over from the previous chunk
    quality_score: float | None = None

    # Hierarchical chunking only
    hierarchy_level: int | None = None
    parent_id: str | None = None
    section_title: str | None = None
    child_ids: tuple[str, ...] = ()

    custom: dict[str, str] = field(default_factory=dict)
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate metadata after initialization."""
        if self.estimated_token_count < 0:
            raise ValueError(f"Token count must be non-negative, got {self.estimated_token_count}")

        if self.overlap_from_previous < 0:
            raise ValueError(f"Overlap must be non-negative, got {self.overlap_from_previous}")

        if self.quality_score is not None and not 0.0 <= self.quality_score <= 1.0:
            raise ValueError(f"Quality score must be between 0.0 and 1.0, got {self.quality_score}")

        if self.hierarchy_level is not None and self.hierarchy_level < 0:
            raise ValueError(f"Hierarchy level must be non-negative, got {self.hierarchy_level}")

    @property
    def is_hierarchical(self) -> bool:
        """Whether the chunk carries hierarchy information."""
        return self.hierarchy_level is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert metadata to plain structured data."""
        return {
            "estimated_token_count": self.estimated_token_count,
            "strategy": self.strategy.value,
            "language_code": self.language_code,
            "starts_at_sentence_boundary": self.starts_at_sentence_boundary,
            "ends_at_sentence_boundary": self.ends_at_sentence_boundary,
            "contains_section_header": self.contains_section_header,
            "overlap_from_previous": self.overlap_from_previous,
            "quality_score": self.quality_score,
            "hierarchy_level": self.hierarchy_level,
            "parent_id": self.parent_id,
            "section_title": self.section_title,
            "child_ids": list(self.child_ids),
            "custom": dict(self.custom),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
