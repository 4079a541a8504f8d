#!/usr/bin/env python3
"""
Chunk entity representing a single text chunk.

This module defines the immutable result record produced by every chunking
strategy together with its invariants.
"""

import uuid
from dataclasses import replace
from typing import Any

from lingochunk.domain.exceptions import InvalidChunkError
from lingochunk.domain.value_objects.chunk_metadata import ChunkLocation, ChunkMetadata


class Chunk:
    """
    Entity representing a single text chunk.

    A chunk is a segment of text extracted from a document by a chunking
    strategy. Chunks are never mutated after construction; re-indexing after
    balancing produces new instances that keep the original id.
    """

    def __init__(
        self,
        content: str,
        index: int,
        total_chunks: int,
        metadata: ChunkMetadata,
        location: ChunkLocation,
        chunk_id: str | None = None,
        embedding: tuple[float, ...] | None = None,
    ) -> None:
        """
        Initialize a chunk.

        Args:
            content: The text content of the chunk
            index: 0-based position in the produced sequence
            total_chunks: Length of the produced sequence
            metadata: Immutable metadata for the chunk
            location: Position of the chunk in the original text
            chunk_id: Identifier, generated when omitted
            embedding: Optional embedding attached by semantic chunking

        Raises:
            InvalidChunkError: If the chunk violates its invariants
        """
        self._validate_content(content)
        self._validate_position(index, total_chunks)

        self._id = chunk_id or uuid.uuid4().hex
        self._content = content
        self._index = index
        self._total_chunks = total_chunks
        self._metadata = metadata
        self._location = location
        self._embedding = tuple(embedding) if embedding is not None else None

    @property
    def id(self) -> str:
        """Get the unique chunk id."""
        return self._id

    @property
    def content(self) -> str:
        """Get the text content of the chunk."""
        return self._content

    @property
    def index(self) -> int:
        return self._index

    @property
    def total_chunks(self) -> int:
        return self._total_chunks

    @property
    def metadata(self) -> ChunkMetadata:
        """Get the immutable metadata of the chunk."""
        return self._metadata

    @property
    def location(self) -> ChunkLocation:
        """Get the location of the chunk in the original text."""
        return self._location

    @property
    def embedding(self) -> tuple[float, ...] | None:
        """Get the embedding vector if one was attached."""
        return self._embedding

    @property
    def token_count(self) -> int:
        """Shortcut for the estimated token count."""
        return self._metadata.estimated_token_count

    @property
    def is_first(self) -> bool:
        return self._index == 0

    @property
    def is_last(self) -> bool:
        return self._index == self._total_chunks - 1

    def has_embedding(self) -> bool:
        """Check if the chunk has an embedding."""
        return self._embedding is not None

    def with_position(self, index: int, total_chunks: int) -> "Chunk":
        """
        Return a copy of the chunk placed at a new position.

        Args:
            index: New 0-based index
            total_chunks: New sequence length

        Returns:
            Re-indexed chunk sharing this chunk's id
        """
        return Chunk(
            content=self._content,
            index=index,
            total_chunks=total_chunks,
            metadata=self._metadata,
            location=self._location,
            chunk_id=self._id,
            embedding=self._embedding,
        )

    def with_metadata(self, **changes: Any) -> "Chunk":
        """Return a copy with some metadata fields replaced."""
        return Chunk(
            content=self._content,
            index=self._index,
            total_chunks=self._total_chunks,
            metadata=replace(self._metadata, **changes),
            location=self._location,
            chunk_id=self._id,
            embedding=self._embedding,
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the chunk to plain structured data.

        Returns:
            JSON-serializable dictionary
        """
        return {
            "id": self._id,
            "content": self._content,
            "index": self._index,
            "total_chunks": self._total_chunks,
            "metadata": self._metadata.to_dict(),
            "location": self._location.to_dict(),
            "embedding": list(self._embedding) if self._embedding is not None else None,
        }

    def _validate_content(self, content: str) -> None:
        """
        Validate chunk content.

        Args:
            content: Content to validate

        Raises:
            InvalidChunkError: If content is invalid
        """
        if not content:
            raise InvalidChunkError("Chunk content cannot be empty")

        if not content.strip():
            raise InvalidChunkError("Chunk content cannot be only whitespace")

    def _validate_position(self, index: int, total_chunks: int) -> None:
        if index < 0:
            raise InvalidChunkError(f"Chunk index must be non-negative, got {index}", {"index": index})

        # total_chunks of 0 marks a chunk that has not been placed in a sequence yet
        if total_chunks and index >= total_chunks:
            raise InvalidChunkError(
                f"Chunk index {index} out of range for {total_chunks} chunks",
                {"index": index, "total_chunks": total_chunks},
            )

    def __repr__(self) -> str:
        """String representation of the chunk."""
        preview = self._content[:50] + "..." if len(self._content) > 50 else self._content
        return (
            f"Chunk(id={self._id}, "
            f"index={self._index}/{self._total_chunks}, "
            f"tokens={self._metadata.estimated_token_count}, "
            f"content='{preview}')"
        )

    def __eq__(self, other: object) -> bool:
        """Check equality based on chunk ID."""
        if not isinstance(other, Chunk):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        """Hash based on chunk ID."""
        return hash(self._id)
