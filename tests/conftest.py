"""Shared fixtures for the chunking engine tests."""

import pytest

from lingochunk.config import ChunkingSettings
from lingochunk.domain.entities.chunk import Chunk
from lingochunk.domain.value_objects.chunk_metadata import ChunkLocation, ChunkMetadata
from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.embedding.mock import MockSimilarityOracle
from lingochunk.languages.registry import LanguageProfileRegistry
from lingochunk.types import ChunkingStrategy


def make_chunk(
    content: str,
    index: int = 0,
    total_chunks: int = 1,
    tokens: int | None = None,
    start: int = 0,
    language_code: str = "en",
    strategy: ChunkingStrategy = ChunkingStrategy.SENTENCE,
    **metadata_fields,
) -> Chunk:
    """Build a chunk whose token count defaults to the English estimate of its content."""
    if tokens is None:
        tokens = LanguageProfileRegistry().get_profile(language_code).estimate_token_count(content)
    return Chunk(
        content=content,
        index=index,
        total_chunks=total_chunks,
        metadata=ChunkMetadata(
            estimated_token_count=tokens,
            strategy=strategy,
            language_code=language_code,
            **metadata_fields,
        ),
        location=ChunkLocation(start_position=start, end_position=start + len(content)),
    )


def numbered_sentences(count: int, prefix: str = "This is sentence number") -> str:
    """English sentences of roughly nine estimated tokens each."""
    return " ".join(f"{prefix} {i} in the sample text." for i in range(1, count + 1))


@pytest.fixture()
def registry():
    """A fresh registry holding every built-in profile."""
    return LanguageProfileRegistry()


@pytest.fixture()
def english(registry):
    return registry.get_profile("en")


@pytest.fixture()
def small_options():
    """Small sizes so short test texts produce several chunks."""
    return ChunkOptions(
        strategy=ChunkingStrategy.SENTENCE,
        target_chunk_size=30,
        min_chunk_size=10,
        max_chunk_size=40,
        overlap_size=0,
        language_code="en",
        enable_chunk_balancing=False,
    )


@pytest.fixture()
def mock_oracle():
    return MockSimilarityOracle(dimension=64)


@pytest.fixture()
def settings():
    """Settings that ignore any local .env file."""
    return ChunkingSettings(_env_file=None)


@pytest.fixture()
def markdown_document():
    return (
        "# Guide\n"
        "An introduction to the guide.\n"
        "## Installation\n"
        "Install the package with the package manager. It needs no extra system libraries.\n"
        "## Usage\n"
        "Import the orchestrator and call chunk on your text.\n"
        "### Options\n"
        "Every option has a sensible default value.\n"
    )


@pytest.fixture()
def chunk_factory():
    return make_chunk


@pytest.fixture()
def sentences():
    return numbered_sentences
