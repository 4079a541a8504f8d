# lingochunk/config/base.py

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.types import ChunkingStrategy


class ChunkingSettings(BaseSettings):
    """
    Process-wide chunking defaults.
    Every field can be overridden with a LINGOCHUNK_-prefixed environment variable or a .env entry.
    """

    # Strategy Configuration
    DEFAULT_STRATEGY: ChunkingStrategy = ChunkingStrategy.AUTO
    DEFAULT_LANGUAGE: str = "en"

    # Chunk Size Configuration (estimated tokens)
    TARGET_CHUNK_SIZE: int = 512
    MIN_CHUNK_SIZE: int = 100
    MAX_CHUNK_SIZE: int = 1024
    OVERLAP_SIZE: int = 50

    # Semantic Chunking
    SEMANTIC_SIMILARITY_THRESHOLD: float = 0.5

    # Post-processing
    ENABLE_CHUNK_BALANCING: bool = True

    # Batch Processing
    BATCH_MAX_CONCURRENCY: int = 4  # Clamped into [1, 32] by the batch processor

    # Pydantic model config
    model_config = SettingsConfigDict(
        env_prefix="LINGOCHUNK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("DEFAULT_STRATEGY", mode="before")
    @classmethod
    def _lowercase_strategy(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value

    @field_validator("DEFAULT_LANGUAGE")
    @classmethod
    def _normalize_language(cls, value: str) -> str:
        return value.strip().lower() or "en"

    def to_chunk_options(self) -> ChunkOptions:
        """
        Build the default chunk options from these settings.

        Returns:
            Validated chunk options

        Raises:
            InvalidConfigurationError: If the configured sizes violate the size contract
        """
        return ChunkOptions(
            strategy=self.DEFAULT_STRATEGY,
            target_chunk_size=self.TARGET_CHUNK_SIZE,
            min_chunk_size=self.MIN_CHUNK_SIZE,
            max_chunk_size=self.MAX_CHUNK_SIZE,
            overlap_size=self.OVERLAP_SIZE,
            semantic_similarity_threshold=self.SEMANTIC_SIMILARITY_THRESHOLD,
            enable_chunk_balancing=self.ENABLE_CHUNK_BALANCING,
        )
