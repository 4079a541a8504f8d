"""Mock similarity oracle for testing.

This oracle generates deterministic embeddings from hashed word features,
suitable for tests without any model loading. Texts sharing vocabulary get
similar vectors, texts with disjoint vocabulary are close to orthogonal.
"""

from __future__ import annotations

import hashlib
import logging
import re
from typing import TYPE_CHECKING

import numpy as np

from lingochunk.embedding.base import SimilarityOracle

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"\w+", re.UNICODE)


class MockSimilarityOracle(SimilarityOracle):
    """Deterministic bag-of-words oracle.

    Features:
    - Fast, no model required
    - Deterministic output based on text content
    - Configurable dimension
    """

    def __init__(self, dimension: int = 384) -> None:
        """Initialize the mock oracle.

        Args:
            dimension: Embedding dimension (default: 384)
        """
        if dimension <= 0:
            raise ValueError(f"Dimension must be positive, got {dimension}")
        self._dimension = dimension
        self.calls = 0

    @property
    def embedding_dimension(self) -> int:
        return self._dimension

    def _word_vector(self, word: str) -> NDArray[np.float32]:
        """Deterministic unit vector for a single word, seeded by its SHA-256 hash."""
        seed = int(hashlib.sha256(word.encode("utf-8")).hexdigest()[:8], 16)
        rng = np.random.Generator(np.random.PCG64(seed))
        vector = rng.standard_normal(self._dimension).astype(np.float32)
        return vector / np.linalg.norm(vector)

    def _generate_embedding(self, text: str) -> NDArray[np.float32]:
        words = [w.lower() for w in _WORD_RE.findall(text)]
        if not words:
            return np.zeros(self._dimension, dtype=np.float32)

        embedding = np.sum([self._word_vector(w) for w in words], axis=0).astype(np.float32)
        norm = np.linalg.norm(embedding)
        if norm > 0:
            embedding = embedding / norm
        return embedding

    async def embed(self, text: str) -> NDArray[np.float32]:
        self.calls += 1
        return self._generate_embedding(text)

    async def embed_batch(self, texts: list[str]) -> NDArray[np.float32]:
        self.calls += 1
        if not texts:
            return np.zeros((0, self._dimension), dtype=np.float32)
        logger.debug(f"Mock oracle embedding batch of {len(texts)} texts")
        return np.vstack([self._generate_embedding(t) for t in texts]).astype(np.float32)
