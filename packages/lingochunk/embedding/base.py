"""Base abstraction for the similarity oracle consumed by semantic chunking."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray


def cosine_similarity(a: NDArray[np.float32] | Sequence[float], b: NDArray[np.float32] | Sequence[float]) -> float:
    """Cosine similarity clipped to [-1, 1]; 0.0 when either vector is zero."""
    vec_a = np.asarray(a, dtype=np.float32)
    vec_b = np.asarray(b, dtype=np.float32)
    if vec_a.shape != vec_b.shape:
        raise ValueError(f"Vector shapes differ: {vec_a.shape} vs {vec_b.shape}")

    norm = float(np.linalg.norm(vec_a) * np.linalg.norm(vec_b))
    if norm == 0.0:
        return 0.0
    return float(np.clip(np.dot(vec_a, vec_b) / norm, -1.0, 1.0))


class SimilarityOracle(ABC):
    """Abstract similarity oracle.

    The chunking engine only consumes this interface; the embedding model
    behind it is owned by the caller.
    """

    @property
    @abstractmethod
    def embedding_dimension(self) -> int:
        """Dimension of the vectors produced by this oracle."""

    @abstractmethod
    async def embed(self, text: str) -> NDArray[np.float32]:
        """Generate an embedding for a single text.

        Args:
            text: Text to embed

        Returns:
            numpy array of shape (embedding_dim,)
        """

    async def embed_batch(self, texts: list[str]) -> NDArray[np.float32]:
        """Generate embeddings for multiple texts.

        The default implementation embeds texts one by one; oracles backed by
        a batching model should override it.

        Args:
            texts: Texts to embed

        Returns:
            numpy array of shape (n_texts, embedding_dim)
        """
        if not texts:
            return np.zeros((0, self.embedding_dimension), dtype=np.float32)
        vectors = [await self.embed(text) for text in texts]
        return np.vstack(vectors).astype(np.float32)

    def similarity(self, a: NDArray[np.float32], b: NDArray[np.float32]) -> float:
        """Similarity between two vectors in [-1, 1], cosine by default."""
        return cosine_similarity(a, b)
