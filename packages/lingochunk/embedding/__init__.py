"""Similarity oracle interface and implementations."""

from lingochunk.embedding.base import SimilarityOracle, cosine_similarity
from lingochunk.embedding.mock import MockSimilarityOracle

__all__ = ["MockSimilarityOracle", "SimilarityOracle", "cosine_similarity"]
