"""
Deterministic text vectorizer for products and queries.

Hashes word tokens and their character trigrams into a fixed number of
signed buckets and L2-normalizes the result. It is not a learned model;
it stands in for an external embedding service so that vectors are
reproducible across runs.
"""

from __future__ import annotations

import hashlib
import re

import numpy as np

from .config import VECTOR_DIM


_TOKEN_RE = re.compile(r"\w+", flags=re.UNICODE)
_TRIGRAM = 3


def _features(text: str) -> list[str]:
    features: list[str] = []
    for token in _TOKEN_RE.findall(text.casefold()):
        features.append(f"w:{token}")
        padded = f"<{token}>"
        for start in range(len(padded) - _TRIGRAM + 1):
            features.append(f"c:{padded[start : start + _TRIGRAM]}")
    return features


class HashingEmbedder:
    """Embed texts into ``dim``-dimensional unit vectors via feature hashing."""

    def __init__(self, *, dim: int = VECTOR_DIM) -> None:
        if dim <= 0:
            raise ValueError("dim must be > 0")
        self.dim = dim

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed a list of texts.

        Returns a list of vectors in the same order as *texts*.
        """
        return [self._embed(text) for text in texts]

    def embed_query(self, query: str) -> list[float]:
        """Embed a single query text."""
        return self._embed(query)

    def _embed(self, text: str) -> list[float]:
        vector = np.zeros(self.dim, dtype=np.float64)
        for feature in _features(text or ""):
            digest = hashlib.blake2b(feature.encode("utf-8"), digest_size=8).digest()
            value = int.from_bytes(digest, "big")
            bucket = value % self.dim
            sign = 1.0 if (value >> 63) & 1 == 0 else -1.0
            vector[bucket] += sign
        norm = float(np.linalg.norm(vector))
        if norm > 0:
            vector /= norm
        return vector.tolist()
