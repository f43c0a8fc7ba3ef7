"""
Cosine-similarity ranking of catalog products against a query vector.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..config import DEFAULT_TOP_K, DEFAULT_VECTOR_FIELD, VECTOR_DIM, VectorField, validate_vector_field
from ..errors import DimensionMismatchError, ValidationError
from ..storage import Product


@dataclass(frozen=True)
class ScoredProduct:
    """A product with its cosine similarity to the query vector."""

    product: Product
    score: float


def _unit_scale(values: np.ndarray) -> np.ndarray:
    """Divide each row by its largest absolute component."""
    peaks = np.max(np.abs(values), axis=-1, keepdims=True)
    return values / np.where(peaks > 0, peaks, 1.0)


def cosine_scores(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Cosine similarity of *query* with every row of *matrix*.

    Rows (or a query) with zero magnitude score 0.0.
    """
    query = _unit_scale(query)
    matrix = _unit_scale(matrix)
    query_norm = float(np.linalg.norm(query))
    row_norms = np.linalg.norm(matrix, axis=1)
    denominators = row_norms * query_norm
    dots = matrix @ query
    scores = np.zeros(matrix.shape[0], dtype=np.float64)
    nonzero = denominators > 0
    scores[nonzero] = dots[nonzero] / denominators[nonzero]
    return np.clip(scores, -1.0, 1.0)


class VectorRanker:
    """Rank products by cosine similarity on a configurable vector field."""

    def __init__(
        self,
        *,
        dim: int = VECTOR_DIM,
        vector_field: VectorField = DEFAULT_VECTOR_FIELD,
        top_k: int = DEFAULT_TOP_K,
    ) -> None:
        if top_k < 1:
            raise ValueError("top_k must be >= 1")
        self.dim = dim
        self.vector_field = validate_vector_field(vector_field)
        self.top_k = top_k

    def rank(
        self,
        query_vector: Sequence[float],
        products: Sequence[Product],
        *,
        limit: int | None = None,
    ) -> list[ScoredProduct]:
        """Return products sorted by descending score, ties in catalog order."""
        query = self._validate_query(query_vector)
        if not products:
            return []

        scores = self.score(query, products)
        # stable argsort keeps catalog order among equal scores
        order = np.argsort(-scores, kind="stable")
        effective_limit = self.top_k if limit is None else max(limit, 0)
        return [
            ScoredProduct(product=products[int(i)], score=float(scores[int(i)]))
            for i in order[:effective_limit]
        ]

    def score(self, query: np.ndarray, products: Sequence[Product]) -> np.ndarray:
        if self.vector_field == "title":
            return cosine_scores(query, self._matrix(products, "title_vector"))
        if self.vector_field == "description":
            return cosine_scores(query, self._matrix(products, "description_vector"))
        title_scores = cosine_scores(query, self._matrix(products, "title_vector"))
        description_scores = cosine_scores(query, self._matrix(products, "description_vector"))
        return (title_scores + description_scores) / 2.0

    def _validate_query(self, query_vector: Sequence[float]) -> np.ndarray:
        if len(query_vector) != self.dim:
            raise DimensionMismatchError(
                expected=self.dim, actual=len(query_vector), what="query vector"
            )
        try:
            values = [float(v) for v in query_vector]
        except (TypeError, ValueError):
            raise ValidationError("query vector must contain only numbers.") from None
        if not all(math.isfinite(v) for v in values):
            raise ValidationError("query vector contains non-finite values.")
        return np.asarray(values, dtype=np.float64)

    @staticmethod
    def _matrix(products: Sequence[Product], attribute: str) -> np.ndarray:
        return np.asarray([getattr(p, attribute) for p in products], dtype=np.float64)
