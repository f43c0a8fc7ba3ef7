"""
Ranking helpers for merging lexical and vector result sets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence, get_args

from ..config import DEFAULT_HYBRID_LIMIT
from ..errors import ValidationError
from ..storage import Product
from .lexical import LexicalMatch, LexicalMatcher, prioritize_title_matches
from .vector import VectorRanker


SearchMode = Literal["text", "semantic", "hybrid"]
SEARCH_MODES: tuple[str, ...] = get_args(SearchMode)


@dataclass(frozen=True)
class RankedProduct:
    """Merged retrieval candidate for a product."""

    product: Product
    score: float | None = None
    lexical_field: str | None = None

    @property
    def matched_by(self) -> str:
        if self.lexical_field is not None and self.score is not None:
            return "lexical+semantic"
        if self.lexical_field is not None:
            return "lexical"
        return "semantic"


def validate_mode(mode: str) -> SearchMode:
    if mode not in SEARCH_MODES:
        raise ValidationError(
            f"Unknown search type {mode!r}; expected one of {', '.join(SEARCH_MODES)}."
        )
    return mode  # type: ignore[return-value]


class HybridCombiner:
    """Dispatch a query by mode and merge the matcher and ranker outputs.

    ``text``: lexical matches, title matches ahead of description-only ones.
    ``semantic``: vector ranking, top-K.
    ``hybrid``: lexical matches first, then the vector-ranked remainder,
    deduplicated by product id and cut to ``hybrid_limit``.
    """

    def __init__(
        self,
        *,
        matcher: LexicalMatcher | None = None,
        ranker: VectorRanker | None = None,
        hybrid_limit: int = DEFAULT_HYBRID_LIMIT,
    ) -> None:
        if hybrid_limit < 1:
            raise ValueError("hybrid_limit must be >= 1")
        self.matcher = matcher or LexicalMatcher()
        self.ranker = ranker or VectorRanker()
        self.hybrid_limit = hybrid_limit

    def combine(
        self,
        *,
        query: str,
        mode: str,
        products: Sequence[Product],
        query_vector: Sequence[float] | None = None,
    ) -> list[RankedProduct]:
        if query is None or not query.strip():
            raise ValidationError("Query is required.")
        search_mode = validate_mode(mode)
        if search_mode != "text" and query_vector is None:
            raise ValidationError(f"A query vector is required for {search_mode} search.")

        if search_mode == "text":
            return self._text(query, products)
        if search_mode == "semantic":
            return [
                RankedProduct(product=hit.product, score=hit.score)
                for hit in self.ranker.rank(query_vector, products)  # type: ignore[arg-type]
            ]
        return self._hybrid(query, products, query_vector)  # type: ignore[arg-type]

    def _text(self, query: str, products: Sequence[Product]) -> list[RankedProduct]:
        matches = prioritize_title_matches(self.matcher.match(query, products))
        return [
            RankedProduct(product=match.product, lexical_field=match.field)
            for match in matches
        ]

    def _hybrid(
        self,
        query: str,
        products: Sequence[Product],
        query_vector: Sequence[float],
    ) -> list[RankedProduct]:
        vector_hits = self.ranker.rank(query_vector, products, limit=len(products))
        scores = {hit.product.id: hit.score for hit in vector_hits}
        matches: list[LexicalMatch] = prioritize_title_matches(
            self.matcher.match(query, products)
        )

        merged: list[RankedProduct] = []
        seen: set[str] = set()
        for match in matches:
            if match.product.id in seen:
                continue
            seen.add(match.product.id)
            merged.append(
                RankedProduct(
                    product=match.product,
                    score=scores.get(match.product.id),
                    lexical_field=match.field,
                )
            )
        for hit in vector_hits:
            if hit.product.id in seen:
                continue
            seen.add(hit.product.id)
            merged.append(RankedProduct(product=hit.product, score=hit.score))
        return merged[: self.hybrid_limit]
