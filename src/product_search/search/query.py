"""
Product search engine: catalog access plus mode-dispatched retrieval.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from ..config import SearchSettings
from ..embeddings import HashingEmbedder
from ..storage import CatalogBackend, InMemoryCatalog, Product, ProductDraft
from ..vespa import EngineStatus, VespaClient
from .lexical import LexicalMatcher
from .ranker import HybridCombiner, RankedProduct
from .vector import VectorRanker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchHit:
    """Ranked product hit returned to callers."""

    product: Product
    score: float | None
    matched_by: str
    lexical_field: str | None

    def to_dict(self, *, include_vectors: bool = False) -> dict[str, Any]:
        data = self.product.to_dict(include_vectors=include_vectors)
        data["similarity"] = self.score
        data["matched_by"] = self.matched_by
        data["matched_field"] = self.lexical_field
        return data


@dataclass(frozen=True)
class SearchResponse:
    """Ordered hits for one query."""

    results: list[SearchHit]

    @property
    def count(self) -> int:
        return len(self.results)


class ProductSearchEngine:
    """Hybrid lexical + vector search over an injected catalog."""

    def __init__(
        self,
        catalog: CatalogBackend | None = None,
        *,
        settings: SearchSettings | None = None,
        embedder: HashingEmbedder | None = None,
        vespa: VespaClient | None = None,
    ) -> None:
        self.settings = settings or SearchSettings()
        self.catalog: CatalogBackend = catalog if catalog is not None else InMemoryCatalog(
            dim=self.settings.dim
        )
        if self.catalog.dim != self.settings.dim:
            raise ValueError(
                f"Catalog dim {self.catalog.dim} does not match settings dim {self.settings.dim}"
            )
        self.embedder = embedder or HashingEmbedder(dim=self.settings.dim)
        self.vespa = vespa
        self.combiner = HybridCombiner(
            matcher=LexicalMatcher(),
            ranker=VectorRanker(
                dim=self.settings.dim,
                vector_field=self.settings.vector_field,
                top_k=self.settings.top_k,
            ),
            hybrid_limit=self.settings.hybrid_limit,
        )

    def search(
        self,
        query: str,
        mode: str = "text",
        query_vector: Sequence[float] | None = None,
    ) -> SearchResponse:
        products = self.catalog.list()
        ranked = self.combiner.combine(
            query=query,
            mode=mode,
            products=products,
            query_vector=query_vector,
        )
        logger.info("Search %r (%s) returned %d of %d products", query, mode, len(ranked), len(products))
        return SearchResponse(results=[self._to_hit(item) for item in ranked])

    def add_product(
        self,
        title: str,
        description: str,
        category: str | None = "General",
        price: float | None = 0.0,
        *,
        title_vector: Sequence[float] | None = None,
        description_vector: Sequence[float] | None = None,
        product_id: str | None = None,
    ) -> Product:
        """Add a product, embedding any vector the caller did not supply."""
        draft = ProductDraft(
            id=product_id,
            title=title,
            description=description,
            category=category or "General",
            price=0.0 if price is None else price,
            title_vector=(
                title_vector
                if title_vector is not None
                else self.embedder.embed_query(title or "")
            ),
            description_vector=(
                description_vector
                if description_vector is not None
                else self.embedder.embed_query(description or "")
            ),
        )
        new_id = self.catalog.add(draft)
        logger.info("Added product %s: %s", new_id, title)
        return self.catalog.get(new_id)

    def list_products(self) -> tuple[Product, ...]:
        return self.catalog.list()

    def get_product(self, product_id: str) -> Product:
        return self.catalog.get(product_id)

    async def external_engine_status(self) -> EngineStatus:
        if self.vespa is None:
            return EngineStatus(connected=False, detail="No external engine configured.")
        return await self.vespa.status()

    @staticmethod
    def _to_hit(item: RankedProduct) -> SearchHit:
        return SearchHit(
            product=item.product,
            score=item.score,
            matched_by=item.matched_by,
            lexical_field=item.lexical_field,
        )
