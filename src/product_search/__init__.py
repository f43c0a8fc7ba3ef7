"""
ProductSearch - hybrid lexical and vector search over a product catalog.

This package provides an in-memory catalog, a case-insensitive lexical
matcher, a cosine-similarity vector ranker and a combiner that merges the
two, exposed through a FastAPI service and a Typer CLI.

Example usage:
    >>> from product_search import ProductSearchEngine, build_sample_catalog
    >>> engine = ProductSearchEngine(build_sample_catalog())
    >>> engine.search("iphone", "text").count
    1
"""

from .embeddings import HashingEmbedder
from .errors import (
    DimensionMismatchError,
    NotFoundError,
    ProductSearchError,
    TransportError,
    ValidationError,
)
from .search import ProductSearchEngine, SearchHit, SearchResponse
from .storage import InMemoryCatalog, Product, ProductDraft, build_sample_catalog
from .vespa import EngineStatus, VespaClient

__all__ = [
    # Engine
    "ProductSearchEngine",
    "SearchHit",
    "SearchResponse",
    # Catalog
    "InMemoryCatalog",
    "Product",
    "ProductDraft",
    "build_sample_catalog",
    "HashingEmbedder",
    # External engine
    "EngineStatus",
    "VespaClient",
    # Errors
    "ProductSearchError",
    "ValidationError",
    "DimensionMismatchError",
    "NotFoundError",
    "TransportError",
]
