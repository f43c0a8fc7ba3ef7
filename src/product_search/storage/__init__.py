"""Catalog storage for product search."""

from .base import CatalogBackend, Product, ProductDraft
from .memory import InMemoryCatalog
from .sample import SAMPLE_PRODUCTS, build_sample_catalog

__all__ = [
    "CatalogBackend",
    "Product",
    "ProductDraft",
    "InMemoryCatalog",
    "SAMPLE_PRODUCTS",
    "build_sample_catalog",
]
