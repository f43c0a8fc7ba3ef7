"""
Catalog interfaces and data models for product storage.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence


@dataclass(frozen=True)
class Product:
    """A catalog product together with its precomputed vectors."""

    id: str
    title: str
    description: str
    category: str
    price: float
    title_vector: tuple[float, ...]
    description_vector: tuple[float, ...]

    def to_dict(self, *, include_vectors: bool = False) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "price": self.price,
        }
        if include_vectors:
            data["title_vector"] = list(self.title_vector)
            data["description_vector"] = list(self.description_vector)
        return data


@dataclass(frozen=True)
class ProductDraft:
    """Product fields supplied by a caller before the catalog assigns an id."""

    title: str
    description: str
    title_vector: Sequence[float]
    description_vector: Sequence[float]
    category: str = "General"
    price: float = 0.0
    id: str | None = None


class CatalogBackend(Protocol):
    """Protocol for the catalog operations used by the search engine."""

    dim: int

    def add(self, draft: ProductDraft) -> str:
        """Validate and append a product, returning its id."""

    def list(self) -> tuple[Product, ...]:
        """Return a snapshot of all products in insertion order."""

    def get(self, product_id: str) -> Product:
        """Return a product by id or raise ``NotFoundError``."""

    def __len__(self) -> int:
        """Return the number of stored products."""
