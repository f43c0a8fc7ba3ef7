"""
Demo product catalog.
"""

from __future__ import annotations

from ..embeddings import HashingEmbedder
from .base import ProductDraft
from .memory import InMemoryCatalog


SAMPLE_PRODUCTS: list[dict[str, object]] = [
    {
        "id": "1",
        "title": "iPhone 15 Pro",
        "description": "Latest Apple smartphone with titanium design and advanced camera system",
        "category": "Electronics",
        "price": 999.99,
    },
    {
        "id": "2",
        "title": "MacBook Air M2",
        "description": "Thin and light laptop with Apple Silicon chip for everyday computing",
        "category": "Computers",
        "price": 1199.99,
    },
    {
        "id": "3",
        "title": "Nike Air Max",
        "description": "Comfortable running shoes with air cushioning technology",
        "category": "Sports",
        "price": 129.99,
    },
    {
        "id": "4",
        "title": "Samsung 4K TV",
        "description": "High definition television with smart features and HDR support",
        "category": "Electronics",
        "price": 599.99,
    },
    {
        "id": "5",
        "title": "Organic Coffee Beans",
        "description": "Premium Arabica coffee beans from sustainable farms",
        "category": "Food",
        "price": 24.99,
    },
]


def build_sample_catalog(embedder: HashingEmbedder | None = None) -> InMemoryCatalog:
    """Return a fresh catalog seeded with the demo products."""
    embedder = embedder or HashingEmbedder()
    catalog = InMemoryCatalog(dim=embedder.dim)
    titles = [str(item["title"]) for item in SAMPLE_PRODUCTS]
    descriptions = [str(item["description"]) for item in SAMPLE_PRODUCTS]
    title_vectors = embedder.embed_texts(titles)
    description_vectors = embedder.embed_texts(descriptions)
    for item, title_vector, description_vector in zip(
        SAMPLE_PRODUCTS, title_vectors, description_vectors
    ):
        catalog.add(
            ProductDraft(
                id=str(item["id"]),
                title=str(item["title"]),
                description=str(item["description"]),
                category=str(item["category"]),
                price=float(item["price"]),  # type: ignore[arg-type]
                title_vector=title_vector,
                description_vector=description_vector,
            )
        )
    return catalog
