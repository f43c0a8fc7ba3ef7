from __future__ import annotations

import pytest

from product_search.config import SearchSettings
from product_search.search import ProductSearchEngine
from product_search.storage import InMemoryCatalog, ProductDraft, build_sample_catalog


SMALL_DIM = 4


def unit(index: int, dim: int = SMALL_DIM) -> list[float]:
    vector = [0.0] * dim
    vector[index] = 1.0
    return vector


def draft(
    title: str,
    description: str,
    *,
    title_vector: list[float] | None = None,
    description_vector: list[float] | None = None,
    product_id: str | None = None,
    dim: int = SMALL_DIM,
) -> ProductDraft:
    return ProductDraft(
        id=product_id,
        title=title,
        description=description,
        title_vector=title_vector if title_vector is not None else [0.0] * dim,
        description_vector=(
            description_vector if description_vector is not None else [0.0] * dim
        ),
    )


@pytest.fixture()
def sample_engine() -> ProductSearchEngine:
    return ProductSearchEngine(build_sample_catalog())


@pytest.fixture()
def small_catalog() -> InMemoryCatalog:
    """Four products with hand-picked vectors in a 4-dimensional space."""
    catalog = InMemoryCatalog(dim=SMALL_DIM)
    catalog.add(
        draft(
            "Trail running shoes",
            "Lightweight shoes for rough terrain",
            title_vector=unit(0),
            description_vector=unit(0),
        )
    )
    catalog.add(
        draft(
            "Espresso machine",
            "Brews coffee with running water at high pressure",
            title_vector=unit(1),
            description_vector=unit(1),
        )
    )
    catalog.add(
        draft(
            "Running watch",
            "GPS watch with heart rate monitor",
            title_vector=[0.6, 0.8, 0.0, 0.0],
            description_vector=[0.6, 0.8, 0.0, 0.0],
        )
    )
    catalog.add(
        draft(
            "Desk lamp",
            "LED lamp with adjustable arm",
            title_vector=unit(3),
            description_vector=unit(2),
        )
    )
    return catalog


@pytest.fixture()
def small_engine(small_catalog: InMemoryCatalog) -> ProductSearchEngine:
    settings = SearchSettings(vector_field="title", top_k=3, hybrid_limit=3, dim=SMALL_DIM)
    return ProductSearchEngine(small_catalog, settings=settings)
