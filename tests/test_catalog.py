"""Tests for the in-memory catalog store and the demo catalog."""

from __future__ import annotations

import threading
from dataclasses import replace

import pytest

from conftest import SMALL_DIM, draft, unit
from product_search.errors import DimensionMismatchError, NotFoundError, ValidationError
from product_search.storage import SAMPLE_PRODUCTS, InMemoryCatalog, build_sample_catalog


def test_add_assigns_sequential_ids_and_preserves_order() -> None:
    catalog = InMemoryCatalog(dim=SMALL_DIM)

    first = catalog.add(draft("Kettle", "Boils water"))
    second = catalog.add(draft("Toaster", "Browns bread"))

    assert (first, second) == ("1", "2")
    assert [p.title for p in catalog.list()] == ["Kettle", "Toaster"]
    assert len(catalog) == 2
    assert "1" in catalog


def test_add_skips_counter_values_taken_by_explicit_ids() -> None:
    catalog = InMemoryCatalog(dim=SMALL_DIM)
    catalog.add(draft("Kettle", "Boils water", product_id="2"))

    assert catalog.add(draft("Toaster", "Browns bread")) == "1"
    assert catalog.add(draft("Blender", "Mixes smoothies")) == "3"


@pytest.mark.parametrize(
    ("title", "description"),
    [("", "Boils water"), ("Kettle", ""), ("   ", "Boils water")],
)
def test_add_rejects_missing_text(title: str, description: str) -> None:
    catalog = InMemoryCatalog(dim=SMALL_DIM)

    with pytest.raises(ValidationError):
        catalog.add(draft(title, description))
    assert len(catalog) == 0


def test_add_rejects_negative_price() -> None:
    catalog = InMemoryCatalog(dim=SMALL_DIM)
    item = draft("Kettle", "Boils water")
    negative = replace(item, price=-1.0)

    with pytest.raises(ValidationError):
        catalog.add(negative)


def test_add_rejects_duplicate_id() -> None:
    catalog = InMemoryCatalog(dim=SMALL_DIM)
    catalog.add(draft("Kettle", "Boils water", product_id="k1"))

    with pytest.raises(ValidationError):
        catalog.add(draft("Other kettle", "Also boils water", product_id="k1"))
    assert len(catalog) == 1


def test_add_rejects_wrong_vector_length_without_partial_insert() -> None:
    catalog = InMemoryCatalog(dim=SMALL_DIM)

    with pytest.raises(DimensionMismatchError) as excinfo:
        catalog.add(draft("Kettle", "Boils water", description_vector=[1.0, 0.0]))

    assert excinfo.value.expected == SMALL_DIM
    assert excinfo.value.actual == 2
    assert catalog.list() == ()


def test_get_unknown_id_raises_not_found() -> None:
    catalog = InMemoryCatalog(dim=SMALL_DIM)

    with pytest.raises(NotFoundError) as excinfo:
        catalog.get("missing")
    assert excinfo.value.product_id == "missing"


def test_list_returns_snapshot_unaffected_by_later_adds() -> None:
    catalog = InMemoryCatalog(dim=SMALL_DIM)
    catalog.add(draft("Kettle", "Boils water", title_vector=unit(0)))
    snapshot = catalog.list()

    catalog.add(draft("Toaster", "Browns bread"))

    assert len(snapshot) == 1
    assert len(catalog.list()) == 2


def test_concurrent_adds_produce_unique_ids() -> None:
    catalog = InMemoryCatalog(dim=SMALL_DIM)

    def worker(offset: int) -> None:
        for i in range(25):
            catalog.add(draft(f"Item {offset}-{i}", "Bulk item"))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    ids = [p.id for p in catalog.list()]
    assert len(ids) == 100
    assert len(set(ids)) == 100


def test_sample_catalog_matches_demo_products() -> None:
    catalog = build_sample_catalog()

    products = catalog.list()
    assert [p.id for p in products] == ["1", "2", "3", "4", "5"]
    assert [p.title for p in products] == [item["title"] for item in SAMPLE_PRODUCTS]
    assert all(len(p.title_vector) == 512 for p in products)
    assert all(-1.0 <= v <= 1.0 for p in products for v in p.description_vector)


def test_product_to_dict_omits_vectors_by_default() -> None:
    product = build_sample_catalog().get("3")

    assert "title_vector" not in product.to_dict()
    with_vectors = product.to_dict(include_vectors=True)
    assert len(with_vectors["title_vector"]) == 512
    assert with_vectors["category"] == "Sports"
