"""
In-memory catalog store.

Writers are serialized by a lock; readers get an immutable snapshot tuple
that is swapped on every add, so queries never block on writers.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import replace
from typing import Sequence

from ..config import VECTOR_DIM
from ..errors import DimensionMismatchError, NotFoundError, ValidationError
from .base import Product, ProductDraft

logger = logging.getLogger(__name__)


def _require_text(value: str | None, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"Product {field_name} is required.")
    return str(value)


def _coerce_vector(values: Sequence[float], *, dim: int, field_name: str) -> tuple[float, ...]:
    try:
        vector = tuple(float(v) for v in values)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must contain only numbers.") from None
    if len(vector) != dim:
        raise DimensionMismatchError(expected=dim, actual=len(vector), what=field_name)
    if not all(math.isfinite(v) for v in vector):
        raise ValidationError(f"{field_name} contains non-finite values.")
    return vector


class InMemoryCatalog:
    """Append-only product catalog kept in process memory."""

    def __init__(self, *, dim: int = VECTOR_DIM) -> None:
        if dim <= 0:
            raise ValueError("dim must be > 0")
        self.dim = dim
        self._lock = threading.Lock()
        self._products: tuple[Product, ...] = ()
        self._by_id: dict[str, Product] = {}
        self._next_id = 1

    def add(self, draft: ProductDraft) -> str:
        product = self._build(draft)
        with self._lock:
            product_id = product.id or self._allocate_id()
            if product_id in self._by_id:
                raise ValidationError(f"Product id already exists: {product_id!r}")
            if not product.id:
                product = replace(product, id=product_id)
            by_id = dict(self._by_id)
            by_id[product_id] = product
            self._by_id = by_id
            self._products = self._products + (product,)
        logger.debug("Added product %s (%s)", product_id, product.title)
        return product_id

    def list(self) -> tuple[Product, ...]:
        return self._products

    def get(self, product_id: str) -> Product:
        product = self._by_id.get(str(product_id))
        if product is None:
            raise NotFoundError(str(product_id))
        return product

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._by_id

    def _allocate_id(self) -> str:
        while str(self._next_id) in self._by_id:
            self._next_id += 1
        product_id = str(self._next_id)
        self._next_id += 1
        return product_id

    def _build(self, draft: ProductDraft) -> Product:
        title = _require_text(draft.title, "title")
        description = _require_text(draft.description, "description")
        category = str(draft.category).strip() if draft.category else ""
        try:
            price = float(draft.price)
        except (TypeError, ValueError):
            raise ValidationError(f"Product price must be a number, got {draft.price!r}.") from None
        if not math.isfinite(price) or price < 0:
            raise ValidationError(f"Product price must be non-negative, got {draft.price!r}.")
        product_id = str(draft.id).strip() if draft.id is not None else ""
        if draft.id is not None and not product_id:
            raise ValidationError("Product id must not be blank.")
        return Product(
            id=product_id,
            title=title,
            description=description,
            category=category or "General",
            price=price,
            title_vector=_coerce_vector(draft.title_vector, dim=self.dim, field_name="title_vector"),
            description_vector=_coerce_vector(
                draft.description_vector, dim=self.dim, field_name="description_vector"
            ),
        )
