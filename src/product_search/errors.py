"""
Exception types raised by the catalog, the search engine and the
external engine client.
"""

from __future__ import annotations


class ProductSearchError(Exception):
    """Base class for all product search errors."""


class ValidationError(ProductSearchError, ValueError):
    """Raised when a product or query fails input validation."""


class DimensionMismatchError(ValidationError):
    """Raised when a vector does not have the expected number of components."""

    def __init__(self, *, expected: int, actual: int, what: str = "vector") -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{what} must have {expected} components, got {actual}."
        )


class NotFoundError(ProductSearchError, LookupError):
    """Raised when a product id is not present in the catalog."""

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id!r}")


class TransportError(ProductSearchError):
    """Raised when the external search engine cannot be reached."""
