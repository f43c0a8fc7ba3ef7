"""
Case-insensitive substring matching over product text fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..storage import Product


@dataclass(frozen=True)
class LexicalMatch:
    """A product whose title or description contains the query."""

    product: Product
    in_title: bool
    in_description: bool

    @property
    def field(self) -> str:
        return "title" if self.in_title else "description"


class LexicalMatcher:
    """Match a query against product titles and descriptions."""

    def match(self, query: str, products: Iterable[Product]) -> list[LexicalMatch]:
        """Return matches in catalog order."""
        if not query.strip():
            return []
        needle = query.casefold()
        matches: list[LexicalMatch] = []
        for product in products:
            in_title = needle in product.title.casefold()
            in_description = needle in product.description.casefold()
            if in_title or in_description:
                matches.append(
                    LexicalMatch(
                        product=product,
                        in_title=in_title,
                        in_description=in_description,
                    )
                )
        return matches


def prioritize_title_matches(matches: list[LexicalMatch]) -> list[LexicalMatch]:
    """Order title matches ahead of description-only matches, stably."""
    return sorted(matches, key=lambda match: 0 if match.in_title else 1)
