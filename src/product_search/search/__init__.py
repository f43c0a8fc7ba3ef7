"""Search helpers for the product catalog."""

from .lexical import LexicalMatch, LexicalMatcher, prioritize_title_matches
from .query import ProductSearchEngine, SearchHit, SearchResponse
from .ranker import SEARCH_MODES, HybridCombiner, RankedProduct, SearchMode
from .vector import ScoredProduct, VectorRanker, cosine_scores

__all__ = [
    "LexicalMatch",
    "LexicalMatcher",
    "prioritize_title_matches",
    "ProductSearchEngine",
    "SearchHit",
    "SearchResponse",
    "SEARCH_MODES",
    "HybridCombiner",
    "RankedProduct",
    "SearchMode",
    "ScoredProduct",
    "VectorRanker",
    "cosine_scores",
]
