"""Tests for the hashing embedder."""

from __future__ import annotations

import math

import pytest

from product_search.embeddings import HashingEmbedder


def _cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    return dot / (math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b)))


def test_embed_texts_returns_correct_count_and_dimension() -> None:
    embedder = HashingEmbedder(dim=64)

    embeddings = embedder.embed_texts(["hello", "world"])

    assert len(embeddings) == 2
    assert all(len(vector) == 64 for vector in embeddings)


def test_embeddings_are_deterministic_across_instances() -> None:
    first = HashingEmbedder().embed_query("Organic Coffee Beans")
    second = HashingEmbedder().embed_query("Organic Coffee Beans")

    assert first == second


def test_embeddings_are_unit_length_with_bounded_components() -> None:
    vector = HashingEmbedder().embed_query("Thin and light laptop")

    assert math.isclose(math.sqrt(sum(v * v for v in vector)), 1.0, rel_tol=1e-9)
    assert all(-1.0 <= v <= 1.0 for v in vector)


def test_embedding_is_case_insensitive() -> None:
    embedder = HashingEmbedder()

    assert embedder.embed_query("iPhone") == embedder.embed_query("IPHONE")


def test_text_without_tokens_embeds_to_zero_vector() -> None:
    vector = HashingEmbedder(dim=16).embed_query("  !!  ")

    assert vector == [0.0] * 16


def test_shared_words_score_higher_than_unrelated_text() -> None:
    embedder = HashingEmbedder()
    query = embedder.embed_query("coffee beans")

    related = embedder.embed_query("Organic Coffee Beans")
    unrelated = embedder.embed_query("Samsung 4K TV")

    assert _cosine(query, related) > _cosine(query, unrelated)


def test_rejects_non_positive_dimension() -> None:
    with pytest.raises(ValueError):
        HashingEmbedder(dim=0)
