# Path: core/search/similarity.py
# Purpose: Score and order stored embeddings against a query embedding.
# Layer: core/search.
# Details: Cosine similarity with loud failures for mismatched dimensions and zero vectors.

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from core.errors import DimensionMismatchError, ZeroVectorError
from core.models.domain import IndexEntry


def cosine_similarity(vector_a: np.ndarray, vector_b: np.ndarray) -> float:
    """Return the cosine of the angle between two vectors, in [-1, 1]."""

    a = np.asarray(vector_a, dtype=np.float64).ravel()
    b = np.asarray(vector_b, dtype=np.float64).ravel()
    if a.shape != b.shape:
        raise DimensionMismatchError(f"Cannot compare vectors of dimension {a.size} and {b.size}.")

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        raise ZeroVectorError("Cosine similarity is undefined for a zero vector.")

    score = float(np.dot(a, b) / (norm_a * norm_b))
    return max(-1.0, min(1.0, score))


def rank_entries(
    query: np.ndarray, entries: Sequence[Tuple[str, IndexEntry]], k: int
) -> List[Tuple[IndexEntry, float]]:
    """Return the ``k`` best-scoring entries, highest first.

    Ties keep the order of ``entries`` (the sort is stable), so identical inputs
    always rank identically.
    """

    scored = [(entry, cosine_similarity(query, entry.embedding)) for _, entry in entries]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored[:k]
