# Path: core/embedders/base.py
# Purpose: Define the Embedder interface for text embeddings.
# Layer: core/embedders.
# Details: Captions and queries go through the same Embedder instance so they share one vector space.

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from core.models.outcome import Failed, Outcome


def is_usable_vector(vector: np.ndarray) -> bool:
    """Return True for a non-empty, finite, not all-zero 1-D vector."""

    return vector.ndim == 1 and vector.size > 0 and bool(np.isfinite(vector).all()) and bool(vector.any())


def usable_embedding(outcome: Outcome[np.ndarray]) -> Outcome[np.ndarray]:
    """Turn a successful but unusable embedding into a failure; cosine similarity is undefined for it."""

    if outcome.ok and not is_usable_vector(np.asarray(outcome.value)):
        return Failed("embedding is empty, zero or non-finite")
    return outcome


class Embedder(ABC):
    """Abstract base class for all text embedders used by indexing and search."""

    name: str

    @abstractmethod
    def embed_text(self, text: str) -> Outcome[np.ndarray]:
        """Return a fixed-length embedding for ``text`` or a failure; never raise for upstream errors."""

    @staticmethod
    def _normalize(vector: np.ndarray) -> np.ndarray:
        """Normalize embedding vectors to unit length to simplify similarity comparisons."""

        norm = np.linalg.norm(vector)
        if norm == 0:
            return vector.astype(np.float32)
        return (vector / norm).astype(np.float32)
