# Path: core/embedders/hash_embedder.py
# Purpose: Provide an offline text embedder based on feature hashing.
# Layer: core/embedders.
# Details: Tokens are hashed into signed buckets so captions sharing words land close together.

from __future__ import annotations

import hashlib
import re

import numpy as np

from core.models.outcome import Failed, Outcome, Succeeded
from .base import Embedder

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")


class HashEmbedder(Embedder):
    """Deterministic embedder for running without network access."""

    def __init__(self, dim: int = 512) -> None:
        if dim <= 0:
            raise ValueError("Embedding dimensionality must be positive.")
        self.dim = dim
        self.name = "hash"

    def embed_text(self, text: str) -> Outcome[np.ndarray]:
        """Generate a deterministic bag-of-words embedding using SHA-256 bucket hashing."""

        tokens = _TOKEN_PATTERN.findall(text.lower()) if text else []
        if not tokens:
            return Failed("no tokens to embed")

        vector = np.zeros(self.dim, dtype=np.float32)
        for token in tokens:
            digest = hashlib.sha256(token.encode("utf-8")).digest()
            bucket = int.from_bytes(digest[:4], "little") % self.dim
            sign = 1.0 if digest[4] & 1 else -1.0
            vector[bucket] += sign
        if not vector.any():
            # Opposite-signed collisions can cancel out completely.
            vector[int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:4], "little") % self.dim] = 1.0
        return Succeeded(self._normalize(vector))
