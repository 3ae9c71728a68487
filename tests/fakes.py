import zlib
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import numpy as np

from core.embedders.base import Embedder
from core.indexing.captions import CaptionGenerator
from core.models.domain import IndexEntry
from core.models.outcome import Failed, Succeeded

FIXED_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeCaptioner(CaptionGenerator):
    """Captions images by looking up their bytes; bytes listed in ``failing`` fail."""

    def __init__(self, captions: Optional[Dict[bytes, str]] = None, failing: Iterable[bytes] = ()) -> None:
        self.captions = captions or {}
        self.failing = set(failing)
        self.calls: List[bytes] = []

    def caption(self, image_bytes):
        self.calls.append(image_bytes)
        if image_bytes in self.failing:
            return Failed("vision service error")
        return Succeeded(self.captions.get(image_bytes, f"caption for {image_bytes.decode()}"))


class FakeEmbedder(Embedder):
    """Returns preset vectors for known texts, a hashed vector otherwise."""

    def __init__(self, vectors: Optional[Dict[str, List[float]]] = None, failing: Iterable[str] = (), dim: int = 3):
        self.name = "fake"
        self.vectors = vectors or {}
        self.failing = set(failing)
        self.dim = dim
        self.calls: List[str] = []

    def embed_text(self, text):
        self.calls.append(text)
        if text in self.failing:
            return Failed("embedding service error")
        if text in self.vectors:
            return Succeeded(np.asarray(self.vectors[text], dtype=np.float32))
        rng = np.random.default_rng(zlib.crc32(text.encode()))
        return Succeeded(rng.random(self.dim).astype(np.float32) + 0.1)


def make_entry(image_id: str, caption: str, embedding) -> IndexEntry:
    return IndexEntry(
        image_id=image_id,
        path=f"/uploads/{image_id}",
        caption=caption,
        embedding=np.asarray(embedding, dtype=np.float32),
        processed_at=FIXED_TIME,
    )


def write_images(folder: Path, names: Iterable[str]) -> None:
    for name in names:
        (folder / name).write_bytes(name.encode())
