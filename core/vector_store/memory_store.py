# Path: core/vector_store/memory_store.py
# Purpose: Provide a process-lifetime in-memory vector store.
# Layer: core/vector_store.
# Details: Entries are immutable once inserted; readers iterate a copied snapshot so concurrent puts are benign.

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Tuple

from core.models.domain import IndexEntry
from .base import VectorStore


class InMemoryVectorStore(VectorStore):
    """Dictionary-backed store; contents are lost when the process exits."""

    def __init__(self, name: str = "memory") -> None:
        self.name = name
        self._entries: Dict[str, IndexEntry] = {}
        self._lock = threading.Lock()

    def has(self, image_id: str) -> bool:
        return image_id in self._entries

    def get(self, image_id: str) -> Optional[IndexEntry]:
        return self._entries.get(image_id)

    def put(self, image_id: str, entry: IndexEntry) -> None:
        if entry.image_id != image_id:
            raise ValueError(f"Entry for {entry.image_id!r} cannot be stored under {image_id!r}.")
        with self._lock:
            self._entries[image_id] = entry

    def all_entries(self) -> List[Tuple[str, IndexEntry]]:
        # Copying under the lock keeps iteration safe while the ingestion run keeps writing.
        with self._lock:
            return list(self._entries.items())

    def size(self) -> int:
        return len(self._entries)
