# Path: core/vector_store/base.py
# Purpose: Define the VectorStore interface for caption/embedding entries.
# Layer: core/vector_store.
# Details: One writer (the active ingestion run) and many concurrent readers (searches) share a store.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from core.models.domain import IndexEntry


class VectorStore(ABC):
    """Abstract base class for pluggable vector store backends."""

    name: str

    @abstractmethod
    def has(self, image_id: str) -> bool:
        """Return True if an entry exists for ``image_id``."""

    @abstractmethod
    def get(self, image_id: str) -> Optional[IndexEntry]:
        """Return the entry stored for ``image_id`` if present."""

    @abstractmethod
    def put(self, image_id: str, entry: IndexEntry) -> None:
        """Insert or explicitly overwrite the entry for ``image_id``."""

    @abstractmethod
    def all_entries(self) -> List[Tuple[str, IndexEntry]]:
        """Return a snapshot of every (id, entry) pair at call time."""

    @abstractmethod
    def size(self) -> int:
        """Return the number of stored entries."""

    def is_empty(self) -> bool:
        return self.size() == 0

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, image_id: object) -> bool:
        return isinstance(image_id, str) and self.has(image_id)
