# Path: core/models/domain.py
# Purpose: Define domain models shared across captioning, indexing, and search workflows.
# Layer: core/models.
# Details: Lightweight dataclasses simplify serialization between the API, scripts, and core services.

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up, as the client-side percentages do."""

    return math.floor(value + 0.5)


@dataclass(frozen=True)
class ImageRecord:
    """An uploaded image as seen through the upload folder."""

    id: str
    path: str
    size: int
    uploaded_at: datetime
    file_path: Path

    def read_bytes(self) -> bytes:
        return self.file_path.read_bytes()


@dataclass(frozen=True)
class IndexEntry:
    """Caption and embedding computed for one image.

    Entries are only ever built once both the caption and the embedding exist,
    and are never mutated after insertion into a vector store.
    """

    image_id: str
    path: str
    caption: str
    embedding: np.ndarray
    processed_at: datetime


@dataclass(frozen=True)
class ProgressEvent:
    """One step of an ingestion run as delivered to the streaming transport."""

    processed: int
    total: int
    current_file: Optional[str] = None
    complete: bool = False
    error: bool = False
    message: Optional[str] = None

    @property
    def progress(self) -> int:
        if self.total == 0:
            return 100
        return round_half_up(self.processed / self.total * 100)

    @property
    def terminal(self) -> bool:
        return self.complete or self.error

    def to_payload(self) -> Dict[str, Any]:
        if self.error:
            return {"error": "Processing failed", "message": self.message or ""}
        if self.complete:
            return {"complete": True, "progress": self.progress, "processed": self.processed, "total": self.total}
        return {
            "progress": self.progress,
            "processed": self.processed,
            "total": self.total,
            "currentFile": self.current_file,
        }


class SearchMode(str, Enum):
    """Retrieval strategy requested by, or reported back to, the caller."""

    SMART = "smart"
    BASIC = "basic"


@dataclass
class SearchQuery:
    """User-facing query structure supplied by API and script layers."""

    text: str
    mode: SearchMode = SearchMode.BASIC

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SearchQuery":
        smart = bool(payload.get("useSmartSearch", False))
        return cls(text=str(payload.get("query") or ""), mode=SearchMode.SMART if smart else SearchMode.BASIC)


@dataclass
class SearchResult:
    """Search candidate combining image location with a caption snippet."""

    filename: str
    path: str
    caption: str
    confidence: Optional[float] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"filename": self.filename, "path": self.path, "caption": self.caption}
        if self.confidence is not None:
            payload["confidence"] = self.confidence
        return payload


@dataclass
class SearchResponse:
    """Results of one query together with the mode that actually produced them."""

    query: str
    mode: SearchMode
    results: List[SearchResult] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "success": True,
            "query": self.query,
            "results": [result.to_payload() for result in self.results],
            "searchType": self.mode.value,
        }
