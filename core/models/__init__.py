# Path: core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes dataclasses used across captioning, indexing, and search layers.

from .domain import ImageRecord, IndexEntry, ProgressEvent, SearchMode, SearchQuery, SearchResponse, SearchResult
from .outcome import Failed, Outcome, Succeeded

__all__ = [
    "ImageRecord",
    "IndexEntry",
    "ProgressEvent",
    "SearchMode",
    "SearchQuery",
    "SearchResponse",
    "SearchResult",
    "Failed",
    "Outcome",
    "Succeeded",
]
