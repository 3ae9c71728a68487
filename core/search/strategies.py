# Path: core/search/strategies.py
# Purpose: Define the retrieval strategies the search engine chooses between.
# Layer: core/search.
# Details: Semantic ranking, keyword substring matching over captions, and random sampling of uploads.

from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

import numpy as np

from core.models.domain import ImageRecord, IndexEntry, SearchResult, round_half_up
from .similarity import rank_entries

BASIC_SEARCH_CAPTION = "Enable smart search for better results"


def _snippet(text: str, length: int) -> str:
    return f"{text[:length]}..."


class SearchStrategy:
    """Common attributes of the retrieval strategies."""

    id: str
    description: str

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"


class SemanticSearch(SearchStrategy):
    """Rank stored entries by cosine similarity to the query embedding."""

    id = "semantic"
    description = "Rank captions by embedding similarity to the query."

    def __init__(self, snippet_length: int = 100) -> None:
        self.snippet_length = snippet_length

    def search(self, query_vector: np.ndarray, entries: Sequence[Tuple[str, IndexEntry]], k: int) -> List[SearchResult]:
        results: List[SearchResult] = []
        for entry, score in rank_entries(query_vector, entries, k):
            caption = f"{round_half_up(score * 100)}% match - {_snippet(entry.caption, self.snippet_length)}"
            results.append(SearchResult(filename=entry.image_id, path=entry.path, caption=caption, confidence=score))
        return results


class KeywordSearch(SearchStrategy):
    """Case-insensitive substring match of the query against stored captions."""

    id = "keyword"
    description = "Match the query text inside stored captions."

    def __init__(self, snippet_length: int = 150) -> None:
        self.snippet_length = snippet_length

    def search(self, text: str, entries: Sequence[Tuple[str, IndexEntry]], k: int) -> List[SearchResult]:
        needle = text.lower()
        results: List[SearchResult] = []
        for _, entry in entries:
            if entry.caption and needle in entry.caption.lower():
                results.append(
                    SearchResult(
                        filename=entry.image_id,
                        path=entry.path,
                        caption=_snippet(entry.caption, self.snippet_length),
                    )
                )
                if len(results) >= k:
                    break
        return results


class RandomSampleSearch(SearchStrategy):
    """Pick uploads uniformly at random, without replacement."""

    id = "random"
    description = "Sample uploaded images when no index is available."

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def search(self, images: Sequence[ImageRecord], k: int) -> List[SearchResult]:
        chosen = self.rng.sample(list(images), min(k, len(images)))
        return [SearchResult(filename=image.id, path=image.path, caption=BASIC_SEARCH_CAPTION) for image in chosen]
