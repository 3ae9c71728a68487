# Path: core/search/pipeline.py
# Purpose: Orchestrate search by choosing between semantic ranking and the fallback strategies.
# Layer: core/search.
# Details: Embeds queries with the same embedder used at index time and reports the mode actually used.

from __future__ import annotations

import logging
from typing import Optional

from core.embedders.base import Embedder, usable_embedding
from core.errors import EmptyQueryError
from core.indexing.scanner import ImageScanner
from core.models.domain import SearchMode, SearchQuery, SearchResponse
from core.vector_store.base import VectorStore
from .strategies import KeywordSearch, RandomSampleSearch, SemanticSearch

logger = logging.getLogger(__name__)


class SearchPipeline:
    """High-level service bridging the API and scripts with the embedder and vector store."""

    def __init__(
        self,
        embedder: Embedder,
        vector_store: VectorStore,
        scanner: ImageScanner,
        k: int = 5,
        semantic: Optional[SemanticSearch] = None,
        keyword: Optional[KeywordSearch] = None,
        sampler: Optional[RandomSampleSearch] = None,
    ) -> None:
        self.embedder = embedder
        self.vector_store = vector_store
        self.scanner = scanner
        self.k = k
        self.semantic = semantic or SemanticSearch()
        self.keyword = keyword or KeywordSearch()
        self.sampler = sampler or RandomSampleSearch()

    def search(self, query: SearchQuery) -> SearchResponse:
        """
        Run ``query`` and return results together with the mode that produced them.

        Smart mode with a non-empty store embeds the query and ranks every entry; if the
        query cannot be embedded it falls back to keyword matching over captions and
        reports basic mode. Basic mode, or smart mode over an empty store, samples
        uploaded images at random without touching the embedder.

        External calls:
        - core/embedders/base.py::Embedder.embed_text - embeds the query text.
        - core/vector_store/base.py::VectorStore.all_entries - snapshot of indexed captions.
        - core/indexing/scanner.py::ImageScanner.scan - lists uploads for random sampling.
        """

        text = query.text or ""
        if not text.strip():
            raise EmptyQueryError("Search query required")

        if query.mode is SearchMode.SMART and not self.vector_store.is_empty():
            entries = self.vector_store.all_entries()
            query_vector = usable_embedding(self.embedder.embed_text(text))
            if query_vector.ok:
                results = self.semantic.search(query_vector.value, entries, self.k)
                return SearchResponse(query=text, mode=SearchMode.SMART, results=results)

            logger.warning("Query embedding failed, using keyword matching: %s", query_vector.reason)
            results = self.keyword.search(text, entries, self.k)
            return SearchResponse(query=text, mode=SearchMode.BASIC, results=results)

        images = self.scanner.scan()
        return SearchResponse(query=text, mode=SearchMode.BASIC, results=self.sampler.search(images, self.k))
