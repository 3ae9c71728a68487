# Path: core/search/__init__.py
# Purpose: Package initializer for search strategies and pipeline orchestration.
# Layer: core/search.
# Details: Exposes the similarity ranker, strategy classes, and the main search pipeline entrypoint.

from .pipeline import SearchPipeline
from .similarity import cosine_similarity, rank_entries
from .strategies import BASIC_SEARCH_CAPTION, KeywordSearch, RandomSampleSearch, SearchStrategy, SemanticSearch

__all__ = [
    "SearchPipeline",
    "SearchStrategy",
    "SemanticSearch",
    "KeywordSearch",
    "RandomSampleSearch",
    "BASIC_SEARCH_CAPTION",
    "cosine_similarity",
    "rank_entries",
]
