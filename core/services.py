# Path: core/services.py
# Purpose: Wire captioner, embedder, store, scanner, ingestion, and search from settings.
# Layer: core.
# Details: Indexing and search receive the same Embedder instance so captions and queries share one vector space.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from config.settings import AppSettings
from core.embedders import Embedder, build_embedder
from core.indexing import CaptionGenerator, ImageScanner, IndexBuilder, build_captioner
from core.search.pipeline import SearchPipeline
from core.search.strategies import KeywordSearch, SemanticSearch
from core.vector_store import InMemoryVectorStore, VectorStore


@dataclass
class Services:
    """Process-wide collaborators shared by the API and the scripts."""

    settings: AppSettings
    scanner: ImageScanner
    vector_store: VectorStore
    embedder: Embedder
    captioner: CaptionGenerator
    index_builder: IndexBuilder
    search_pipeline: SearchPipeline


def build_services(
    settings: AppSettings,
    captioner: Optional[CaptionGenerator] = None,
    embedder: Optional[Embedder] = None,
    vector_store: Optional[VectorStore] = None,
    **builder_options,
) -> Services:
    """Build the service graph; explicit collaborators override the settings-driven defaults."""

    scanner = ImageScanner(settings.upload_folder, public_prefix=settings.public_prefix)
    vector_store = vector_store if vector_store is not None else InMemoryVectorStore()
    embedder = embedder or build_embedder(settings)
    captioner = captioner or build_captioner(settings)

    index_builder = IndexBuilder(
        captioner=captioner,
        embedder=embedder,
        vector_store=vector_store,
        scanner=scanner,
        throttle_seconds=settings.throttle_seconds,
        **builder_options,
    )
    search_pipeline = SearchPipeline(
        embedder=embedder,
        vector_store=vector_store,
        scanner=scanner,
        k=settings.result_limit,
        semantic=SemanticSearch(snippet_length=settings.smart_snippet_length),
        keyword=KeywordSearch(snippet_length=settings.keyword_snippet_length),
    )
    return Services(
        settings=settings,
        scanner=scanner,
        vector_store=vector_store,
        embedder=embedder,
        captioner=captioner,
        index_builder=index_builder,
        search_pipeline=search_pipeline,
    )
