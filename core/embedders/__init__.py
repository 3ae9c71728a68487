# Path: core/embedders/__init__.py
# Purpose: Package initializer for embedder implementations and interfaces.
# Layer: core/embedders.
# Details: Exposes the base interface, reference implementations, and a settings-driven factory.

from __future__ import annotations

from config.settings import AppSettings
from .base import Embedder, is_usable_vector, usable_embedding
from .hash_embedder import HashEmbedder
from .openai_embedder import OpenAIEmbedder, create_openai_client


def build_embedder(settings: AppSettings, client=None) -> Embedder:
    """Return the embedder selected by ``settings.embedder.name``."""

    name = settings.embedder.name.lower()
    if name == "hash":
        return HashEmbedder(dim=settings.embedder.dim)
    if name == "openai":
        return OpenAIEmbedder(settings.embedder, settings.openai, client=client)
    raise ValueError(f"Unknown embedder: {settings.embedder.name}")


__all__ = [
    "Embedder",
    "HashEmbedder",
    "OpenAIEmbedder",
    "build_embedder",
    "create_openai_client",
    "is_usable_vector",
    "usable_embedding",
]
