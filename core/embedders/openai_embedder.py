# Path: core/embedders/openai_embedder.py
# Purpose: Embed text through the OpenAI embeddings endpoint.
# Layer: core/embedders.
# Details: Converts service errors and malformed responses into Failed outcomes.

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import openai

from config.settings import EmbedderSettings, OpenAISettings
from core.models.outcome import Failed, Outcome, Succeeded
from .base import Embedder, is_usable_vector

logger = logging.getLogger(__name__)


def create_openai_client(settings: OpenAISettings) -> openai.OpenAI:
    """Build a client; the SDK falls back to ``OPENAI_API_KEY`` when no key is configured."""

    return openai.OpenAI(api_key=settings.api_key, base_url=settings.base_url, max_retries=0)


class OpenAIEmbedder(Embedder):
    """Embedder backed by a remote embedding model."""

    def __init__(
        self,
        settings: Optional[EmbedderSettings] = None,
        openai_settings: Optional[OpenAISettings] = None,
        client: Optional[openai.OpenAI] = None,
    ) -> None:
        self.settings = settings or EmbedderSettings()
        self.openai_settings = openai_settings or OpenAISettings()
        self.name = "openai"
        self._client = client

    @property
    def client(self) -> openai.OpenAI:
        if self._client is None:
            self._client = create_openai_client(self.openai_settings)
        return self._client

    def embed_text(self, text: str) -> Outcome[np.ndarray]:
        if not text or not text.strip():
            return Failed("cannot embed empty text")

        try:
            response = self.client.embeddings.create(
                model=self.settings.model_name,
                input=text,
                timeout=self.settings.timeout,
            )
            vector = np.asarray(response.data[0].embedding, dtype=np.float32)
        except openai.OpenAIError as exc:
            logger.warning("Embedding request failed: %s", exc)
            return Failed(f"embedding service error: {exc}")
        except (AttributeError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Malformed embedding response: %s", exc)
            return Failed(f"malformed embedding response: {exc}")

        if not is_usable_vector(vector):
            return Failed("embedding service returned an empty, zero or non-finite vector")
        return Succeeded(vector)
