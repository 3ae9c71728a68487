# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes settings for the upload folder, upstream services, ingestion throttling, and search limits.

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_VISION_PROMPT = (
    "Describe this image in detail. Include: people (relationships if apparent), location, activities, "
    "colors, clothing, objects, and any text visible. Be specific about distinguishing features that "
    "would help someone search for this photo later."
)

ENV_PREFIX = "PHOTOQUERY_"


class OpenAISettings(BaseModel):
    """Credentials and endpoint shared by the vision and embedding clients."""

    api_key: Optional[str] = Field(default=None, description="API key for the OpenAI-compatible service.")
    base_url: Optional[str] = Field(default=None, description="Override for the service base URL.")


class EmbedderSettings(BaseModel):
    """Settings describing which text embedder implementation to use and how to call it."""

    model_config = ConfigDict(protected_namespaces=())

    name: str = Field(default="openai", description="Identifier of the embedder implementation (openai or hash).")
    model_name: str = Field(default="text-embedding-ada-002", description="Embedding model requested upstream.")
    dim: int = Field(default=1536, description="Dimensionality produced by the offline hash embedder.")
    timeout: float = Field(default=30.0, description="Seconds before an embedding request is abandoned.")


class VisionSettings(BaseModel):
    """Settings for the image captioning service."""

    model_config = ConfigDict(protected_namespaces=())

    model_name: str = Field(default="gpt-4o-mini", description="Vision-capable chat model.")
    prompt: str = Field(default=DEFAULT_VISION_PROMPT, description="Instruction sent alongside every image.")
    max_tokens: int = Field(default=300, description="Upper bound on caption length in tokens.")
    detail: str = Field(default="high", description="Image detail level requested from the service.")
    timeout: float = Field(default=60.0, description="Seconds before a caption request is abandoned.")


class AppSettings(BaseModel):
    """Top-level application settings shared across services and interfaces."""

    upload_folder: Path = Field(default=Path("uploads"), description="Folder containing uploaded images.")
    public_prefix: str = Field(default="/uploads", description="URL prefix under which uploads are served.")
    throttle_seconds: float = Field(default=0.5, ge=0, description="Delay between items during ingestion.")
    result_limit: int = Field(default=5, gt=0, description="Maximum number of search results returned.")
    smart_snippet_length: int = Field(default=100, description="Caption characters shown for ranked results.")
    keyword_snippet_length: int = Field(default=150, description="Caption characters shown for keyword matches.")
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    embedder: EmbedderSettings = Field(default_factory=EmbedderSettings)
    vision: VisionSettings = Field(default_factory=VisionSettings)
    api_title: str = Field(default="PhotoQuery API", description="Title reported by the HTTP API.")
    host: str = Field(default="0.0.0.0", description="Interface the HTTP API binds to.")
    port: int = Field(default=8081, description="Port the HTTP API listens on.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "AppSettings":
        """Instantiate settings, applying ``PHOTOQUERY_*`` and ``OPENAI_API_KEY`` overrides."""

        env = os.environ if environ is None else environ
        settings = cls()
        overrides = {}
        for field_name in ("upload_folder", "public_prefix", "throttle_seconds", "result_limit", "host", "port", "log_level"):
            value = env.get(f"{ENV_PREFIX}{field_name.upper()}")
            if value is not None:
                overrides[field_name] = value

        embedder_name = env.get(f"{ENV_PREFIX}EMBEDDER")
        if embedder_name:
            overrides["embedder"] = settings.embedder.model_copy(update={"name": embedder_name})

        api_key = env.get("OPENAI_API_KEY")
        base_url = env.get("OPENAI_BASE_URL")
        if api_key or base_url:
            overrides["openai"] = OpenAISettings(api_key=api_key, base_url=base_url)

        # model_validate re-runs coercion so string values from the environment become typed.
        return cls.model_validate({**settings.model_dump(), **overrides})


__all__ = ["AppSettings", "EmbedderSettings", "OpenAISettings", "VisionSettings", "DEFAULT_VISION_PROMPT"]
