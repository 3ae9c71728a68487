# Path: core/indexing/captions.py
# Purpose: Turn image bytes into searchable natural-language captions.
# Layer: core/indexing.
# Details: Calls a vision-capable chat model with a fixed descriptive prompt; failures become Failed outcomes.

from __future__ import annotations

import base64
import io
import logging
from abc import ABC, abstractmethod
from typing import Optional

import openai
from PIL import Image, UnidentifiedImageError

from config.settings import OpenAISettings, VisionSettings
from core.embedders.openai_embedder import create_openai_client
from core.models.outcome import Failed, Outcome, Succeeded

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"


class CaptionGenerator(ABC):
    """Interface for components producing a caption for one image."""

    @abstractmethod
    def caption(self, image_bytes: bytes) -> Outcome[str]:
        """Describe the image or return a failure; never raise for upstream errors."""


def detect_mime_type(image_bytes: bytes) -> str:
    """Guess the MIME type of encoded image bytes, defaulting to JPEG."""

    try:
        with Image.open(io.BytesIO(image_bytes)) as image:
            mime = Image.MIME.get(image.format or "")
    except (UnidentifiedImageError, OSError):
        return DEFAULT_MIME_TYPE
    return mime or DEFAULT_MIME_TYPE


class VisionCaptioner(CaptionGenerator):
    """Caption generator backed by a remote vision model."""

    def __init__(
        self,
        settings: Optional[VisionSettings] = None,
        openai_settings: Optional[OpenAISettings] = None,
        client: Optional[openai.OpenAI] = None,
    ) -> None:
        self.settings = settings or VisionSettings()
        self.openai_settings = openai_settings or OpenAISettings()
        self._client = client

    @property
    def client(self) -> openai.OpenAI:
        if self._client is None:
            self._client = create_openai_client(self.openai_settings)
        return self._client

    def build_messages(self, image_bytes: bytes) -> list:
        encoded = base64.b64encode(image_bytes).decode("ascii")
        data_url = f"data:{detect_mime_type(image_bytes)};base64,{encoded}"
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": self.settings.prompt},
                    {"type": "image_url", "image_url": {"url": data_url, "detail": self.settings.detail}},
                ],
            }
        ]

    def caption(self, image_bytes: bytes) -> Outcome[str]:
        try:
            response = self.client.chat.completions.create(
                model=self.settings.model_name,
                messages=self.build_messages(image_bytes),
                max_tokens=self.settings.max_tokens,
                timeout=self.settings.timeout,
            )
            content = response.choices[0].message.content
        except openai.OpenAIError as exc:
            logger.warning("Vision request failed: %s", exc)
            return Failed(f"vision service error: {exc}")
        except (AttributeError, IndexError, TypeError) as exc:
            logger.warning("Malformed vision response: %s", exc)
            return Failed(f"malformed vision response: {exc}")

        if not content or not content.strip():
            return Failed("vision service returned an empty caption")
        return Succeeded(content.strip())
