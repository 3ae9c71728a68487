# Path: core/indexing/__init__.py
# Purpose: Package initializer for indexing utilities.
# Layer: core/indexing.
# Details: Exposes scanning, captioning, and the ingestion pipeline.

from __future__ import annotations

from config.settings import AppSettings
from .captions import CaptionGenerator, VisionCaptioner
from .index_builder import IndexBuilder
from .scanner import SUPPORTED_EXTENSIONS, ImageScanner


def build_captioner(settings: AppSettings, client=None) -> CaptionGenerator:
    """Return the vision captioner configured by ``settings``."""

    return VisionCaptioner(settings.vision, settings.openai, client=client)


__all__ = ["CaptionGenerator", "VisionCaptioner", "IndexBuilder", "ImageScanner", "SUPPORTED_EXTENSIONS", "build_captioner"]
