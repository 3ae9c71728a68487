# Path: config/__init__.py
# Purpose: Package initializer for configuration module.
# Layer: config.
# Details: Exposes settings models and the logging setup helper.

from .logging import configure_logging
from .settings import AppSettings, EmbedderSettings, OpenAISettings, VisionSettings

__all__ = ["AppSettings", "EmbedderSettings", "OpenAISettings", "VisionSettings", "configure_logging"]
