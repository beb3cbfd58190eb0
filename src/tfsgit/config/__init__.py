"""Configuration for tfsgit."""

from tfsgit.config.logging import configure_logging
from tfsgit.config.settings import Settings

__all__ = ["Settings", "configure_logging"]
