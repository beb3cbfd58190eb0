"""Business logic services for tfsgit."""

from tfsgit.services.mirror import MirrorService

__all__ = ["MirrorService"]
