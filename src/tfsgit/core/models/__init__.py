"""Domain models for tfsgit."""

from tfsgit.core.models.entry import ObjectKind, RemoteEntry
from tfsgit.core.models.stats import MirrorStats

__all__ = [
    "ObjectKind",
    "RemoteEntry",
    "MirrorStats",
]
