"""Core domain models and exceptions for tfsgit."""

from tfsgit.core.exceptions import (
    ConfigurationError,
    LocalFilesystemError,
    MatchPatternError,
    RemoteAPIError,
    TfsGitError,
    TransportError,
)
from tfsgit.core.models import MirrorStats, ObjectKind, RemoteEntry

__all__ = [
    # Models
    "RemoteEntry",
    "ObjectKind",
    "MirrorStats",
    # Exceptions
    "TfsGitError",
    "ConfigurationError",
    "TransportError",
    "RemoteAPIError",
    "LocalFilesystemError",
    "MatchPatternError",
]
