"""Exceptions raised by tfsgit."""

from typing import Any


class TfsGitError(Exception):
    """Base class for every error tfsgit raises."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(TfsGitError):
    """A required setting is missing or a value is invalid."""


class TransportError(TfsGitError):
    """The remote could not be reached or answered with an unexpected status."""


class RemoteAPIError(TfsGitError):
    """The remote API reported an error in the response body."""


class LocalFilesystemError(TfsGitError):
    """A local file could not be created or written."""


class MatchPatternError(TfsGitError):
    """The file name match pattern is not a valid regular expression."""
