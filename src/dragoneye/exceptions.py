"""Error taxonomy of the Dragoneye client."""

from __future__ import annotations

__all__ = [
    "DragoneyeError",
    "ConfigurationError",
    "IncorrectMediaTypeError",
    "MediaFetchError",
    "PredictionTaskError",
    "PredictionTaskBeginError",
    "PredictionUploadError",
    "PredictionTaskResultsUnavailableError",
]


class DragoneyeError(Exception):
    """Base class for client specific errors."""


class ConfigurationError(DragoneyeError, ValueError):
    """Raised when the client cannot be configured (e.g. no API key)."""


class IncorrectMediaTypeError(DragoneyeError, ValueError):
    """Raised when a media MIME type is missing or of the wrong family."""


class MediaFetchError(DragoneyeError, OSError):
    """Raised when remote media cannot be downloaded."""


class PredictionTaskError(DragoneyeError):
    """Raised for task lifecycle failures (initiate, status, failed state, timeout)."""


class PredictionTaskBeginError(DragoneyeError):
    """Raised when a prediction task cannot be created."""


class PredictionUploadError(DragoneyeError):
    """Raised when uploading media to the signed target fails."""


class PredictionTaskResultsUnavailableError(DragoneyeError):
    """Raised when task results cannot be fetched."""
