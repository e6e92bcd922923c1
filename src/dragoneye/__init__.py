"""Python client for the Dragoneye classification API."""

from .classification import Classification, ClassificationResult
from .client import Dragoneye
from .common import (
    PredictionTaskState,
    PredictionTaskUUID,
    PredictionType,
    TaxonID,
    TaxonType,
    is_task_complete,
    is_task_failed,
    is_task_successful,
)
from .config import DragoneyeSettings
from .exceptions import (
    ConfigurationError,
    DragoneyeError,
    IncorrectMediaTypeError,
    MediaFetchError,
    PredictionTaskBeginError,
    PredictionTaskError,
    PredictionTaskResultsUnavailableError,
    PredictionUploadError,
)
from .logging import configure_logging
from .media import Image, Media, MediaBlob, Video
from .models import (
    ClassificationPredictImageResponse,
    ClassificationPredictVideoResponse,
    PredictionTaskStatusResponse,
)

__all__ = [
    "Classification",
    "ClassificationPredictImageResponse",
    "ClassificationPredictVideoResponse",
    "ClassificationResult",
    "ConfigurationError",
    "Dragoneye",
    "DragoneyeError",
    "DragoneyeSettings",
    "Image",
    "IncorrectMediaTypeError",
    "Media",
    "MediaBlob",
    "MediaFetchError",
    "PredictionTaskBeginError",
    "PredictionTaskError",
    "PredictionTaskResultsUnavailableError",
    "PredictionTaskState",
    "PredictionTaskStatusResponse",
    "PredictionTaskUUID",
    "PredictionType",
    "PredictionUploadError",
    "TaxonID",
    "TaxonType",
    "Video",
    "configure_logging",
    "is_task_complete",
    "is_task_failed",
    "is_task_successful",
]
