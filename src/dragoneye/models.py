"""Pydantic models for Dragoneye API payloads.

Wire names are kept as aliases (``displayName``, ``normalizedBbox``) so that
``model_dump(by_alias=True)`` reproduces the server JSON, while attributes
stay snake_case. Unknown keys are ignored, except on result payloads, which
keep them so the caller sees everything the server returned.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import (
    NormalizedBbox,
    PredictionTaskState,
    PredictionTaskUUID,
    PredictionType,
    TaxonID,
    TaxonType,
)


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


# ---- Task lifecycle ----


class PresignedPostRequest(_ApiModel):
    """One-time upload destination issued by the begin call."""

    url: str = Field(..., description="Target URL of the signed POST")
    fields: Dict[str, Any] = Field(
        default_factory=dict,
        description="Form fields to send verbatim ahead of the file field",
    )


class MediaUploadUrl(_ApiModel):
    blob_path: str
    presigned_post_request: PresignedPostRequest


class PredictionTaskBeginResponse(_ApiModel):
    """Answer of ``POST /prediction-task/begin``.

    ``signed_urls`` is a list for forward compatibility; only the first entry
    is used for uploads.
    """

    prediction_task_uuid: PredictionTaskUUID
    prediction_type: PredictionType
    signed_urls: List[MediaUploadUrl] = Field(default_factory=list)


class PredictionTaskStatusResponse(_ApiModel):
    prediction_task_uuid: PredictionTaskUUID
    prediction_type: PredictionType
    status: PredictionTaskState


# ---- Image predictions ----


class TaxonPrediction(_ApiModel):
    """Node of a category/trait prediction tree (depth is not bounded)."""

    id: TaxonID
    type: TaxonType
    name: str
    display_name: str = Field(..., alias="displayName")
    score: Optional[float] = None
    children: List[TaxonPrediction] = Field(default_factory=list)


class ClassificationTraitRootPrediction(_ApiModel):
    id: TaxonID
    name: str
    display_name: str = Field(..., alias="displayName")
    taxons: List[TaxonPrediction] = Field(default_factory=list)


class ClassificationObjectPrediction(_ApiModel):
    normalized_bbox: NormalizedBbox = Field(..., alias="normalizedBbox")
    category: TaxonPrediction
    traits: List[ClassificationTraitRootPrediction] = Field(default_factory=list)


class ClassificationPredictImageResponse(_ApiModel):
    """Image predictions plus any extra keys the server sent."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    predictions: List[ClassificationObjectPrediction]
    prediction_task_uuid: PredictionTaskUUID


# ---- Video predictions ----


class ClassificationVideoObjectPrediction(ClassificationObjectPrediction):
    frame_id: str
    timestamp_microseconds: int


class ClassificationPredictVideoResponse(_ApiModel):
    """Per-frame predictions keyed by timestamp in microseconds."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    timestamp_us_to_predictions: Dict[int, List[ClassificationVideoObjectPrediction]]
    frames_per_second: float
    prediction_task_uuid: PredictionTaskUUID


__all__ = [
    "ClassificationObjectPrediction",
    "ClassificationPredictImageResponse",
    "ClassificationPredictVideoResponse",
    "ClassificationTraitRootPrediction",
    "ClassificationVideoObjectPrediction",
    "MediaUploadUrl",
    "PredictionTaskBeginResponse",
    "PredictionTaskStatusResponse",
    "PresignedPostRequest",
    "TaxonPrediction",
]
