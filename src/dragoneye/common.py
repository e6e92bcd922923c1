"""Identifiers, constants and task status predicates shared by the client.

Task states are issued by the server and are not a closed set: ``predicted``
is the only success literal, every state starting with ``failed`` is a
failure (``failed_timeout``, ``failed_invalid_input`` …) and anything else is
still in progress.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal, NewType

TaxonID = NewType("TaxonID", int)
PredictionTaskUUID = NewType("PredictionTaskUUID", str)
PredictionTaskState = NewType("PredictionTaskState", str)

PredictionType = Literal["image", "video"]
NormalizedBbox = tuple[float, float, float, float]


class TaxonType(StrEnum):
    """Kind of node in a taxon prediction tree."""

    CATEGORY = "category"
    TRAIT = "trait"


BASE_API_URL = "https://api.dragoneye.ai"

PREDICTED_STATUS = PredictionTaskState("predicted")
FAILED_STATUS_PREFIX = "failed"


def is_task_successful(status: str) -> bool:
    return status == PREDICTED_STATUS


def is_task_failed(status: str) -> bool:
    return status.startswith(FAILED_STATUS_PREFIX)


def is_task_complete(status: str) -> bool:
    """Return ``True`` once the task reached a terminal state."""

    return is_task_successful(status) or is_task_failed(status)


__all__ = [
    "BASE_API_URL",
    "FAILED_STATUS_PREFIX",
    "NormalizedBbox",
    "PREDICTED_STATUS",
    "PredictionTaskState",
    "PredictionTaskUUID",
    "PredictionType",
    "TaxonID",
    "TaxonType",
    "is_task_complete",
    "is_task_failed",
    "is_task_successful",
]
