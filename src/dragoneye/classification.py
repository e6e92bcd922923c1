"""Classification prediction tasks driven through the Dragoneye API.

A prediction runs as a remote task: begin (server returns the task UUID and
signed upload targets) → upload the media to the first signed target →
initiate the prediction → poll the status until it is terminal → fetch the
results. Calls are strictly sequential and nothing is retried; a failure at
any stage propagates and leaves the server side task as it is.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping

import httpx

from .common import (
    PredictionTaskUUID,
    PredictionType,
    is_task_complete,
    is_task_failed,
)
from .exceptions import (
    IncorrectMediaTypeError,
    PredictionTaskBeginError,
    PredictionTaskError,
    PredictionTaskResultsUnavailableError,
    PredictionUploadError,
)
from .media import Image, Media, Video
from .models import (
    ClassificationPredictImageResponse,
    ClassificationPredictVideoResponse,
    MediaUploadUrl,
    PredictionTaskBeginResponse,
    PredictionTaskStatusResponse,
)

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .client import Dragoneye

logger = logging.getLogger(__name__)

ClassificationResult = ClassificationPredictImageResponse | ClassificationPredictVideoResponse


@dataclass(slots=True)
class Classification:
    """Prediction task operations bound to a :class:`Dragoneye` client."""

    client: Dragoneye
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    clock: Callable[[], float] = time.monotonic
    log: logging.Logger = field(default_factory=lambda: logger)

    # ---- public API ----

    async def predict_image(
        self,
        media: Image,
        model_name: str,
        timeout_seconds: float | None = None,
    ) -> ClassificationResult:
        if not isinstance(media, Image):
            raise IncorrectMediaTypeError(
                f'predict_image requires an Image; got {type(media).__name__} ("{media.mime_type}")'
            )
        return await self._predict_unified(media, model_name, None, timeout_seconds)

    async def predict_video(
        self,
        media: Video,
        model_name: str,
        frames_per_second: float = 1,
        timeout_seconds: float | None = None,
    ) -> ClassificationResult:
        if not isinstance(media, Video):
            raise IncorrectMediaTypeError(
                f'predict_video requires a Video; got {type(media).__name__} ("{media.mime_type}")'
            )
        return await self._predict_unified(media, model_name, frames_per_second, timeout_seconds)

    async def begin_prediction_task(
        self,
        mime_type: str,
        frames_per_second: float | None = None,
    ) -> PredictionTaskBeginResponse:
        url = f"{self.client.base_url}/prediction-task/begin"
        form = {"mimetype": mime_type}
        if frames_per_second is not None:
            form["frames_per_second"] = _format_number(frames_per_second)

        try:
            async with self._http_client() as http:
                response = await http.post(
                    url, headers=self.client.auth_headers(), files=_form_fields(form)
                )
        except httpx.HTTPError as exc:
            raise PredictionTaskBeginError(f"Error beginning prediction task: {exc}") from exc

        if not _is_success(response):
            raise PredictionTaskBeginError(
                f"Error beginning prediction task: {_describe(response)}"
            )

        begin = PredictionTaskBeginResponse.model_validate(response.json())
        self.log.info(
            "prediction.task.begin",
            extra={
                "prediction_task_uuid": begin.prediction_task_uuid,
                "prediction_type": begin.prediction_type,
                "mime_type": mime_type,
            },
        )
        return begin

    async def upload_media(self, media: Media, signed_url: MediaUploadUrl) -> None:
        """POST the media to a signed target.

        The presigned fields precede the ``file`` part. No authorization
        header is sent: the signed URL is the credential.
        """

        presigned = signed_url.presigned_post_request
        fields = {key: str(value) for key, value in presigned.fields.items()}
        blob = media.to_blob()
        files = {"file": ("file", blob.data, blob.content_type)}

        try:
            async with self._http_client() as http:
                response = await http.post(presigned.url, data=fields, files=files)
        except httpx.HTTPError as exc:
            raise PredictionUploadError(
                f"Error uploading media to prediction task: {exc}"
            ) from exc

        if not _is_success(response):
            raise PredictionUploadError(
                f"Error uploading media to prediction task: {_describe(response)}"
            )
        self.log.info(
            "prediction.task.uploaded",
            extra={"blob_path": signed_url.blob_path, "size_bytes": media.size},
        )

    async def initiate_predict(
        self, model_name: str, prediction_task_uuid: PredictionTaskUUID
    ) -> None:
        url = f"{self.client.base_url}/predict"
        form = {"model_name": model_name, "prediction_task_uuid": prediction_task_uuid}

        try:
            async with self._http_client() as http:
                response = await http.post(
                    url, headers=self.client.auth_headers(), files=_form_fields(form)
                )
        except httpx.HTTPError as exc:
            raise PredictionTaskError(f"Error initiating prediction: {exc}") from exc

        if not _is_success(response):
            raise PredictionTaskError(f"Error initiating prediction: {_describe(response)}")
        self.log.info(
            "prediction.task.initiated",
            extra={"prediction_task_uuid": prediction_task_uuid, "model_name": model_name},
        )

    async def get_status(
        self, prediction_task_uuid: PredictionTaskUUID
    ) -> PredictionTaskStatusResponse:
        url = f"{self.client.base_url}/prediction-task/status"

        try:
            async with self._http_client() as http:
                response = await http.get(
                    url,
                    headers=self.client.auth_headers(),
                    params={"predictionTaskUuid": prediction_task_uuid},
                )
        except httpx.HTTPError as exc:
            raise PredictionTaskError(f"Error getting prediction task status: {exc}") from exc

        if not _is_success(response):
            raise PredictionTaskError(
                f"Error getting prediction task status: {_describe(response)}"
            )
        return PredictionTaskStatusResponse.model_validate(response.json())

    async def wait_for_completion(
        self,
        prediction_task_uuid: PredictionTaskUUID,
        timeout_seconds: float | None = None,
        polling_interval_ms: int | None = None,
    ) -> PredictionTaskStatusResponse:
        """Poll the task status until it is terminal.

        The first status check always happens; after each non-terminal status
        the timeout is checked before sleeping. Without ``timeout_seconds``
        polling never stops on its own.
        """

        if polling_interval_ms is None:
            polling_interval_ms = self.client.settings.polling_interval_ms
        interval_seconds = polling_interval_ms / 1000
        started = self.clock()

        while True:
            status = await self.get_status(prediction_task_uuid)
            if is_task_complete(status.status):
                return status

            self.log.debug(
                "prediction.task.status",
                extra={"prediction_task_uuid": prediction_task_uuid, "status": status.status},
            )
            if timeout_seconds is not None and self.clock() - started >= timeout_seconds:
                self.log.warning(
                    "prediction.task.timeout",
                    extra={
                        "prediction_task_uuid": prediction_task_uuid,
                        "timeout_seconds": timeout_seconds,
                    },
                )
                raise PredictionTaskError(
                    f"Prediction task {prediction_task_uuid} did not complete "
                    f"within {timeout_seconds} seconds."
                )

            await self.sleep(interval_seconds)

    async def get_results(
        self,
        prediction_task_uuid: PredictionTaskUUID,
        prediction_type: PredictionType,
    ) -> ClassificationResult:
        """Fetch results and tag them with ``prediction_task_uuid``."""

        url = f"{self.client.base_url}/prediction-task/results"

        try:
            async with self._http_client() as http:
                response = await http.get(
                    url,
                    headers=self.client.auth_headers(),
                    params={"predictionTaskUuid": prediction_task_uuid},
                )
        except httpx.HTTPError as exc:
            raise PredictionTaskResultsUnavailableError(
                f"Error getting prediction task results: {exc}"
            ) from exc

        if not _is_success(response):
            raise PredictionTaskResultsUnavailableError(
                f"Error getting prediction task results: {_describe(response)}"
            )

        augmented = {**response.json(), "prediction_task_uuid": prediction_task_uuid}
        if prediction_type == "image":
            return ClassificationPredictImageResponse.model_validate(augmented)
        if prediction_type == "video":
            return ClassificationPredictVideoResponse.model_validate(augmented)
        raise ValueError(f"Unknown prediction type: {prediction_type!r}")

    async def get_image_results(
        self, prediction_task_uuid: PredictionTaskUUID
    ) -> ClassificationPredictImageResponse:
        return await self.get_results(prediction_task_uuid, "image")  # type: ignore[return-value]

    async def get_video_results(
        self, prediction_task_uuid: PredictionTaskUUID
    ) -> ClassificationPredictVideoResponse:
        return await self.get_results(prediction_task_uuid, "video")  # type: ignore[return-value]

    # ---- internals ----

    async def _predict_unified(
        self,
        media: Media,
        model_name: str,
        frames_per_second: float | None,
        timeout_seconds: float | None,
    ) -> ClassificationResult:
        begin = await self.begin_prediction_task(media.mime_type, frames_per_second)
        if not begin.signed_urls:
            raise PredictionTaskBeginError(
                f"Prediction task {begin.prediction_task_uuid} returned no signed upload URLs"
            )

        # Only the first signed target is used; the list is kept for future multi-part uploads.
        await self.upload_media(media, begin.signed_urls[0])
        await self.initiate_predict(model_name, begin.prediction_task_uuid)

        status = await self.wait_for_completion(begin.prediction_task_uuid, timeout_seconds)
        if is_task_failed(status.status):
            self.log.warning(
                "prediction.task.failed",
                extra={"prediction_task_uuid": begin.prediction_task_uuid, "status": status.status},
            )
            raise PredictionTaskError(f"Prediction task failed: {status.status}")

        return await self.get_results(begin.prediction_task_uuid, begin.prediction_type)

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.client.settings.request_timeout_seconds)


def _form_fields(form: Mapping[str, str]) -> dict[str, tuple[None, str]]:
    """Encode plain fields as multipart parts without a filename."""

    return {key: (None, str(value)) for key, value in form.items()}


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _is_success(response: httpx.Response) -> bool:
    return 200 <= response.status_code < 300


def _describe(response: httpx.Response) -> str:
    return f"{response.status_code} {response.reason_phrase}".strip()


__all__ = ["Classification", "ClassificationResult"]
