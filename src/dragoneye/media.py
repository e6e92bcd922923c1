"""Image and video payloads with a verified MIME family.

Every construction path resolves a candidate MIME type, checks that it is
``image/*`` or ``video/*`` and that the family matches the variant, and only
then builds the instance. The variant constructor repeats the family check,
so a :class:`Media` with a wrong or missing type cannot exist.
"""

from __future__ import annotations

import base64
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, ClassVar, Self

import httpx

from .common import PredictionType
from .exceptions import IncorrectMediaTypeError, MediaFetchError

logger = logging.getLogger(__name__)

_EXTENSION_MIME_TYPES: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml",
    ".mp4": "video/mp4",
    ".mov": "video/quicktime",
    ".webm": "video/webm",
    ".mkv": "video/x-matroska",
    ".avi": "video/x-msvideo",
}


def _strict_b64decode(encoded: str) -> bytes:
    # Line-wrapped (MIME) base64 is accepted; any other stray character is not.
    return base64.b64decode("".join(encoded.split()), validate=True)


_decode_base64: Callable[[str], bytes] = _strict_b64decode


def guess_mime_type(path: str | os.PathLike[str]) -> str | None:
    """Guess a MIME type from the file extension (case-insensitive)."""

    return _EXTENSION_MIME_TYPES.get(Path(path).suffix.lower())


def _is_image_or_video(mime: str | None) -> bool:
    return bool(mime) and (mime.startswith("image/") or mime.startswith("video/"))


def _expected_family_text(kind: PredictionType | None) -> str:
    if kind is None:
        return "image/* or video/*"
    return f"{kind}/*"


def _enforce_family(kind: PredictionType | None, mime: str, context: str) -> None:
    if kind is not None and not mime.startswith(f"{kind}/"):
        raise IncorrectMediaTypeError(
            f'Invalid MIME type for {context}: "{mime}". Expected {kind}/*'
        )


@dataclass(frozen=True, slots=True)
class MediaBlob:
    """Raw payload with an optional intrinsic content type."""

    data: bytes = field(repr=False)
    content_type: str | None = None


@dataclass(frozen=True, slots=True)
class Media:
    """Immutable media payload; instantiate through :class:`Image` or :class:`Video`."""

    data: bytes = field(repr=False)
    mime_type: str
    name: str | None = None

    kind: ClassVar[PredictionType]

    def __post_init__(self) -> None:
        family = getattr(type(self), "kind", None)
        if family is None:
            raise TypeError("Media is abstract; use Image or Video")
        _enforce_family(family, self.mime_type, type(self).__name__)

    @property
    def size(self) -> int:
        return len(self.data)

    def to_blob(self) -> MediaBlob:
        """Return the payload used for the multipart upload."""

        return MediaBlob(data=self.data, content_type=self.mime_type)

    # ---- factories ----

    @classmethod
    def _verify(cls, candidate: str | None, context: str) -> str:
        mime = (candidate or "").strip()
        kind = getattr(cls, "kind", None)
        if not _is_image_or_video(mime):
            raise IncorrectMediaTypeError(
                f'Invalid MIME type for {cls.__name__}.{context}: "{mime or "(missing)"}". '
                f"Expected {_expected_family_text(kind)}"
            )
        _enforce_family(kind, mime, f"{cls.__name__}.{context}")
        return mime

    @classmethod
    def from_bytes(
        cls,
        data: bytes | bytearray | memoryview,
        mime_type: str,
        *,
        name: str | None = None,
    ) -> Self:
        mime = cls._verify(mime_type, "from_bytes")
        return cls(data=bytes(data), mime_type=mime, name=name)

    @classmethod
    def from_blob(
        cls,
        blob: MediaBlob,
        mime_type_override: str | None = None,
        *,
        name: str | None = None,
    ) -> Self:
        """Build from a blob; its own content type is used unless overridden."""

        candidate = mime_type_override if mime_type_override is not None else blob.content_type
        mime = cls._verify(candidate, "from_blob")
        return cls(data=bytes(blob.data), mime_type=mime, name=name)

    @classmethod
    def from_file(
        cls,
        fileobj: BinaryIO,
        mime_type_override: str | None = None,
        *,
        name: str | None = None,
    ) -> Self:
        """Read an open binary file.

        The intrinsic type comes from a ``content_type`` attribute when the
        object has one (upload wrappers usually do); the display name defaults
        to the basename of ``fileobj.name``.
        """

        if name is None:
            raw_name = getattr(fileobj, "name", None)
            if isinstance(raw_name, str):
                name = os.path.basename(raw_name)
        blob = MediaBlob(data=fileobj.read(), content_type=getattr(fileobj, "content_type", None))
        return cls.from_blob(blob, mime_type_override, name=name)

    @classmethod
    def from_base64(cls, encoded: str, mime_type: str, *, name: str | None = None) -> Self:
        """Decode base64 text.

        Raises:
            IncorrectMediaTypeError: If ``mime_type`` is not of the variant family.
            binascii.Error: If ``encoded`` is not valid base64.
        """

        mime = cls._verify(mime_type, "from_base64")
        return cls.from_bytes(_decode_base64(encoded), mime, name=name)

    @classmethod
    async def from_url(
        cls,
        url: str,
        mime_type_override: str | None = None,
        *,
        name: str | None = None,
        timeout_seconds: float = 30.0,
    ) -> Self:
        """Download ``url``; the type is the override, else the ``Content-Type`` header."""

        try:
            async with httpx.AsyncClient(timeout=timeout_seconds, follow_redirects=True) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("media.url.fetch_failed", extra={"url": url, "error": str(exc)})
            raise MediaFetchError(f"Failed to fetch media from URL: {exc}") from exc

        if not 200 <= response.status_code < 300:
            logger.warning(
                "media.url.fetch_failed",
                extra={"url": url, "status_code": response.status_code},
            )
            raise MediaFetchError(
                f"Failed to fetch media from URL: {response.status_code} {response.reason_phrase}"
            )

        header_type = (response.headers.get("Content-Type") or "").split(";")[0].strip() or None
        resolved = (mime_type_override if mime_type_override is not None else header_type) or ""
        resolved = resolved.strip()
        kind = getattr(cls, "kind", None)
        expected = _expected_family_text(kind)
        if not _is_image_or_video(resolved):
            raise IncorrectMediaTypeError(
                f'Remote resource is not {expected} (Content-Type "{header_type or "unknown"}", '
                f'got "{resolved or "(missing)"}"). Provide a valid {expected} mime_type_override.'
            )
        _enforce_family(kind, resolved, f"{cls.__name__}.from_url")
        return cls(data=response.content, mime_type=resolved, name=name)

    @classmethod
    def from_file_path(
        cls,
        path: str | os.PathLike[str],
        mime_type: str | None = None,
        *,
        name: str | None = None,
    ) -> Self:
        """Read a local file, guessing the MIME type from its extension.

        Read failures propagate as :class:`OSError`.
        """

        file_path = Path(path)
        data = file_path.read_bytes()
        guessed = (mime_type if mime_type is not None else guess_mime_type(file_path)) or ""
        guessed = guessed.strip()
        kind = getattr(cls, "kind", None)
        expected = _expected_family_text(kind)
        if not _is_image_or_video(guessed):
            raise IncorrectMediaTypeError(
                f'Cannot infer a valid {expected} MIME type for "{file_path}" '
                f'(got "{guessed or "(missing)"}"). Pass an explicit {expected} mime_type.'
            )
        _enforce_family(kind, guessed, f"{cls.__name__}.from_file_path")
        return cls.from_bytes(data, guessed, name=name if name is not None else file_path.name)


@dataclass(frozen=True, slots=True)
class Image(Media):
    kind: ClassVar[PredictionType] = "image"


@dataclass(frozen=True, slots=True)
class Video(Media):
    kind: ClassVar[PredictionType] = "video"


__all__ = ["Image", "Media", "MediaBlob", "Video", "guess_mime_type"]
