from __future__ import annotations

import base64
import binascii
import dataclasses
from pathlib import Path

import httpx
import pytest

from dragoneye.exceptions import IncorrectMediaTypeError, MediaFetchError
from dragoneye.media import Image, Media, MediaBlob, Video, guess_mime_type
from tests.mocks.http import DummyHTTPResponse, configure_httpx

pytestmark = pytest.mark.unit

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png"


@pytest.mark.parametrize(
    "mime",
    [
        "image/png",
        "image/jpeg",
        "image/svg+xml",
        "video/mp4",
        "video/quicktime",
        "text/plain",
        "application/octet-stream",
        "imagepng",
        "",
    ],
)
def test_variant_accepts_only_its_family(mime: str) -> None:
    if mime.startswith("image/"):
        assert Image.from_bytes(b"x", mime).mime_type == mime
    else:
        with pytest.raises(IncorrectMediaTypeError):
            Image.from_bytes(b"x", mime)

    if mime.startswith("video/"):
        assert Video.from_bytes(b"x", mime).mime_type == mime
    else:
        with pytest.raises(IncorrectMediaTypeError):
            Video.from_bytes(b"x", mime)


def test_from_bytes_keeps_payload() -> None:
    image = Image.from_bytes(bytearray(PNG_BYTES), "image/png")

    blob = image.to_blob()
    assert blob.data == PNG_BYTES
    assert blob.content_type == "image/png"
    assert image.size == len(PNG_BYTES)
    assert image.kind == "image"


def test_mime_type_is_trimmed() -> None:
    video = Video.from_bytes(b"v", "  video/mp4\n")
    assert video.mime_type == "video/mp4"


def test_error_names_missing_value_and_expected_family() -> None:
    with pytest.raises(IncorrectMediaTypeError, match=r"\(missing\).*image/\*"):
        Image.from_bytes(b"x", "   ")


def test_wrong_family_error_names_offending_value() -> None:
    with pytest.raises(IncorrectMediaTypeError, match=r'"video/mp4".*image/\*'):
        Image.from_bytes(b"x", "video/mp4")


def test_variant_constructor_rechecks_family() -> None:
    with pytest.raises(IncorrectMediaTypeError):
        Image(data=b"x", mime_type="video/mp4")
    with pytest.raises(IncorrectMediaTypeError):
        Video(data=b"x", mime_type="")


def test_base_media_is_not_constructible() -> None:
    with pytest.raises(TypeError):
        Media.from_bytes(b"x", "image/png")


def test_media_is_immutable() -> None:
    image = Image.from_bytes(b"x", "image/png")
    with pytest.raises(dataclasses.FrozenInstanceError):
        image.mime_type = "image/jpeg"  # type: ignore[misc]


def test_from_blob_uses_intrinsic_type() -> None:
    image = Image.from_blob(MediaBlob(data=b"x", content_type="image/webp"))
    assert image.mime_type == "image/webp"


def test_from_blob_override_wins() -> None:
    video = Video.from_blob(MediaBlob(data=b"x", content_type="image/png"), "video/webm")
    assert video.mime_type == "video/webm"


def test_from_blob_without_type_fails() -> None:
    with pytest.raises(IncorrectMediaTypeError, match="missing"):
        Image.from_blob(MediaBlob(data=b"x"))


def test_from_file_defaults_name_to_basename(tmp_path: Path) -> None:
    path = tmp_path / "photo.png"
    path.write_bytes(PNG_BYTES)

    with path.open("rb") as fh:
        image = Image.from_file(fh, "image/png")

    assert image.name == "photo.png"
    assert image.data == PNG_BYTES


def test_from_file_reads_content_type_attribute() -> None:
    class Upload:
        name = "clip.mov"
        content_type = "video/quicktime"

        def read(self) -> bytes:
            return b"movie"

    video = Video.from_file(Upload())  # type: ignore[arg-type]
    assert video.mime_type == "video/quicktime"
    assert video.name == "clip.mov"


def test_from_base64_decodes_payload() -> None:
    encoded = base64.b64encode(PNG_BYTES).decode("ascii")
    image = Image.from_base64(encoded, "image/png")
    assert image.data == PNG_BYTES


def test_from_base64_accepts_line_wrapped_text() -> None:
    payload = bytes(range(100))
    wrapped = base64.encodebytes(payload).decode("ascii")
    assert "\n" in wrapped.strip()

    image = Image.from_base64(f"  {wrapped}\r\n", "image/png")

    assert image.data == payload


def test_from_base64_checks_type_before_decoding() -> None:
    with pytest.raises(IncorrectMediaTypeError):
        Image.from_base64("%%% not base64 %%%", "video/mp4")


def test_from_base64_propagates_decode_errors() -> None:
    with pytest.raises(binascii.Error):
        Image.from_base64("not-base64", "image/png")


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("a.jpg", "image/jpeg"),
        ("a.JPEG", "image/jpeg"),
        ("a.svg", "image/svg+xml"),
        ("a.mov", "video/quicktime"),
        ("a.mkv", "video/x-matroska"),
        ("a.avi", "video/x-msvideo"),
        ("a.txt", None),
        ("noext", None),
    ],
)
def test_guess_mime_type(filename: str, expected: str | None) -> None:
    assert guess_mime_type(filename) == expected


def test_from_file_path_guesses_by_extension(tmp_path: Path) -> None:
    path = tmp_path / "cat.PNG"
    path.write_bytes(PNG_BYTES)

    image = Image.from_file_path(path)

    assert image.mime_type == "image/png"
    assert image.name == "cat.PNG"
    assert image.data == PNG_BYTES


def test_from_file_path_explicit_type_wins(tmp_path: Path) -> None:
    path = tmp_path / "frame.bin"
    path.write_bytes(b"raw")

    video = Video.from_file_path(path, "video/mp4")
    assert video.mime_type == "video/mp4"


def test_from_file_path_unknown_extension_fails(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_bytes(b"text")

    with pytest.raises(IncorrectMediaTypeError, match="missing"):
        Image.from_file_path(path)


def test_from_file_path_wrong_family_fails(tmp_path: Path) -> None:
    path = tmp_path / "cat.png"
    path.write_bytes(PNG_BYTES)

    with pytest.raises(IncorrectMediaTypeError, match=r"video/\*"):
        Video.from_file_path(path)


def test_from_file_path_missing_file_is_io_error(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        Image.from_file_path(tmp_path / "missing.png")


@pytest.mark.asyncio
async def test_from_url_uses_content_type_header(monkeypatch) -> None:
    transport = configure_httpx(
        monkeypatch,
        [
            DummyHTTPResponse(
                200,
                content=PNG_BYTES,
                headers={"Content-Type": "image/png; charset=binary"},
            )
        ],
    )

    image = await Image.from_url("https://cdn.example/cat")

    assert image.mime_type == "image/png"
    assert image.data == PNG_BYTES
    assert transport.urls() == ["https://cdn.example/cat"]


@pytest.mark.asyncio
async def test_from_url_override_wins(monkeypatch) -> None:
    configure_httpx(
        monkeypatch,
        [DummyHTTPResponse(200, content=b"v", headers={"Content-Type": "application/octet-stream"})],
    )

    video = await Video.from_url("https://cdn.example/clip", "video/mp4")
    assert video.mime_type == "video/mp4"


@pytest.mark.asyncio
async def test_from_url_reports_attempted_content_type(monkeypatch) -> None:
    configure_httpx(
        monkeypatch,
        [DummyHTTPResponse(200, content=b"<html>", headers={"Content-Type": "text/html"})],
    )

    with pytest.raises(IncorrectMediaTypeError, match="text/html"):
        await Image.from_url("https://cdn.example/page")


@pytest.mark.asyncio
async def test_from_url_wrong_family(monkeypatch) -> None:
    configure_httpx(
        monkeypatch,
        [DummyHTTPResponse(200, content=b"v", headers={"Content-Type": "video/mp4"})],
    )

    with pytest.raises(IncorrectMediaTypeError):
        await Image.from_url("https://cdn.example/clip")


@pytest.mark.asyncio
async def test_from_url_non_success_is_fetch_error(monkeypatch) -> None:
    configure_httpx(monkeypatch, [DummyHTTPResponse(404, reason_phrase="Not Found")])

    with pytest.raises(MediaFetchError, match="404"):
        await Image.from_url("https://cdn.example/missing")


@pytest.mark.asyncio
async def test_from_url_transport_error_is_fetch_error(monkeypatch) -> None:
    configure_httpx(monkeypatch, [httpx.ConnectError("connection refused")])

    with pytest.raises(MediaFetchError) as exc_info:
        await Image.from_url("https://cdn.example/cat")

    assert isinstance(exc_info.value, OSError)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
