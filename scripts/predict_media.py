"""Command line entry point: classify a local image or video file."""

from __future__ import annotations

import argparse
import asyncio
import sys

from dragoneye import Dragoneye, DragoneyeError, Image, Video, configure_logging
from dragoneye.classification import ClassificationResult
from dragoneye.media import guess_mime_type


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a Dragoneye classification on a media file.")
    parser.add_argument("path", help="Path to the image or video file.")
    parser.add_argument("--model", required=True, help="Model name to predict with.")
    parser.add_argument(
        "--kind",
        choices=("image", "video"),
        default=None,
        help="Media kind; guessed from the MIME type when omitted.",
    )
    parser.add_argument("--mime-type", default=None, help="Explicit MIME type of the file.")
    parser.add_argument("--fps", type=float, default=1, help="Frames per second for videos.")
    parser.add_argument("--timeout", type=float, default=None, help="Polling timeout in seconds.")
    return parser.parse_args(argv)


def resolve_kind(path: str, kind: str | None, mime_type: str | None) -> str:
    if kind:
        return kind
    mime = mime_type or guess_mime_type(path) or ""
    return "video" if mime.startswith("video/") else "image"


async def run_prediction(args: argparse.Namespace, client: Dragoneye) -> ClassificationResult:
    kind = resolve_kind(args.path, args.kind, args.mime_type)
    if kind == "video":
        video = Video.from_file_path(args.path, args.mime_type)
        return await client.classification.predict_video(
            video, args.model, frames_per_second=args.fps, timeout_seconds=args.timeout
        )
    image = Image.from_file_path(args.path, args.mime_type)
    return await client.classification.predict_image(
        image, args.model, timeout_seconds=args.timeout
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging()
    try:
        client = Dragoneye()
        result = asyncio.run(run_prediction(args, client))
    except (DragoneyeError, OSError) as exc:
        print(f"prediction failed: {exc}", file=sys.stderr)
        return 2

    print(result.model_dump_json(by_alias=True, indent=2), file=sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
