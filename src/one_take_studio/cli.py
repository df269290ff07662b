"""
CLI entrypoint. Use from project root:
  python -m one_take_studio transcribe talk.mp3 [--chunk-duration 30] [--pause-chunking] [--output result.json]
  python -m one_take_studio transcribe-url https://example.com/talk.mp3
  python -m one_take_studio serve [--host 0.0.0.0] [--port 3001]
"""

import argparse
import asyncio
import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from one_take_studio import config


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_pipeline():
    from one_take_studio.adapters import default_adapters
    from one_take_studio.application.pipeline import StudioPipeline

    return StudioPipeline.from_adapters(**default_adapters())


def _print_summary(result: Dict[str, Any]) -> None:
    analysis = result.get("analysis")
    print(f"Title: {analysis['title'] if analysis else '(analysis failed)'}")
    if analysis:
        print(f"Duration: {analysis['duration']}")
        print(f"Topics: {', '.join(analysis['topics'])}")
    for name, items in result["generatedContent"].items():
        print(f"  {name}: {len(items)} item(s)")
        for item in items:
            print(f"    Day {item['day']} {item['time']}  {item['title'][:60]}")


def _emit(result: Dict[str, Any], output: Optional[str]) -> None:
    text = json.dumps(result, indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(text, encoding="utf-8")
        print(f"\n✅ Result saved to: {output}")
    else:
        print(text)


def _run_transcribe(args: argparse.Namespace) -> int:
    path = Path(args.file)
    if not path.is_file():
        print(f"❌ File not found: {path}")
        return 1

    mimetype = mimetypes.guess_type(path.name)[0] or ""
    if mimetype not in config.ALLOWED_MIME_TYPES:
        print(f"❌ Unsupported file type: {mimetype or 'unknown'}")
        return 1

    print("=" * 60)
    print(f"Processing {path.name}...")
    print("=" * 60)

    print("\n[1/3] Transcribing and analyzing...")
    pipeline = _build_pipeline()
    result = asyncio.run(
        pipeline.process_file(
            path.read_bytes(),
            mimetype,
            chunk_duration=args.chunk_duration,
            use_pause_based_chunking=args.pause_chunking,
        )
    )
    return _finish(result, args.output)


def _run_transcribe_url(args: argparse.Namespace) -> int:
    print("=" * 60)
    print(f"Processing {args.url}...")
    print("=" * 60)

    print("\n[1/3] Transcribing and analyzing...")
    pipeline = _build_pipeline()
    result = asyncio.run(
        pipeline.process_url(
            args.url,
            chunk_duration=args.chunk_duration,
            use_pause_based_chunking=args.pause_chunking,
        )
    )
    return _finish(result, args.output)


def _finish(result: Dict[str, Any], output: Optional[str]) -> int:
    chunks = result["transcript"].get("transcript") or []
    print(f"Transcript: {len(chunks)} chunk(s)")

    print("\n[2/3] Generated content:")
    _print_summary(result)

    print("\n[3/3] Writing result...")
    _emit(result, output)
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "one_take_studio.server:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=config.LOG_LEVEL.lower(),
    )
    return 0


def _add_chunking_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--chunk-duration",
        type=int,
        default=config.DEFAULT_CHUNK_DURATION,
        help=f"Transcript chunk length in seconds (default {config.DEFAULT_CHUNK_DURATION})",
    )
    parser.add_argument(
        "--pause-chunking",
        action="store_true",
        help="Split chunks at natural pauses instead of fixed windows",
    )
    parser.add_argument("--output", type=str, help="Write the JSON result to this file instead of stdout")


def main(argv=None) -> int:
    from one_take_studio.domain.errors import StudioError

    parser = argparse.ArgumentParser(
        description="Turn one recording into TikTok scripts, Twitter threads, LinkedIn posts and a newsletter"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    transcribe = subparsers.add_parser("transcribe", help="Process a local audio/video file")
    transcribe.add_argument("file", help="Path to the audio or video file")
    _add_chunking_options(transcribe)
    transcribe.set_defaults(handler=_run_transcribe)

    transcribe_url = subparsers.add_parser("transcribe-url", help="Process a remote audio/video file")
    transcribe_url.add_argument("url", help="URL of the audio or video file")
    _add_chunking_options(transcribe_url)
    transcribe_url.set_defaults(handler=_run_transcribe_url)

    serve = subparsers.add_parser("serve", help="Start the HTTP API")
    serve.add_argument("--host", default=config.HOST, help=f"Bind address (default {config.HOST})")
    serve.add_argument("--port", type=int, default=config.PORT, help=f"Port (default {config.PORT})")
    serve.set_defaults(handler=_run_serve)

    args = parser.parse_args(argv)
    _configure_logging()

    try:
        return args.handler(args)
    except StudioError as e:
        print(f"\n❌ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
