"""Command-line entry point: builds a Manifest and hands it to the engine."""

import argparse
import logging
import subprocess
import sys
from pathlib import Path

from silencetrim.engine import process
from silencetrim.ffutil import DEFAULT_EXT, FFmpegNotFoundError
from silencetrim.manifest import Manifest, TrimConfig, load_manifest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="silencetrim",
        description="silencetrim: shorten long pauses in audio/video files with ffmpeg.",
    )
    sub = parser.add_subparsers(dest="command")

    proc = sub.add_parser("process", help="Trim silence from a media file")
    proc.add_argument("video", nargs="?", type=Path, help="Input media file")
    proc.add_argument("--manifest", "-m", type=Path, help="Path to a JSON manifest file")
    proc.add_argument("--output", "-o", type=Path, help="Output file path")
    proc.add_argument("--noise-db", type=float, default=-30.0, help="Level in dB under which audio counts as silence")
    proc.add_argument(
        "--max-pause", type=float, default=1.0,
        help="Longest allowed pause in seconds; longer pauses are cut down to this length",
    )
    proc.add_argument("--min-silence", type=float, default=None, help="Shortest silence to detect (defaults to --max-pause)")
    proc.add_argument("--intro-padding", type=float, default=0.0, help="Seconds of leading silence to keep")
    proc.add_argument("--outro-padding", type=float, default=0.0, help="Seconds of trailing silence to keep")
    proc.add_argument("--min-keep", type=float, default=0.0, help="Drop kept segments shorter than this many seconds")
    proc.add_argument("--no-shrink", action="store_true", help="Keep full padding around short clips")
    proc.add_argument("--keep-temp", action="store_true", help="Preserve the temp directory with cut chunks")
    proc.add_argument("--verbose", "-v", action="store_true", help="Log ffmpeg command lines")

    serve = sub.add_parser("serve", help="Launch the web UI")
    serve.add_argument("--port", type=int, default=8321, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")

    return parser


def _manifest_from_args(args: argparse.Namespace) -> Manifest:
    if args.manifest:
        m = load_manifest(args.manifest)
        if args.keep_temp:
            m.keep_temp = True
        return m

    output = args.output or args.video.with_name(
        args.video.stem + "_trimmed" + (args.video.suffix or DEFAULT_EXT)
    )
    return Manifest(
        input=args.video,
        output=output,
        trim=TrimConfig(
            noise_db=args.noise_db,
            max_pause=args.max_pause,
            min_silence=args.min_silence,
            intro_padding=args.intro_padding,
            outro_padding=args.outro_padding,
            min_keep=args.min_keep,
            shrink_padding=not args.no_shrink,
        ),
        keep_temp=args.keep_temp,
    )


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
        from silencetrim.web import create_app
        app = create_app()
        print(f"silencetrim web UI: http://{args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=False)
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.manifest and not args.video:
        print("Error: provide either a VIDEO argument or --manifest.", file=sys.stderr)
        sys.exit(1)

    def on_progress(stage: str, frac: float) -> None:
        print(f"  [{frac:3.0%}] {stage}")

    try:
        m = _manifest_from_args(args)
        result = process(m, on_progress=on_progress)
    except subprocess.CalledProcessError as e:
        stderr = e.stderr if isinstance(e.stderr, str) else (e.stderr or b"").decode(errors="replace")
        print(f"error: ffmpeg failed: {stderr[-500:] or e}", file=sys.stderr)
        sys.exit(1)
    except (FFmpegNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    print()
    print(f"Done! Output: {result.output_path}")
    print(f"  Duration: {result.duration_original:.1f}s -> {result.duration_final:.1f}s")
    print(f"  Silences detected: {result.silences_detected}, segments kept: {result.segments_kept}")
    if result.work_dir:
        print(f"  Temp files: {result.work_dir}")


if __name__ == "__main__":
    main()
