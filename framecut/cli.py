"""Thin CLI entry point: builds clip requests and calls the clipper."""

import argparse
import sys
from pathlib import Path

from framecut.clipper import extract_clips, extract_thumbnail
from framecut.config import setup_logging
from framecut.ffutil import FFmpegError, FFmpegNotFoundError, check_ffmpeg
from framecut.manifest import load_clips, save_report, validate_video_file
from framecut.models import SMART_COPY, ClipRequest
from framecut.strategies import STRATEGY_NAMES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="framecut",
        description="framecut: frame-accurate video clipping with keyframe-aware stream copy.",
    )
    parser.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARN or ERROR (default: $LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command")

    ext = sub.add_parser("extract", help="Extract one or more clips from a video")
    ext.add_argument("--input", "-i", type=Path, required=True, help="Input video file")
    ext.add_argument("--start", "-s", type=str, help="Start time (HH:MM:SS.mmm, seconds, or frames)")
    ext.add_argument("--end", "-e", type=str, help="End time")
    ext.add_argument("--output", "-o", type=str, help="Output file")
    ext.add_argument("--clips", type=Path, help="Path to clips JSON file (for batch extraction)")
    ext.add_argument("--strategy", choices=STRATEGY_NAMES, default=SMART_COPY, help="Extraction strategy")
    ext.add_argument("--report", type=Path, help="Save report to JSON file")

    thumb = sub.add_parser("thumbnail", help="Extract a single frame as thumbnail")
    thumb.add_argument("--input", "-i", type=Path, required=True, help="Input video file")
    thumb.add_argument("--time", "-t", type=str, required=True, help="Timestamp (HH:MM:SS.mmm, seconds, or frames)")
    thumb.add_argument("--output", "-o", type=Path, required=True, help="Output image file")

    return parser


def _run_extract(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    if args.clips:
        clips = load_clips(args.clips)
    elif args.start and args.end and args.output:
        clips = [ClipRequest(start=args.start, end=args.end, output=args.output, strategy=args.strategy)]
    else:
        parser.error(
            "single clip extraction requires --start, --end and --output; "
            "or use --clips <json> for batch extraction"
        )

    validate_video_file(args.input)

    def on_progress(message: str) -> None:
        print(f"  {message}")

    print("\n•• framecut - Frame-Accurate Video Clipper ••\n")
    report = extract_clips(args.input, clips, args.strategy, on_progress=on_progress)

    if args.report:
        save_report(report, args.report)
        print(f"\nReport saved to {args.report}")

    print()
    print(f"Done! Processed {len(report.clips)} clip(s) in {report.total_processing_time_ms / 1000:.1f}s")
    for c in report.clips:
        print(f"  {c.output}: {c.actual_start} -> {c.actual_end} ({c.frames_included} frames, {c.strategy})")


def _run_thumbnail(args: argparse.Namespace) -> None:
    if not args.input.exists():
        raise FileNotFoundError(f"Input file {args.input} does not exist")

    print("\n•• framecut - Thumbnail Extractor ••\n")
    extract_thumbnail(args.input, args.time, args.output)
    print(f"Thumbnail saved to {args.output}")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    setup_logging(args.log_level)

    try:
        check_ffmpeg()
        if args.command == "extract":
            _run_extract(args, parser)
        else:
            _run_thumbnail(args)
    except (ValueError, OSError, FFmpegError, FFmpegNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
