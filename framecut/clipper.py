"""Clip planner: analyzes the source once and runs each requested cut."""

import dataclasses
import logging
import time
from pathlib import Path
from typing import Callable

from framecut import analyzer, ffutil
from framecut.models import (
    RE_ENCODE,
    SMART_COPY,
    ClipRequest,
    ClipResult,
    ExtractionReport,
)
from framecut.strategies import StrategyContext, get_strategy
from framecut.timecode import format_timecode, parse

logger = logging.getLogger(__name__)


class InvalidRangeError(ValueError):
    """Raised when a clip window is empty or reversed."""
    pass


class OutOfBoundsError(ValueError):
    """Raised when a time falls outside the source duration."""
    pass


def _elapsed_ms(since: float) -> int:
    return int((time.monotonic() - since) * 1000)


def validate_time_range(
    clip: ClipRequest, start: float, end: float, duration: float
) -> None:
    if start >= end:
        raise InvalidRangeError(
            f"Invalid clip range: start ({clip.start}) must be before end ({clip.end})"
        )
    if start < 0 or end > duration:
        raise OutOfBoundsError(
            f"Clip range out of bounds: {clip.start} to {clip.end}, "
            f"with duration {duration}s"
        )


def extract_clips(
    input_path: str | Path,
    clips: list[ClipRequest],
    default_strategy: str = SMART_COPY,
    on_progress: Callable[[str], None] | None = None,
) -> ExtractionReport:
    """Cut every clip from *input_path*, in order, and report the results.

    The source is probed once and, unless every clip is re-encoded, its
    keyframes are scanned once and shared by all clips. The first failing
    clip aborts the batch; files written before it are left in place.

    Args:
        input_path: Source video.
        clips: Requests, processed sequentially.
        default_strategy: Strategy for requests that do not name one.
        on_progress: Optional callback receiving human-readable stage messages.
    """

    def _progress(message: str) -> None:
        logger.info(message)
        if on_progress:
            on_progress(message)

    started = time.monotonic()

    _progress("Analyzing video...")
    video = analyzer.analyze(input_path)
    _progress(
        f"Video: {video.width}x{video.height} @ {video.framerate:.2f}fps, "
        f"{video.duration:.2f}s"
    )

    keyframes: tuple[float, ...] | None = None
    if any((c.strategy or default_strategy) != RE_ENCODE for c in clips):
        _progress("Extracting keyframe positions (this may take a while)...")
        keyframes = tuple(analyzer.get_keyframes(input_path))
        interval = analyzer.estimate_keyframe_interval(keyframes)
        video = dataclasses.replace(video, keyframes=keyframes, keyframe_interval=interval)
        _progress(f"Found {len(keyframes)} keyframes, typical interval {interval:.2f}s")

    results: list[ClipResult] = []
    for i, clip in enumerate(clips, start=1):
        tag = clip.strategy or default_strategy
        _progress(f"Processing clip {i}/{len(clips)} ({tag})...")

        start = parse(clip.start, video.framerate)
        end = parse(clip.end, video.framerate)
        validate_time_range(clip, start, end, video.duration)
        strategy = get_strategy(tag)

        ctx = StrategyContext(
            video=video,
            start=start,
            end=end,
            output=clip.output,
            keyframes=keyframes,
        )
        clip_started = time.monotonic()
        plan = strategy.run(ctx)
        clip_ms = _elapsed_ms(clip_started)

        results.append(
            ClipResult(
                requested_start=clip.start,
                requested_end=clip.end,
                actual_start=format_timecode(plan.actual_start),
                actual_end=format_timecode(plan.actual_end),
                strategy=strategy.name,
                frames_included=round((plan.actual_end - plan.actual_start) * video.framerate),
                is_re_encoded=strategy.name == RE_ENCODE,
                processing_time_ms=clip_ms,
                output=clip.output,
            )
        )
        _progress(f"Created {clip.output} in {clip_ms / 1000:.1f}s")

    return ExtractionReport(
        source=video,
        clips=results,
        total_processing_time_ms=_elapsed_ms(started),
    )


def extract_thumbnail(
    input_path: str | Path, timestamp: str, output_path: str | Path
) -> None:
    """Write the frame at *timestamp* as a high-quality still image."""
    video = analyzer.analyze(input_path)
    seconds = parse(timestamp, video.framerate)

    if seconds < 0 or seconds > video.duration:
        raise OutOfBoundsError(f"Timestamp {timestamp} out of bounds")

    ffutil.run_ffmpeg([
        "-ss", str(seconds),
        "-i", str(input_path),
        "-vframes", "1",
        "-q:v", "2",
        "-y",
        str(output_path),
    ])
    logger.info("Thumbnail saved to %s", output_path)
