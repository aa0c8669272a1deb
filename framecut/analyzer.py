"""Video analysis via ffprobe: stream metadata and keyframe positions."""

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from framecut import ffutil
from framecut.models import VideoInfo

logger = logging.getLogger(__name__)

DEFAULT_KEYFRAME_INTERVAL = 2.0
INTERVAL_SAMPLE_SIZE = 20


class NoVideoStreamError(ValueError):
    """Raised when the input file exposes no video stream."""
    pass


def _parse_framerate(rate: str | None) -> float:
    """Reduce an ffprobe rational such as ``"30000/1001"`` to fps."""
    num, _, den = (rate or "0/1").partition("/")
    denominator = float(den) if den else 0.0
    return float(num) / (denominator or 1.0)


def analyze(input_path: str | Path) -> VideoInfo:
    """Probe the first video stream and the container of *input_path*."""
    stream_out = ffutil.run_ffprobe([
        "-v", "error",
        "-select_streams", "v:0",
        "-show_entries", "stream=width,height,codec_name,r_frame_rate,duration,nb_frames",
        "-of", "json",
        str(input_path),
    ])
    streams = json.loads(stream_out).get("streams") or []
    if not streams:
        raise NoVideoStreamError(f"No video stream found in {input_path}")
    stream = streams[0]

    format_out = ffutil.run_ffprobe([
        "-v", "error",
        "-show_entries", "format=duration",
        "-of", "json",
        str(input_path),
    ])
    fmt = json.loads(format_out).get("format") or {}

    # Stream duration is absent for some containers (e.g. mkv)
    duration = stream.get("duration")
    if duration in (None, "N/A"):
        duration = fmt.get("duration")
    if duration in (None, "N/A"):
        raise ValueError(f"Could not determine duration of {input_path}")

    return VideoInfo(
        file=str(input_path),
        duration=float(duration),
        framerate=_parse_framerate(stream.get("r_frame_rate")),
        width=int(stream["width"]),
        height=int(stream["height"]),
        codec=stream["codec_name"],
    )


def get_keyframes(input_path: str | Path) -> list[float]:
    """Return sorted keyframe timestamps of the first video stream.

    This decodes frame headers for the whole stream and is by far the slowest
    probe; callers should run it at most once per file.
    """
    output = ffutil.run_ffprobe([
        "-v", "error",
        "-select_streams", "v:0",
        "-show_entries", "frame=key_frame,pts_time,pkt_pts_time",
        "-of", "json",
        str(input_path),
    ])
    frames = json.loads(output).get("frames") or []

    keyframes: list[float] = []
    for frame in frames:
        if int(frame.get("key_frame", 0)) != 1:
            continue
        # pkt_pts_time was dropped in ffmpeg 5; older builds only report it
        ts = frame.get("pts_time", frame.get("pkt_pts_time"))
        if ts in (None, "N/A"):
            continue
        keyframes.append(float(ts))

    keyframes.sort()
    logger.debug("Found %d keyframes in %s", len(keyframes), input_path)
    return keyframes


def find_previous_keyframe(timestamp: float, keyframes: Sequence[float]) -> float:
    """Latest keyframe at or before *timestamp*; 0 (stream start) if none."""
    for k in reversed(keyframes):
        if k <= timestamp:
            return k
    return 0.0


def find_nearest_keyframe(timestamp: float, keyframes: Sequence[float]) -> float:
    """Keyframe closest to *timestamp*; ties go to the earlier entry."""
    nearest = keyframes[0]
    min_diff = abs(nearest - timestamp)
    for k in keyframes:
        diff = abs(k - timestamp)
        if diff < min_diff:
            min_diff = diff
            nearest = k
    return nearest


def estimate_keyframe_interval(keyframes: Sequence[float]) -> float:
    """Median GOP length over the first keyframes, for display only."""
    if len(keyframes) < 2:
        return DEFAULT_KEYFRAME_INTERVAL

    sample = list(keyframes[:INTERVAL_SAMPLE_SIZE])
    gaps = sorted(b - a for a, b in zip(sample, sample[1:]))
    return gaps[len(gaps) // 2]
