"""Extraction strategies: where to seek and whether to re-encode.

Each strategy turns a requested window into a :class:`CutPlan`: the ffmpeg
seek position, duration and codec mode, plus the boundaries the output will
actually have. Planning is pure; :meth:`ExtractionStrategy.run` hands the plan
to ffmpeg.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from framecut import ffutil
from framecut.analyzer import find_nearest_keyframe, find_previous_keyframe
from framecut.models import KEYFRAME_ONLY, RE_ENCODE, SMART_COPY, VideoInfo

logger = logging.getLogger(__name__)

# Coarse seek lead when no keyframe data is available
FALLBACK_SEEK_LEAD = 5.0


class MissingKeyframeDataError(ValueError):
    """Raised when a keyframe-dependent strategy has no keyframes."""
    pass


class UnknownStrategyError(ValueError):
    """Raised for a strategy tag with no registered strategy."""
    pass


@dataclass(frozen=True)
class StrategyContext:
    video: VideoInfo
    start: float
    end: float
    output: str
    keyframes: Sequence[float] | None = None


@dataclass(frozen=True)
class CutPlan:
    """Resolved ffmpeg parameters for one clip.

    ``trim`` is the precise post-decode offset of a two-phase seek; it is
    ``None`` for stream-copy plans.
    """

    seek: float
    duration: float
    actual_start: float
    actual_end: float
    reencode: bool = False
    trim: float | None = None

    def ffmpeg_args(self, input_path: str, output_path: str) -> list[str]:
        args = ["-ss", str(self.seek), "-i", input_path]
        if self.trim is not None:
            args += ["-ss", str(self.trim)]
        args += ["-t", str(self.duration)]
        if self.reencode:
            args += [
                "-c:v", "libx264",
                "-preset", "fast",
                "-crf", "23",
                "-c:a", "copy",
            ]
        else:
            args += ["-c", "copy", "-avoid_negative_ts", "1"]
        args += ["-y", output_path]
        return args


def _require_keyframes(keyframes: Sequence[float] | None, strategy: str) -> Sequence[float]:
    if not keyframes:
        raise MissingKeyframeDataError(f"Keyframe data required for {strategy} strategy")
    return keyframes


class ExtractionStrategy:
    name: str = ""

    def plan(self, ctx: StrategyContext) -> CutPlan:
        raise NotImplementedError

    def run(self, ctx: StrategyContext) -> CutPlan:
        """Plan the cut and execute it with ffmpeg."""
        plan = self.plan(ctx)
        ffutil.run_ffmpeg(plan.ffmpeg_args(ctx.video.file, ctx.output))
        return plan


class KeyframeOnly(ExtractionStrategy):
    """Stream copy with both ends snapped to their nearest keyframe."""

    name = KEYFRAME_ONLY

    def plan(self, ctx: StrategyContext) -> CutPlan:
        keyframes = _require_keyframes(ctx.keyframes, self.name)
        start = find_nearest_keyframe(ctx.start, keyframes)
        end = find_nearest_keyframe(ctx.end, keyframes)
        return CutPlan(seek=start, duration=end - start, actual_start=start, actual_end=end)


class SmartCopy(ExtractionStrategy):
    """Stream copy from the keyframe at or before start up to the requested end.

    Frames between that keyframe and the requested start stay in the output.
    """

    name = SMART_COPY

    def plan(self, ctx: StrategyContext) -> CutPlan:
        keyframes = _require_keyframes(ctx.keyframes, self.name)
        start = find_previous_keyframe(ctx.start, keyframes)
        return CutPlan(
            seek=start,
            duration=ctx.end - start,
            actual_start=start,
            actual_end=ctx.end,
        )


class ReEncode(ExtractionStrategy):
    """Frame-accurate cut: coarse input seek, precise trim, libx264 video."""

    name = RE_ENCODE

    def plan(self, ctx: StrategyContext) -> CutPlan:
        if ctx.keyframes:
            seek = find_previous_keyframe(ctx.start, ctx.keyframes)
        else:
            seek = max(0.0, ctx.start - FALLBACK_SEEK_LEAD)
        return CutPlan(
            seek=seek,
            trim=ctx.start - seek,
            duration=ctx.end - ctx.start,
            actual_start=ctx.start,
            actual_end=ctx.end,
            reencode=True,
        )


STRATEGIES: dict[str, ExtractionStrategy] = {
    s.name: s for s in (KeyframeOnly(), SmartCopy(), ReEncode())
}
STRATEGY_NAMES = tuple(STRATEGIES)


def get_strategy(name: str) -> ExtractionStrategy:
    try:
        return STRATEGIES[name]
    except KeyError:
        raise UnknownStrategyError(f"Unknown extraction strategy: {name}") from None
