"""Shared data types used across framecut."""

from dataclasses import asdict, dataclass, field

KEYFRAME_ONLY = "keyframe-only"
SMART_COPY = "smart-copy"
RE_ENCODE = "re-encode"


@dataclass(frozen=True)
class VideoInfo:
    """Metadata of the source file, extracted once per run via ffprobe."""

    file: str
    duration: float
    framerate: float
    width: int
    height: int
    codec: str
    keyframe_interval: float | None = None
    keyframes: tuple[float, ...] | None = None

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "duration": self.duration,
            "framerate": self.framerate,
            "width": self.width,
            "height": self.height,
            "codec": self.codec,
            "keyframe_interval": self.keyframe_interval,
            "keyframe_count": len(self.keyframes) if self.keyframes is not None else None,
        }


@dataclass(frozen=True)
class ClipRequest:
    """A requested cut; start/end are unparsed time expressions."""

    start: str
    end: str
    output: str
    strategy: str | None = None


@dataclass
class ClipResult:
    """Outcome of one ClipRequest."""

    requested_start: str
    requested_end: str
    actual_start: str
    actual_end: str
    strategy: str
    frames_included: int
    is_re_encoded: bool
    processing_time_ms: int
    output: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ExtractionReport:
    source: VideoInfo
    clips: list[ClipResult] = field(default_factory=list)
    total_processing_time_ms: int = 0

    def to_dict(self) -> dict:
        return {
            "source": self.source.to_dict(),
            "clips": [c.to_dict() for c in self.clips],
            "total_processing_time_ms": self.total_processing_time_ms,
        }
