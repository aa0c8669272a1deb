"""JSON batch files and reports: the contract between the CLI and the clipper."""

import json
from pathlib import Path

from framecut.models import ClipRequest, ExtractionReport

VIDEO_EXTENSIONS = (".mp4", ".mov", ".avi", ".mkv", ".m4v", ".webm")


def validate_video_file(path: str | Path) -> None:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if path.suffix.lower() not in VIDEO_EXTENSIONS:
        raise ValueError(f"Unsupported file format: {path.suffix}")


def load_clips(path: str | Path) -> list[ClipRequest]:
    """Load and validate a batch of clip requests from a JSON file.

    The document is a list of ``{"start", "end", "output", "strategy"?}``
    objects; times stay unparsed until the source frame rate is known.
    """
    path = Path(path)
    data = json.loads(path.read_text())

    if not isinstance(data, list):
        raise ValueError("Clips file must contain a JSON list of clip objects")

    clips: list[ClipRequest] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict) or not all(k in item for k in ("start", "end", "output")):
            raise ValueError(f"Clip #{i + 1} must contain 'start', 'end' and 'output' fields")
        clips.append(
            ClipRequest(
                start=str(item["start"]),
                end=str(item["end"]),
                output=str(item["output"]),
                strategy=item.get("strategy"),
            )
        )
    return clips


def save_report(report: ExtractionReport, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(json.dumps(report.to_dict(), indent=2))
    return path
