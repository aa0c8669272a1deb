"""FFmpeg/ffprobe subprocess helpers."""

import logging
import shutil
import subprocess

from framecut.config import settings

logger = logging.getLogger(__name__)


class FFmpegNotFoundError(RuntimeError):
    """Raised when a configured ffmpeg/ffprobe binary is not on PATH."""
    pass


class FFmpegError(RuntimeError):
    """Raised when ffmpeg or ffprobe exits non-zero or cannot be spawned."""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr


def check_ffmpeg() -> None:
    """Raise FFmpegNotFoundError if ffmpeg/ffprobe are not on PATH."""
    for cmd in (settings.FFMPEG_BINARY, settings.FFPROBE_BINARY):
        if shutil.which(cmd) is None:
            raise FFmpegNotFoundError(f"{cmd} not found on PATH")


def _run(tool: str, binary: str, args: list[str]) -> str:
    cmd = [binary, *args]
    logger.debug("Executing %s: %s", tool, " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        raise FFmpegError(f"Failed to spawn {tool}: {e}") from e

    if result.returncode != 0:
        logger.error("%s exited with rc=%d", tool, result.returncode)
        raise FFmpegError(f"{tool} failed: {result.stderr}", stderr=result.stderr)
    return result.stdout


def run_ffprobe(args: list[str]) -> str:
    """Run ffprobe with *args* and return its stdout."""
    return _run("ffprobe", settings.FFPROBE_BINARY, args)


def run_ffmpeg(args: list[str]) -> None:
    """Run ffmpeg with *args*; the output file is the caller's concern."""
    _run("ffmpeg", settings.FFMPEG_BINARY, args)
