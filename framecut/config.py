"""Environment-driven settings and logging setup."""

import logging
import os
import shutil
import sys

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class Settings:
    # --- External tools ---
    FFMPEG_BINARY: str = os.getenv("FRAMECUT_FFMPEG", shutil.which("ffmpeg") or "ffmpeg")
    FFPROBE_BINARY: str = os.getenv("FRAMECUT_FFPROBE", shutil.which("ffprobe") or "ffprobe")

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "ERROR")


settings = Settings()


def parse_log_level(name: str | None) -> int:
    """Map a level name to a logging constant; unknown names fall back to ERROR."""
    if not name:
        return logging.ERROR
    return _LEVELS.get(name.strip().upper(), logging.ERROR)


_handler: logging.Handler | None = None


def setup_logging(level: str | None = None) -> None:
    """Attach a stderr handler to the ``framecut`` logger.

    Calling it again swaps the previous handler for one bound to the current
    ``sys.stderr``, so repeated setup never stacks handlers.
    """
    global _handler
    logger = logging.getLogger("framecut")
    logger.setLevel(parse_log_level(level or settings.LOG_LEVEL))

    if _handler is not None:
        logger.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("[%(levelname)s] |%(name)s| %(message)s"))
    logger.addHandler(_handler)
    logger.propagate = False
