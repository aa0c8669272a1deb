"""Shared test fixtures."""

import logging
from pathlib import Path

import pytest

from framecut import config
from framecut.models import VideoInfo

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def reset_framecut_logger():
    """Undo setup_logging so handlers bound to captured stderr never leak."""

    def _reset() -> None:
        logger = logging.getLogger("framecut")
        for h in list(logger.handlers):
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
        config._handler = None

    _reset()
    yield
    _reset()


@pytest.fixture
def sample_clips_path() -> Path:
    return FIXTURES_DIR / "sample_clips.json"


@pytest.fixture
def video_info() -> VideoInfo:
    return VideoInfo(
        file="video.mp4",
        duration=20.0,
        framerate=30.0,
        width=1920,
        height=1080,
        codec="h264",
    )
