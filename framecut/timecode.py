"""Timecode parsing and formatting.

Accepted time expressions:

* frame counts: ``"1234f"`` (converted with the source frame rate)
* clock timecodes: ``"01:23:45.500"``
* plain seconds: ``"125.5"``
"""

import math


class TimecodeError(ValueError):
    """Base class for malformed time expressions."""
    pass


class InvalidFrameNumberError(TimecodeError):
    """Raised for a malformed '<n>f' expression or an unusable frame rate."""
    pass


class InvalidTimecodeFormatError(TimecodeError):
    """Raised when a clock timecode does not have three parts."""
    pass


class InvalidTimecodeValueError(TimecodeError):
    """Raised when a clock timecode part is not a number."""
    pass


class InvalidTimeFormatError(TimecodeError):
    """Raised when plain seconds are not a number."""
    pass


def _to_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"non-finite value: {text}")
    return value


def parse(expression: str, framerate: float) -> float:
    """Convert a time expression to seconds, relative to *framerate*."""
    expression = expression.strip()

    if expression.endswith("f"):
        try:
            frame_num = int(expression[:-1])
        except ValueError:
            raise InvalidFrameNumberError(f"Invalid frame number: {expression}") from None
        if framerate <= 0:
            raise InvalidFrameNumberError(
                f"Cannot convert frame number {expression}: frame rate is {framerate}"
            )
        return frame_num / framerate

    if ":" in expression:
        parts = expression.split(":")
        if len(parts) != 3:
            raise InvalidTimecodeFormatError(
                f"Invalid timecode format: {expression}. Expected HH:MM:SS.mmm"
            )
        try:
            hours = int(parts[0])
            minutes = int(parts[1])
            seconds = _to_float(parts[2])
        except ValueError:
            raise InvalidTimecodeValueError(f"Invalid timecode values: {expression}") from None
        return hours * 3600 + minutes * 60 + seconds

    try:
        return _to_float(expression)
    except ValueError:
        raise InvalidTimeFormatError(f"Invalid time format: {expression}") from None


def format_timecode(seconds: float) -> str:
    """Render *seconds* as ``HH:MM:SS.mmm``."""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:06.3f}"


def seconds_to_frame_number(seconds: float, framerate: float) -> int:
    return math.floor(framerate * seconds)
