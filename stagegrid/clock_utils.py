"""Helpers for converting between "HH:MM" clock strings and minutes from midnight."""

import re
from typing import Union

from .data_model import Minutes

_CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def parse_clock(value: Union[str, int]) -> Minutes:
    """Parse "HH:MM" (or an int already in minutes) into minutes from midnight.

    Hours up to 24 are accepted so that "24:00" can close a day.

    Raises:
        ValueError: If the string is not a valid clock time
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid clock time: {value!r}")
    if isinstance(value, int):
        return value
    match = _CLOCK_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid clock time: {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 24 or minutes > 59 or (hours == 24 and minutes != 0):
        raise ValueError(f"Clock time out of range: {value!r}")
    return hours * 60 + minutes


def format_clock(minutes: Minutes) -> str:
    """Format minutes from midnight as zero-padded "HH:MM"."""
    hours, mins = divmod(int(minutes), 60)
    return f"{hours:02d}:{mins:02d}"


def format_time_range(start: Minutes, end: Minutes) -> str:
    """Label shown on event cards, e.g. "13:00-14:30"."""
    return f"{format_clock(start)}-{format_clock(end)}"


def format_hour_label(hour: int) -> str:
    """Label for an hour tick in the time column."""
    return f"{hour:02d}:00"
