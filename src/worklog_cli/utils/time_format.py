"""Time helpers: clocks, duration rounding and display formatting."""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: timezone-aware UTC now."""
    return datetime.now(UTC)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    ``round()`` uses banker's rounding (``round(2.5) == 2``); stored durations
    round 2.5 s up to 3 s.
    """
    return int(math.floor(value + 0.5))


def seconds_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds()


def elapsed_whole_seconds(start: datetime, now: datetime) -> int:
    """Whole seconds from *start* to *now*, floored and never negative."""
    return max(0, math.floor(seconds_between(start, now)))


def format_duration(seconds: int | None) -> str:
    """Format seconds as ``HH:MM:SS``.

    Examples:
        format_duration(45)   -> "00:00:45"
        format_duration(90)   -> "00:01:30"
        format_duration(3661) -> "01:01:01"
    """
    if not seconds or seconds <= 0:
        return "00:00:00"
    hrs, rest = divmod(int(seconds), 3600)
    mins, secs = divmod(rest, 60)
    return f"{hrs:02d}:{mins:02d}:{secs:02d}"


def format_countdown(seconds: int) -> str:
    """Format a countdown as ``MM:SS`` (minutes may exceed 59)."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def format_clock(value: datetime | None) -> str:
    """Local wall-clock time ``HH:MM``, empty string for None."""
    if value is None:
        return ""
    return value.astimezone().strftime("%H:%M")


def format_date(value: datetime | None) -> str:
    """Local date, e.g. ``15 Jan 2024``."""
    if value is None:
        return ""
    local = value.astimezone()
    return f"{local.day} {local.strftime('%b %Y')}"


_DURATION_UNITS = {"h": 3600, "m": 60, "s": 1}
_DURATION_PATTERN = re.compile(r"(\d+)\s*([hms])")


def parse_duration(text: str) -> int:
    """Parse a user-entered duration into seconds.

    Accepts ``HH:MM:SS``, ``H:MM``, unit strings like ``1h30m`` or ``45m``,
    and a bare number of minutes.

    Raises:
        ValueError: If the text is not a duration
    """
    value = text.strip().lower()
    if not value:
        raise ValueError("Empty duration")

    if ":" in value:
        parts = value.split(":")
        if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid duration: {text!r}")
        numbers = [int(p) for p in parts]
        if len(numbers) == 2:
            numbers.append(0)
        hours, minutes, seconds = numbers
        return hours * 3600 + minutes * 60 + seconds

    if value.isdigit():
        return int(value) * 60

    matches = _DURATION_PATTERN.findall(value)
    if not matches or _DURATION_PATTERN.sub("", value).strip():
        raise ValueError(f"Invalid duration: {text!r}")
    return sum(int(amount) * _DURATION_UNITS[unit] for amount, unit in matches)
