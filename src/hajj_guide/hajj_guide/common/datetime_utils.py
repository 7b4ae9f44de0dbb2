from __future__ import annotations

from datetime import datetime, time

from ..core.constants import TIME_FORMAT
from ..core.exceptions import InvalidInput


def parse_hhmm(value) -> time:
    """Parse 'HH:MM' (or 'HH:MM:SS', or '08:00 AM') into a time.

    Accepts an existing time/datetime unchanged.
    """
    if isinstance(value, datetime):
        return value.time().replace(microsecond=0)
    if isinstance(value, time):
        return value.replace(microsecond=0)
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput("Time is required (HH:MM)")

    text = value.strip().upper()
    for fmt in (TIME_FORMAT, "%H:%M:%S", "%I:%M %p", "%I:%M%p"):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise InvalidInput(f"Invalid time: {value!r} (expected HH:MM)")


def format_hhmm(value: time) -> str:
    return value.strftime(TIME_FORMAT)


def now_local() -> datetime:
    """Naive local wall-clock time, the clock behind session stamps."""
    return datetime.now()
