"""Clock time extraction from free text."""

import re
from typing import Optional

# "at 3", "at 15:30", "at 3:30pm", "at 3 pm". A number running into a
# date, decimal or longer number is not a time.
_AT_TIME = re.compile(r"\bat\s+(\d{1,2})(?::(\d{2}))?(?![\d/.:-])(?:\s*(am|pm)\b)?")
# "3pm", "3:30 pm" without a leading "at"; the meridiem is required here.
_BARE_TIME = re.compile(r"\b(\d{1,2})(?::(\d{2}))?\s*(am|pm)\b")


def _to_clock(hour: int, minute: int, meridiem: Optional[str]) -> Optional[str]:
    if meridiem:
        if not 1 <= hour <= 12:
            return None
        if meridiem == "pm" and hour < 12:
            hour += 12
        elif meridiem == "am" and hour == 12:
            hour = 0
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"


def find_time(text: str) -> Optional[tuple[str, tuple[int, int]]]:
    """Find a clock time in lower-cased free text.

    Returns:
        ``("HH:MM", span)`` in 24-hour clock, or None
    """
    for pattern in (_AT_TIME, _BARE_TIME):
        match = pattern.search(text)
        if match is None:
            continue
        hour, minute, meridiem = match.groups()
        clock = _to_clock(int(hour), int(minute or 0), meridiem)
        if clock is not None:
            return clock, match.span()
    return None
