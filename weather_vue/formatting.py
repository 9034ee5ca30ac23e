# ABOUTME: Pure presentation helpers for relative times, weekday labels, and capitalisation.
# ABOUTME: English-only phrasing with "just now", minute, hour, and day thresholds.

import math
from datetime import date, datetime

_SINGLE_STEP_DAYS = {-1: "yesterday", 0: "today", 1: "tomorrow"}


def round_half_up(value: float) -> int:
    """Round halves towards positive infinity, so 2.5 becomes 3 and -2.5 becomes -2."""
    return math.floor(value + 0.5)


def _phrase(amount: int, unit: str) -> str:
    if amount == 0:
        return f"this {unit}"
    label = unit if abs(amount) == 1 else f"{unit}s"
    if amount > 0:
        return f"in {amount} {label}"
    return f"{-amount} {label} ago"


def format_relative_time(instant: datetime, now: datetime) -> str:
    """Describe ``instant`` relative to ``now`` using the coarsest fitting unit.

    "just now" under 45 seconds, then minutes under an hour, hours under a
    day, and days beyond that. Both datetimes must be comparable (both aware
    or both naive).
    """
    diff_seconds = (instant - now).total_seconds()
    if abs(diff_seconds) < 45:
        return "just now"

    minutes = round_half_up(diff_seconds / 60)
    if abs(minutes) < 60:
        return _phrase(minutes, "minute")

    hours = round_half_up(diff_seconds / 3600)
    if abs(hours) < 24:
        return _phrase(hours, "hour")

    days = round_half_up(diff_seconds / 86400)
    if days in _SINGLE_STEP_DAYS:
        return _SINGLE_STEP_DAYS[days]
    return _phrase(days, "day")


def format_weekday(day: date) -> str:
    """English weekday name, e.g. 'Monday'."""
    return day.strftime("%A")


def day_label(index: int, day: date) -> str:
    """Forecast card heading: the first card is always 'Today'."""
    return "Today" if index == 0 else format_weekday(day)


def capitalize_first_letter(text: str | None = "") -> str:
    """Upper-case the first character and leave the rest untouched."""
    if not text:
        return ""
    return text[0].upper() + text[1:]

