"""
Calendar-day arithmetic shared by the stores and the statistics engine.

All dates are plain calendar days (no time-of-day). "Today" is never read
from the system clock directly; callers pass a Clock so tests can pin it.
"""

import re
from datetime import date, datetime, timedelta
from typing import Callable

Clock = Callable[[], date]

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(date_str: str) -> date:
    """
    Parse an ISO calendar day.

    Args:
        date_str: Date string in YYYY-MM-DD form

    Returns:
        Parsed date

    Raises:
        ValueError: If the string is not a valid ISO calendar day
    """
    if not isinstance(date_str, str) or not _ISO_DATE_RE.match(date_str):
        raise ValueError(f"Invalid date format: {date_str!r}. Expected YYYY-MM-DD")
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError as e:
        raise ValueError(f"Invalid date: {date_str}") from e


def format_date(day: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return day.strftime("%Y-%m-%d")


def retention_cutoff(today: date, retention_days: int) -> date:
    """Oldest calendar day still kept by a retention window ending today."""
    return today - timedelta(days=retention_days)


def is_within_retention(date_str: str, today: date, retention_days: int) -> bool:
    """True if the entry dated *date_str* survives the retention window."""
    return parse_date(date_str) >= retention_cutoff(today, retention_days)


def start_of_week(today: date) -> date:
    """
    Most recent Sunday on or before *today*.

    Weeks for the "this week" counter start on Sunday.
    """
    days_since_sunday = (today.weekday() + 1) % 7
    return today - timedelta(days=days_since_sunday)


def iso_week(day: date) -> tuple[int, int]:
    """
    ISO-8601 (year, week) for *day*.

    Thursday-shift algorithm: move to the Thursday of the same Monday-based
    week; that Thursday's year is the ISO year, and the week number counts
    7-day blocks from January 1st of that year.

    Args:
        day: Any calendar day

    Returns:
        (iso_year, iso_week) with iso_week in 1..53
    """
    thursday = day + timedelta(days=3 - day.weekday())
    year_start = date(thursday.year, 1, 1)
    week = (thursday - year_start).days // 7 + 1
    return thursday.year, week


def iso_week_key(day: date) -> str:
    """Stable identifier for the ISO week containing *day*, e.g. '2024-W02'."""
    year, week = iso_week(day)
    return f"{year}-W{week:02d}"
