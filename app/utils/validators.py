# app/utils/validators.py
"""Parsing helpers for the plain date/time strings used across the API"""
import re
from datetime import date, datetime
from typing import Union

from app.core.exceptions import InvalidInput

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def parse_date(value: Union[date, str]) -> date:
    """
    Parse a YYYY-MM-DD string into a date.

    datetime values are rejected; slots are keyed by calendar date only.
    """
    if isinstance(value, datetime):
        raise InvalidInput("Date must not include a time component")
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise InvalidInput(f"Invalid date '{value}'. Use YYYY-MM-DD")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidInput(f"Invalid date '{value}'. Use YYYY-MM-DD")


def normalize_time(value: str) -> str:
    """
    Normalize a clock time to zero-padded HH:MM.

    Accepts H:MM, HH:MM and HH:MM:SS (as returned by Postgres time columns).
    Seconds must be zero since slots have minute precision.
    """
    if not isinstance(value, str):
        raise InvalidInput(f"Invalid time '{value}'. Use HH:MM")

    match = _TIME_RE.match(value.strip())
    if not match:
        raise InvalidInput(f"Invalid time '{value}'. Use HH:MM")

    hours, minutes, seconds = match.groups()
    hours, minutes = int(hours), int(minutes)
    if hours > 23 or minutes > 59 or (seconds is not None and int(seconds) != 0):
        raise InvalidInput(f"Invalid time '{value}'. Use HH:MM")

    return f"{hours:02d}:{minutes:02d}"


def validate_time_range(start_time: str, end_time: str) -> tuple:
    """Normalize a start/end pair and require start < end"""
    start = normalize_time(start_time)
    end = normalize_time(end_time)
    if start >= end:
        raise InvalidInput(f"Start time {start} must be before end time {end}")
    return start, end
