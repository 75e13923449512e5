"""
Date normalization for Indian government notice listings.

Handles:
- Numeric dates (15-01-2024, 15/01/2024, 15.01.2024, 2024-01-15)
- English month names (January 15, 2024 and 15 January 2024)
- Recency checks and human-readable relative times
"""

import re
from datetime import datetime
from typing import Iterable, Optional, TypeVar

from dateutil import parser as date_parser

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

SECONDS_PER_DAY = 24 * 60 * 60

# Fields missing from free text fall back to this, never to today
GENERIC_DEFAULT_DATE = datetime(1900, 1, 1)

MONTHS = {
    "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6,
    "july": 7, "august": 8, "september": 9, "october": 10, "november": 11,
    "december": 12,
}

MONTH_ABBREVIATIONS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

_MONTH_NAMES = "|".join(MONTHS)

# Order matters: day-first numeric dates are the common Indian convention
DAY_FIRST_PATTERN = re.compile(r"(\d{1,2})[-/.](\d{1,2})[-/.](\d{4})")
YEAR_FIRST_PATTERN = re.compile(r"(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})")
MONTH_DAY_YEAR_PATTERN = re.compile(rf"({_MONTH_NAMES})\s+(\d{{1,2}}),?\s+(\d{{4}})", re.IGNORECASE)
DAY_MONTH_YEAR_PATTERN = re.compile(rf"(\d{{1,2}})\s+({_MONTH_NAMES})\s+(\d{{4}})", re.IGNORECASE)


def _build_date(year: str, month: int, day: str) -> Optional[datetime]:
    """Build a datetime, returning None for impossible calendar dates."""
    try:
        return datetime(int(year), int(month), int(day))
    except ValueError:
        return None


def _parse_numeric(text: str) -> Optional[datetime]:
    match = DAY_FIRST_PATTERN.search(text)
    if match:
        day, month, year = match.groups()
        parsed = _build_date(year, int(month), day)
        if parsed:
            return parsed

    # A four-digit leading group means year first
    match = YEAR_FIRST_PATTERN.search(text)
    if match:
        year, month, day = match.groups()
        parsed = _build_date(year, int(month), day)
        if parsed:
            return parsed

    return None


def _parse_month_name(text: str) -> Optional[datetime]:
    match = MONTH_DAY_YEAR_PATTERN.search(text)
    if match:
        month_name, day, year = match.groups()
        parsed = _build_date(year, MONTHS[month_name.lower()], day)
        if parsed:
            return parsed

    match = DAY_MONTH_YEAR_PATTERN.search(text)
    if match:
        day, month_name, year = match.groups()
        parsed = _build_date(year, MONTHS[month_name.lower()], day)
        if parsed:
            return parsed

    return None


def _parse_generic(text: str) -> Optional[datetime]:
    """Last resort: let dateutil try whatever format the site used."""
    try:
        parsed = date_parser.parse(text, default=GENERIC_DEFAULT_DATE)
    except (ValueError, OverflowError, TypeError):
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_indian_date(text: Optional[str]) -> Optional[datetime]:
    """
    Parse a free-text date as found on Indian government sites.

    Supported formats, tried in order:
    - "15-01-2024", "15/01/2024", "15.01.2024" (day first)
    - "2024-01-15", "2024/01/15", "2024.01.15" (year first)
    - "January 15, 2024" (comma optional, any case)
    - "15 January 2024" (any case)
    - anything dateutil understands

    Args:
        text: String containing a date, possibly surrounded by other text

    Returns:
        Naive datetime at midnight, or None when no date is recognized
    """
    if not text:
        return None

    cleaned = text.strip()
    if not cleaned:
        return None

    parsed = _parse_numeric(cleaned) or _parse_month_name(cleaned) or _parse_generic(cleaned)
    if parsed is None:
        logger.debug("date_unparsed", text=cleaned)
    return parsed


def _days_between(date: datetime, now: Optional[datetime]) -> float:
    now = now or datetime.now(date.tzinfo)
    return (now - date).total_seconds() / SECONDS_PER_DAY


def is_within_days(date: datetime, days: float, now: Optional[datetime] = None) -> bool:
    """
    Check whether `date` falls within the last `days` days.

    Dates in the future are never within the window.
    """
    diff_days = _days_between(date, now)
    return 0 <= diff_days <= days


def get_relative_time(date: datetime, now: Optional[datetime] = None) -> str:
    """Describe `date` relative to now, e.g. "Yesterday" or "2 weeks ago"."""
    diff_days = int(_days_between(date, now) // 1)

    if diff_days <= 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    if diff_days < 7:
        return f"{diff_days} days ago"
    if diff_days < 14:
        return "1 week ago"
    if diff_days < 30:
        return f"{diff_days // 7} weeks ago"
    if diff_days < 60:
        return "1 month ago"
    return f"{diff_days // 30} months ago"


def format_date(date: datetime) -> str:
    """Render a date as "15 Jan 2024"."""
    return f"{date.day} {MONTH_ABBREVIATIONS[date.month - 1]} {date.year}"


def sort_by_date(items: Iterable[T], descending: bool = True) -> list[T]:
    """
    Sort items by their `parsed_date` attribute.

    Items without a parsed date always come last, in their original
    order, regardless of direction.
    """
    dated = []
    undated = []
    for item in items:
        if getattr(item, "parsed_date", None) is not None:
            dated.append(item)
        else:
            undated.append(item)

    dated.sort(key=lambda item: item.parsed_date, reverse=descending)
    return dated + undated
