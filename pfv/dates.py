"""Date utilities for pfv.

Pure functions for reading calendar months out of transaction dates.
"""

import re
from datetime import date

import pandas as pd

from pfv.domain.models import MonthLabel

# Fixed English abbreviations so labels never depend on the process locale
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# Calendar date first; pandas would otherwise also accept words like "today"
ISO_DATE_PREFIX = re.compile(r"\d{4}-\d{2}-\d{2}(?:$|[T ])")


def parse_calendar_date(raw_date: str) -> date | None:
    """Parse an ISO-8601 date string into a calendar date.

    The date is read as written: a time-of-day or UTC offset suffix is
    accepted but never shifts the calendar day.

    Args:
        raw_date: ISO-8601 date (YYYY-MM-DD), optionally with a time part.

    Returns:
        Calendar date, or None if the string is not a valid ISO-8601 date.
    """
    if not isinstance(raw_date, str):
        return None

    raw_date = raw_date.strip()
    if not ISO_DATE_PREFIX.match(raw_date):
        return None

    try:
        parsed = pd.to_datetime(raw_date, format="ISO8601")
    except (ValueError, TypeError, OverflowError):
        return None

    if pd.isna(parsed):
        return None

    return date(parsed.year, parsed.month, parsed.day)


def month_label(day: date) -> MonthLabel:
    """Format the month label for a calendar date.

    Args:
        day: Calendar date.

    Returns:
        Label in "Mon YYYY" format (e.g., "Jan 2024").
    """
    return MonthLabel(f"{MONTH_ABBREVIATIONS[day.month - 1]} {day.year:04d}")


def normalize_date(raw_date: str) -> str:
    """Normalize a user-entered date string to ISO format (YYYY-MM-DD).

    Uses pandas.to_datetime so that ISO, European and other common formats
    typed at the command line all end up as ISO dates.

    Args:
        raw_date: Raw date string.

    Returns:
        Normalized date in YYYY-MM-DD format.

    Raises:
        ValueError: If date cannot be parsed.
    """
    try:
        # Year-first input is ISO and must not be read day-first
        if raw_date[:4].isdigit() and raw_date[4:5] == "-":
            parsed_date = pd.to_datetime(raw_date, format="ISO8601")
        else:
            parsed_date = pd.to_datetime(raw_date, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e

    if pd.isna(parsed_date):
        raise ValueError(f"Could not parse date '{raw_date}'")

    return parsed_date.strftime("%Y-%m-%d")
