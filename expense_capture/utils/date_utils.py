"""Date manipulation utilities"""

import re
from datetime import date, datetime, time
from typing import Optional

from dateutil import parser as dateutil_parser

MONTH_ABBREVIATIONS = ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"]

NUMERIC_DATE = re.compile(r"\d{2}[-/]\d{2}[-/]\d{2,4}")
COMPACT_DATE = re.compile(r"\d{2}[A-Za-z]{3}\d{2,4}")


def expand_year(year: int) -> int:
    """Two-digit bank years are 20xx"""
    return year + 2000 if year < 100 else year


def normalize_date_token(token: str, today: Optional[date] = None) -> date:
    """
    Convert a date token from a bank SMS to a calendar date.

    Supported tokens:
    - DD-MM-YY(YY) / DD/MM/YY(YY)  e.g. 31-01-26, 05/03/2024
    - DDMonYY(YY)                  e.g. 31Jan26
    - anything dateutil understands, read day-first (e.g. 5-Jan-26)

    Never raises: an unparseable token or impossible date (31-02-24, 12Foo24)
    falls back to `today`, which defaults to the current date.
    """
    fallback = today or date.today()
    if not token:
        return fallback

    try:
        if NUMERIC_DATE.fullmatch(token):
            day, month, year = (int(part) for part in re.split(r"[-/]", token)[:3])
            return date(expand_year(year), month, day)

        if COMPACT_DATE.fullmatch(token):
            day = int(token[:2])
            month_abbr = token[2:5].lower()
            year = expand_year(int(token[5:]))
            if month_abbr not in MONTH_ABBREVIATIONS:
                return fallback
            return date(year, MONTH_ABBREVIATIONS.index(month_abbr) + 1, day)

        return dateutil_parser.parse(token, dayfirst=True, default=datetime.combine(fallback, time())).date()

    except (ValueError, OverflowError):
        return fallback


def weekday_index(day: date) -> int:
    """Day of week with Sunday = 0, Saturday = 6"""
    return day.isoweekday() % 7
