from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Iterable, Optional, Protocol

from ..core.constants import DAYS_OF_WEEK, MONTH_NAMES, SUNDAY


class HasDate(Protocol):
    date: str


def normalize_date(raw: str | None) -> str:
    """Strip whitespace and any time-of-day suffix: '2024-08-17T07:00' -> '2024-08-17'."""
    if not raw:
        return ""
    return raw.strip().split("T")[0]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(normalize_date(value), "%Y-%m-%d").date()


def iso(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def _at_noon(date_str: str) -> Optional[datetime]:
    # Noon keeps the calendar day stable whatever the local offset.
    try:
        year, month, day = (int(p) for p in normalize_date(date_str).split("-"))
        return datetime(year, month, day, 12, 0, 0)
    except ValueError:
        return None


def js_weekday(date_str: str) -> Optional[int]:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    moment = _at_noon(date_str)
    if moment is None:
        return None
    return (moment.weekday() + 1) % 7


def is_weekend(date_str: str | None) -> bool:
    if not date_str:
        return False
    index = js_weekday(date_str)
    return index in (0, 6)


def day_name(date_str: str) -> str:
    """Indonesian weekday name ('Senin' .. 'Sabtu', 'Minggu' for Sunday)."""
    index = js_weekday(date_str)
    if index is None:
        return ""
    if index == 0:
        return SUNDAY
    return DAYS_OF_WEEK[index - 1]


def resolve_holiday(date_str: str | None, holidays: Iterable[HasDate]):
    """Return the first holiday falling on date_str, or None."""
    if not date_str:
        return None
    target = normalize_date(date_str)
    for holiday in holidays:
        if normalize_date(holiday.date) == target:
            return holiday
    return None


def is_day_off(date_str: str, holidays: Iterable[HasDate]) -> bool:
    return is_weekend(date_str) or resolve_holiday(date_str, holidays) is not None


def is_school_day(date_str: str, holidays: Iterable[HasDate]) -> bool:
    return not is_day_off(date_str, holidays)


def month_dates(year: int, month: int) -> list[str]:
    """Every calendar day of the month as YYYY-MM-DD."""
    days = calendar.monthrange(int(year), int(month))[1]
    return [f"{int(year):04d}-{int(month):02d}-{d:02d}" for d in range(1, days + 1)]


def month_name(month: int) -> str:
    return MONTH_NAMES[int(month) - 1]


def format_long_date(date_str: str) -> str:
    """Indonesian long date, e.g. 'Senin, 19 Oktober 2026'."""
    d = parse_iso_date(date_str)
    return f"{day_name(date_str)}, {d.day} {month_name(d.month)} {d.year}"


def now_local() -> datetime:
    """Local wall-clock time used for default dates in the controllers."""
    return datetime.now()
