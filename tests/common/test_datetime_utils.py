from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.school_attendance.school_attendance.academic.model import Holiday
from src.school_attendance.school_attendance.common.datetime_utils import (
    day_name,
    format_long_date,
    is_day_off,
    is_school_day,
    is_weekend,
    month_dates,
    normalize_date,
    resolve_holiday,
)


def _every_day(year: int):
    d = date(year, 1, 1)
    while d.year == year:
        yield d
        d += timedelta(days=1)


@pytest.mark.parametrize("year", [2024, 2026])
def test_is_weekend_matches_calendar_weekday_for_whole_year(year):
    for d in _every_day(year):
        assert is_weekend(d.isoformat()) == (d.weekday() in (5, 6)), d


@pytest.mark.parametrize(
    "raw, expected",
    [
        # European and US daylight-saving switch days
        ("2024-03-31", True),
        ("2024-10-27", True),
        ("2026-03-08", True),
        ("2026-11-01", True),
        ("2026-03-30", False),
    ],
)
def test_is_weekend_on_dst_transition_days(raw, expected):
    assert is_weekend(raw) is expected


def test_normalize_date_strips_time_suffix_and_whitespace():
    assert normalize_date(" 2024-08-17T07:30:00Z ") == "2024-08-17"
    assert normalize_date("2024-08-17") == "2024-08-17"
    assert normalize_date("") == ""
    assert normalize_date(None) == ""


def test_is_weekend_empty_is_false():
    assert is_weekend("") is False


def test_day_name_is_indonesian_monday_first_with_sunday_special():
    assert day_name("2026-10-19") == "Senin"
    assert day_name("2026-10-24") == "Sabtu"
    assert day_name("2026-10-25") == "Minggu"
    assert day_name("2026-10-19T23:59:00") == "Senin"


def test_resolve_holiday_matches_normalized_dates():
    holidays = [
        Holiday(id="a", date="2024-08-17T00:00:00", description="Independence Day"),
        Holiday(id="b", date="2024-08-17", description="Duplicate"),
    ]
    assert resolve_holiday("2024-08-17", holidays).description == "Independence Day"
    assert resolve_holiday("2024-08-18", holidays) is None


def test_holiday_is_day_off_even_on_weekday():
    holidays = [Holiday(id="x", date="2026-10-20", description="Libur sekolah")]
    assert is_day_off("2026-10-20", holidays)
    assert not is_school_day("2026-10-20", holidays)
    assert is_school_day("2026-10-21", holidays)
    assert is_day_off("2026-10-24", [])


def test_independence_day_is_day_off():
    holidays = [Holiday(id="h", date="2024-08-17", description="Independence Day")]
    assert is_day_off("2024-08-17", holidays) is True


def test_month_dates_covers_leap_february():
    days = month_dates(2024, 2)
    assert len(days) == 29
    assert days[0] == "2024-02-01"
    assert days[-1] == "2024-02-29"


def test_format_long_date():
    assert format_long_date("2026-10-19") == "Senin, 19 Oktober 2026"
