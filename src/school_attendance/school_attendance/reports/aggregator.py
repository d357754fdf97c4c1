"""Monthly attendance matrix.

Pure functions over snapshots: every day of the month is classified per
student in the order HOLIDAY > WEEKEND > NOT_SCHEDULED > recorded status.
Only SCHOOL_DAY cells count as eligible slots for the percentage.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from ..academic.model import Holiday
from ..common.datetime_utils import day_name, is_weekend, month_dates, resolve_holiday
from ..core.enums import AttendanceStatus, DayKind
from ..students.model import Student
from ..subjects.model import Subject
from ..subjects.schedule import is_scheduled
from .model import DayColumn, MonthlyReport, ReportCell, StudentRow, Tally


def classify_day(date: str, holidays: Sequence[Holiday], subject: Optional[Subject], class_id: str) -> DayKind:
    if resolve_holiday(date, holidays) is not None:
        return DayKind.HOLIDAY
    if is_weekend(date):
        return DayKind.WEEKEND
    if subject is not None and not is_scheduled(subject, day_name(date), class_id):
        return DayKind.NOT_SCHEDULED
    return DayKind.SCHOOL_DAY


def tally(statuses: Iterable[AttendanceStatus]) -> Tally:
    counts = {s: 0 for s in AttendanceStatus}
    for status in statuses:
        counts[status] += 1
    return Tally(
        hadir=counts[AttendanceStatus.HADIR],
        sakit=counts[AttendanceStatus.SAKIT],
        izin=counts[AttendanceStatus.IZIN],
        alpa=counts[AttendanceStatus.ALPA],
    )


def build_monthly_report(
    *,
    year: int,
    month: int,
    class_id: str,
    students: Sequence[Student],
    holidays: Sequence[Holiday],
    statuses: Mapping[tuple[str, str], AttendanceStatus],
    subject: Optional[Subject] = None,
) -> MonthlyReport:
    """Build the report matrix.

    statuses maps (student_id, date) to the recorded status; for subject
    reports the caller passes only that subject's records.
    """
    dates = month_dates(year, month)
    days = tuple(
        DayColumn(
            day=index,
            date=date,
            day_name=day_name(date),
            kind=classify_day(date, holidays, subject, class_id),
        )
        for index, date in enumerate(dates, start=1)
    )

    rows = []
    for student in students:
        cells = []
        for date in dates:
            kind = classify_day(date, holidays, subject, student.class_id)
            status = AttendanceStatus.NONE
            if kind == DayKind.SCHOOL_DAY:
                status = statuses.get((student.id, date), AttendanceStatus.NONE)
            cells.append(ReportCell(date=date, kind=kind, status=status))
        rows.append(
            StudentRow(
                student=student,
                cells=tuple(cells),
                tally=tally(c.status for c in cells if c.is_eligible),
            )
        )

    totals = sum((r.tally for r in rows), Tally())
    return MonthlyReport(
        year=int(year),
        month=int(month),
        class_id=class_id,
        subject=subject,
        days=days,
        rows=tuple(rows),
        totals=totals,
        eligible_slots=sum(r.eligible_days for r in rows),
    )
