from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.attendance.model import AttendanceRecord, SubjectAttendanceRecord
from src.school_attendance.school_attendance.attendance.service import coerce_status
from src.school_attendance.school_attendance.core.enums import AttendanceStatus
from src.school_attendance.school_attendance.core.exceptions import DayOffError, StoreWriteError, ValidationError

MONDAY = "2026-10-19"
SATURDAY = "2026-10-24"
INDEPENDENCE_DAY = "2024-08-17"


def _daily(student_id, date, status):
    return AttendanceRecord(student_id=student_id, date=date, status=status, academic_year="2024/2025")


def test_marking_present_creates_single_record(container, store):
    container.attendance_service.mark_attendance([_daily("s1", MONDAY, AttendanceStatus.HADIR)])

    assert store.docs["attendance"]["s1-2026-10-19"] == {
        "id": "s1-2026-10-19",
        "studentId": "s1",
        "date": MONDAY,
        "status": "H",
        "academicYear": "2024/2025",
    }
    assert container.state.attendance["s1-2026-10-19"].status == AttendanceStatus.HADIR


def test_marking_again_overwrites_instead_of_duplicating(container, store):
    service = container.attendance_service
    service.mark_attendance([_daily("s1", MONDAY, AttendanceStatus.HADIR)])
    service.mark_attendance([_daily("s1", MONDAY, AttendanceStatus.SAKIT)])
    service.mark_attendance([_daily("s1", MONDAY, AttendanceStatus.SAKIT)])

    records = [r for r in container.attendance_repo.list_daily() if r.student_id == "s1"]
    assert len(records) == 1
    assert records[0].status == AttendanceStatus.SAKIT
    assert len(store.docs["attendance"]) == 1


def test_marking_none_deletes_record(container, store):
    service = container.attendance_service
    service.mark_attendance([_daily("s1", MONDAY, AttendanceStatus.IZIN)])
    service.mark_attendance([_daily("s1", MONDAY, AttendanceStatus.NONE)])

    assert store.docs["attendance"] == {}
    assert container.state.attendance == {}


def test_weekend_status_is_refused_and_nothing_written(container, store):
    with pytest.raises(DayOffError):
        container.attendance_service.mark_attendance(
            [_daily("s1", MONDAY, AttendanceStatus.HADIR), _daily("s2", SATURDAY, AttendanceStatus.HADIR)]
        )
    assert store.docs.get("attendance", {}) == {}


def test_holiday_rejects_present_but_allows_reset(container, store):
    service = container.attendance_service
    assert service.day_off_reason(INDEPENDENCE_DAY) == "Libur Nasional (Hari Kemerdekaan RI)"

    with pytest.raises(DayOffError):
        service.mark_attendance([_daily("s1", INDEPENDENCE_DAY, AttendanceStatus.HADIR)])

    service.mark_attendance([_daily("s1", INDEPENDENCE_DAY, AttendanceStatus.NONE)])
    assert store.docs.get("attendance", {}) == {}


def test_check_status_change_only_lets_reset_through_on_weekend(container):
    service = container.attendance_service
    assert service.check_status_change(SATURDAY, "") == AttendanceStatus.NONE
    assert service.check_status_change(MONDAY, "H") == AttendanceStatus.HADIR
    with pytest.raises(DayOffError) as exc:
        service.check_status_change(SATURDAY, "S")
    assert "Akhir Pekan" in str(exc.value)


def test_failed_commit_leaves_state_untouched(container, store):
    service = container.attendance_service
    service.mark_attendance([_daily("s1", MONDAY, AttendanceStatus.HADIR)])

    store.fail_next_commit = True
    with pytest.raises(StoreWriteError):
        service.mark_attendance([_daily("s1", MONDAY, AttendanceStatus.ALPA), _daily("s2", MONDAY, AttendanceStatus.HADIR)])

    assert store.docs["attendance"]["s1-2026-10-19"]["status"] == "H"
    assert "s2-2026-10-19" not in store.docs["attendance"]
    assert container.state.attendance["s1-2026-10-19"].status == AttendanceStatus.HADIR
    assert "s2-2026-10-19" not in container.state.attendance


def test_subject_records_are_keyed_by_subject(container, store):
    service = container.attendance_service
    service.mark_subject_attendance(
        [
            SubjectAttendanceRecord("s1", "math", MONDAY, AttendanceStatus.HADIR, "2024/2025"),
            SubjectAttendanceRecord("s1", "ipa", MONDAY, AttendanceStatus.ALPA, "2024/2025"),
        ]
    )
    assert set(store.docs["subjectAttendance"]) == {"s1-math-2026-10-19", "s1-ipa-2026-10-19"}
    assert store.docs["subjectAttendance"]["s1-ipa-2026-10-19"]["subjectId"] == "ipa"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("H", AttendanceStatus.HADIR),
        ("sakit", AttendanceStatus.SAKIT),
        (" izin ", AttendanceStatus.IZIN),
        ("A", AttendanceStatus.ALPA),
        ("", AttendanceStatus.NONE),
        (None, AttendanceStatus.NONE),
        ("-", AttendanceStatus.NONE),
    ],
)
def test_coerce_status(raw, expected):
    assert coerce_status(raw) == expected


@pytest.mark.parametrize("raw", ["L", AttendanceStatus.LIBUR, "X"])
def test_coerce_status_refuses_reserved_and_unknown(raw):
    with pytest.raises(ValidationError):
        coerce_status(raw)
