from __future__ import annotations

from urllib.parse import unquote

import pytest

from src.school_attendance.school_attendance.core.enums import AttendanceStatus, Gender
from src.school_attendance.school_attendance.core.exceptions import ValidationError
from src.school_attendance.school_attendance.notifications import whatsapp
from src.school_attendance.school_attendance.students.model import Student

MONDAY = "2026-10-19"


def _student(student_id, name, class_id="1", phone=None):
    return Student(id=student_id, nisn=student_id, name=name, gender=Gender.L, class_id=class_id, parent_phone=phone)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("0812-3456-789", "628123456789"),
        ("+62 812 3456", "628123456"),
        ("812345", "62812345"),
        ("", ""),
        (None, ""),
    ],
)
def test_format_phone(raw, expected):
    assert whatsapp.format_phone(raw) == expected


def test_individual_link_contains_encoded_message():
    andi = _student("s1", "Andi", phone="0812 111")

    url = whatsapp.individual_link(andi, AttendanceStatus.SAKIT, MONDAY, school_name="SD Negeri 5 Bilato")

    assert url.startswith("https://wa.me/62812111?text=")
    text = unquote(url.split("?text=", 1)[1])
    assert "*Andi*" in text
    assert "Senin, 19 Oktober 2026" in text
    assert "*SAKIT" in text
    assert text.endswith("_Absensi SD Negeri 5 Bilato_")
    assert " " not in url


def test_individual_link_requires_phone_and_status():
    with pytest.raises(ValidationError, match="Nomor WA"):
        whatsapp.individual_link(_student("s1", "Andi"), AttendanceStatus.HADIR, MONDAY)
    with pytest.raises(ValidationError):
        whatsapp.individual_message(_student("s1", "Andi", phone="0812"), AttendanceStatus.NONE, MONDAY)


def test_recap_groups_absences_and_counts_present():
    students = [_student("s1", "Andi"), _student("s2", "Budi"), _student("s3", "Citra"), _student("s4", "Dedi")]
    statuses = {"s1": AttendanceStatus.HADIR, "s2": AttendanceStatus.SAKIT, "s3": AttendanceStatus.HADIR}

    message = whatsapp.recap_message(students, statuses, date=MONDAY, class_id="1", school_name="SD X")
    lines = message.split("\n")

    assert lines[0] == "*LAPORAN ABSENSI KELAS 1*"
    assert lines[1] == "Senin, 19 Oktober 2026"
    assert "1. Budi (1)" in lines
    assert not any("IZIN" in line or "ALPA" in line for line in lines)
    assert lines[-3].endswith("Hadir: 2 Siswa")
    assert lines[-1] == "_SD X_"
    assert whatsapp.recap_link(message).startswith("https://wa.me/?text=")


def test_notification_service_uses_saved_status(container, make_student, admin):
    make_student("s1", "Andi", phone="0812-000")
    make_student("s2", "Budi")
    container.attendance_service.save_daily(admin, date=MONDAY, class_id="1", statuses={"s1": "A", "s2": "H"})
    service = container.notification_service

    link = service.parent_link(admin, student_id="s1", date=MONDAY, class_id="1")

    assert link["phone"] == "62812000"
    assert "ALPA" in unquote(link["url"])
    with pytest.raises(ValidationError):
        service.parent_link(admin, student_id="s2", date=MONDAY, class_id="1")

    recap = service.recap_link(admin, date=MONDAY, class_id="1")
    assert "1. Andi (1)" in recap["message"]
    assert "Hadir: 1 Siswa" in recap["message"]
