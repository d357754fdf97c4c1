from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.core.enums import AlumniReason, Gender
from src.school_attendance.school_attendance.core.exceptions import StoreWriteError, ValidationError
from src.school_attendance.school_attendance.students.model import Student
from src.school_attendance.school_attendance.students.service import filter_students


def _student(student_id, name, class_id, is_active=True):
    return Student(id=student_id, nisn=student_id, name=name, gender=Gender.P, class_id=class_id, is_active=is_active)


def test_filter_students_by_class_and_all():
    students = [
        _student("a", "Zahra", "2"),
        _student("b", "Budi", "10"),
        _student("c", "Andi", "2"),
        _student("d", "Citra", "1"),
        _student("e", "Aan", "1", is_active=False),
    ]

    assert [s.name for s in filter_students(students, "2")] == ["Andi", "Zahra"]
    assert [s.name for s in filter_students(students, "ALL")] == ["Citra", "Andi", "Zahra", "Budi"]
    assert filter_students(students, "6") == []


def test_add_student_and_unique_nisn(container, store):
    service = container.student_service
    student = service.add_student(nisn="1234", name="Andi", gender="l", class_id="1", parent_phone=" 0812 ")

    doc = store.docs["students"][student.id]
    assert doc["gender"] == "L"
    assert doc["parentPhone"] == "0812"
    assert doc["isActive"] is True

    with pytest.raises(ValidationError, match="NISN"):
        service.add_student(nisn="1234", name="Budi", gender="L", class_id="1")
    with pytest.raises(ValidationError):
        service.add_student(nisn="5678", name="Budi", gender="X", class_id="1")


def test_update_promote_and_deactivate(container, make_student, store):
    make_student("s1", "Andi", "1")
    make_student("s2", "Budi", "1")
    service = container.student_service

    service.update_student("s1", name="Andi Saputra", parent_phone="0813")
    service.promote_student("s1", "2")
    service.set_active("s2", False)

    assert store.docs["students"]["s1"]["name"] == "Andi Saputra"
    assert store.docs["students"]["s1"]["classId"] == "2"
    assert [s.id for s in service.list_students("1")] == []
    assert [s.id for s in service.list_students("1", include_inactive=True)] == ["s2"]

    with pytest.raises(ValidationError):
        service.update_student("s1", nisn="00s2")


def test_move_to_alumni_is_single_batch(container, make_student, store):
    make_student("s1", "Andi", "6", phone="0812")
    commits = store.commits

    alumni = container.student_service.move_to_alumni("s1", reason="Tamat", date_left="2026-06-20")

    assert store.commits == commits + 1
    assert "s1" not in store.docs["students"]
    assert store.docs["alumni"]["s1"]["reason"] == "Tamat"
    assert alumni.academic_year == "2024/2025"
    assert alumni.last_class_id == "6"
    assert [a.name for a in container.student_service.list_alumni()] == ["Andi"]
    assert container.student_service.list_alumni()[0].reason == AlumniReason.TAMAT


def test_move_to_alumni_failure_keeps_student(container, make_student, store):
    make_student("s1", "Andi", "6")
    store.fail_next_commit = True

    with pytest.raises(StoreWriteError):
        container.student_service.move_to_alumni("s1", reason="Pindah", date_left="2026-06-20")

    assert "s1" in store.docs["students"]
    assert "alumni" not in store.docs
    assert container.student_service.get("s1").name == "Andi"


def test_move_to_alumni_without_active_year(container, make_student, store):
    make_student("s1", "Andi", "6")
    store.update("academicYears", "2024-2025", {"isActive": False})

    alumni = container.student_service.move_to_alumni("s1", reason="Pindah", date_left="2026-06-20")

    assert alumni.academic_year == "Unknown"


def test_move_to_alumni_rejects_unknown_reason(container, make_student):
    make_student("s1", "Andi", "6")
    with pytest.raises(ValidationError):
        container.student_service.move_to_alumni("s1", reason="Lulus", date_left="2026-06-20")


def test_delete_student(container, make_student, store):
    make_student("s1", "Andi")
    container.student_service.delete_student("s1")
    assert store.docs["students"] == {}
    with pytest.raises(ValidationError):
        container.student_service.delete_student("s1")
