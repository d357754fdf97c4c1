from __future__ import annotations

from typing import Iterable, Optional

from ..academic.repository import AcademicYearRepository
from ..common.validators import require_class_id, require_iso_date, require_non_empty
from ..core.constants import ALL_CLASSES, UNKNOWN_YEAR
from ..core.enums import AlumniReason, Gender
from ..core.exceptions import ValidationError
from ..database.document_store import new_document_id
from .model import Alumni, Student
from .repository import StudentRepository


def _class_key(class_id: str) -> tuple[int, str]:
    return (int(class_id), class_id) if class_id.isdigit() else (10**6, class_id)


def filter_students(students: Iterable[Student], class_id: str) -> list[Student]:
    """Active students of a class sorted by name; for ALL, sorted by class then name."""
    if class_id == ALL_CLASSES:
        selected = [s for s in students if s.is_active]
        return sorted(selected, key=lambda s: (_class_key(s.class_id), s.name))
    selected = [s for s in students if s.is_active and s.class_id == class_id]
    return sorted(selected, key=lambda s: s.name)


def _parse_gender(value: str | None) -> Gender:
    try:
        return Gender((value or "").strip().upper())
    except ValueError:
        raise ValidationError("Jenis kelamin harus L atau P")


class StudentService:
    def __init__(self, students: StudentRepository, years: AcademicYearRepository):
        self._students = students
        self._years = years

    def list_students(self, class_id: str = ALL_CLASSES, *, include_inactive: bool = False) -> list[Student]:
        if not include_inactive:
            return filter_students(self._students.list_all(), class_id)
        return sorted(
            (s for s in self._students.list_all() if class_id == ALL_CLASSES or s.class_id == class_id),
            key=lambda s: (_class_key(s.class_id), s.name),
        )

    def get(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise ValidationError("Siswa tidak ditemukan")
        return student

    def add_student(
        self,
        *,
        nisn: str,
        name: str,
        gender: str,
        class_id: str,
        parent_phone: Optional[str] = None,
    ) -> Student:
        nisn = require_non_empty(nisn, "NISN")
        if self._students.get_by_nisn(nisn):
            raise ValidationError("NISN sudah terdaftar")

        student = Student(
            id=new_document_id(),
            nisn=nisn,
            name=require_non_empty(name, "Nama siswa"),
            gender=_parse_gender(gender),
            class_id=require_class_id(class_id),
            parent_phone=(parent_phone or "").strip() or None,
        )
        self._students.save(student)
        return student

    def update_student(
        self,
        student_id: str,
        *,
        nisn: Optional[str] = None,
        name: Optional[str] = None,
        gender: Optional[str] = None,
        class_id: Optional[str] = None,
        parent_phone: Optional[str] = None,
    ) -> None:
        """Merge the given fields into the student document."""
        current = self.get(student_id)

        fields: dict = {}
        if nisn is not None:
            nisn = require_non_empty(nisn, "NISN")
            owner = self._students.get_by_nisn(nisn)
            if owner and owner.id != current.id:
                raise ValidationError("NISN sudah terdaftar")
            fields["nisn"] = nisn
        if name is not None:
            fields["name"] = require_non_empty(name, "Nama siswa")
        if gender is not None:
            fields["gender"] = _parse_gender(gender).value
        if class_id is not None:
            fields["classId"] = require_class_id(class_id)
        if parent_phone is not None:
            fields["parentPhone"] = parent_phone.strip()
        if fields:
            self._students.update_fields(current.id, fields)

    def delete_student(self, student_id: str) -> None:
        self._students.delete(self.get(student_id).id)

    def promote_student(self, student_id: str, new_class_id: str) -> None:
        self._students.update_fields(self.get(student_id).id, {"classId": require_class_id(new_class_id)})

    def set_active(self, student_id: str, is_active: bool) -> None:
        self._students.update_fields(self.get(student_id).id, {"isActive": bool(is_active)})

    def move_to_alumni(self, student_id: str, *, reason: str, date_left: str) -> Alumni:
        student = self.get(student_id)
        try:
            alumni_reason = AlumniReason(reason)
        except ValueError:
            raise ValidationError("Alasan keluar tidak valid")

        active = self._years.get_active()
        alumni = Alumni(
            id=student.id,
            nisn=student.nisn,
            name=student.name,
            gender=student.gender,
            class_id=student.class_id,
            reason=alumni_reason,
            date_left=require_iso_date(date_left, "Tanggal keluar"),
            last_class_id=student.class_id,
            academic_year=active.name if active else UNKNOWN_YEAR,
            parent_phone=student.parent_phone,
        )
        self._students.move_to_alumni(alumni)
        return alumni

    def list_alumni(self) -> list[Alumni]:
        return sorted(self._students.list_alumni(), key=lambda a: (a.date_left, a.name), reverse=True)
