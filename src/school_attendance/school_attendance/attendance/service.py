from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ..academic.model import AcademicYear
from ..academic.repository import AcademicYearRepository, HolidayRepository
from ..common.clipboard import cell, iter_tab_rows
from ..common.datetime_utils import day_name, is_weekend, resolve_holiday
from ..common.validators import require_iso_date
from ..core.enums import RECORDABLE_STATUSES, AttendanceStatus, Role
from ..core.exceptions import (
    AuthorizationError,
    DayOffError,
    ImportFormatError,
    NoActiveAcademicYearError,
    NotScheduledError,
    ValidationError,
)
from ..students.model import Student
from ..students.repository import StudentRepository
from ..students.service import filter_students
from ..subjects.model import Subject
from ..subjects.repository import SubjectRepository
from ..subjects.schedule import is_scheduled
from ..teachers.access import require_admin, require_class_access, require_subject_access
from ..teachers.service import SessionUser
from .model import AttendanceRecord, SubjectAttendanceRecord
from .repository import AttendanceRepository


@dataclass(frozen=True)
class RosterEntry:
    """One row of an attendance input sheet."""

    student: Student
    status: AttendanceStatus

    def to_dict(self) -> dict:
        return {
            "student_id": self.student.id,
            "nisn": self.student.nisn,
            "name": self.student.name,
            "class_id": self.student.class_id,
            "status": self.status.value,
        }


def coerce_status(value) -> AttendanceStatus:
    """Accept a status, its code or its name; the reserved LIBUR is refused."""
    if isinstance(value, AttendanceStatus):
        status = value
    else:
        raw = str(value or "").strip().upper()
        if raw in ("", AttendanceStatus.NONE.value, AttendanceStatus.NONE.name):
            return AttendanceStatus.NONE
        status = AttendanceStatus.parse(raw)
        if status == AttendanceStatus.NONE:
            raise ValidationError(f"Status tidak valid: {value}")
    if status not in RECORDABLE_STATUSES and status != AttendanceStatus.NONE:
        raise ValidationError(f"Status tidak valid: {status.value}")
    return status


class AttendanceService:
    """Use case: daily and per-subject attendance input, gated on school days."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        years: AcademicYearRepository,
        holidays: HolidayRepository,
        subjects: SubjectRepository,
    ):
        self._attendance = attendance
        self._students = students
        self._years = years
        self._holidays = holidays
        self._subjects = subjects

    def day_off_reason(self, date: str) -> Optional[str]:
        holiday = resolve_holiday(date, self._holidays.list_all())
        if holiday:
            return f"Libur Nasional ({holiday.description})"
        if is_weekend(date):
            return "Akhir Pekan"
        return None

    def check_status_change(self, date: str, status) -> AttendanceStatus:
        """Gate one selection: anything but NONE is refused on a weekend or holiday."""
        status = coerce_status(status)
        if status == AttendanceStatus.NONE:
            return status
        reason = self.day_off_reason(date)
        if reason:
            raise DayOffError(f"Tanggal {date} adalah {reason}. Hanya reset (kosongkan) yang diperbolehkan.")
        return status

    def mark_attendance(self, records: Sequence[AttendanceRecord]) -> None:
        for record in records:
            self.check_status_change(record.date, record.status)
        self._attendance.mark_attendance(records)

    def mark_subject_attendance(self, records: Sequence[SubjectAttendanceRecord]) -> None:
        for record in records:
            self.check_status_change(record.date, record.status)
        self._attendance.mark_subject_attendance(records)

    def load_daily(self, user: SessionUser, *, date: str, class_id: str) -> list[RosterEntry]:
        date = require_iso_date(date)
        require_class_access(user, class_id)
        saved = {r.student_id: r.status for r in self._attendance.list_daily() if r.date == date}
        return [RosterEntry(s, saved.get(s.id, AttendanceStatus.NONE)) for s in self._roster(class_id)]

    def load_subject(self, user: SessionUser, *, date: str, class_id: str, subject_id: str) -> list[RosterEntry]:
        date = require_iso_date(date)
        require_class_access(user, class_id)
        subject = self._require_subject(user, subject_id)
        saved = {
            r.student_id: r.status
            for r in self._attendance.list_subject()
            if r.date == date and r.subject_id == subject.id
        }
        return [RosterEntry(s, saved.get(s.id, AttendanceStatus.NONE)) for s in self._roster(class_id)]

    def save_daily(self, user: SessionUser, *, date: str, class_id: str, statuses: Mapping[str, object]) -> int:
        """Write one record per student of the class; students left out are reset."""
        date = require_iso_date(date)
        require_class_access(user, class_id)
        year = self._require_active_year()

        records = [
            AttendanceRecord(
                student_id=s.id,
                date=date,
                status=coerce_status(statuses.get(s.id)),
                academic_year=year.name,
            )
            for s in self._roster(class_id)
        ]
        self.mark_attendance(records)
        return sum(1 for r in records if r.status != AttendanceStatus.NONE)

    def save_subject(
        self,
        user: SessionUser,
        *,
        date: str,
        class_id: str,
        subject_id: str,
        statuses: Mapping[str, object],
    ) -> int:
        date = require_iso_date(date)
        require_class_access(user, class_id)
        year = self._require_active_year()
        if not subject_id:
            raise ValidationError("Pilih mata pelajaran")
        subject = self._require_subject(user, subject_id)
        if not is_scheduled(subject, day_name(date), class_id):
            raise NotScheduledError("Tidak ada jadwal mata pelajaran ini di hari/kelas tersebut.")

        records = [
            SubjectAttendanceRecord(
                student_id=s.id,
                subject_id=subject.id,
                date=date,
                status=coerce_status(statuses.get(s.id)),
                academic_year=year.name,
            )
            for s in self._roster(class_id)
        ]
        self.mark_subject_attendance(records)
        return sum(1 for r in records if r.status != AttendanceStatus.NONE)

    def import_daily(self, user: SessionUser, *, text: str, date: str, class_id: str) -> int:
        """Upsert pasted 'NISN-or-Name<TAB>Status' lines for the class; returns the match count."""
        require_admin(user)
        date = require_iso_date(date)
        reason = self.day_off_reason(date)
        if reason:
            raise DayOffError(f"Tanggal {date} adalah {reason}.")
        year = self._require_active_year()

        roster = self._roster(class_id)
        matched: dict[str, AttendanceRecord] = {}
        for row in iter_tab_rows(text, min_columns=2):
            key, status = cell(row, 0), AttendanceStatus.parse(cell(row, 1))
            if status == AttendanceStatus.NONE:
                continue
            student = next((s for s in roster if s.nisn == key or s.name.lower() == key.lower()), None)
            if student is None:
                continue
            matched[student.id] = AttendanceRecord(
                student_id=student.id, date=date, status=status, academic_year=year.name
            )

        if not matched:
            raise ImportFormatError("Tidak ada data cocok. Format: Nama/NISN [Tab] Status (H/S/I/A)")
        self.mark_attendance(list(matched.values()))
        return len(matched)

    def student_history(self, user: SessionUser, student_id: str) -> list[AttendanceRecord]:
        """Daily records of one student, newest first."""
        student = self._students.get_by_id(student_id)
        if not student:
            raise ValidationError("Siswa tidak ditemukan")
        if user.role == Role.ORANG_TUA:
            if user.student_id != student.id:
                raise AuthorizationError("Anda hanya dapat melihat data anak Anda")
        else:
            require_class_access(user, student.class_id)

        records = [r for r in self._attendance.list_daily() if r.student_id == student.id]
        return sorted(records, key=lambda r: r.date, reverse=True)

    def _roster(self, class_id: str) -> list[Student]:
        return filter_students(self._students.list_all(), class_id)

    def _require_active_year(self) -> AcademicYear:
        year = self._years.get_active()
        if not year:
            raise NoActiveAcademicYearError("Pilih tahun pelajaran aktif terlebih dahulu")
        return year

    def _require_subject(self, user: SessionUser, subject_id: str) -> Subject:
        subject = self._subjects.get_by_id(subject_id)
        if not subject:
            raise ValidationError("Mata pelajaran tidak ditemukan")
        require_subject_access(user, subject, self._subjects.list_all())
        return subject
