from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..academic.repository import HolidayRepository
from ..attendance.repository import AttendanceRepository
from ..core.constants import SIGNATURE_PLACEHOLDER_NAME, SIGNATURE_PLACEHOLDER_NIP
from ..core.exceptions import ValidationError
from ..students.repository import StudentRepository
from ..students.service import filter_students
from ..subjects.model import Subject
from ..subjects.repository import SubjectRepository
from ..teachers.access import require_class_access, require_subject_access
from ..teachers.model import Headmaster
from ..teachers.repository import HeadmasterRepository, TeacherRepository
from ..teachers.service import SessionUser
from .aggregator import build_monthly_report
from .model import MonthlyReport


@dataclass(frozen=True)
class Signer:
    title: str
    name: str
    nip: str


class ReportService:
    """Use case: monthly daily/subject reports for the classes a user may see."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        holidays: HolidayRepository,
        subjects: SubjectRepository,
        teachers: TeacherRepository,
        headmaster: HeadmasterRepository,
    ):
        self._attendance = attendance
        self._students = students
        self._holidays = holidays
        self._subjects = subjects
        self._teachers = teachers
        self._headmaster = headmaster

    def monthly_report(
        self,
        user: SessionUser,
        *,
        year: int,
        month: int,
        class_id: str,
        subject_id: Optional[str] = None,
    ) -> MonthlyReport:
        if subject_id:
            return self.subject_report(user, year=year, month=month, class_id=class_id, subject_id=subject_id)
        return self.daily_report(user, year=year, month=month, class_id=class_id)

    def daily_report(self, user: SessionUser, *, year: int, month: int, class_id: str) -> MonthlyReport:
        year, month = _check_period(year, month)
        require_class_access(user, class_id)
        statuses = {(r.student_id, r.date): r.status for r in self._attendance.list_daily()}
        return build_monthly_report(
            year=year,
            month=month,
            class_id=class_id,
            students=filter_students(self._students.list_all(), class_id),
            holidays=list(self._holidays.list_all()),
            statuses=statuses,
        )

    def subject_report(self, user: SessionUser, *, year: int, month: int, class_id: str, subject_id: str) -> MonthlyReport:
        year, month = _check_period(year, month)
        require_class_access(user, class_id)
        subject = self._subjects.get_by_id(subject_id)
        if not subject:
            raise ValidationError("Mata pelajaran tidak ditemukan")
        require_subject_access(user, subject, self._subjects.list_all())

        statuses = {
            (r.student_id, r.date): r.status for r in self._attendance.list_subject() if r.subject_id == subject.id
        }
        return build_monthly_report(
            year=year,
            month=month,
            class_id=class_id,
            students=filter_students(self._students.list_all(), class_id),
            holidays=list(self._holidays.list_all()),
            statuses=statuses,
            subject=subject,
        )

    def headmaster(self) -> Headmaster:
        return self._headmaster.get()

    def signer_for(self, report: MonthlyReport) -> Signer:
        """Subject reports are signed by the first teacher of the subject, daily ones by the homeroom teacher."""
        if report.subject is not None:
            return self._subject_signer(report.subject)

        teacher = next((t for t in self._teachers.list_all() if t.class_id and t.class_id == report.class_id), None)
        if teacher:
            return Signer(title="Wali Kelas", name=teacher.name, nip=teacher.nip)
        return Signer(title="Wali Kelas", name=SIGNATURE_PLACEHOLDER_NAME, nip=SIGNATURE_PLACEHOLDER_NIP)

    def _subject_signer(self, subject: Subject) -> Signer:
        teacher = next((t for t in self._teachers.list_all() if subject.id in t.subject_ids), None)
        if teacher:
            return Signer(title="Guru Mata Pelajaran", name=teacher.name, nip=teacher.nip)
        return Signer(title="Guru Mata Pelajaran", name=SIGNATURE_PLACEHOLDER_NAME, nip=SIGNATURE_PLACEHOLDER_NIP)


def _check_period(year, month) -> tuple[int, int]:
    try:
        year, month = int(year), int(month)
    except (TypeError, ValueError):
        raise ValidationError("Periode tidak valid")
    if not 1 <= month <= 12 or year < 1900:
        raise ValidationError("Periode tidak valid")
    return year, month
