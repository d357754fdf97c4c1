"""Local read replica of the document store.

Services read from AppState only. It is mutated by the replica when a
collection snapshot arrives and by the named apply_* operations that mirror a
successful write before its echo comes back.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from ..academic.model import AcademicYear, Holiday
from ..attendance.model import AttendanceRecord, SubjectAttendanceRecord
from ..core import constants as c
from ..core.enums import AttendanceStatus
from ..database.document_store import DocumentSnapshot
from ..students.model import Alumni, Student
from ..subjects.model import Subject
from ..teachers.model import Headmaster, Teacher


@dataclass
class AppState:
    students: list[Student] = field(default_factory=list)
    alumni: list[Alumni] = field(default_factory=list)
    teachers: list[Teacher] = field(default_factory=list)
    attendance: dict[str, AttendanceRecord] = field(default_factory=dict)
    subject_attendance: dict[str, SubjectAttendanceRecord] = field(default_factory=dict)
    subjects: list[Subject] = field(default_factory=list)
    academic_years: list[AcademicYear] = field(default_factory=list)
    holidays: list[Holiday] = field(default_factory=list)
    headmaster: Optional[Headmaster] = None
    connected: bool = True
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def load_snapshot(self, collection: str, snapshots: Sequence[DocumentSnapshot]) -> None:
        """Replace one collection with the documents of a fresh snapshot."""
        with self._lock:
            if collection == c.STUDENTS:
                self.students = [Student.from_document(s.doc_id, s.data) for s in snapshots]
            elif collection == c.ALUMNI:
                self.alumni = [Alumni.from_document(s.doc_id, s.data) for s in snapshots]
            elif collection == c.TEACHERS:
                self.teachers = [Teacher.from_document(s.doc_id, s.data) for s in snapshots]
            elif collection == c.ATTENDANCE:
                records = (AttendanceRecord.from_document(s.doc_id, s.data) for s in snapshots)
                self.attendance = {r.id: r for r in records}
            elif collection == c.SUBJECT_ATTENDANCE:
                records = (SubjectAttendanceRecord.from_document(s.doc_id, s.data) for s in snapshots)
                self.subject_attendance = {r.id: r for r in records}
            elif collection == c.SUBJECTS:
                self.subjects = [Subject.from_document(s.doc_id, s.data) for s in snapshots]
            elif collection == c.ACADEMIC_YEARS:
                self.academic_years = [AcademicYear.from_document(s.doc_id, s.data) for s in snapshots]
            elif collection == c.HOLIDAYS:
                self.holidays = [Holiday.from_document(s.doc_id, s.data) for s in snapshots]
            elif collection == c.SETTINGS:
                for snap in snapshots:
                    if snap.doc_id == c.HEADMASTER_DOC_ID:
                        self.headmaster = Headmaster.from_document(snap.data)
            else:
                raise ValueError(f"Unknown collection: {collection}")

    def apply_attendance(self, records: Iterable[AttendanceRecord]) -> None:
        with self._lock:
            merged = dict(self.attendance)
            for record in records:
                if record.status == AttendanceStatus.NONE:
                    merged.pop(record.id, None)
                else:
                    merged[record.id] = record
            self.attendance = merged

    def apply_subject_attendance(self, records: Iterable[SubjectAttendanceRecord]) -> None:
        with self._lock:
            merged = dict(self.subject_attendance)
            for record in records:
                if record.status == AttendanceStatus.NONE:
                    merged.pop(record.id, None)
                else:
                    merged[record.id] = record
            self.subject_attendance = merged

    def active_year(self) -> Optional[AcademicYear]:
        for year in self.academic_years:
            if year.is_active:
                return year
        return None

    def find_student(self, student_id: str) -> Optional[Student]:
        for student in self.students:
            if student.id == str(student_id):
                return student
        return None

    def find_subject(self, subject_id: str) -> Optional[Subject]:
        for subject in self.subjects:
            if subject.id == str(subject_id):
                return subject
        return None
