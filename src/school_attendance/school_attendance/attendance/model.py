from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Daily status of one student; at most one per (student, date)."""

    student_id: str
    date: str
    status: AttendanceStatus
    academic_year: str = ""

    @property
    def id(self) -> str:
        return f"{self.student_id}-{self.date}"

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "AttendanceRecord":
        return cls(
            student_id=str(data.get("studentId") or ""),
            date=str(data.get("date") or ""),
            status=AttendanceStatus.from_code(data.get("status")),
            academic_year=str(data.get("academicYear") or ""),
        )

    def to_document(self) -> dict:
        return {
            "id": self.id,
            "studentId": self.student_id,
            "date": self.date,
            "status": self.status.value,
            "academicYear": self.academic_year,
        }


@dataclass(frozen=True)
class SubjectAttendanceRecord:
    """Per-subject status of one student; at most one per (student, subject, date)."""

    student_id: str
    subject_id: str
    date: str
    status: AttendanceStatus
    academic_year: str = ""

    @property
    def id(self) -> str:
        return f"{self.student_id}-{self.subject_id}-{self.date}"

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "SubjectAttendanceRecord":
        return cls(
            student_id=str(data.get("studentId") or ""),
            subject_id=str(data.get("subjectId") or ""),
            date=str(data.get("date") or ""),
            status=AttendanceStatus.from_code(data.get("status")),
            academic_year=str(data.get("academicYear") or ""),
        )

    def to_document(self) -> dict:
        return {
            "id": self.id,
            "studentId": self.student_id,
            "subjectId": self.subject_id,
            "date": self.date,
            "status": self.status.value,
            "academicYear": self.academic_year,
        }
