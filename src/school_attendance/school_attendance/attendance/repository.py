from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord, SubjectAttendanceRecord


class AttendanceRepository(Protocol):
    """Daily and per-subject attendance records.

    mark_* apply a whole list as one atomic batch: NONE deletes the record at
    that key, any other status creates or replaces it.
    """

    def list_daily(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_subject(self) -> Sequence[SubjectAttendanceRecord]:
        raise NotImplementedError

    def mark_attendance(self, records: Sequence[AttendanceRecord]) -> None:
        raise NotImplementedError

    def mark_subject_attendance(self, records: Sequence[SubjectAttendanceRecord]) -> None:
        raise NotImplementedError
