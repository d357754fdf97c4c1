from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceStatus, DayKind
from ..students.model import Student
from ..subjects.model import Subject


@dataclass(frozen=True)
class DayColumn:
    """Header of one calendar day, classified for the selection as a whole."""

    day: int
    date: str
    day_name: str
    kind: DayKind


@dataclass(frozen=True)
class ReportCell:
    date: str
    kind: DayKind
    status: AttendanceStatus = AttendanceStatus.NONE

    @property
    def is_eligible(self) -> bool:
        return self.kind == DayKind.SCHOOL_DAY

    @property
    def code(self) -> str:
        """Text shown in exports: blank for days off, unscheduled days and unset records."""
        if not self.is_eligible or self.status == AttendanceStatus.NONE:
            return ""
        return self.status.value


@dataclass(frozen=True)
class Tally:
    hadir: int = 0
    sakit: int = 0
    izin: int = 0
    alpa: int = 0

    def __add__(self, other: "Tally") -> "Tally":
        return Tally(
            hadir=self.hadir + other.hadir,
            sakit=self.sakit + other.sakit,
            izin=self.izin + other.izin,
            alpa=self.alpa + other.alpa,
        )

    def to_dict(self) -> dict:
        return {"H": self.hadir, "S": self.sakit, "I": self.izin, "A": self.alpa}


@dataclass(frozen=True)
class StudentRow:
    student: Student
    cells: tuple[ReportCell, ...]
    tally: Tally

    @property
    def eligible_days(self) -> int:
        return sum(1 for c in self.cells if c.is_eligible)


@dataclass(frozen=True)
class MonthlyReport:
    year: int
    month: int
    class_id: str
    subject: Optional[Subject]
    days: tuple[DayColumn, ...]
    rows: tuple[StudentRow, ...]
    totals: Tally
    eligible_slots: int

    @property
    def percentage(self) -> float:
        if self.eligible_slots == 0:
            return 0.0
        return self.totals.hadir / self.eligible_slots * 100

    @property
    def percentage_text(self) -> str:
        return f"{self.percentage:.2f}"

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "class_id": self.class_id,
            "subject": self.subject.to_dict() if self.subject else None,
            "days": [
                {"day": d.day, "date": d.date, "day_name": d.day_name, "kind": d.kind.value} for d in self.days
            ],
            "rows": [
                {
                    "student_id": r.student.id,
                    "nisn": r.student.nisn,
                    "name": r.student.name,
                    "class_id": r.student.class_id,
                    "cells": [c.code for c in r.cells],
                    "tally": r.tally.to_dict(),
                    "eligible_days": r.eligible_days,
                }
                for r in self.rows
            ],
            "totals": self.totals.to_dict(),
            "eligible_slots": self.eligible_slots,
            "percentage": self.percentage_text,
        }
