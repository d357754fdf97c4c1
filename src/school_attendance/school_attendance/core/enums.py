from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for access control."""

    ADMIN = "ADMIN"
    WALI_KELAS = "WALI_KELAS"
    GURU_MAPEL = "GURU_MAPEL"
    ORANG_TUA = "ORANG_TUA"


class AttendanceStatus(str, Enum):
    """Attendance status; the value is the short code stored and exported.

    LIBUR is reserved: holidays come from the holiday collection and no write
    path produces this status.
    """

    HADIR = "H"
    SAKIT = "S"
    IZIN = "I"
    ALPA = "A"
    LIBUR = "L"
    NONE = "-"

    @classmethod
    def parse(cls, raw: str | None) -> "AttendanceStatus":
        """Map an imported code (H/HADIR, S/SAKIT, I/IZIN, A/ALPA) to a status.

        Anything else maps to NONE.
        """
        value = (raw or "").strip().upper()
        for status in RECORDABLE_STATUSES:
            if value in (status.value, status.name):
                return status
        return cls.NONE

    @classmethod
    def from_code(cls, code: str | None) -> "AttendanceStatus":
        try:
            return cls(code)
        except ValueError:
            return cls.NONE


RECORDABLE_STATUSES = (
    AttendanceStatus.HADIR,
    AttendanceStatus.SAKIT,
    AttendanceStatus.IZIN,
    AttendanceStatus.ALPA,
)


class DayKind(str, Enum):
    """Classification of one report cell, in precedence order."""

    HOLIDAY = "HOLIDAY"
    WEEKEND = "WEEKEND"
    NOT_SCHEDULED = "NOT_SCHEDULED"
    SCHOOL_DAY = "SCHOOL_DAY"


class AlumniReason(str, Enum):
    PINDAH = "Pindah"
    TAMAT = "Tamat"
    MENINGGAL = "Meninggal"
    DROPOUT = "Drop Out"


class Gender(str, Enum):
    L = "L"
    P = "P"
