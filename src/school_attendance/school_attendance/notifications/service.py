from __future__ import annotations

from typing import Optional

from ..attendance.service import AttendanceService, coerce_status
from ..core.constants import DEFAULT_SCHOOL_NAME
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..teachers.service import SessionUser
from . import whatsapp


class NotificationService:
    """Builds WhatsApp links from the saved (or just-selected) statuses of a class."""

    def __init__(self, attendance: AttendanceService, *, school_name: str = DEFAULT_SCHOOL_NAME):
        self._attendance = attendance
        self._school_name = school_name

    def parent_link(
        self,
        user: SessionUser,
        *,
        student_id: str,
        date: str,
        class_id: str,
        status: Optional[str] = None,
    ) -> dict:
        roster = self._attendance.load_daily(user, date=date, class_id=class_id)
        entry = next((e for e in roster if e.student.id == str(student_id)), None)
        if entry is None:
            raise ValidationError("Siswa tidak ditemukan di kelas ini")

        chosen = coerce_status(status) if status else entry.status
        if chosen == AttendanceStatus.NONE:
            raise ValidationError("Pilih status kehadiran dulu")

        url = whatsapp.individual_link(entry.student, chosen, date, school_name=self._school_name)
        return {"student_id": entry.student.id, "phone": whatsapp.format_phone(entry.student.parent_phone), "url": url}

    def recap_link(self, user: SessionUser, *, date: str, class_id: str) -> dict:
        roster = self._attendance.load_daily(user, date=date, class_id=class_id)
        message = whatsapp.recap_message(
            [e.student for e in roster],
            {e.student.id: e.status for e in roster},
            date=date,
            class_id=class_id,
            school_name=self._school_name,
        )
        return {"message": message, "url": whatsapp.recap_link(message)}
