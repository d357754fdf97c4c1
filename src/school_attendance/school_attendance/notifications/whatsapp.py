"""WhatsApp deep links with pre-filled attendance messages.

Links only open a chat; nothing here tracks delivery.
"""

from __future__ import annotations

import re
from typing import Mapping, Sequence
from urllib.parse import quote

from ..common.datetime_utils import format_long_date
from ..core.constants import ALL_CLASSES, DEFAULT_SCHOOL_NAME
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..students.model import Student

WA_BASE_URL = "https://wa.me/"
SEPARATOR = "-" * 32

STATUS_LABELS = {
    AttendanceStatus.HADIR: ("HADIR", "✅"),
    AttendanceStatus.SAKIT: ("SAKIT", "\U0001F637"),
    AttendanceStatus.IZIN: ("IZIN", "\U0001F4E9"),
    AttendanceStatus.ALPA: ("ALPA (Tanpa Keterangan)", "❌"),
}

_NON_DIGIT = re.compile(r"\D")


def format_phone(phone: str | None) -> str:
    """Digits only, Indonesian numbers in international form: '0812-345' -> '62812345'."""
    digits = _NON_DIGIT.sub("", phone or "")
    if digits.startswith("0"):
        return "62" + digits[1:]
    if digits.startswith("8"):
        return "62" + digits
    return digits


def _encode(text: str) -> str:
    # Same character set as JavaScript's encodeURIComponent.
    return quote(text, safe="-_.!~*'()")


def individual_message(student: Student, status: AttendanceStatus, date: str, *, school_name: str = DEFAULT_SCHOOL_NAME) -> str:
    if status not in STATUS_LABELS:
        raise ValidationError("Pilih status kehadiran dulu")
    label, emoji = STATUS_LABELS[status]
    return (
        f"Yth. Wali Murid ananda *{student.name}*,\n\n"
        f"Diberitahukan bahwa pada hari ini {format_long_date(date)}, "
        f"siswa tersebut tercatat: *{label} {emoji}*.\n\n"
        f"Terima kasih.\n_Absensi {school_name}_"
    )


def individual_link(student: Student, status: AttendanceStatus, date: str, *, school_name: str = DEFAULT_SCHOOL_NAME) -> str:
    phone = format_phone(student.parent_phone)
    if not phone:
        raise ValidationError(f"Nomor WA Orang Tua untuk {student.name} belum diisi.")
    message = individual_message(student, status, date, school_name=school_name)
    return f"{WA_BASE_URL}{phone}?text={_encode(message)}"


def recap_message(
    students: Sequence[Student],
    statuses: Mapping[str, AttendanceStatus],
    *,
    date: str,
    class_id: str,
    school_name: str = DEFAULT_SCHOOL_NAME,
) -> str:
    title = "SEMUA KELAS" if class_id == ALL_CLASSES else f"KELAS {class_id}"
    lines = [f"*LAPORAN ABSENSI {title}*", format_long_date(date), SEPARATOR]

    for status in (AttendanceStatus.SAKIT, AttendanceStatus.IZIN, AttendanceStatus.ALPA):
        group = [s for s in students if statuses.get(s.id) == status]
        if not group:
            continue
        label, emoji = STATUS_LABELS[status]
        lines.append(f"*{emoji} {label.split(' ')[0]}:*")
        lines.extend(f"{i}. {s.name} ({s.class_id})" for i, s in enumerate(group, start=1))
        lines.append("")

    present = sum(1 for s in students if statuses.get(s.id) == AttendanceStatus.HADIR)
    lines.append(f"{STATUS_LABELS[AttendanceStatus.HADIR][1]} Hadir: {present} Siswa")
    lines.append(SEPARATOR)
    lines.append(f"_{school_name}_")
    return "\n".join(lines)


def recap_link(message: str) -> str:
    return f"{WA_BASE_URL}?text={_encode(message)}"
