from __future__ import annotations

import re

from ..core.constants import CLASS_LIST
from ..core.exceptions import ValidationError
from .datetime_utils import normalize_date, parse_iso_date

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def require_non_empty(value: str | None, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} wajib diisi")
    return value.strip()


def require_min_length(value: str | None, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} minimal {min_len} karakter")
    return value


def is_iso_date(value: str | None) -> bool:
    return bool(value) and bool(_ISO_DATE.match(value.strip()))


def require_iso_date(value: str | None, field_name: str = "Tanggal") -> str:
    normalized = normalize_date(value)
    if not is_iso_date(normalized):
        raise ValidationError(f"{field_name} harus berformat YYYY-MM-DD")
    try:
        parse_iso_date(normalized)
    except ValueError:
        raise ValidationError(f"{field_name} tidak valid")
    return normalized


def require_class_id(value: str | None) -> str:
    class_id = (value or "").strip()
    if class_id not in CLASS_LIST:
        raise ValidationError("Kelas tidak valid")
    return class_id
