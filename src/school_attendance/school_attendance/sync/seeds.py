"""Default documents written once when a collection is first seen empty."""

from __future__ import annotations

from werkzeug.security import generate_password_hash

from ..academic.model import AcademicYear, Holiday
from ..core import constants as c
from ..teachers.model import Headmaster, Teacher

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"

DEFAULT_HEADMASTER = Headmaster(name="Kepala Sekolah", nip="-")


def default_teachers() -> list[Teacher]:
    return [
        Teacher(
            id=c.ADMIN_ID,
            name="Administrator",
            nip="-",
            username=DEFAULT_ADMIN_USERNAME,
            password_hash=generate_password_hash(DEFAULT_ADMIN_PASSWORD),
        )
    ]


def default_academic_years() -> list[AcademicYear]:
    return [
        AcademicYear(id="2024-2025", name="2024/2025", is_active=True),
        AcademicYear(id="2025-2026", name="2025/2026", is_active=False),
    ]


def default_holidays() -> list[Holiday]:
    return [
        Holiday(id="h-2024-08-17", date="2024-08-17", description="Hari Kemerdekaan RI"),
        Holiday(id="h-2024-12-25", date="2024-12-25", description="Hari Raya Natal"),
        Holiday(id="h-2025-01-01", date="2025-01-01", description="Tahun Baru Masehi"),
    ]


def default_documents(collection: str) -> dict[str, dict]:
    """doc_id -> document for the collections that are auto-seeded, else {}."""
    if collection == c.TEACHERS:
        return {t.id: t.to_document() for t in default_teachers()}
    if collection == c.ACADEMIC_YEARS:
        return {y.id: y.to_document() for y in default_academic_years()}
    if collection == c.HOLIDAYS:
        return {h.id: h.to_document() for h in default_holidays()}
    if collection == c.SETTINGS:
        return {c.HEADMASTER_DOC_ID: DEFAULT_HEADMASTER.to_document()}
    return {}
