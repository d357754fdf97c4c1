from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from ..core.enums import AlumniReason, Gender


@dataclass(frozen=True)
class Student:
    """Student on the active roster (or deactivated after promotion)."""

    id: str
    nisn: str
    name: str
    gender: Gender
    class_id: str
    parent_phone: Optional[str] = None
    is_active: bool = True

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "Student":
        return cls(
            id=str(data.get("id") or doc_id),
            nisn=str(data.get("nisn") or ""),
            name=str(data.get("name") or ""),
            gender=Gender(data.get("gender") or "L"),
            class_id=str(data.get("classId") or ""),
            parent_phone=data.get("parentPhone") or None,
            is_active=bool(data.get("isActive", True)),
        )

    def to_document(self) -> dict:
        doc = {
            "id": self.id,
            "nisn": self.nisn,
            "name": self.name,
            "gender": self.gender.value,
            "classId": self.class_id,
            "isActive": self.is_active,
        }
        if self.parent_phone:
            doc["parentPhone"] = self.parent_phone
        return doc

    def to_dict(self) -> dict:
        data = asdict(self)
        data["gender"] = self.gender.value
        return data


@dataclass(frozen=True)
class Alumni:
    id: str
    nisn: str
    name: str
    gender: Gender
    class_id: str
    reason: AlumniReason
    date_left: str
    last_class_id: str
    academic_year: str
    parent_phone: Optional[str] = None

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "Alumni":
        return cls(
            id=str(data.get("id") or doc_id),
            nisn=str(data.get("nisn") or ""),
            name=str(data.get("name") or ""),
            gender=Gender(data.get("gender") or "L"),
            class_id=str(data.get("classId") or ""),
            reason=AlumniReason(data.get("reason") or AlumniReason.PINDAH.value),
            date_left=str(data.get("dateLeft") or ""),
            last_class_id=str(data.get("lastClassId") or data.get("classId") or ""),
            academic_year=str(data.get("academicYear") or ""),
            parent_phone=data.get("parentPhone") or None,
        )

    def to_document(self) -> dict:
        doc = {
            "id": self.id,
            "nisn": self.nisn,
            "name": self.name,
            "gender": self.gender.value,
            "classId": self.class_id,
            "reason": self.reason.value,
            "dateLeft": self.date_left,
            "lastClassId": self.last_class_id,
            "academicYear": self.academic_year,
        }
        if self.parent_phone:
            doc["parentPhone"] = self.parent_phone
        return doc

    def to_dict(self) -> dict:
        data = asdict(self)
        data["gender"] = self.gender.value
        data["reason"] = self.reason.value
        return data
