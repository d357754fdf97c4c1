from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AcademicYear:
    id: str
    name: str
    is_active: bool = False

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "AcademicYear":
        return cls(
            id=str(data.get("id") or doc_id),
            name=str(data.get("name") or ""),
            is_active=bool(data.get("isActive", False)),
        )

    def to_document(self) -> dict:
        return {"id": self.id, "name": self.name, "isActive": self.is_active}


@dataclass(frozen=True)
class Holiday:
    id: str
    date: str
    description: str

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "Holiday":
        return cls(
            id=str(data.get("id") or doc_id),
            date=str(data.get("date") or ""),
            description=str(data.get("description") or ""),
        )

    def to_document(self) -> dict:
        return {"id": self.id, "date": self.date, "description": self.description}
