from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import ADMIN_ID
from ..core.enums import Role


@dataclass(frozen=True)
class Teacher:
    """Teacher document; doubles as a login account when username is set.

    A teacher with class_id is a homeroom teacher (one class). Without it the
    teacher is a subject teacher limited by accessible_class_ids/subject_ids.
    """

    id: str
    name: str
    nip: str
    class_id: Optional[str] = None
    accessible_class_ids: tuple[str, ...] = field(default_factory=tuple)
    subject_ids: tuple[str, ...] = field(default_factory=tuple)
    username: Optional[str] = None
    password_hash: Optional[str] = None

    @property
    def role(self) -> Role:
        if self.id == ADMIN_ID:
            return Role.ADMIN
        if self.class_id:
            return Role.WALI_KELAS
        return Role.GURU_MAPEL

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "Teacher":
        return cls(
            id=str(data.get("id") or doc_id),
            name=str(data.get("name") or ""),
            nip=str(data.get("nip") or ""),
            class_id=str(data["classId"]) if data.get("classId") else None,
            accessible_class_ids=tuple(str(c) for c in data.get("accessibleClassIds") or ()),
            subject_ids=tuple(str(s) for s in data.get("subjectIds") or ()),
            username=data.get("username") or None,
            password_hash=data.get("passwordHash") or None,
        )

    def to_document(self) -> dict:
        doc: dict = {"id": self.id, "name": self.name, "nip": self.nip}
        if self.class_id:
            doc["classId"] = self.class_id
        if self.accessible_class_ids:
            doc["accessibleClassIds"] = list(self.accessible_class_ids)
        if self.subject_ids:
            doc["subjectIds"] = list(self.subject_ids)
        if self.username:
            doc["username"] = self.username
        if self.password_hash:
            doc["passwordHash"] = self.password_hash
        return doc

    def to_dict(self) -> dict:
        """Public view; never exposes the password hash."""
        return {
            "id": self.id,
            "name": self.name,
            "nip": self.nip,
            "class_id": self.class_id,
            "accessible_class_ids": list(self.accessible_class_ids),
            "subject_ids": list(self.subject_ids),
            "username": self.username,
            "role": self.role.value,
        }


@dataclass(frozen=True)
class Headmaster:
    name: str
    nip: str

    @classmethod
    def from_document(cls, data: dict) -> "Headmaster":
        return cls(name=str(data.get("name") or ""), nip=str(data.get("nip") or ""))

    def to_document(self) -> dict:
        return {"name": self.name, "nip": self.nip}
