from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScheduleEntry:
    """Classes that have the subject on one weekday."""

    day: str
    class_ids: tuple[str, ...] = field(default_factory=tuple)

    def to_document(self) -> dict:
        return {"day": self.day, "classIds": list(self.class_ids)}


@dataclass(frozen=True)
class Subject:
    """Subject with an optional weekly schedule (empty = open every school day)."""

    id: str
    name: str
    schedule: tuple[ScheduleEntry, ...] = field(default_factory=tuple)

    def entry_for(self, day: str):
        for entry in self.schedule:
            if entry.day == day:
                return entry
        return None

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "Subject":
        entries = tuple(
            ScheduleEntry(
                day=str(item.get("day") or ""),
                class_ids=tuple(str(c) for c in item.get("classIds") or ()),
            )
            for item in data.get("schedule") or ()
        )
        return cls(id=str(data.get("id") or doc_id), name=str(data.get("name") or ""), schedule=entries)

    def to_document(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "schedule": [entry.to_document() for entry in self.schedule],
        }

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "schedule": [{"day": e.day, "class_ids": list(e.class_ids)} for e in self.schedule],
        }
