from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping

from ..common.validators import require_non_empty
from ..core.constants import CLASS_LIST, DAYS_OF_WEEK
from ..core.exceptions import ValidationError
from ..database.document_store import new_document_id
from .model import ScheduleEntry, Subject
from .repository import SubjectRepository


def toggle_class(schedule: Iterable[ScheduleEntry], day: str, class_id: str) -> tuple[ScheduleEntry, ...]:
    """Add class_id to the day's entry or remove it; a day left without classes is dropped."""
    entries = list(schedule)
    for index, entry in enumerate(entries):
        if entry.day != day:
            continue
        if class_id in entry.class_ids:
            remaining = tuple(c for c in entry.class_ids if c != class_id)
            if remaining:
                entries[index] = ScheduleEntry(day=day, class_ids=remaining)
            else:
                del entries[index]
        else:
            entries[index] = ScheduleEntry(day=day, class_ids=entry.class_ids + (class_id,))
        return tuple(entries)

    entries.append(ScheduleEntry(day=day, class_ids=(class_id,)))
    return tuple(entries)


class SubjectService:
    def __init__(self, subjects: SubjectRepository):
        self._subjects = subjects

    def list_subjects(self) -> list[Subject]:
        return list(self._subjects.list_all())

    def get(self, subject_id: str) -> Subject:
        subject = self._subjects.get_by_id(subject_id)
        if not subject:
            raise ValidationError("Mata pelajaran tidak ditemukan")
        return subject

    def add_subject(self, name: str) -> Subject:
        subject = Subject(id=new_document_id(), name=require_non_empty(name, "Nama mapel"))
        self._subjects.save(subject)
        return subject

    def rename_subject(self, subject_id: str, name: str) -> Subject:
        subject = replace(self.get(subject_id), name=require_non_empty(name, "Nama mapel"))
        self._subjects.save(subject)
        return subject

    def delete_subject(self, subject_id: str) -> None:
        self.get(subject_id)
        self._subjects.delete(subject_id)

    def toggle_schedule(self, subject_id: str, *, day: str, class_id: str) -> Subject:
        if day not in DAYS_OF_WEEK:
            raise ValidationError("Hari tidak valid")
        if class_id not in CLASS_LIST:
            raise ValidationError("Kelas tidak valid")

        subject = self.get(subject_id)
        subject = replace(subject, schedule=toggle_class(subject.schedule, day, class_id))
        self._subjects.save(subject)
        return subject

    def set_schedule(self, subject_id: str, schedule: Mapping[str, Iterable[str]]) -> Subject:
        """Replace the whole schedule from {day: [classIds]}; empty days are dropped."""
        entries = []
        for day in DAYS_OF_WEEK:
            classes = {str(c) for c in schedule.get(day) or ()}
            unknown = classes - set(CLASS_LIST)
            if unknown:
                raise ValidationError(f"Kelas tidak valid: {', '.join(sorted(unknown))}")
            if classes:
                entries.append(ScheduleEntry(day=day, class_ids=tuple(c for c in CLASS_LIST if c in classes)))

        extra_days = set(schedule) - set(DAYS_OF_WEEK)
        if extra_days:
            raise ValidationError(f"Hari tidak valid: {', '.join(sorted(extra_days))}")

        subject = replace(self.get(subject_id), schedule=tuple(entries))
        self._subjects.save(subject)
        return subject
