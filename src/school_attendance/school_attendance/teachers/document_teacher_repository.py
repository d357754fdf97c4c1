from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import HEADMASTER_DOC_ID, SETTINGS, TEACHERS
from ..database.document_store import DocumentStore
from ..sync.seeds import DEFAULT_HEADMASTER
from ..sync.state import AppState
from .model import Headmaster, Teacher


class DocumentTeacherRepository:
    def __init__(self, store: DocumentStore, state: AppState):
        self._store = store
        self._state = state

    def list_all(self) -> Sequence[Teacher]:
        return list(self._state.teachers)

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        for teacher in self._state.teachers:
            if teacher.id == str(teacher_id):
                return teacher
        return None

    def get_by_username(self, username: str) -> Optional[Teacher]:
        username = (username or "").strip()
        for teacher in self._state.teachers:
            if username and teacher.username == username:
                return teacher
        return None

    def save(self, teacher: Teacher) -> None:
        self._store.set(TEACHERS, teacher.id, teacher.to_document())

    def save_many(self, teachers: Sequence[Teacher]) -> None:
        batch = self._store.batch()
        for teacher in teachers:
            batch.set(TEACHERS, teacher.id, teacher.to_document())
        batch.commit()

    def update_fields(self, teacher_id: str, fields: dict) -> None:
        self._store.update(TEACHERS, teacher_id, fields)

    def delete(self, teacher_id: str) -> None:
        self._store.delete(TEACHERS, teacher_id)


class DocumentHeadmasterRepository:
    def __init__(self, store: DocumentStore, state: AppState):
        self._store = store
        self._state = state

    def get(self) -> Headmaster:
        return self._state.headmaster or DEFAULT_HEADMASTER

    def save(self, headmaster: Headmaster) -> None:
        self._store.set(SETTINGS, HEADMASTER_DOC_ID, headmaster.to_document())
