from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import SUBJECTS
from ..database.document_store import DocumentStore
from ..sync.state import AppState
from .model import Subject


class DocumentSubjectRepository:
    def __init__(self, store: DocumentStore, state: AppState):
        self._store = store
        self._state = state

    def list_all(self) -> Sequence[Subject]:
        return sorted(self._state.subjects, key=lambda s: s.name.lower())

    def get_by_id(self, subject_id: str) -> Optional[Subject]:
        return self._state.find_subject(subject_id)

    def save(self, subject: Subject) -> None:
        self._store.set(SUBJECTS, subject.id, subject.to_document())

    def delete(self, subject_id: str) -> None:
        self._store.delete(SUBJECTS, subject_id)
