from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import ALUMNI, STUDENTS
from ..database.document_store import DocumentStore
from ..sync.state import AppState
from .model import Alumni, Student


class DocumentStudentRepository:
    def __init__(self, store: DocumentStore, state: AppState):
        self._store = store
        self._state = state

    def list_all(self) -> Sequence[Student]:
        return list(self._state.students)

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self._state.find_student(student_id)

    def get_by_nisn(self, nisn: str) -> Optional[Student]:
        nisn = (nisn or "").strip()
        for student in self._state.students:
            if nisn and student.nisn == nisn:
                return student
        return None

    def save(self, student: Student) -> None:
        self._store.set(STUDENTS, student.id, student.to_document())

    def update_fields(self, student_id: str, fields: dict) -> None:
        self._store.update(STUDENTS, student_id, fields)

    def delete(self, student_id: str) -> None:
        self._store.delete(STUDENTS, student_id)

    def list_alumni(self) -> Sequence[Alumni]:
        return list(self._state.alumni)

    def move_to_alumni(self, alumni: Alumni) -> None:
        self._store.batch().set(ALUMNI, alumni.id, alumni.to_document()).delete(STUDENTS, alumni.id).commit()
