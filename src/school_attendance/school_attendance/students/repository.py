from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Alumni, Student


class StudentRepository(Protocol):
    """Roster access; reads come from the replica, writes go to the store."""

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_nisn(self, nisn: str) -> Optional[Student]:
        raise NotImplementedError

    def save(self, student: Student) -> None:
        raise NotImplementedError

    def update_fields(self, student_id: str, fields: dict) -> None:
        raise NotImplementedError

    def delete(self, student_id: str) -> None:
        raise NotImplementedError

    def list_alumni(self) -> Sequence[Alumni]:
        raise NotImplementedError

    def move_to_alumni(self, alumni: Alumni) -> None:
        """Write the alumni document and remove the student in one batch."""
        raise NotImplementedError
