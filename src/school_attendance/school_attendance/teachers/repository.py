from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Headmaster, Teacher


class TeacherRepository(Protocol):
    def list_all(self) -> Sequence[Teacher]:
        raise NotImplementedError

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[Teacher]:
        raise NotImplementedError

    def save(self, teacher: Teacher) -> None:
        raise NotImplementedError

    def save_many(self, teachers: Sequence[Teacher]) -> None:
        raise NotImplementedError

    def update_fields(self, teacher_id: str, fields: dict) -> None:
        raise NotImplementedError

    def delete(self, teacher_id: str) -> None:
        raise NotImplementedError


class HeadmasterRepository(Protocol):
    def get(self) -> Headmaster:
        raise NotImplementedError

    def save(self, headmaster: Headmaster) -> None:
        raise NotImplementedError
