from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Subject


class SubjectRepository(Protocol):
    def list_all(self) -> Sequence[Subject]:
        raise NotImplementedError

    def get_by_id(self, subject_id: str) -> Optional[Subject]:
        raise NotImplementedError

    def save(self, subject: Subject) -> None:
        raise NotImplementedError

    def delete(self, subject_id: str) -> None:
        raise NotImplementedError
