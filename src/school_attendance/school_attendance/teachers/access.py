"""Which classes and subjects a logged-in user may see or record."""

from __future__ import annotations

from typing import Sequence

from ..core.constants import ALL_CLASSES, CLASS_LIST
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..subjects.model import Subject
from .service import SessionUser


def available_classes(user: SessionUser) -> list[str]:
    if user.role == Role.ADMIN:
        return list(CLASS_LIST)
    if user.class_id:
        return [user.class_id]
    if user.accessible_class_ids:
        return [c for c in CLASS_LIST if c in user.accessible_class_ids]
    return []


def available_subjects(user: SessionUser, subjects: Sequence[Subject]) -> list[Subject]:
    """Admin sees all; a teacher with assigned subjects sees only those; otherwise all."""
    if user.role != Role.ADMIN and user.subject_ids:
        return [s for s in subjects if s.id in user.subject_ids]
    return list(subjects)


def require_staff(user: SessionUser) -> None:
    if user.role == Role.ORANG_TUA:
        raise AuthorizationError("Anda tidak memiliki akses")


def require_admin(user: SessionUser) -> None:
    if user.role != Role.ADMIN:
        raise AuthorizationError("Hanya admin yang dapat melakukan aksi ini")


def require_class_access(user: SessionUser, class_id: str) -> None:
    require_staff(user)
    if class_id == ALL_CLASSES:
        if user.role != Role.ADMIN:
            raise AuthorizationError("Hanya admin yang dapat melihat semua kelas")
        return
    if class_id not in available_classes(user):
        raise AuthorizationError(f"Anda tidak memiliki akses ke kelas {class_id}")


def require_subject_access(user: SessionUser, subject: Subject, subjects: Sequence[Subject]) -> None:
    require_staff(user)
    if all(s.id != subject.id for s in available_subjects(user, subjects)):
        raise AuthorizationError(f"Anda tidak memiliki akses ke mapel {subject.name}")
