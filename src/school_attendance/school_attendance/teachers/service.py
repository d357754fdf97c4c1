from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.clipboard import cell, iter_tab_rows
from ..common.validators import require_class_id, require_min_length, require_non_empty
from ..core.constants import ADMIN_ID, ALL_CLASSES, CLASS_LIST
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ImportFormatError, ValidationError
from ..database.document_store import new_document_id
from ..students.repository import StudentRepository
from ..sync.seeds import DEFAULT_HEADMASTER
from .model import Headmaster, Teacher
from .repository import HeadmasterRepository, TeacherRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    id: str
    name: str
    role: Role
    class_id: Optional[str] = None
    accessible_class_ids: tuple[str, ...] = field(default_factory=tuple)
    subject_ids: tuple[str, ...] = field(default_factory=tuple)
    student_id: Optional[str] = None

    @classmethod
    def for_teacher(cls, teacher: Teacher) -> "SessionUser":
        if teacher.role == Role.ADMIN:
            return cls(id=teacher.id, name="Administrator", role=Role.ADMIN)
        return cls(
            id=teacher.id,
            name=teacher.name,
            role=teacher.role,
            class_id=teacher.class_id,
            accessible_class_ids=teacher.accessible_class_ids,
            subject_ids=teacher.subject_ids,
        )

    def to_session(self) -> dict:
        return {
            "user_id": self.id,
            "name": self.name,
            "role": self.role.value,
            "class_id": self.class_id,
            "accessible_class_ids": list(self.accessible_class_ids),
            "subject_ids": list(self.subject_ids),
            "student_id": self.student_id,
        }

    @classmethod
    def from_session(cls, data) -> "SessionUser":
        return cls(
            id=str(data["user_id"]),
            name=str(data.get("name") or ""),
            role=Role(data["role"]),
            class_id=data.get("class_id") or None,
            accessible_class_ids=tuple(data.get("accessible_class_ids") or ()),
            subject_ids=tuple(data.get("subject_ids") or ()),
            student_id=data.get("student_id") or None,
        )


class AuthService:
    """Use case: authenticate staff (username/password) and parents (student NISN)."""

    def __init__(self, teachers: TeacherRepository, students: StudentRepository):
        self._teachers = teachers
        self._students = students

    def authenticate(self, username: str, password: str) -> SessionUser:
        teacher = self._teachers.get_by_username(username)
        if not teacher or not teacher.password_hash:
            raise AuthenticationError("Username atau password salah")

        try:
            ok = check_password_hash(teacher.password_hash, password or "")
        except ValueError:
            # Unknown hash method in a hand-edited document.
            ok = False

        if not ok:
            raise AuthenticationError("Username atau password salah")

        return SessionUser.for_teacher(teacher)

    def authenticate_parent(self, nisn: str) -> SessionUser:
        nisn = require_non_empty(nisn, "NISN")
        student = self._students.get_by_nisn(nisn)
        if not student or not student.is_active:
            raise AuthenticationError("NISN tidak ditemukan")
        return SessionUser(
            id=student.nisn,
            name="Orang Tua Siswa",
            role=Role.ORANG_TUA,
            student_id=student.id,
        )


def _clean_class_ids(values: Iterable[str] | None) -> tuple[str, ...]:
    wanted = {str(v).strip() for v in values or ()}
    return tuple(c for c in CLASS_LIST if c in wanted)


class TeacherService:
    """Use case: manage teachers and their login accounts (admin)."""

    def __init__(self, teachers: TeacherRepository):
        self._teachers = teachers

    def list_teachers(self) -> list[Teacher]:
        return sorted(
            (t for t in self._teachers.list_all() if t.id != ADMIN_ID),
            key=lambda t: t.name.lower(),
        )

    def list_users(self, *, class_id: str = ALL_CLASSES, search: str = "") -> list[Teacher]:
        """Accounts for the user screen: admin hidden, filtered by homeroom class and name/username."""
        term = (search or "").strip().lower()
        users = []
        for teacher in self.list_teachers():
            if class_id and class_id != ALL_CLASSES and teacher.class_id != class_id:
                continue
            if term and term not in teacher.name.lower() and term not in (teacher.username or "").lower():
                continue
            users.append(teacher)
        return users

    def add_teacher(self, *, name: str, nip: str, class_id: str | None = None) -> Teacher:
        teacher = Teacher(
            id=new_document_id(),
            name=require_non_empty(name, "Nama guru"),
            nip=require_non_empty(nip, "NIP"),
            class_id=require_class_id(class_id) if class_id else None,
        )
        self._teachers.save(teacher)
        return teacher

    def update_teacher(self, teacher_id: str, *, name: str | None = None, nip: str | None = None, class_id: str | None = None) -> None:
        if not self._teachers.get_by_id(teacher_id):
            raise ValidationError("Guru tidak ditemukan")

        fields: dict = {}
        if name is not None:
            fields["name"] = require_non_empty(name, "Nama guru")
        if nip is not None:
            fields["nip"] = require_non_empty(nip, "NIP")
        if class_id is not None:
            fields["classId"] = require_class_id(class_id) if class_id else ""
        if fields:
            self._teachers.update_fields(teacher_id, fields)

    def delete_teacher(self, teacher_id: str) -> None:
        if teacher_id == ADMIN_ID:
            raise ValidationError("Akun administrator tidak dapat dihapus")
        if not self._teachers.get_by_id(teacher_id):
            raise ValidationError("Guru tidak ditemukan")
        self._teachers.delete(teacher_id)

    def import_teachers(self, text: str) -> int:
        """Lines 'Name<TAB>NIP[<TAB>ClassId]'; returns how many were imported."""
        teachers = []
        for row in iter_tab_rows(text, min_columns=2):
            name, nip, class_id = cell(row, 0), cell(row, 1), cell(row, 2)
            if not name:
                continue
            teachers.append(
                Teacher(
                    id=new_document_id(),
                    name=name,
                    nip=nip or "-",
                    class_id=class_id if class_id in CLASS_LIST else None,
                )
            )
        if not teachers:
            raise ImportFormatError("Gagal membaca format. Gunakan: Nama | NIP | Kelas")
        self._teachers.save_many(teachers)
        return len(teachers)

    def save_user(
        self,
        *,
        name: str,
        username: str,
        password: str | None,
        nip: str = "-",
        class_id: str | None = None,
        accessible_class_ids: Iterable[str] | None = None,
        subject_ids: Iterable[str] | None = None,
        user_id: str | None = None,
    ) -> Teacher:
        """Create or edit an account.

        A homeroom account (class_id set) drops its access lists; a subject
        teacher account drops its class. On edit an empty password keeps the
        current one.
        """
        name = require_non_empty(name, "Nama")
        username = require_non_empty(username, "Username")

        existing = self._teachers.get_by_id(user_id) if user_id else None
        if user_id and not existing:
            raise ValidationError("User tidak ditemukan")

        owner = self._teachers.get_by_username(username)
        if owner and (not existing or owner.id != existing.id):
            raise ValidationError("Username sudah digunakan")

        if existing and not password:
            password_hash = existing.password_hash
        else:
            password_hash = generate_password_hash(require_min_length(password, "Password", 4))

        if class_id:
            teacher = Teacher(
                id=existing.id if existing else new_document_id(),
                name=name,
                nip=(nip or "-").strip() or "-",
                class_id=require_class_id(class_id),
                username=username,
                password_hash=password_hash,
            )
        else:
            teacher = Teacher(
                id=existing.id if existing else new_document_id(),
                name=name,
                nip=(nip or "-").strip() or "-",
                accessible_class_ids=_clean_class_ids(accessible_class_ids),
                subject_ids=tuple(str(s) for s in subject_ids or ()),
                username=username,
                password_hash=password_hash,
            )

        if existing and existing.role == Role.ADMIN:
            teacher = replace(teacher, class_id=None, accessible_class_ids=(), subject_ids=())

        self._teachers.save(teacher)
        return teacher

    def import_users(self, text: str) -> int:
        """Lines 'Name<TAB>Username<TAB>Password[<TAB>ClassId]'; returns how many were imported.

        Lines whose username is already taken, by a stored account or an
        earlier line of the same paste, are skipped.
        """
        taken = {t.username for t in self._teachers.list_all() if t.username}
        users = []
        for row in iter_tab_rows(text, min_columns=3):
            name, username, password, class_id = cell(row, 0), cell(row, 1), cell(row, 2), cell(row, 3)
            if not (name and username and password) or username in taken:
                continue
            taken.add(username)
            users.append(
                Teacher(
                    id=new_document_id(),
                    name=name,
                    nip="-",
                    class_id=class_id if class_id in CLASS_LIST else None,
                    username=username,
                    password_hash=generate_password_hash(password),
                )
            )
        if not users:
            raise ImportFormatError("Gagal import. Pastikan format: Nama | Username | Password | Kelas")
        self._teachers.save_many(users)
        return len(users)


class HeadmasterService:
    def __init__(self, headmaster: HeadmasterRepository):
        self._headmaster = headmaster

    def get(self) -> Headmaster:
        return self._headmaster.get()

    def update(self, *, name: str, nip: str) -> Headmaster:
        headmaster = Headmaster(name=require_non_empty(name, "Nama kepala sekolah"), nip=require_non_empty(nip, "NIP"))
        self._headmaster.save(headmaster)
        return headmaster

    def reset(self) -> Headmaster:
        self._headmaster.save(DEFAULT_HEADMASTER)
        return DEFAULT_HEADMASTER
