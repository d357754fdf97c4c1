from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.core.enums import Role
from src.school_attendance.school_attendance.core.exceptions import StoreWriteError
from src.school_attendance.school_attendance.database.document_store import (
    UPDATE,
    DocumentSnapshot,
    DocumentStore,
    merge_document,
)
from src.school_attendance.school_attendance.teachers.service import SessionUser


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store; a batch is applied to a copy and swapped in, so it is all-or-nothing."""

    def __init__(self):
        super().__init__()
        self.docs: dict[str, dict[str, dict]] = {}
        self.fail_next_commit = False
        self.commits = 0
        self._pending: set[str] = set()

    def list(self, collection):
        return [DocumentSnapshot(doc_id, dict(data)) for doc_id, data in sorted(self.docs.get(collection, {}).items())]

    def _apply(self, ops):
        if self.fail_next_commit:
            self.fail_next_commit = False
            raise StoreWriteError("Gagal menyimpan data ke database. Silakan coba lagi.")

        staged = {c: dict(d) for c, d in self.docs.items()}
        for op in ops:
            coll = staged.setdefault(op.collection, {})
            current = coll.get(op.doc_id)
            if op.kind == UPDATE and current is None:
                raise StoreWriteError(f"Dokumen {op.collection}/{op.doc_id} tidak ditemukan")
            result = merge_document(current, op)
            if result is None:
                coll.pop(op.doc_id, None)
            else:
                coll[op.doc_id] = result
        self.docs = staged
        self.commits += 1

    def external_set(self, collection, doc_id, data):
        """Simulate another process writing; only poll() reveals it."""
        self.docs.setdefault(collection, {})[doc_id] = dict(data)
        self._pending.add(collection)

    def poll(self):
        changed = sorted(self._pending)
        self._pending.clear()
        self._notify(changed)
        return changed


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def container(store):
    c = build_container(store=store, poll_seconds=0)
    c.replica.start()
    yield c
    c.replica.stop()


@pytest.fixture
def admin():
    return SessionUser(id="admin", name="Administrator", role=Role.ADMIN)


@pytest.fixture
def wali_kelas_1():
    return SessionUser(id="t1", name="Bu Sari", role=Role.WALI_KELAS, class_id="1")


@pytest.fixture
def make_student(store):
    def _make(student_id, name, class_id="1", *, nisn=None, phone=None, is_active=True):
        doc = {
            "id": student_id,
            "nisn": nisn or f"00{student_id}",
            "name": name,
            "gender": "L",
            "classId": class_id,
            "isActive": is_active,
        }
        if phone:
            doc["parentPhone"] = phone
        store.set("students", student_id, doc)
        return doc

    return _make
