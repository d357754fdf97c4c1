from __future__ import annotations

import logging
from typing import Sequence

from ..core.constants import ATTENDANCE, SUBJECT_ATTENDANCE
from ..core.enums import AttendanceStatus
from ..database.document_store import DocumentStore
from ..sync.state import AppState
from .model import AttendanceRecord, SubjectAttendanceRecord

logger = logging.getLogger(__name__)


class DocumentAttendanceRepository:
    def __init__(self, store: DocumentStore, state: AppState):
        self._store = store
        self._state = state

    def list_daily(self) -> Sequence[AttendanceRecord]:
        return list(self._state.attendance.values())

    def list_subject(self) -> Sequence[SubjectAttendanceRecord]:
        return list(self._state.subject_attendance.values())

    def mark_attendance(self, records: Sequence[AttendanceRecord]) -> None:
        self._commit(ATTENDANCE, records)
        self._state.apply_attendance(records)

    def mark_subject_attendance(self, records: Sequence[SubjectAttendanceRecord]) -> None:
        self._commit(SUBJECT_ATTENDANCE, records)
        self._state.apply_subject_attendance(records)

    def _commit(self, collection: str, records) -> None:
        batch = self._store.batch()
        for record in records:
            if record.status == AttendanceStatus.NONE:
                batch.delete(collection, record.id)
            else:
                batch.set(collection, record.id, record.to_document())
        batch.commit()
        logger.debug("Marked %d %s records", len(batch), collection)
