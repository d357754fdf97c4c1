from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import ACADEMIC_YEARS, HOLIDAYS
from ..database.document_store import DocumentStore
from ..sync.state import AppState
from .model import AcademicYear, Holiday


class DocumentAcademicYearRepository:
    def __init__(self, store: DocumentStore, state: AppState):
        self._store = store
        self._state = state

    def list_all(self) -> Sequence[AcademicYear]:
        return list(self._state.academic_years)

    def get_by_id(self, year_id: str) -> Optional[AcademicYear]:
        for year in self._state.academic_years:
            if year.id == str(year_id):
                return year
        return None

    def get_active(self) -> Optional[AcademicYear]:
        return self._state.active_year()

    def save(self, year: AcademicYear) -> None:
        self._store.set(ACADEMIC_YEARS, year.id, year.to_document())

    def activate(self, year_id: str) -> None:
        batch = self._store.batch()
        for year in self._state.academic_years:
            batch.update(ACADEMIC_YEARS, year.id, {"isActive": year.id == str(year_id)})
        batch.commit()

    def delete(self, year_id: str) -> None:
        self._store.delete(ACADEMIC_YEARS, year_id)


class DocumentHolidayRepository:
    def __init__(self, store: DocumentStore, state: AppState):
        self._store = store
        self._state = state

    def list_all(self) -> Sequence[Holiday]:
        return sorted(self._state.holidays, key=lambda h: h.date)

    def save(self, holiday: Holiday) -> None:
        self._store.set(HOLIDAYS, holiday.id, holiday.to_document())

    def save_many(self, holidays: Sequence[Holiday]) -> None:
        batch = self._store.batch()
        for holiday in holidays:
            batch.set(HOLIDAYS, holiday.id, holiday.to_document())
        batch.commit()

    def delete(self, holiday_id: str) -> None:
        self._store.delete(HOLIDAYS, holiday_id)
