from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AcademicYear, Holiday


class AcademicYearRepository(Protocol):
    def list_all(self) -> Sequence[AcademicYear]:
        raise NotImplementedError

    def get_by_id(self, year_id: str) -> Optional[AcademicYear]:
        raise NotImplementedError

    def get_active(self) -> Optional[AcademicYear]:
        raise NotImplementedError

    def save(self, year: AcademicYear) -> None:
        raise NotImplementedError

    def activate(self, year_id: str) -> None:
        """Set is_active on year_id and clear it on every other year, in one batch."""
        raise NotImplementedError

    def delete(self, year_id: str) -> None:
        raise NotImplementedError


class HolidayRepository(Protocol):
    def list_all(self) -> Sequence[Holiday]:
        raise NotImplementedError

    def save(self, holiday: Holiday) -> None:
        raise NotImplementedError

    def save_many(self, holidays: Sequence[Holiday]) -> None:
        raise NotImplementedError

    def delete(self, holiday_id: str) -> None:
        raise NotImplementedError
