from __future__ import annotations

from typing import Optional

from ..common.clipboard import cell, iter_tab_rows
from ..common.validators import require_iso_date, require_non_empty
from ..core.exceptions import ImportFormatError, ValidationError
from ..database.document_store import new_document_id
from .model import AcademicYear, Holiday
from .repository import AcademicYearRepository, HolidayRepository


class AcademicYearService:
    """Use case: academic years; exactly one may be active."""

    def __init__(self, years: AcademicYearRepository):
        self._years = years

    def list_years(self) -> list[AcademicYear]:
        return sorted(self._years.list_all(), key=lambda y: y.name)

    def active_year(self) -> Optional[AcademicYear]:
        return self._years.get_active()

    def add_year(self, name: str) -> AcademicYear:
        name = require_non_empty(name, "Tahun ajaran")
        if any(y.name == name for y in self._years.list_all()):
            raise ValidationError("Tahun ajaran sudah ada")
        year = AcademicYear(id=new_document_id(), name=name, is_active=False)
        self._years.save(year)
        return year

    def activate(self, year_id: str) -> None:
        if not self._years.get_by_id(year_id):
            raise ValidationError("Tahun ajaran tidak ditemukan")
        self._years.activate(year_id)

    def delete_year(self, year_id: str) -> None:
        year = self._years.get_by_id(year_id)
        if not year:
            raise ValidationError("Tahun ajaran tidak ditemukan")
        if year.is_active:
            raise ValidationError("Tidak bisa menghapus tahun ajaran yang aktif")
        self._years.delete(year_id)


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def list_holidays(self) -> list[Holiday]:
        return list(self._holidays.list_all())

    def add_holiday(self, *, date: str, description: str) -> Holiday:
        holiday = Holiday(
            id=new_document_id(),
            date=require_iso_date(date),
            description=require_non_empty(description, "Keterangan"),
        )
        self._holidays.save(holiday)
        return holiday

    def delete_holiday(self, holiday_id: str) -> None:
        if all(h.id != str(holiday_id) for h in self._holidays.list_all()):
            raise ValidationError("Hari libur tidak ditemukan")
        self._holidays.delete(holiday_id)

    def import_holidays(self, text: str) -> int:
        """Lines 'YYYY-MM-DD<TAB>Description'; lines without a valid calendar date are skipped."""
        holidays = []
        for row in iter_tab_rows(text, min_columns=2):
            try:
                date = require_iso_date(cell(row, 0))
            except ValidationError:
                continue
            holidays.append(Holiday(id=new_document_id(), date=date, description=cell(row, 1)))
        if not holidays:
            raise ImportFormatError("Gagal. Pastikan format: YYYY-MM-DD [Tab] Keterangan")
        self._holidays.save_many(holidays)
        return len(holidays)
