from __future__ import annotations

import csv
import io
from datetime import date
from typing import Optional

from ..common.datetime_utils import month_name
from ..core.constants import ALL_CLASSES, DEFAULT_SCHOOL_CITY, DEFAULT_SCHOOL_NAME
from ..core.enums import DayKind
from ..teachers.model import Headmaster
from .model import MonthlyReport
from .service import Signer


def report_title(report: MonthlyReport) -> str:
    if report.subject is not None:
        return f"Laporan Absensi Mapel {report.subject.name}"
    return "Laporan Absensi Harian"


def class_label(class_id: str) -> str:
    return "Semua Kelas" if class_id == ALL_CLASSES else class_id


def csv_filename(report: MonthlyReport) -> str:
    label = report.subject.name if report.subject is not None else "Harian"
    return f"Absensi_{label}_{month_name(report.month)}.csv"


def to_csv(report: MonthlyReport) -> str:
    """Title lines, a blank line, then the No,NISN,Nama Siswa,Kelas,1..N,H,S,I,A matrix."""
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow([report_title(report)])
    writer.writerow([f"Bulan: {month_name(report.month)} {report.year}"])
    writer.writerow([f"Kelas: {class_label(report.class_id)}"])
    writer.writerow([])

    writer.writerow(["No", "NISN", "Nama Siswa", "Kelas", *[str(d.day) for d in report.days], "H", "S", "I", "A"])
    for index, row in enumerate(report.rows, start=1):
        writer.writerow(
            [
                index,
                row.student.nisn,
                row.student.name,
                row.student.class_id,
                *[cell.code for cell in row.cells],
                row.tally.hadir,
                row.tally.sakit,
                row.tally.izin,
                row.tally.alpa,
            ]
        )
    return out.getvalue()


_CELL_CLASS = {
    DayKind.HOLIDAY: "bg-red",
    DayKind.WEEKEND: "bg-gray",
    DayKind.NOT_SCHEDULED: "bg-gray",
    DayKind.SCHOOL_DAY: "",
}


def print_context(
    report: MonthlyReport,
    *,
    headmaster: Headmaster,
    signer: Signer,
    school_name: str = DEFAULT_SCHOOL_NAME,
    school_city: str = DEFAULT_SCHOOL_CITY,
    printed_on: Optional[date] = None,
) -> dict:
    """Template variables for templates/reports/print.html."""
    printed_on = printed_on or date.today()
    return {
        "title": report_title(report),
        "heading": "LAPORAN ABSENSI MATA PELAJARAN" if report.subject is not None else "LAPORAN ABSENSI HARIAN",
        "school_name": school_name.upper(),
        "subject_name": report.subject.name if report.subject is not None else None,
        "class_label": class_label(report.class_id),
        "period": f"{month_name(report.month)} {report.year}",
        "days": report.days,
        "rows": [
            {
                "no": index,
                "name": row.student.name,
                "class_id": row.student.class_id,
                "cells": [{"code": c.code, "css": _CELL_CLASS[c.kind]} for c in row.cells],
                "tally": row.tally,
            }
            for index, row in enumerate(report.rows, start=1)
        ],
        "totals": report.totals,
        "percentage": report.percentage_text,
        "headmaster": headmaster,
        "signer": signer,
        "signed_at": f"{school_city}, {printed_on.day} {month_name(printed_on.month)} {printed_on.year}",
    }
