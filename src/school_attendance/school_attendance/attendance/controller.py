from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import day_name, now_local
from ..common.web import admin_required, arg, current_user, json_body, login_required, ok, staff_required
from ..container import Container
from ..subjects.schedule import is_scheduled


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    def _today() -> str:
        return now_local().strftime("%Y-%m-%d")

    @app.route("/api/attendance/daily", methods=["GET"], endpoint="load_daily_attendance")
    @staff_required
    def load_daily_attendance():
        date = arg("date", _today())
        roster = svc.load_daily(current_user(), date=date, class_id=arg("class_id"))
        return ok(
            {
                "date": date,
                "day_name": day_name(date),
                "day_off": svc.day_off_reason(date),
                "students": [e.to_dict() for e in roster],
            }
        )

    @app.route("/api/attendance/check", methods=["POST"], endpoint="check_status_change")
    @staff_required
    def check_status_change():
        data = json_body()
        status = svc.check_status_change(data.get("date", ""), data.get("status"))
        return ok({"status": status.value})

    @app.route("/api/attendance/daily", methods=["POST"], endpoint="save_daily_attendance")
    @staff_required
    def save_daily_attendance():
        data = json_body()
        saved = svc.save_daily(
            current_user(),
            date=data.get("date", ""),
            class_id=str(data.get("class_id", "")),
            statuses=data.get("statuses") or {},
        )
        return ok({"saved": saved, "message": "Data tersimpan"})

    @app.route("/api/attendance/daily/import", methods=["POST"], endpoint="import_daily_attendance")
    @admin_required
    def import_daily_attendance():
        data = json_body()
        count = svc.import_daily(
            current_user(),
            text=data.get("text", ""),
            date=data.get("date", ""),
            class_id=str(data.get("class_id", "")),
        )
        return ok({"count": count, "message": f"Berhasil import {count} data."})

    @app.route("/api/attendance/subject", methods=["GET"], endpoint="load_subject_attendance")
    @staff_required
    def load_subject_attendance():
        date = arg("date", _today())
        class_id = arg("class_id")
        subject_id = arg("subject_id")
        roster = svc.load_subject(current_user(), date=date, class_id=class_id, subject_id=subject_id)
        subject = container.subject_service.get(subject_id)
        return ok(
            {
                "date": date,
                "day_name": day_name(date),
                "day_off": svc.day_off_reason(date),
                "scheduled": is_scheduled(subject, day_name(date), class_id),
                "students": [e.to_dict() for e in roster],
            }
        )

    @app.route("/api/attendance/subject", methods=["POST"], endpoint="save_subject_attendance")
    @staff_required
    def save_subject_attendance():
        data = json_body()
        saved = svc.save_subject(
            current_user(),
            date=data.get("date", ""),
            class_id=str(data.get("class_id", "")),
            subject_id=str(data.get("subject_id") or ""),
            statuses=data.get("statuses") or {},
        )
        return ok({"saved": saved, "message": "Absensi mapel tersimpan"})

    @app.route("/api/attendance/student/<student_id>", methods=["GET"], endpoint="student_history")
    @login_required
    def student_history(student_id: str):
        records = svc.student_history(current_user(), student_id)
        return ok({"records": [r.to_document() for r in records]})
