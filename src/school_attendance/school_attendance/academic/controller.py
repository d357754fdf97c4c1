from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    years = container.year_service
    holidays = container.holiday_service

    @app.route("/api/academic-years", methods=["GET"], endpoint="list_academic_years")
    @login_required
    def list_academic_years():
        active = years.active_year()
        return ok(
            {
                "academic_years": [y.to_document() for y in years.list_years()],
                "active": active.to_document() if active else None,
            }
        )

    @app.route("/api/academic-years", methods=["POST"], endpoint="add_academic_year")
    @admin_required
    def add_academic_year():
        year = years.add_year(json_body().get("name", ""))
        return ok({"academic_year": year.to_document()}, 201)

    @app.route("/api/academic-years/<year_id>/activate", methods=["POST"], endpoint="activate_academic_year")
    @admin_required
    def activate_academic_year(year_id: str):
        years.activate(year_id)
        return ok({"academic_years": [y.to_document() for y in years.list_years()]})

    @app.route("/api/academic-years/<year_id>", methods=["DELETE"], endpoint="delete_academic_year")
    @admin_required
    def delete_academic_year(year_id: str):
        years.delete_year(year_id)
        return ok()

    @app.route("/api/holidays", methods=["GET"], endpoint="list_holidays")
    @login_required
    def list_holidays():
        return ok({"holidays": [h.to_document() for h in holidays.list_holidays()]})

    @app.route("/api/holidays", methods=["POST"], endpoint="add_holiday")
    @admin_required
    def add_holiday():
        data = json_body()
        holiday = holidays.add_holiday(date=data.get("date", ""), description=data.get("description", ""))
        return ok({"holiday": holiday.to_document()}, 201)

    @app.route("/api/holidays/<holiday_id>", methods=["DELETE"], endpoint="delete_holiday")
    @admin_required
    def delete_holiday(holiday_id: str):
        holidays.delete_holiday(holiday_id)
        return ok()

    @app.route("/api/holidays/import", methods=["POST"], endpoint="import_holidays")
    @admin_required
    def import_holidays():
        count = holidays.import_holidays(json_body().get("text", ""))
        return ok({"count": count, "message": f"Berhasil mengimport {count} hari libur."})
