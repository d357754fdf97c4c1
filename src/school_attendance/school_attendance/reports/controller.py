from __future__ import annotations

from flask import Flask, Response, render_template

from ..common.datetime_utils import now_local
from ..common.web import arg, current_user, ok, staff_required
from ..container import Container
from ..core.constants import ALL_CLASSES
from .exporters import csv_filename, print_context, to_csv


def register(app: Flask, container: Container) -> None:
    svc = container.report_service

    def _report_from_args():
        today = now_local()
        return svc.monthly_report(
            current_user(),
            year=arg("year", str(today.year)),
            month=arg("month", str(today.month)),
            class_id=arg("class_id", ALL_CLASSES),
            subject_id=arg("subject_id") or None,
        )

    @app.route("/api/reports/monthly", methods=["GET"], endpoint="monthly_report")
    @staff_required
    def monthly_report():
        return ok({"report": _report_from_args().to_dict()})

    @app.route("/reports/monthly.csv", methods=["GET"], endpoint="monthly_report_csv")
    @staff_required
    def monthly_report_csv():
        report = _report_from_args()
        csv_bytes = to_csv(report).encode("utf-8-sig")
        return Response(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{csv_filename(report)}"'},
        )

    @app.route("/reports/monthly/print", methods=["GET"], endpoint="monthly_report_print")
    @staff_required
    def monthly_report_print():
        report = _report_from_args()
        context = print_context(
            report,
            headmaster=svc.headmaster(),
            signer=svc.signer_for(report),
            school_name=container.school_name,
            school_city=container.school_city,
            printed_on=now_local().date(),
        )
        return render_template("reports/print.html", **context)
