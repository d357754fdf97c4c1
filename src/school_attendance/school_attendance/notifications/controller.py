from __future__ import annotations

from flask import Flask

from ..common.web import arg, current_user, ok, staff_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.notification_service

    @app.route("/api/notifications/whatsapp/<student_id>", methods=["GET"], endpoint="whatsapp_parent_link")
    @staff_required
    def whatsapp_parent_link(student_id: str):
        link = svc.parent_link(
            current_user(),
            student_id=student_id,
            date=arg("date"),
            class_id=arg("class_id"),
            status=arg("status") or None,
        )
        return ok(link)

    @app.route("/api/notifications/recap", methods=["GET"], endpoint="whatsapp_recap_link")
    @staff_required
    def whatsapp_recap_link():
        return ok(svc.recap_link(current_user(), date=arg("date"), class_id=arg("class_id")))
