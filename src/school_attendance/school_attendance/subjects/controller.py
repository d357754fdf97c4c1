from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, current_user, json_body, ok, staff_required
from ..container import Container
from ..teachers.access import available_subjects


def register(app: Flask, container: Container) -> None:
    svc = container.subject_service

    @app.route("/api/subjects", methods=["GET"], endpoint="list_subjects")
    @staff_required
    def list_subjects():
        subjects = available_subjects(current_user(), svc.list_subjects())
        return ok({"subjects": [s.to_dict() for s in subjects]})

    @app.route("/api/subjects", methods=["POST"], endpoint="add_subject")
    @admin_required
    def add_subject():
        subject = svc.add_subject(json_body().get("name", ""))
        return ok({"subject": subject.to_dict()}, 201)

    @app.route("/api/subjects/<subject_id>", methods=["PUT"], endpoint="rename_subject")
    @admin_required
    def rename_subject(subject_id: str):
        subject = svc.rename_subject(subject_id, json_body().get("name", ""))
        return ok({"subject": subject.to_dict()})

    @app.route("/api/subjects/<subject_id>", methods=["DELETE"], endpoint="delete_subject")
    @admin_required
    def delete_subject(subject_id: str):
        svc.delete_subject(subject_id)
        return ok()

    @app.route("/api/subjects/<subject_id>/schedule/toggle", methods=["POST"], endpoint="toggle_subject_schedule")
    @admin_required
    def toggle_subject_schedule(subject_id: str):
        data = json_body()
        subject = svc.toggle_schedule(subject_id, day=data.get("day", ""), class_id=str(data.get("class_id", "")))
        return ok({"subject": subject.to_dict()})

    @app.route("/api/subjects/<subject_id>/schedule", methods=["PUT"], endpoint="set_subject_schedule")
    @admin_required
    def set_subject_schedule(subject_id: str):
        subject = svc.set_schedule(subject_id, json_body().get("schedule") or {})
        return ok({"subject": subject.to_dict()})
