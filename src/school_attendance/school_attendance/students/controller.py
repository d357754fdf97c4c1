from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, arg, current_user, json_body, ok, staff_required
from ..container import Container
from ..core.constants import ALL_CLASSES
from ..teachers.access import require_class_access


def register(app: Flask, container: Container) -> None:
    svc = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @staff_required
    def list_students():
        class_id = arg("class_id", ALL_CLASSES)
        require_class_access(current_user(), class_id)
        include_inactive = arg("include_inactive") in {"1", "true", "yes"}
        students = svc.list_students(class_id, include_inactive=include_inactive)
        return ok({"students": [s.to_dict() for s in students]})

    @app.route("/api/students", methods=["POST"], endpoint="add_student")
    @admin_required
    def add_student():
        data = json_body()
        student = svc.add_student(
            nisn=data.get("nisn", ""),
            name=data.get("name", ""),
            gender=data.get("gender", ""),
            class_id=str(data.get("class_id", "")),
            parent_phone=data.get("parent_phone"),
        )
        return ok({"student": student.to_dict()}, 201)

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="update_student")
    @admin_required
    def update_student(student_id: str):
        data = json_body()
        svc.update_student(
            student_id,
            nisn=data.get("nisn"),
            name=data.get("name"),
            gender=data.get("gender"),
            class_id=str(data["class_id"]) if "class_id" in data else None,
            parent_phone=data.get("parent_phone"),
        )
        return ok({"student": svc.get(student_id).to_dict()})

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    @admin_required
    def delete_student(student_id: str):
        svc.delete_student(student_id)
        return ok()

    @app.route("/api/students/<student_id>/promote", methods=["POST"], endpoint="promote_student")
    @admin_required
    def promote_student(student_id: str):
        svc.promote_student(student_id, str(json_body().get("class_id", "")))
        return ok({"student": svc.get(student_id).to_dict()})

    @app.route("/api/students/<student_id>/active", methods=["POST"], endpoint="set_student_active")
    @admin_required
    def set_student_active(student_id: str):
        svc.set_active(student_id, bool(json_body().get("is_active", True)))
        return ok({"student": svc.get(student_id).to_dict()})

    @app.route("/api/students/<student_id>/alumni", methods=["POST"], endpoint="move_to_alumni")
    @admin_required
    def move_to_alumni(student_id: str):
        data = json_body()
        alumni = svc.move_to_alumni(student_id, reason=data.get("reason", ""), date_left=data.get("date_left", ""))
        return ok({"alumni": alumni.to_dict()})

    @app.route("/api/alumni", methods=["GET"], endpoint="list_alumni")
    @admin_required
    def list_alumni():
        return ok({"alumni": [a.to_dict() for a in svc.list_alumni()]})
