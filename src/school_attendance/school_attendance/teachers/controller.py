from __future__ import annotations

from flask import Flask, request, session

from ..common.web import admin_required, arg, current_user, json_body, login_required, login_user, ok
from ..container import Container
from ..core.constants import ALL_CLASSES


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body() or request.form
        user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        login_user(user)
        return ok({"user": user.to_session()})

    @app.route("/login/parent", methods=["POST"], endpoint="login_parent")
    def login_parent():
        data = json_body() or request.form
        user = container.auth_service.authenticate_parent(data.get("nisn", ""))
        login_user(user)
        return ok({"user": user.to_session()})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok({"user": current_user().to_session()})

    @app.route("/api/teachers", methods=["GET"], endpoint="list_teachers")
    @admin_required
    def list_teachers():
        return ok({"teachers": [t.to_dict() for t in container.teacher_service.list_teachers()]})

    @app.route("/api/teachers", methods=["POST"], endpoint="add_teacher")
    @admin_required
    def add_teacher():
        data = json_body()
        teacher = container.teacher_service.add_teacher(
            name=data.get("name", ""),
            nip=data.get("nip", ""),
            class_id=str(data.get("class_id") or "") or None,
        )
        return ok({"teacher": teacher.to_dict()}, 201)

    @app.route("/api/teachers/<teacher_id>", methods=["PUT"], endpoint="update_teacher")
    @admin_required
    def update_teacher(teacher_id: str):
        data = json_body()
        container.teacher_service.update_teacher(
            teacher_id,
            name=data.get("name"),
            nip=data.get("nip"),
            class_id=str(data["class_id"] or "") if "class_id" in data else None,
        )
        return ok()

    @app.route("/api/teachers/<teacher_id>", methods=["DELETE"], endpoint="delete_teacher")
    @admin_required
    def delete_teacher(teacher_id: str):
        container.teacher_service.delete_teacher(teacher_id)
        return ok()

    @app.route("/api/teachers/import", methods=["POST"], endpoint="import_teachers")
    @admin_required
    def import_teachers():
        count = container.teacher_service.import_teachers(json_body().get("text", ""))
        return ok({"count": count, "message": f"Berhasil mengimport {count} data guru."})

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    def list_users():
        users = container.teacher_service.list_users(class_id=arg("class_id", ALL_CLASSES), search=arg("q"))
        return ok({"users": [u.to_dict() for u in users]})

    @app.route("/api/users", methods=["POST"], endpoint="save_user")
    @admin_required
    def save_user():
        data = json_body()
        user = container.teacher_service.save_user(
            user_id=data.get("id") or None,
            name=data.get("name", ""),
            username=data.get("username", ""),
            password=data.get("password"),
            nip=data.get("nip") or "-",
            class_id=str(data.get("class_id") or "") or None,
            accessible_class_ids=data.get("accessible_class_ids") or [],
            subject_ids=data.get("subject_ids") or [],
        )
        return ok({"user": user.to_dict()}, 201 if not data.get("id") else 200)

    @app.route("/api/users/import", methods=["POST"], endpoint="import_users")
    @admin_required
    def import_users():
        count = container.teacher_service.import_users(json_body().get("text", ""))
        return ok({"count": count, "message": f"Berhasil import {count} user."})

    @app.route("/api/headmaster", methods=["GET"], endpoint="get_headmaster")
    @login_required
    def get_headmaster():
        return ok({"headmaster": container.headmaster_service.get().to_document()})

    @app.route("/api/headmaster", methods=["PUT"], endpoint="update_headmaster")
    @admin_required
    def update_headmaster():
        data = json_body()
        headmaster = container.headmaster_service.update(name=data.get("name", ""), nip=data.get("nip", ""))
        return ok({"headmaster": headmaster.to_document()})

    @app.route("/api/headmaster/reset", methods=["POST"], endpoint="reset_headmaster")
    @admin_required
    def reset_headmaster():
        return ok({"headmaster": container.headmaster_service.reset().to_document()})
