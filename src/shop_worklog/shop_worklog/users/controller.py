from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, json_endpoint
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    @json_endpoint
    def login():
        body = json_body()
        user = container.auth_service.login(body.get("name"), body.get("pin"))
        return jsonify({"ok": True, "user": user.to_dict()})

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @json_endpoint
    def list_users():
        return jsonify([u.to_dict() for u in container.user_service.list_users()])

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @json_endpoint
    def create_user():
        body = json_body()
        user = container.user_service.create(name=body.get("name"), role=body.get("role"))
        return jsonify(user.to_dict())

    @app.route("/api/users/reset-pin", methods=["POST"], endpoint="reset_pin")
    @json_endpoint
    def reset_pin():
        container.user_service.reset_pin(name=json_body().get("name"))
        return jsonify({"ok": True})

    @app.route("/api/users/rename", methods=["POST"], endpoint="rename_user")
    @json_endpoint
    def rename_user():
        body = json_body()
        container.user_service.rename(old_name=body.get("oldName"), new_name=body.get("newName"))
        return jsonify({"ok": True})

    @app.route("/api/users", methods=["DELETE"], endpoint="delete_user")
    @json_endpoint
    def delete_user():
        container.user_service.delete(name=json_body().get("name"))
        return jsonify({"ok": True})
