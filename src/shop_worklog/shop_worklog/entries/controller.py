from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, json_endpoint
from ..container import Container
from .filters import Actor, EntryCriteria


def register(app: Flask, container: Container) -> None:
    @app.route("/api/entries", methods=["GET"], endpoint="list_entries")
    @json_endpoint
    def list_entries():
        actor = Actor(role=request.args.get("role"), name=request.args.get("name"))
        criteria = EntryCriteria.from_query(request.args)
        rows = container.entry_service.list_entries(actor, criteria)
        return jsonify([e.to_dict() for e in rows])

    @app.route("/api/entries", methods=["POST"], endpoint="save_entry")
    @json_endpoint
    def save_entry():
        saved = container.entry_service.upsert(json_body())
        return jsonify({"ok": True, "id": saved.entry_id, "saved": saved.to_dict()})

    @app.route("/api/entries/<entry_id>", methods=["DELETE"], endpoint="delete_entry")
    @json_endpoint
    def delete_entry(entry_id: str):
        container.entry_service.delete(entry_id)
        return jsonify({"ok": True})
