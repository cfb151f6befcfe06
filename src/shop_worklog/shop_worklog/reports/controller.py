from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_endpoint
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/weekly", methods=["GET"], endpoint="weekly_report")
    @json_endpoint
    def weekly_report():
        """Admin rollup for the current week."""
        report = container.weekly_report_service.weekly_report()
        return jsonify(report.to_dict())
