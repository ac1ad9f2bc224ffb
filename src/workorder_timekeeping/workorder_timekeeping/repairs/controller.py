from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from ..core.exceptions import StoreUnavailable
from .model import RepairReport


def report_to_json(report: RepairReport) -> dict:
    return {
        "entries_fixed": report.entries_fixed,
        "entries_flagged_for_review": report.entries_flagged_for_review,
        "abandoned_entry_ids": list(report.abandoned_entry_ids),
        "actions": [
            {
                "entry_id": a.entry_id,
                "worker_id": a.worker_id,
                "kind": a.kind.value,
                "outcome": a.outcome.value,
                "clock_out_time": a.clock_out_time.isoformat() if a.clock_out_time else None,
            }
            for a in report.actions
        ],
    }


def register(app: Flask, container: Container) -> None:
    service = container.repair_service

    @app.route("/api/clock-repairs/anomalies", methods=["GET"], endpoint="clock_anomalies")
    def clock_anomalies():
        try:
            anomalies = service.detect()
        except StoreUnavailable:
            return jsonify({"success": False, "message": "Time entry store unavailable"}), 503
        return jsonify(
            {
                "success": True,
                "anomalies": [
                    {"entry_id": a.entry.entry_id, "worker_id": a.entry.worker_id, "kind": a.kind.value}
                    for a in anomalies
                ],
            }
        )

    @app.route("/api/clock-repairs", methods=["POST"], endpoint="clock_repairs")
    def clock_repairs():
        """Operator action: fix clock issues."""
        try:
            report = service.repair_anomalies()
        except StoreUnavailable:
            return jsonify({"success": False, "message": "Time entry store unavailable"}), 503
        return jsonify({"success": True, "report": report_to_json(report)})
