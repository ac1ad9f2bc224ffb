from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from ..core.exceptions import StoreError, ValidationError, WorkerNotFoundError
from .model import TimeClockEntry


def entry_to_json(e: TimeClockEntry) -> dict:
    return {
        "entry_id": e.entry_id,
        "worker_id": e.worker_id,
        "work_date": e.work_date.isoformat(),
        "clock_in_time": e.clock_in_time.isoformat(),
        "clock_out_time": e.clock_out_time.isoformat() if e.clock_out_time else None,
        "is_active": e.is_active,
        "needs_review": e.needs_review,
        "note": e.note,
    }


def register(app: Flask, container: Container) -> None:
    service = container.time_clock_service

    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.route("/api/workers/<int:worker_id>/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in(worker_id: int):
        try:
            entry = service.clock_in(worker_id)
        except WorkerNotFoundError as e:
            return _error(str(e), 404)
        except ValidationError as e:
            return _error(str(e), 400)
        except StoreError:
            return _error("Time entry store unavailable", 503)
        return jsonify({"success": True, "entry": entry_to_json(entry)}), 201

    @app.route("/api/workers/<int:worker_id>/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out(worker_id: int):
        try:
            entry = service.clock_out(worker_id)
        except WorkerNotFoundError as e:
            return _error(str(e), 404)
        except ValidationError as e:
            return _error(str(e), 400)
        except StoreError:
            return _error("Time entry store unavailable", 503)
        return jsonify({"success": True, "entry": entry_to_json(entry)})

    @app.route("/api/workers/<int:worker_id>/current-entry", methods=["GET"], endpoint="current_entry")
    def current_entry(worker_id: int):
        try:
            entry = service.current_entry(worker_id)
        except StoreError:
            return _error("Time entry store unavailable", 503)
        return jsonify({"success": True, "entry": entry_to_json(entry) if entry else None})
