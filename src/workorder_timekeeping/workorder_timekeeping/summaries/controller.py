from __future__ import annotations

from datetime import date
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_hours, parse_iso_date
from ..container import Container
from ..core.exceptions import StoreUnavailable, ValidationError, WorkerNotFoundError
from ..work_orders.model import WorkOrder
from .model import WorkerWeeklySummary, WorkOrderHoursBreakdown


def _work_order_json(wo: Optional[WorkOrder]) -> Optional[dict]:
    if wo is None:
        return None
    return {"work_order_id": wo.work_order_id, "title": wo.title, "status": wo.status.value}


def summary_to_json(s: WorkerWeeklySummary) -> dict:
    return {
        "worker": {
            "worker_id": s.worker.worker_id,
            "name": s.worker.name,
            "position": s.worker.position,
        },
        "week_start": s.week_start.isoformat(),
        "week_end": s.week_end.isoformat(),
        "total_hours": round(s.total_hours, 4),
        "total_hours_display": format_hours(s.total_hours),
        "regular_hours": round(s.regular_hours, 4),
        "is_overtime": s.is_overtime,
        "overtime_hours": round(s.overtime_hours, 4),
        "unattributed_hours": round(s.unattributed_hours, 4),
        "current_work_order": _work_order_json(s.current_work_order),
        "work_orders": [
            {
                "work_order": _work_order_json(wos.work_order),
                "hours_worked": round(wos.hours_worked, 4),
                "is_active": wos.is_active,
                "status": wos.status.value,
            }
            for wos in s.work_orders
        ],
        "flagged_entry_ids": list(s.flagged_entry_ids),
        "daily_hours": {day.isoformat(): round(hours, 4) for day, hours in s.daily_hours.items()},
    }


def breakdown_to_json(b: WorkOrderHoursBreakdown) -> dict:
    return {
        "work_order": _work_order_json(b.work_order),
        "total_hours": round(b.total_hours, 4),
        "workers": [
            {"worker_id": wh.worker.worker_id, "name": wh.worker.name, "hours": round(wh.hours, 4)}
            for wh in b.worker_hours
        ],
    }


def register(app: Flask, container: Container) -> None:
    service = container.summary_service

    def _reference_date() -> date:
        value = request.args.get("date")
        if not value:
            return container.clock.now().date()
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("Invalid date (YYYY-MM-DD)")

    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.route("/api/workers/<int:worker_id>/weekly-summary", methods=["GET"], endpoint="weekly_summary")
    def weekly_summary(worker_id: int):
        try:
            summary = service.weekly_summary(worker_id, _reference_date())
        except WorkerNotFoundError as e:
            return _error(str(e), 404)
        except ValidationError as e:
            return _error(str(e), 400)
        except StoreUnavailable:
            return _error("Time entry store unavailable", 503)
        return jsonify({"success": True, "summary": summary_to_json(summary)})

    @app.route("/api/weekly-summaries", methods=["GET"], endpoint="weekly_summaries")
    def weekly_summaries():
        try:
            summaries = service.all_weekly_summaries(_reference_date())
        except ValidationError as e:
            return _error(str(e), 400)
        except StoreUnavailable:
            return _error("Time entry store unavailable", 503)
        return jsonify({"success": True, "summaries": [summary_to_json(s) for s in summaries]})

    @app.route("/api/work-orders/breakdown", methods=["GET"], endpoint="work_order_breakdown")
    def work_order_breakdown():
        try:
            breakdowns = service.work_order_breakdowns(_reference_date())
        except ValidationError as e:
            return _error(str(e), 400)
        except StoreUnavailable:
            return _error("Time entry store unavailable", 503)
        return jsonify({"success": True, "work_orders": [breakdown_to_json(b) for b in breakdowns]})

    @app.route("/api/overtime", methods=["GET"], endpoint="overtime_report")
    def overtime_report():
        try:
            report = service.overtime_report(_reference_date())
        except ValidationError as e:
            return _error(str(e), 400)
        except StoreUnavailable:
            return _error("Time entry store unavailable", 503)
        return jsonify(
            {
                "success": True,
                "worker_count": report.worker_count,
                "total_overtime_hours": round(report.total_overtime_hours, 4),
                "daily_threshold_hours": report.daily_threshold,
                "daily_overtime_breakdown": {
                    str(worker_id): {day.isoformat(): round(hours, 4) for day, hours in days.items()}
                    for worker_id, days in report.daily_overtime_breakdown().items()
                },
                "summaries": [summary_to_json(s) for s in report.summaries],
            }
        )
