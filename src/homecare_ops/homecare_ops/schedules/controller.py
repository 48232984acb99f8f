from __future__ import annotations

from datetime import date, datetime

from flask import Flask, jsonify, request

from ..api.errors import json_endpoint
from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..core.constants import DEFAULT_UPCOMING_LIMIT
from ..core.exceptions import ValidationError
from ..container import Container
from .model import Occurrence, ScheduledPackage


def occurrence_to_dict(o: Occurrence) -> dict:
    return {
        "scheduled_package_id": o.scheduled_package_id,
        "date": o.date.isoformat(),
        "start": o.start.isoformat(),
        "end": o.end.isoformat(),
        "is_exception": o.is_exception,
        "original_date": o.original_date.isoformat() if o.original_date else None,
    }


def package_to_dict(rule: ScheduledPackage) -> dict:
    return {
        "id": rule.scheduled_package_id,
        "status": rule.status.value,
        "exceptions": [
            {
                "date": ex.date.isoformat(),
                "action": ex.action.value,
                "new_start": ex.new_start.isoformat() if ex.new_start else None,
            }
            for ex in rule.exceptions
        ],
    }


def _date_arg(value: str | None, name: str) -> date:
    if not value:
        raise ValidationError(f"{name} is required (YYYY-MM-DD)")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD")


def _datetime_arg(value: str | None, name: str) -> datetime | None:
    if not value:
        return None
    try:
        return parse_iso_datetime(value)
    except ValueError:
        raise ValidationError(f"{name} must be an ISO date/time")


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    @app.get("/api/scheduled-packages", endpoint="package_list")
    @json_endpoint
    def package_list():
        items = service.list_packages(status=request.args.get("status") or None)
        return jsonify([package_to_dict(rule) for rule in items])

    @app.get("/api/scheduled-packages/<int:package_id>/occurrences", endpoint="package_occurrences")
    @json_endpoint
    def package_occurrences(package_id: int):
        start = _date_arg(request.args.get("start"), "start")
        end = _date_arg(request.args.get("end"), "end")
        items = service.get_occurrences(package_id, start=start, end=end)
        return jsonify([occurrence_to_dict(o) for o in items])

    @app.get("/api/scheduled-packages/<int:package_id>/calendar/<int:year>/<int:month>", endpoint="package_calendar")
    @json_endpoint
    def package_calendar(package_id: int, year: int, month: int):
        items = service.month_preview(package_id, year=year, month=month)
        return jsonify([occurrence_to_dict(o) for o in items])

    @app.get("/api/scheduled-packages/<int:package_id>/upcoming", endpoint="package_upcoming")
    @json_endpoint
    def package_upcoming(package_id: int):
        after = _datetime_arg(request.args.get("after"), "after")
        limit = request.args.get("limit", type=int) or DEFAULT_UPCOMING_LIMIT
        items = service.upcoming(package_id, after=after, limit=limit)
        return jsonify([occurrence_to_dict(o) for o in items])

    @app.post("/api/scheduled-packages/<int:package_id>/exceptions", endpoint="package_add_exception")
    @json_endpoint
    def package_add_exception(package_id: int):
        body = request.get_json(silent=True) or {}
        rule = service.add_exception(
            package_id,
            day=_date_arg(body.get("date"), "date"),
            action=body.get("action") or "",
            new_start=_datetime_arg(body.get("new_start"), "new_start"),
        )
        return jsonify(package_to_dict(rule)), 201

    @app.delete("/api/scheduled-packages/<int:package_id>/exceptions/<day>", endpoint="package_remove_exception")
    @json_endpoint
    def package_remove_exception(package_id: int, day: str):
        rule = service.remove_exception(package_id, day=_date_arg(day, "date"))
        return jsonify(package_to_dict(rule))

    @app.post("/api/scheduled-packages/<int:package_id>/pause", endpoint="package_pause")
    @json_endpoint
    def package_pause(package_id: int):
        return jsonify(package_to_dict(service.pause(package_id)))

    @app.post("/api/scheduled-packages/<int:package_id>/resume", endpoint="package_resume")
    @json_endpoint
    def package_resume(package_id: int):
        return jsonify(package_to_dict(service.resume(package_id)))

    @app.post("/api/scheduled-packages/<int:package_id>/cancel", endpoint="package_cancel")
    @json_endpoint
    def package_cancel(package_id: int):
        return jsonify(package_to_dict(service.cancel(package_id)))
