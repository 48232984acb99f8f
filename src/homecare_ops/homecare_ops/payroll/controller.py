from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..api.errors import json_endpoint
from ..common.formatting import format_currency, format_hours
from ..core.exceptions import ValidationError
from ..container import Container
from .model import TimeSheet


def time_sheet_to_dict(ts: TimeSheet) -> dict:
    return {
        "id": ts.time_sheet_id,
        "caregiver_id": ts.caregiver_id,
        "pay_period_id": ts.pay_period_id,
        "total_hours": ts.total_hours,
        "regular_hours": ts.regular_hours,
        "overtime_hours": ts.overtime_hours,
        "hourly_rate": ts.hourly_rate,
        "overtime_rate": ts.overtime_rate,
        "gross_pay": ts.gross_pay,
        "deductions": asdict(ts.deductions),
        "net_pay": ts.net_pay,
        "status": ts.status.value,
        "approved_by": ts.approved_by,
        "approved_at": ts.approved_at.isoformat() if ts.approved_at else None,
        "display": {
            "total_hours": format_hours(ts.total_hours),
            "gross_pay": format_currency(ts.gross_pay),
            "net_pay": format_currency(ts.net_pay),
        },
    }


def _int_field(body: dict, name: str) -> int:
    try:
        return int(body[name])
    except (KeyError, TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer")


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.post("/api/payroll/time-sheets/calculate", endpoint="payroll_calculate")
    @json_endpoint
    def payroll_calculate():
        body = request.get_json(silent=True) or {}
        result = service.calculate_for_caregiver(
            caregiver_id=_int_field(body, "caregiver_id"),
            pay_period_id=_int_field(body, "pay_period_id"),
        )
        return jsonify(
            {
                "time_sheet": time_sheet_to_dict(result.time_sheet),
                "anomalies": [
                    {"evv_id": a.evv_id, "kind": a.kind.value, "message": a.message} for a in result.anomalies
                ],
            }
        )

    @app.post("/api/payroll/time-sheets/<int:time_sheet_id>/approve", endpoint="payroll_approve")
    @json_endpoint
    def payroll_approve(time_sheet_id: int):
        body = request.get_json(silent=True) or {}
        sheet = service.approve(time_sheet_id=time_sheet_id, approved_by=_int_field(body, "approved_by"))
        return jsonify(time_sheet_to_dict(sheet))

    @app.get("/api/payroll/pay-periods/<int:pay_period_id>/summary", endpoint="payroll_summary")
    @json_endpoint
    def payroll_summary(pay_period_id: int):
        return jsonify(asdict(service.period_summary(pay_period_id=pay_period_id)))
