from __future__ import annotations

from dataclasses import replace
from datetime import datetime, time, timedelta
from typing import Optional, Sequence

from ..api.client import RestClient
from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..core.enums import TimeSheetStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Deductions, EVVEvent, PayPeriod, TimeSheet
from .repository import EVVRepository, PayPeriodRepository, TimeSheetRepository


def _opt_dt(value: Optional[str]) -> Optional[datetime]:
    return parse_iso_datetime(value) if value else None


def evv_from_record(r: dict) -> EVVEvent:
    return EVVEvent(
        evv_id=int(r["id"]),
        caregiver_id=int(r["caregiver_id"]),
        appointment_id=int(r["appointment_id"]) if r.get("appointment_id") is not None else None,
        check_in_time=_opt_dt(r.get("check_in_time")),
        check_out_time=_opt_dt(r.get("check_out_time")),
    )


def pay_period_from_record(r: dict) -> PayPeriod:
    # API dates are inclusive; the domain period is half-open.
    start = parse_iso_date(r["start_date"])
    end = parse_iso_date(r["end_date"])
    return PayPeriod(
        pay_period_id=int(r["id"]),
        start=datetime.combine(start, time.min),
        end=datetime.combine(end + timedelta(days=1), time.min),
    )


def time_sheet_from_record(r: dict) -> TimeSheet:
    d = r.get("deductions") or {}
    try:
        status = TimeSheetStatus(r.get("status") or TimeSheetStatus.CALCULATED.value)
    except ValueError:
        raise ValidationError(f"Unsupported timesheet status: {r.get('status')!r}")
    return TimeSheet(
        time_sheet_id=int(r["id"]) if r.get("id") is not None else None,
        caregiver_id=int(r["caregiver_id"]),
        pay_period_id=int(r["pay_period_id"]),
        total_hours=float(r.get("total_hours") or 0),
        regular_hours=float(r.get("regular_hours") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        hourly_rate=float(r.get("hourly_rate") or 0),
        overtime_rate=float(r.get("overtime_rate") or 0),
        gross_pay=float(r.get("gross_pay") or 0),
        deductions=Deductions(
            federal=float(d.get("federal_tax") or 0),
            state=float(d.get("state_tax") or 0),
            social_security=float(d.get("social_security") or 0),
            medicare=float(d.get("medicare") or 0),
            total=float(d.get("total") or 0),
        ),
        net_pay=float(r.get("net_pay") or 0),
        status=status,
        approved_by=int(r["approved_by"]) if r.get("approved_by") is not None else None,
        approved_at=_opt_dt(r.get("approved_at")),
    )


def time_sheet_to_record(ts: TimeSheet) -> dict:
    record = {
        "caregiver_id": ts.caregiver_id,
        "pay_period_id": ts.pay_period_id,
        "total_hours": ts.total_hours,
        "regular_hours": ts.regular_hours,
        "overtime_hours": ts.overtime_hours,
        "hourly_rate": ts.hourly_rate,
        "overtime_rate": ts.overtime_rate,
        "gross_pay": ts.gross_pay,
        "deductions": {
            "federal_tax": ts.deductions.federal,
            "state_tax": ts.deductions.state,
            "social_security": ts.deductions.social_security,
            "medicare": ts.deductions.medicare,
            "total": ts.deductions.total,
        },
        "net_pay": ts.net_pay,
        "status": ts.status.value,
        "approved_by": ts.approved_by,
        "approved_at": ts.approved_at.isoformat() if ts.approved_at else None,
    }
    if ts.time_sheet_id is not None:
        record["id"] = ts.time_sheet_id
    return record


class RestEVVRepository(EVVRepository):
    def __init__(self, client: RestClient):
        self._client = client

    def list_for_caregiver(self, caregiver_id: int) -> Sequence[EVVEvent]:
        rows = self._client.get("/evvRecords", params={"caregiver_id": int(caregiver_id)}) or []
        return [evv_from_record(r) for r in rows]


class RestPayPeriodRepository(PayPeriodRepository):
    def __init__(self, client: RestClient):
        self._client = client

    def get_by_id(self, pay_period_id: int) -> Optional[PayPeriod]:
        try:
            r = self._client.get(f"/payPeriods/{int(pay_period_id)}")
        except NotFoundError:
            return None
        return pay_period_from_record(r) if r else None


class RestTimeSheetRepository(TimeSheetRepository):
    def __init__(self, client: RestClient):
        self._client = client

    def get_by_id(self, time_sheet_id: int) -> Optional[TimeSheet]:
        try:
            r = self._client.get(f"/timeSheets/{int(time_sheet_id)}")
        except NotFoundError:
            return None
        return time_sheet_from_record(r) if r else None

    def find(self, *, caregiver_id: int, pay_period_id: int) -> Optional[TimeSheet]:
        rows = self._client.get(
            "/timeSheets",
            params={"caregiver_id": int(caregiver_id), "pay_period_id": int(pay_period_id)},
        ) or []
        return time_sheet_from_record(rows[0]) if rows else None

    def list_for_period(self, pay_period_id: int) -> Sequence[TimeSheet]:
        rows = self._client.get("/timeSheets", params={"pay_period_id": int(pay_period_id)}) or []
        return [time_sheet_from_record(r) for r in rows]

    def save(self, time_sheet: TimeSheet) -> TimeSheet:
        record = time_sheet_to_record(time_sheet)
        if time_sheet.time_sheet_id is None:
            created = self._client.post("/timeSheets", record)
            return replace(time_sheet, time_sheet_id=int(created["id"]))
        self._client.put(f"/timeSheets/{time_sheet.time_sheet_id}", record)
        return time_sheet
