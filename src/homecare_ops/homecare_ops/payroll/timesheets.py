from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Sequence

from ..core.enums import TimeSheetStatus
from ..core.exceptions import InvalidStateError
from .model import PayrollSummary, TimeSheet


def approve_time_sheet(time_sheet: TimeSheet, *, approved_by: int, approved_at: datetime) -> TimeSheet:
    """Supervisor approval; freezes the calculated values as they are."""
    if time_sheet.status != TimeSheetStatus.CALCULATED:
        raise InvalidStateError("Only a calculated timesheet can be approved")
    return replace(
        time_sheet,
        status=TimeSheetStatus.APPROVED,
        approved_by=int(approved_by),
        approved_at=approved_at,
    )


def summarize_period(pay_period_id: int, time_sheets: Sequence[TimeSheet]) -> PayrollSummary:
    sheets = [ts for ts in time_sheets if ts.pay_period_id == pay_period_id]
    total_hours = sum(ts.total_hours for ts in sheets)
    return PayrollSummary(
        pay_period_id=pay_period_id,
        total_caregivers=len(sheets),
        total_hours=total_hours,
        total_gross_pay=round(sum(ts.gross_pay for ts in sheets), 2),
        total_net_pay=round(sum(ts.net_pay for ts in sheets), 2),
        total_deductions=round(sum(ts.deductions.total for ts in sheets), 2),
        overtime_hours=sum(ts.overtime_hours for ts in sheets),
        pending_approvals=sum(1 for ts in sheets if ts.status == TimeSheetStatus.CALCULATED),
        average_hours=total_hours / len(sheets) if sheets else 0.0,
    )
