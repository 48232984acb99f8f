from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..caregivers.repository import CaregiverRepository
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_OVERTIME_THRESHOLD
from ..core.enums import TimeSheetStatus
from ..core.exceptions import InvalidStateError, NotFoundError
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollSummary, TimeSheet, TimeSheetResult
from .repository import EVVRepository, PayPeriodRepository, TimeSheetRepository
from .timesheets import approve_time_sheet, summarize_period

logger = logging.getLogger(__name__)


class PayrollService:
    def __init__(
        self,
        evv: EVVRepository,
        caregivers: CaregiverRepository,
        pay_periods: PayPeriodRepository,
        time_sheets: TimeSheetRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        overtime_threshold: float = DEFAULT_OVERTIME_THRESHOLD,
    ):
        self._evv = evv
        self._caregivers = caregivers
        self._pay_periods = pay_periods
        self._time_sheets = time_sheets
        self._calculator = calculator or StandardPayrollCalculator()
        self._overtime_threshold = overtime_threshold

    def calculate_for_caregiver(self, *, caregiver_id: int, pay_period_id: int) -> TimeSheetResult:
        """Calculate (or recalculate) a caregiver's timesheet and persist it.

        An existing calculated sheet is replaced in place; an approved one is
        frozen and cannot be recalculated.
        """
        caregiver = self._caregivers.get_by_id(int(caregiver_id))
        if not caregiver:
            raise NotFoundError(f"Caregiver {caregiver_id} does not exist")
        period = self._pay_periods.get_by_id(int(pay_period_id))
        if not period:
            raise NotFoundError(f"Pay period {pay_period_id} does not exist")

        existing = self._time_sheets.find(caregiver_id=caregiver.caregiver_id, pay_period_id=period.pay_period_id)
        if existing and existing.status == TimeSheetStatus.APPROVED:
            raise InvalidStateError("Timesheet is already approved")

        result = self._calculator.calculate_time_sheet(
            self._evv.list_for_caregiver(caregiver.caregiver_id),
            period,
            caregiver.hourly_rate,
            self._overtime_threshold,
            caregiver_id=caregiver.caregiver_id,
            overtime_rate=caregiver.overtime_rate,
        )
        for anomaly in result.anomalies:
            logger.warning(
                "Caregiver %s, EVV %s excluded (%s): %s",
                caregiver.caregiver_id,
                anomaly.evv_id,
                anomaly.kind.value,
                anomaly.message,
            )

        sheet = result.time_sheet
        if existing:
            sheet = replace(sheet, time_sheet_id=existing.time_sheet_id)
        saved = self._time_sheets.save(sheet)
        logger.info(
            "Timesheet %s calculated: caregiver=%s period=%s hours=%.2f gross=%.2f",
            saved.time_sheet_id,
            saved.caregiver_id,
            saved.pay_period_id,
            saved.total_hours,
            saved.gross_pay,
        )
        return replace(result, time_sheet=saved)

    def approve(self, *, time_sheet_id: int, approved_by: int, now: Optional[datetime] = None) -> TimeSheet:
        sheet = self._time_sheets.get_by_id(int(time_sheet_id))
        if not sheet:
            raise NotFoundError(f"Timesheet {time_sheet_id} does not exist")

        approved = approve_time_sheet(sheet, approved_by=approved_by, approved_at=now or now_local())
        saved = self._time_sheets.save(approved)
        logger.info("Timesheet %s approved by %s", time_sheet_id, approved_by)
        return saved

    def period_summary(self, *, pay_period_id: int) -> PayrollSummary:
        return summarize_period(int(pay_period_id), self._time_sheets.list_for_period(int(pay_period_id)))
