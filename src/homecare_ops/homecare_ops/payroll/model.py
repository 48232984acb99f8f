from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core import constants
from ..core.enums import AnomalyKind, TimeSheetStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class EVVEvent:
    """Electronic Visit Verification check-in/check-out pair for one visit."""

    evv_id: int
    caregiver_id: int
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    appointment_id: Optional[int] = None


@dataclass(frozen=True)
class PayPeriod:
    """Half-open range ``[start, end)`` over which hours are aggregated."""

    pay_period_id: int
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.end <= self.start:
            raise ValidationError("Pay period end must be after its start")


@dataclass(frozen=True)
class DeductionRates:
    federal: float = constants.FEDERAL_TAX_RATE
    state: float = constants.STATE_TAX_RATE
    social_security: float = constants.SOCIAL_SECURITY_RATE
    medicare: float = constants.MEDICARE_RATE

    def __post_init__(self):
        for name in ("federal", "state", "social_security", "medicare"):
            if not 0 <= getattr(self, name) <= 1:
                raise ValidationError(f"{name} rate must be between 0 and 1")


@dataclass(frozen=True)
class Deductions:
    federal: float
    state: float
    social_security: float
    medicare: float
    total: float


@dataclass(frozen=True)
class TimeSheet:
    caregiver_id: int
    pay_period_id: int
    total_hours: float
    regular_hours: float
    overtime_hours: float
    hourly_rate: float
    overtime_rate: float
    gross_pay: float
    deductions: Deductions
    net_pay: float
    status: TimeSheetStatus = TimeSheetStatus.CALCULATED
    time_sheet_id: Optional[int] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None


@dataclass(frozen=True)
class DataAnomaly:
    """An EVV event excluded from totals, with the reason."""

    evv_id: int
    kind: AnomalyKind
    message: str


@dataclass(frozen=True)
class TimeSheetResult:
    time_sheet: TimeSheet
    anomalies: tuple[DataAnomaly, ...] = ()


@dataclass(frozen=True)
class PayrollSummary:
    """Pay-period totals shown on the payroll dashboard."""

    pay_period_id: int
    total_caregivers: int
    total_hours: float
    total_gross_pay: float
    total_net_pay: float
    total_deductions: float
    overtime_hours: float
    pending_approvals: int
    average_hours: float
