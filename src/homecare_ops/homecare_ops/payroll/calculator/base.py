from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from ...common.validators import require_non_negative
from ...core.constants import DEFAULT_OVERTIME_THRESHOLD, OVERTIME_MULTIPLIER
from ...core.enums import TimeSheetStatus
from ..model import DataAnomaly, DeductionRates, Deductions, EVVEvent, PayPeriod, TimeSheet, TimeSheetResult


def _money(value: float) -> float:
    return round(value, 2)


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll).

    Subclasses decide how many hours an EVV event contributes to a period;
    the overtime split and pay arithmetic are shared.
    """

    def __init__(self, *, rates: Optional[DeductionRates] = None, overtime_multiplier: float = OVERTIME_MULTIPLIER):
        self._rates = rates or DeductionRates()
        self._overtime_multiplier = require_non_negative(overtime_multiplier, "overtime_multiplier")

    @abstractmethod
    def worked_hours(self, event: EVVEvent, period: PayPeriod) -> tuple[float, Optional[DataAnomaly]]:
        raise NotImplementedError

    def calculate_time_sheet(
        self,
        events: Iterable[EVVEvent],
        pay_period: PayPeriod,
        hourly_rate: float,
        overtime_threshold: float = DEFAULT_OVERTIME_THRESHOLD,
        *,
        caregiver_id: int,
        overtime_rate: Optional[float] = None,
    ) -> TimeSheetResult:
        require_non_negative(hourly_rate, "hourly_rate")
        require_non_negative(overtime_threshold, "overtime_threshold")
        if overtime_rate is None:
            overtime_rate = hourly_rate * self._overtime_multiplier
        require_non_negative(overtime_rate, "overtime_rate")

        total = 0.0
        anomalies: list[DataAnomaly] = []
        for event in events:
            hours, anomaly = self.worked_hours(event, pay_period)
            if anomaly:
                anomalies.append(anomaly)
            total += hours

        regular = min(total, float(overtime_threshold))
        overtime = max(0.0, total - overtime_threshold)
        gross = _money(regular * hourly_rate + overtime * overtime_rate)
        deductions = self.deductions(gross)

        return TimeSheetResult(
            time_sheet=TimeSheet(
                caregiver_id=int(caregiver_id),
                pay_period_id=pay_period.pay_period_id,
                total_hours=total,
                regular_hours=regular,
                overtime_hours=overtime,
                hourly_rate=hourly_rate,
                overtime_rate=overtime_rate,
                gross_pay=gross,
                deductions=deductions,
                net_pay=_money(gross - deductions.total),
                status=TimeSheetStatus.CALCULATED,
            ),
            anomalies=tuple(anomalies),
        )

    def deductions(self, gross: float) -> Deductions:
        federal = _money(gross * self._rates.federal)
        state = _money(gross * self._rates.state)
        social_security = _money(gross * self._rates.social_security)
        medicare = _money(gross * self._rates.medicare)
        return Deductions(
            federal=federal,
            state=state,
            social_security=social_security,
            medicare=medicare,
            total=_money(federal + state + social_security + medicare),
        )
