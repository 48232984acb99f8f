from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AnomalyKind
from ..model import DataAnomaly, EVVEvent, PayPeriod
from .base import PayrollCalculator


def _inside(moment: datetime, period: PayPeriod) -> bool:
    return period.start <= moment < period.end


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: (out - in), clipped to the pay period.

    Incomplete or inverted events contribute nothing and are reported.
    """

    def worked_hours(self, event: EVVEvent, period: PayPeriod) -> tuple[float, Optional[DataAnomaly]]:
        check_in, check_out = event.check_in_time, event.check_out_time

        if check_in is None and check_out is None:
            return 0.0, None
        if check_in is None:
            if not _inside(check_out, period):
                return 0.0, None
            return 0.0, DataAnomaly(event.evv_id, AnomalyKind.MISSING_CHECK_IN, "Check-out without check-in")
        if check_out is None:
            if not _inside(check_in, period):
                return 0.0, None
            return 0.0, DataAnomaly(event.evv_id, AnomalyKind.MISSING_CHECK_OUT, "Visit has no check-out yet")

        if check_out < check_in:
            # owned by the period its check-in falls in
            if not _inside(check_in, period):
                return 0.0, None
            return 0.0, DataAnomaly(
                event.evv_id,
                AnomalyKind.CHECKOUT_BEFORE_CHECKIN,
                f"Check-out {check_out.isoformat()} is before check-in {check_in.isoformat()}",
            )

        start = max(check_in, period.start)
        end = min(check_out, period.end)
        if end <= start:
            return 0.0, None
        return (end - start).total_seconds() / 3600, None
