from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EVVEvent, PayPeriod, TimeSheet


class EVVRepository(Protocol):
    def list_for_caregiver(self, caregiver_id: int) -> Sequence[EVVEvent]:
        raise NotImplementedError


class PayPeriodRepository(Protocol):
    def get_by_id(self, pay_period_id: int) -> Optional[PayPeriod]:
        raise NotImplementedError


class TimeSheetRepository(Protocol):
    def get_by_id(self, time_sheet_id: int) -> Optional[TimeSheet]:
        raise NotImplementedError

    def find(self, *, caregiver_id: int, pay_period_id: int) -> Optional[TimeSheet]:
        raise NotImplementedError

    def list_for_period(self, pay_period_id: int) -> Sequence[TimeSheet]:
        raise NotImplementedError

    def save(self, time_sheet: TimeSheet) -> TimeSheet:
        """Create or replace; returns the sheet with its time_sheet_id set."""

        raise NotImplementedError
