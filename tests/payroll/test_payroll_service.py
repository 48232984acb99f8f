from __future__ import annotations

from datetime import datetime

import pytest

from src.homecare_ops.homecare_ops.core.enums import TimeSheetStatus
from src.homecare_ops.homecare_ops.core.exceptions import InvalidStateError, NotFoundError
from src.homecare_ops.homecare_ops.payroll.service import PayrollService
from tests.fakes import InMemoryCaregivers, InMemoryEVV, InMemoryPayPeriods, InMemoryTimeSheets, make_event


@pytest.fixture
def sheets():
    return InMemoryTimeSheets()


@pytest.fixture
def service(caregiver, pay_period, sheets):
    events = [
        make_event(1, datetime(2024, 1, 2, 8, 0), datetime(2024, 1, 2, 16, 0)),
        make_event(2, datetime(2024, 1, 3, 8, 0), datetime(2024, 1, 3, 17, 0)),
        make_event(3, datetime(2024, 1, 4, 8, 0), None),
        make_event(4, datetime(2024, 1, 2, 8, 0), datetime(2024, 1, 2, 20, 0), caregiver_id=99),
    ]
    return PayrollService(
        InMemoryEVV(events),
        InMemoryCaregivers(caregiver),
        InMemoryPayPeriods(pay_period),
        sheets,
    )


def test_calculate_persists_sheet_with_anomalies(service, sheets):
    result = service.calculate_for_caregiver(caregiver_id=30, pay_period_id=5)

    assert result.time_sheet.time_sheet_id == 1
    assert result.time_sheet.total_hours == 17
    assert result.time_sheet.gross_pay == 340
    assert [a.evv_id for a in result.anomalies] == [3]
    assert sheets.get_by_id(1) == result.time_sheet


def test_recalculation_replaces_instead_of_accumulating(service, sheets):
    first = service.calculate_for_caregiver(caregiver_id=30, pay_period_id=5)
    second = service.calculate_for_caregiver(caregiver_id=30, pay_period_id=5)

    assert first == second
    assert list(sheets.by_id) == [1]


def test_approved_sheet_cannot_be_recalculated(service):
    sheet = service.calculate_for_caregiver(caregiver_id=30, pay_period_id=5).time_sheet
    approved = service.approve(time_sheet_id=sheet.time_sheet_id, approved_by=7, now=datetime(2024, 1, 16, 9, 0))

    assert approved.status == TimeSheetStatus.APPROVED
    assert approved.approved_at == datetime(2024, 1, 16, 9, 0)
    assert approved.net_pay == sheet.net_pay
    with pytest.raises(InvalidStateError):
        service.calculate_for_caregiver(caregiver_id=30, pay_period_id=5)


def test_unknown_records_raise_not_found(service):
    with pytest.raises(NotFoundError):
        service.calculate_for_caregiver(caregiver_id=12345, pay_period_id=5)
    with pytest.raises(NotFoundError):
        service.calculate_for_caregiver(caregiver_id=30, pay_period_id=12345)
    with pytest.raises(NotFoundError):
        service.approve(time_sheet_id=12345, approved_by=7)


def test_period_summary_counts_pending(service):
    service.calculate_for_caregiver(caregiver_id=30, pay_period_id=5)

    summary = service.period_summary(pay_period_id=5)

    assert summary.total_caregivers == 1
    assert summary.pending_approvals == 1
    assert summary.total_net_pay == pytest.approx(256.19)
