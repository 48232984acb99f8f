from __future__ import annotations

from datetime import datetime

from src.homecare_ops.homecare_ops.core.enums import TimeSheetStatus
from src.homecare_ops.homecare_ops.payroll.rest_repository import (
    RestTimeSheetRepository,
    evv_from_record,
    pay_period_from_record,
    time_sheet_from_record,
)


class RecordingClient:
    def __init__(self):
        self.calls = []

    def post(self, path, payload):
        self.calls.append(("POST", path, payload))
        return {**payload, "id": 41}

    def put(self, path, payload):
        self.calls.append(("PUT", path, payload))
        return payload


def test_pay_period_end_date_is_inclusive():
    period = pay_period_from_record({"id": 5, "start_date": "2024-01-01", "end_date": "2024-01-14"})

    assert period.start == datetime(2024, 1, 1)
    assert period.end == datetime(2024, 1, 15)


def test_evv_record_parses_utc_timestamps_and_open_visits():
    event = evv_from_record(
        {"id": 3, "caregiver_id": 30, "appointment_id": 8, "check_in_time": "2024-01-02T08:00:00.000Z", "check_out_time": None}
    )

    assert event.check_in_time == datetime(2024, 1, 2, 8, 0)
    assert event.check_out_time is None
    assert event.appointment_id == 8


def test_time_sheet_record_uses_api_deduction_names():
    ts = time_sheet_from_record(
        {
            "id": 2,
            "caregiver_id": 30,
            "pay_period_id": 5,
            "total_hours": 17,
            "gross_pay": 340,
            "deductions": {"federal_tax": 40.8, "state_tax": 17, "social_security": 21.08, "medicare": 4.93, "total": 83.81},
            "net_pay": 256.19,
            "status": "approved",
            "approved_at": "2024-01-16T09:00:00",
        }
    )

    assert ts.deductions.federal == 40.8
    assert ts.deductions.state == 17
    assert ts.status == TimeSheetStatus.APPROVED
    assert ts.approved_at == datetime(2024, 1, 16, 9, 0)


def test_save_posts_new_sheets_and_puts_existing_ones():
    client = RecordingClient()
    repo = RestTimeSheetRepository(client)
    draft = time_sheet_from_record({"caregiver_id": 30, "pay_period_id": 5})

    created = repo.save(draft)
    repo.save(created)

    assert created.time_sheet_id == 41
    assert [(m, p) for m, p, _ in client.calls] == [("POST", "/timeSheets"), ("PUT", "/timeSheets/41")]
    assert "id" not in client.calls[0][2]
