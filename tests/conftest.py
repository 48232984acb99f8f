from __future__ import annotations

from datetime import datetime

import pytest

from src.homecare_ops.homecare_ops.caregivers.model import Caregiver
from src.homecare_ops.homecare_ops.payroll.model import PayPeriod
from src.homecare_ops.homecare_ops.schedules.model import ScheduledPackage
from tests.fakes import make_rule


@pytest.fixture
def weekly_rule() -> ScheduledPackage:
    return make_rule()


@pytest.fixture
def pay_period() -> PayPeriod:
    return PayPeriod(pay_period_id=5, start=datetime(2024, 1, 1), end=datetime(2024, 1, 15))


@pytest.fixture
def caregiver() -> Caregiver:
    return Caregiver(caregiver_id=30, user_id=300, first_name="Ana", last_name="Silva", hourly_rate=20.0)
