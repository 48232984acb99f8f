from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .api.client import RestClient
from .caregivers.rest_repository import RestCaregiverRepository
from .core import constants
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.model import DeductionRates
from .payroll.rest_repository import RestEVVRepository, RestPayPeriodRepository, RestTimeSheetRepository
from .payroll.service import PayrollService
from .schedules.rest_repository import RestScheduledPackageRepository
from .schedules.service import ScheduledPackageService


@dataclass(frozen=True)
class Container:
    schedule_service: ScheduledPackageService
    payroll_service: PayrollService
    client: Optional[RestClient] = None

    def close(self) -> None:
        if self.client is not None:
            self.client.close()


def build_container(*, settings: Mapping[str, Any]) -> Container:
    client = RestClient(
        str(settings.get("API_BASE_URL")),
        timeout=float(settings.get("API_TIMEOUT_SECONDS", constants.DEFAULT_API_TIMEOUT_SECONDS)),
    )

    calculator = StandardPayrollCalculator(
        rates=DeductionRates(
            federal=float(settings.get("FEDERAL_TAX_RATE", constants.FEDERAL_TAX_RATE)),
            state=float(settings.get("STATE_TAX_RATE", constants.STATE_TAX_RATE)),
            social_security=float(settings.get("SOCIAL_SECURITY_RATE", constants.SOCIAL_SECURITY_RATE)),
            medicare=float(settings.get("MEDICARE_RATE", constants.MEDICARE_RATE)),
        ),
        overtime_multiplier=float(settings.get("OVERTIME_MULTIPLIER", constants.OVERTIME_MULTIPLIER)),
    )

    schedule_service = ScheduledPackageService(RestScheduledPackageRepository(client))
    payroll_service = PayrollService(
        RestEVVRepository(client),
        RestCaregiverRepository(client),
        RestPayPeriodRepository(client),
        RestTimeSheetRepository(client),
        calculator=calculator,
        overtime_threshold=float(settings.get("OVERTIME_THRESHOLD", constants.DEFAULT_OVERTIME_THRESHOLD)),
    )

    return Container(schedule_service=schedule_service, payroll_service=payroll_service, client=client)
