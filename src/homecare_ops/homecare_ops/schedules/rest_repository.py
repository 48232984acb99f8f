from __future__ import annotations

from typing import Any, Optional, Sequence

from ..api.client import RestClient
from ..common.datetime_utils import parse_hhmm, parse_iso_date, parse_iso_datetime
from ..core.constants import DEFAULT_VISIT_MINUTES
from ..core.enums import ExceptionAction, Frequency, PackageStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import ScheduledPackage, ScheduleException, TimeOfDay
from .repository import ScheduledPackageRepository

RESOURCE = "/scheduledPackages"


def _opt_int(value: Any) -> Optional[int]:
    if value in (None, "", "none"):
        return None
    return int(value)


def from_record(r: dict) -> ScheduledPackage:
    """Map an API record (snake_case JSON) to the domain rule."""
    try:
        status = PackageStatus(r.get("status") or PackageStatus.ACTIVE.value)
    except ValueError:
        raise ValidationError(f"Unsupported package status: {r.get('status')!r}")

    exceptions = []
    for ex in r.get("exceptions") or []:
        try:
            action = ExceptionAction(ex["action"])
        except ValueError:
            raise ValidationError(f"Unsupported exception action: {ex['action']!r}")
        new_start = ex.get("new_start")
        exceptions.append(
            ScheduleException(
                date=parse_iso_date(ex["date"]),
                action=action,
                new_start=parse_iso_datetime(new_start) if new_start else None,
            )
        )

    end_date = r.get("end_date")
    return ScheduledPackage(
        scheduled_package_id=int(r["id"]),
        customer_id=int(r["customer_id"]),
        package_id=int(r["package_id"]),
        caregiver_id=_opt_int(r.get("caregiver_id", r.get("assigned_caregiver_id"))),
        frequency=Frequency.parse(r["frequency"]),
        start_date=parse_iso_date(r["start_date"]),
        end_date=parse_iso_date(end_date) if end_date else None,
        time_of_day=TimeOfDay(
            start=parse_hhmm(r.get("start_time") or "09:00"),
            duration_minutes=int(r.get("duration_minutes") or DEFAULT_VISIT_MINUTES),
        ),
        status=status,
        exceptions=tuple(exceptions),
        interval_days=_opt_int(r.get("interval_days")),
        max_occurrences=_opt_int(r.get("max_occurrences")),
    )


def to_record(rule: ScheduledPackage) -> dict:
    return {
        "id": rule.scheduled_package_id,
        "customer_id": rule.customer_id,
        "package_id": rule.package_id,
        "caregiver_id": rule.caregiver_id,
        "frequency": rule.frequency.value,
        "start_date": rule.start_date.isoformat(),
        "end_date": rule.end_date.isoformat() if rule.end_date else None,
        "start_time": rule.time_of_day.start.strftime("%H:%M"),
        "duration_minutes": rule.time_of_day.duration_minutes,
        "status": rule.status.value,
        "exceptions": [
            {
                "date": ex.date.isoformat(),
                "action": ex.action.value,
                "new_start": ex.new_start.isoformat() if ex.new_start else None,
            }
            for ex in rule.exceptions
        ],
        "interval_days": rule.interval_days,
        "max_occurrences": rule.max_occurrences,
    }


class RestScheduledPackageRepository(ScheduledPackageRepository):
    def __init__(self, client: RestClient):
        self._client = client

    def get_by_id(self, scheduled_package_id: int) -> Optional[ScheduledPackage]:
        try:
            r = self._client.get(f"{RESOURCE}/{int(scheduled_package_id)}")
        except NotFoundError:
            return None
        return from_record(r) if r else None

    def list_all(self, *, status: Optional[PackageStatus] = None) -> Sequence[ScheduledPackage]:
        params = {"status": status.value} if status else None
        rows = self._client.get(RESOURCE, params=params) or []
        return [from_record(r) for r in rows]

    def save(self, rule: ScheduledPackage) -> None:
        record = to_record(rule)
        # Only the fields the core owns; the admin screens own the rest.
        self._client.patch(
            f"{RESOURCE}/{rule.scheduled_package_id}",
            {"status": record["status"], "exceptions": record["exceptions"]},
        )
