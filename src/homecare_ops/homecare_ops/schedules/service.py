from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_UPCOMING_LIMIT
from ..core.enums import ExceptionAction, PackageStatus
from ..core.exceptions import NotFoundError, ValidationError
from . import rules
from .expander import get_occurrences, month_occurrences, next_occurrences
from .model import Occurrence, ScheduledPackage
from .repository import ScheduledPackageRepository

logger = logging.getLogger(__name__)


class ScheduledPackageService:
    def __init__(self, packages: ScheduledPackageRepository):
        self._packages = packages

    def get(self, scheduled_package_id: int) -> ScheduledPackage:
        rule = self._packages.get_by_id(int(scheduled_package_id))
        if not rule:
            raise NotFoundError(f"Scheduled package {scheduled_package_id} does not exist")
        return rule

    def list_packages(self, *, status: Optional[PackageStatus | str] = None) -> list[ScheduledPackage]:
        if status is not None:
            try:
                status = PackageStatus(status)
            except ValueError:
                raise ValidationError(f"Unknown package status: {status!r}")
        return list(self._packages.list_all(status=status))

    def get_occurrences(self, scheduled_package_id: int, *, start: date, end: date) -> list[Occurrence]:
        return get_occurrences(self.get(scheduled_package_id), start, end)

    def month_preview(self, scheduled_package_id: int, *, year: int, month: int) -> list[Occurrence]:
        return month_occurrences(self.get(scheduled_package_id), year, month)

    def upcoming(
        self,
        scheduled_package_id: int,
        *,
        after: Optional[datetime] = None,
        limit: int = DEFAULT_UPCOMING_LIMIT,
    ) -> list[Occurrence]:
        return next_occurrences(self.get(scheduled_package_id), after or now_local(), int(limit))

    def add_exception(
        self,
        scheduled_package_id: int,
        *,
        day: date,
        action: ExceptionAction | str,
        new_start: Optional[datetime] = None,
    ) -> ScheduledPackage:
        updated = rules.add_exception(self.get(scheduled_package_id), day, action, new_start)
        self._packages.save(updated)
        logger.info("Package %s: %s exception on %s", scheduled_package_id, updated.exception_for(day).action.value, day)
        return updated

    def remove_exception(self, scheduled_package_id: int, *, day: date) -> ScheduledPackage:
        updated = rules.remove_exception(self.get(scheduled_package_id), day)
        self._packages.save(updated)
        logger.info("Package %s: exception on %s removed", scheduled_package_id, day)
        return updated

    def pause(self, scheduled_package_id: int) -> ScheduledPackage:
        return self._apply(scheduled_package_id, rules.pause)

    def resume(self, scheduled_package_id: int) -> ScheduledPackage:
        return self._apply(scheduled_package_id, rules.resume)

    def cancel(self, scheduled_package_id: int) -> ScheduledPackage:
        return self._apply(scheduled_package_id, rules.cancel)

    def _apply(self, scheduled_package_id: int, transition) -> ScheduledPackage:
        current = self.get(scheduled_package_id)
        updated = transition(current)
        self._packages.save(updated)
        logger.info("Package %s: %s -> %s", scheduled_package_id, current.status.value, updated.status.value)
        return updated
