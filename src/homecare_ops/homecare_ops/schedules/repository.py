from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PackageStatus
from .model import ScheduledPackage


class ScheduledPackageRepository(Protocol):
    def get_by_id(self, scheduled_package_id: int) -> Optional[ScheduledPackage]:
        raise NotImplementedError

    def list_all(self, *, status: Optional[PackageStatus] = None) -> Sequence[ScheduledPackage]:
        raise NotImplementedError

    def save(self, rule: ScheduledPackage) -> None:
        """Persist status and exceptions of an existing rule."""

        raise NotImplementedError
