from __future__ import annotations

from typing import Optional, Protocol

from .model import Caregiver


class CaregiverRepository(Protocol):
    def get_by_id(self, caregiver_id: int) -> Optional[Caregiver]:
        raise NotImplementedError
