from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Caregiver:
    """Caregiver profile merged with its user account."""

    caregiver_id: int
    user_id: Optional[int]
    first_name: str
    last_name: str
    hourly_rate: float
    overtime_rate: Optional[float] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
