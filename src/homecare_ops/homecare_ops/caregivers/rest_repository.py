from __future__ import annotations

from typing import Optional

from ..api.client import RestClient
from ..common.records import merge_profile
from ..core.exceptions import NotFoundError
from .model import Caregiver
from .repository import CaregiverRepository


def from_records(profile: dict, user: Optional[dict] = None) -> Caregiver:
    merged = merge_profile(user or {}, profile)
    overtime_rate = merged.get("overtime_rate")
    user_id = merged.get("user_id", profile.get("user_id"))
    return Caregiver(
        caregiver_id=int(profile["id"]),
        user_id=int(user_id) if user_id is not None else None,
        first_name=merged.get("first_name") or "",
        last_name=merged.get("last_name") or "",
        hourly_rate=float(merged.get("hourly_rate") or 0),
        overtime_rate=float(overtime_rate) if overtime_rate is not None else None,
    )


class RestCaregiverRepository(CaregiverRepository):
    def __init__(self, client: RestClient):
        self._client = client

    def get_by_id(self, caregiver_id: int) -> Optional[Caregiver]:
        try:
            profile = self._client.get(f"/caregivers/{int(caregiver_id)}")
        except NotFoundError:
            return None
        if not profile:
            return None

        user = None
        if profile.get("user_id") is not None:
            try:
                user = self._client.get(f"/users/{int(profile['user_id'])}")
            except NotFoundError:
                user = None
        return from_records(profile, user)
