"""Helpers for the plain JSON records exchanged with the REST API."""

from __future__ import annotations

from typing import Any, Mapping

# Fields that identify the account; a profile overlay never changes them.
IDENTITY_FIELDS = frozenset({"id", "user_id", "email", "role"})


def merge_profile(user: Mapping[str, Any], profile: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay a caregiver/customer profile on its user record.

    Precedence, field by field:

    1. identity fields (``IDENTITY_FIELDS``) always come from ``user``;
    2. other fields come from ``profile`` when present and not ``None``;
    3. otherwise the ``user`` value is kept.

    The profile's own primary key is preserved as ``profile_id``.
    Neither input is modified.
    """
    merged: dict[str, Any] = dict(user)
    for key, value in profile.items():
        if key in IDENTITY_FIELDS or value is None:
            continue
        merged[key] = value
    if "id" in profile:
        merged["profile_id"] = profile["id"]
    if "user_id" not in merged and "id" in user:
        merged["user_id"] = user["id"]
    return merged
