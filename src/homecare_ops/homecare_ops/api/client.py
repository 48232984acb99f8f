from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_API_TIMEOUT_SECONDS
from ..core.exceptions import ApiError, NotFoundError

logger = logging.getLogger(__name__)


class RestClient:
    """JSON client for the back-office REST API.

    Owns one ``requests.Session``; call ``close()`` (or use it as a context
    manager) when the owning app shuts down.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_API_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = float(timeout)
        self._session = session or requests.Session()
        self._session.headers.setdefault("Accept", "application/json")

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def get(self, path: str, *, params: Optional[dict] = None) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: str, payload: dict) -> Any:
        return self._request("POST", path, json=payload)

    def put(self, path: str, payload: dict) -> Any:
        return self._request("PUT", path, json=payload)

    def patch(self, path: str, payload: dict) -> Any:
        return self._request("PATCH", path, json=payload)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            resp = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise ApiError(f"Could not reach API: {e}") from e

        if resp.status_code == 404:
            raise NotFoundError(f"Not found: {path}")
        if not resp.ok:
            logger.error("%s %s answered %s", method, url, resp.status_code)
            raise ApiError(f"API answered {resp.status_code} for {method} {path}", status_code=resp.status_code)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(f"API returned invalid JSON for {method} {path}") from e
