from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import ApiError, DomainError, InvalidStateError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (InvalidStateError, 409),
    (ApiError, 502),
)


def status_for(error: DomainError) -> int:
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def json_endpoint(view):
    """Translate domain errors into ``{"error": ...}`` JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return jsonify({"error": str(e)}), status_for(e)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return jsonify({"error": "Internal server error"}), 500

    return wrapper
