from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import jsonify, request

from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def json_endpoint(view):
    """Turn domain errors into ``{"error": ...}`` responses with their status code."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            if e.status_code >= 500:
                logger.error("%s %s failed: %s", request.method, request.path, e)
            return jsonify({"error": str(e)}), e.status_code
        except Exception:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            return jsonify({"error": "Internal server error"}), 500

    return wrapper
