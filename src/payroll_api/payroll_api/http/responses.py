from __future__ import annotations

from typing import Any, Optional

from flask import jsonify

from ..common.pagination import Page


def api_response(status_code: int, success: bool, message: str, data: Any = None, **extra: Any):
    """Standard envelope: {status_code, success, message, data?, ...extra}."""
    body: dict[str, Any] = {"status_code": status_code, "success": success, "message": message}
    if data is not None:
        body["data"] = data
    body.update(extra)
    resp = jsonify(body)
    resp.status_code = status_code
    return resp


def success(message: str, data: Any = None, **extra: Any):
    return api_response(200, True, message, data, **extra)


def created(message: str, data: Any = None, **extra: Any):
    return api_response(201, True, message, data, **extra)


def error(status_code: int, message: str, errors: Optional[dict] = None):
    extra = {"errors": errors} if errors else {}
    return api_response(status_code, False, message, **extra)


def paginated(page: Page, items: list):
    return success("Data retrieved successfully", items, pagination=page.meta())
