"""Response envelope: ``{"success": bool, ...}``."""

from __future__ import annotations

from typing import Any

from flask import jsonify


def ok(**payload: Any):
    return jsonify({"success": True, **payload})


def fail(message: str, status: int, *, details: str | None = None):
    body: dict[str, Any] = {"success": False, "error": message}
    if details is not None:
        body["details"] = details
    response = jsonify(body)
    response.status_code = status
    return response
