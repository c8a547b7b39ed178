from __future__ import annotations

from flask import request

from ..common.validators import require_json_object


def json_body() -> dict:
    """The request's JSON object; missing or malformed bodies are a validation error."""
    return require_json_object(request.get_json(silent=True))
