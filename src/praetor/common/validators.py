from __future__ import annotations

import math
from datetime import date
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_iso_datetime


def require_json_object(body: Any) -> dict:
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required", field_name)
    return value.strip()


def optional_non_empty(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    return require_non_empty(value, field_name)


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string", field_name)
    return value


def _as_number(value: Any, field_name: str) -> float:
    # bool is an int subclass; "true" is not a quantity.
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number", field_name)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValidationError(f"{field_name} must be a number", field_name)
    if not isinstance(value, (int, float)):
        raise ValidationError(f"{field_name} must be a number", field_name)
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a number", field_name)
    return number


def parse_positive_number(value: Any, field_name: str) -> float:
    number = _as_number(value, field_name)
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than 0", field_name)
    return number


def parse_non_negative_number(value: Any, field_name: str) -> float:
    number = _as_number(value, field_name)
    if number < 0:
        raise ValidationError(f"{field_name} must be greater than or equal to 0", field_name)
    return number


def optional_non_negative_number(value: Any, field_name: str) -> Optional[float]:
    if value is None:
        return None
    return parse_non_negative_number(value, field_name)


def optional_bool(value: Any, field_name: str) -> Optional[bool]:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean", field_name)
    return value


def require_id_list(value: Any, field_name: str) -> list[str]:
    """Validate a list of ids, dropping repeats but keeping first-seen order."""
    if not isinstance(value, list):
        raise ValidationError(f"{field_name} must be an array", field_name)
    out: list[str] = []
    for i, item in enumerate(value):
        item_id = require_non_empty(item, f"{field_name}[{i}]")
        if item_id not in out:
            out.append(item_id)
    return out


def optional_id_list(value: Any, field_name: str) -> Optional[list[str]]:
    if value is None:
        return None
    return require_id_list(value, field_name)


def require_iso_date(value: Any, field_name: str) -> date:
    """Accept YYYY-MM-DD, or a full ISO timestamp whose date part is taken."""
    text = require_non_empty(value, field_name)
    try:
        if len(text) == 10:
            return parse_iso_date(text)
        if len(text) > 10 and text[10] == "T":
            return parse_iso_datetime(text).date()
    except ValueError:
        pass
    raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)", field_name)


def optional_iso_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    return require_iso_date(value, field_name)
