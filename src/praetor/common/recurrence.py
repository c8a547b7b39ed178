"""Task recurrence patterns.

Stored patterns are either a plain frequency (``daily``, ``weekly``,
``monthly``) or a custom monthly rule ``monthly:<first|last>:<weekday>``
where weekday is 0 (Sunday) to 6 (Saturday).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import ValidationError

SIMPLE_PATTERNS = ("daily", "weekly", "monthly")

_CUSTOM_RE = re.compile(r"^monthly:(first|last):([0-6])$")


@dataclass(frozen=True)
class MonthlyRule:
    occurrence: str
    weekday: int

    def __str__(self) -> str:
        return f"monthly:{self.occurrence}:{self.weekday}"


def parse_monthly_rule(pattern: str) -> Optional[MonthlyRule]:
    m = _CUSTOM_RE.match(pattern)
    if not m:
        return None
    return MonthlyRule(occurrence=m.group(1), weekday=int(m.group(2)))


def validate_pattern(value, field_name: str = "recurrencePattern") -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string", field_name)
    pattern = value.strip()
    if pattern in SIMPLE_PATTERNS or parse_monthly_rule(pattern):
        return pattern
    raise ValidationError(
        f"{field_name} must be daily, weekly, monthly or monthly:<first|last>:<0-6>",
        field_name,
    )
