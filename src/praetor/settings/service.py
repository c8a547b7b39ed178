from __future__ import annotations

from typing import Any

from ..auth.model import Identity
from ..common.validators import optional_bool, optional_non_negative_number, optional_text, require_non_empty
from ..core.enums import Language, StartOfWeek
from ..core.exceptions import ValidationError
from .model import GeneralSettings, UserSettings
from .repository import GeneralSettingsRepository, UserSettingsRepository

MAX_DAILY_GOAL = 24


def _optional_choice(value: Any, enum_cls, field_name: str):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of {allowed}", field_name)


class UserSettingsService:
    """Per-user preferences; a row with defaults is created on first read."""

    def __init__(self, settings: UserSettingsRepository):
        self._settings = settings

    def get_or_create(self, identity: Identity) -> UserSettings:
        current = self._settings.get(identity.user_id)
        if current is None:
            current = UserSettings(
                user_id=identity.user_id,
                full_name=identity.name,
                email=f"{identity.username}@example.com",
            )
            self._settings.insert_defaults(current)
            current = self._settings.get(identity.user_id) or current
        return current

    def update(self, identity: Identity, payload: dict) -> UserSettings:
        full_name = optional_text(payload.get("fullName"), "fullName")
        email = optional_text(payload.get("email"), "email")
        daily_goal = optional_non_negative_number(payload.get("dailyGoal"), "dailyGoal")
        if daily_goal is not None and daily_goal > MAX_DAILY_GOAL:
            raise ValidationError(f"dailyGoal must be between 0 and {MAX_DAILY_GOAL}", "dailyGoal")
        start_of_week = _optional_choice(payload.get("startOfWeek"), StartOfWeek, "startOfWeek")
        treat_saturday = optional_bool(payload.get("treatSaturdayAsHoliday"), "treatSaturdayAsHoliday")
        ai_insights = optional_bool(payload.get("enableAiInsights"), "enableAiInsights")
        language = _optional_choice(payload.get("language"), Language, "language")

        current = self.get_or_create(identity)
        changes = {
            "full_name": full_name,
            "email": email,
            "daily_goal": daily_goal,
            "start_of_week": start_of_week,
            "treat_saturday_as_holiday": treat_saturday,
            "enable_ai_insights": ai_insights,
            "language": language,
        }
        self._settings.update(identity.user_id, {k: v for k, v in changes.items() if v is not None})
        return self._settings.get(identity.user_id) or current


class GeneralSettingsService:
    """Application-wide settings.

    ``load`` always reads the store and hands back an immutable value, so
    callers never observe a stale process-level copy.
    """

    def __init__(self, settings: GeneralSettingsRepository):
        self._settings = settings

    def load(self) -> GeneralSettings:
        return self._settings.load()

    def update(self, payload: dict) -> GeneralSettings:
        currency = require_non_empty(payload.get("currency"), "currency")
        self._settings.save(GeneralSettings(currency=currency))
        return self.load()
