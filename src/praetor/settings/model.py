from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_CURRENCY, DEFAULT_DAILY_GOAL
from ..core.enums import Language, StartOfWeek


@dataclass(frozen=True)
class UserSettings:
    user_id: str
    full_name: str
    email: str
    daily_goal: float = float(DEFAULT_DAILY_GOAL)
    start_of_week: StartOfWeek = StartOfWeek.MONDAY
    treat_saturday_as_holiday: bool = True
    enable_ai_insights: bool = False
    language: Language = Language.EN

    def to_dict(self) -> dict:
        return {
            "fullName": self.full_name,
            "email": self.email,
            "dailyGoal": self.daily_goal,
            "startOfWeek": self.start_of_week.value,
            "treatSaturdayAsHoliday": self.treat_saturday_as_holiday,
            "enableAiInsights": self.enable_ai_insights,
            "language": self.language.value,
        }


@dataclass(frozen=True)
class GeneralSettings:
    currency: str = DEFAULT_CURRENCY

    def to_dict(self) -> dict:
        return {"currency": self.currency}
