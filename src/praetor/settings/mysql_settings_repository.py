from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional

from ..core.constants import GENERAL_SETTINGS_ID
from ..core.enums import Language, StartOfWeek
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, patch_assignments, to_float
from .model import GeneralSettings, UserSettings
from .repository import GeneralSettingsRepository, UserSettingsRepository


_SETTINGS_COLUMNS = (
    "full_name",
    "email",
    "daily_goal",
    "start_of_week",
    "treat_saturday_as_holiday",
    "enable_ai_insights",
    "language",
)


def _to_column(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return 1 if value else 0
    return value


def _row_to_settings(r: dict) -> UserSettings:
    return UserSettings(
        user_id=r["user_id"],
        full_name=r.get("full_name") or "",
        email=r.get("email") or "",
        daily_goal=to_float(r.get("daily_goal")),
        start_of_week=StartOfWeek(r["start_of_week"]),
        treat_saturday_as_holiday=bool(r.get("treat_saturday_as_holiday")),
        enable_ai_insights=bool(r.get("enable_ai_insights")),
        language=Language(r["language"]),
    )


class MySQLUserSettingsRepository(UserSettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: str) -> Optional[UserSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, email, daily_goal, start_of_week,
                       treat_saturday_as_holiday, enable_ai_insights, language
                FROM settings WHERE user_id=%s
                """,
                (user_id,),
            )
            r = fetchone(cur)
            return _row_to_settings(r) if r else None

    def insert_defaults(self, settings: UserSettings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO settings(user_id, full_name, email, daily_goal, start_of_week,
                                     treat_saturday_as_holiday, enable_ai_insights, language)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE user_id=user_id
                """,
                (settings.user_id, *(_to_column(getattr(settings, c)) for c in _SETTINGS_COLUMNS)),
            )

    def update(self, user_id: str, changes: Mapping[str, Any]) -> None:
        sets, params = patch_assignments({k: _to_column(v) for k, v in changes.items()}, _SETTINGS_COLUMNS)
        if not sets:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE settings SET {', '.join(sets)}, updated_at=CURRENT_TIMESTAMP WHERE user_id=%s",
                (*params, user_id),
            )


class MySQLGeneralSettingsRepository(GeneralSettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self) -> GeneralSettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT currency FROM general_settings WHERE id=%s", (GENERAL_SETTINGS_ID,))
            r = fetchone(cur)
        return GeneralSettings(currency=r["currency"]) if r else GeneralSettings()

    def save(self, settings: GeneralSettings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO general_settings(id, currency) VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE currency=VALUES(currency), updated_at=CURRENT_TIMESTAMP
                """,
                (GENERAL_SETTINGS_ID, settings.currency),
            )
