from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .model import GeneralSettings, UserSettings


class UserSettingsRepository(Protocol):
    def get(self, user_id: str) -> Optional[UserSettings]:
        raise NotImplementedError

    def insert_defaults(self, settings: UserSettings) -> None:
        """Insert the row unless the user already has one."""
        raise NotImplementedError

    def update(self, user_id: str, changes: Mapping[str, Any]) -> None:
        """Write only the fields in ``changes`` to an existing row."""
        raise NotImplementedError


class GeneralSettingsRepository(Protocol):
    def load(self) -> GeneralSettings:
        raise NotImplementedError

    def save(self, settings: GeneralSettings) -> None:
        raise NotImplementedError
