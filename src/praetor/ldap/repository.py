from __future__ import annotations

from typing import Any, Mapping, Protocol

from .model import LdapConfig


class LdapConfigRepository(Protocol):
    def load(self) -> LdapConfig:
        """Stored configuration, or the defaults when none was saved."""
        raise NotImplementedError

    def update(self, changes: Mapping[str, Any]) -> None:
        """Write the given fields, creating the row from defaults first if needed."""
        raise NotImplementedError
