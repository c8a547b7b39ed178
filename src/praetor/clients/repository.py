from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..access.visibility import Scope
from .model import Client


class ClientRepository(Protocol):
    def list_visible(self, scope: Scope) -> Sequence[Client]:
        raise NotImplementedError

    def get(self, client_id: str) -> Optional[Client]:
        raise NotImplementedError

    def get_visible(self, scope: Scope, client_id: str) -> Optional[Client]:
        raise NotImplementedError

    def create(self, *, client_id: str, name: str) -> Client:
        raise NotImplementedError

    def delete(self, client_id: str) -> bool:
        raise NotImplementedError
