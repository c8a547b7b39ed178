from __future__ import annotations

from typing import Sequence

from ..access.visibility import VisibilityResolver, require_visible
from ..auth.model import Identity
from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.enums import ResourceType
from ..core.exceptions import NotFoundError
from .model import Client
from .repository import ClientRepository


class ClientService:
    def __init__(self, clients: ClientRepository, visibility: VisibilityResolver):
        self._clients = clients
        self._visibility = visibility

    def _scope(self, identity: Identity):
        return self._visibility.resolve(role=identity.role, owner_id=identity.user_id, resource=ResourceType.CLIENTS)

    def list_visible(self, identity: Identity) -> Sequence[Client]:
        return self._clients.list_visible(self._scope(identity))

    def get_visible(self, identity: Identity, client_id: str) -> Client:
        scope = self._scope(identity)
        return require_visible(self._clients.get(client_id), self._clients.get_visible(scope, client_id), "Client")

    def create(self, *, name) -> Client:
        name = require_non_empty(name, "name")
        return self._clients.create(client_id=new_id("c"), name=name)

    def delete(self, client_id: str) -> None:
        if not self._clients.delete(client_id):
            raise NotFoundError("Client not found")
