from __future__ import annotations

import logging
import secrets
from typing import Any, Iterable, List, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.ids import new_id
from ..common.validators import optional_bool, optional_text, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..users.avatar import avatar_initials
from ..users.repository import UserRepository
from ..users.service import parse_role
from .directory import DirectoryClient
from .model import DirectoryUser, LdapConfig, RoleMapping, SyncStats
from .repository import LdapConfigRepository

logger = logging.getLogger(__name__)

_TEXT_FIELDS = {
    "serverUrl": "server_url",
    "baseDn": "base_dn",
    "bindDn": "bind_dn",
    "bindPassword": "bind_password",
    "userFilter": "user_filter",
    "groupBaseDn": "group_base_dn",
    "groupFilter": "group_filter",
}


def parse_role_mappings(value: Any) -> Optional[List[RoleMapping]]:
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValidationError("roleMappings must be an array", "roleMappings")
    mappings: List[RoleMapping] = []
    for i, raw in enumerate(value):
        path = f"roleMappings[{i}]"
        if not isinstance(raw, dict):
            raise ValidationError(f"{path} must be an object", path)
        try:
            role = parse_role(raw.get("role"))
        except ValidationError:
            raise ValidationError(f"{path}.role must be one of admin, manager, user", f"{path}.role")
        mappings.append(RoleMapping(ldap_group=require_non_empty(raw.get("ldapGroup"), f"{path}.ldapGroup"), role=role))
    return mappings


def resolve_role(groups: Iterable[str], mappings: Sequence[RoleMapping]) -> Role:
    """Highest role among the mappings matching any of ``groups``; plain user otherwise."""
    member_of = {g.lower() for g in groups}
    best = Role.USER
    for mapping in mappings:
        if mapping.ldap_group.lower() in member_of and mapping.role.rank > best.rank:
            best = mapping.role
    return best


class LdapService:
    """Directory configuration and user synchronization.

    The configuration is an immutable value: callers load it explicitly
    (``load_config``) and hand it to ``sync_users``. Saving a new
    configuration returns the reloaded value.
    """

    def __init__(self, config_repo: LdapConfigRepository, users: UserRepository, directory: DirectoryClient):
        self._config_repo = config_repo
        self._users = users
        self._directory = directory

    def load_config(self) -> LdapConfig:
        return self._config_repo.load()

    def update_config(self, payload: dict) -> LdapConfig:
        patch: dict = {}
        enabled = optional_bool(payload.get("enabled"), "enabled")
        if enabled is not None:
            patch["enabled"] = enabled
        for key, attr in _TEXT_FIELDS.items():
            value = optional_text(payload.get(key), key)
            if value is not None:
                patch[attr] = value
        mappings = parse_role_mappings(payload.get("roleMappings"))
        if mappings is not None:
            patch["role_mappings"] = tuple(mappings)

        self._config_repo.update(patch)
        return self.load_config()

    def _apply(self, entry: DirectoryUser, role: Role) -> str:
        existing = self._users.get_by_username(entry.username)
        if existing is None:
            self._users.create_user(
                user_id=new_id("u"),
                name=entry.name,
                username=entry.username,
                # Directory accounts cannot log in with a local password.
                password_hash=generate_password_hash(secrets.token_urlsafe(32)),
                role=role,
                avatar_initials=avatar_initials(entry.name),
            )
            return "created"
        if existing.name != entry.name or existing.role != role:
            self._users.update_profile(
                existing.user_id,
                name=entry.name,
                role=role,
                avatar_initials=avatar_initials(entry.name),
            )
            return "updated"
        return "unchanged"

    def sync_users(self, config: Optional[LdapConfig] = None) -> SyncStats:
        config = config if config is not None else self.load_config()
        if not config.enabled:
            raise ValidationError("LDAP sync is disabled")

        entries = self._directory.fetch_users(config)
        outcomes = [self._apply(e, resolve_role(e.groups, config.role_mappings)) for e in entries]
        stats = SyncStats(
            synced=len(entries),
            created=outcomes.count("created"),
            updated=outcomes.count("updated"),
        )
        logger.info(
            "LDAP sync from %s: %d synced, %d created, %d updated",
            config.server_url,
            stats.synced,
            stats.created,
            stats.updated,
        )
        return stats
