from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from ..core.enums import Role


@dataclass(frozen=True)
class RoleMapping:
    ldap_group: str
    role: Role

    def to_dict(self) -> dict:
        return {"ldapGroup": self.ldap_group, "role": self.role.value}


@dataclass(frozen=True)
class LdapConfig:
    enabled: bool = False
    server_url: str = "ldap://ldap.example.com:389"
    base_dn: str = "dc=example,dc=com"
    bind_dn: str = "cn=read-only-admin,dc=example,dc=com"
    bind_password: str = ""
    user_filter: str = "(uid={0})"
    group_base_dn: str = "ou=groups,dc=example,dc=com"
    group_filter: str = "(member={0})"
    role_mappings: Tuple[RoleMapping, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "serverUrl": self.server_url,
            "baseDn": self.base_dn,
            "bindDn": self.bind_dn,
            "bindPassword": self.bind_password,
            "userFilter": self.user_filter,
            "groupBaseDn": self.group_base_dn,
            "groupFilter": self.group_filter,
            "roleMappings": [m.to_dict() for m in self.role_mappings],
        }


@dataclass(frozen=True)
class DirectoryUser:
    """One account as read from the directory, with the groups it belongs to."""

    username: str
    name: str
    groups: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SyncStats:
    synced: int = 0
    created: int = 0
    updated: int = 0

    def to_dict(self) -> dict:
        return {"synced": self.synced, "created": self.created, "updated": self.updated}
