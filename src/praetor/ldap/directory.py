"""Directory access through ldap3."""

from __future__ import annotations

import logging
import re
from typing import Any, List, Protocol, Sequence

from ldap3 import NONE, SUBTREE, Connection, Server
from ldap3.core.exceptions import LDAPException
from ldap3.utils.conv import escape_filter_chars

from ..core.exceptions import DirectoryError
from .model import DirectoryUser, LdapConfig

logger = logging.getLogger(__name__)

_FILTER_ATTR_RE = re.compile(r"\(\s*([A-Za-z][\w-]*)\s*=\s*\{0\}\s*\)")


class DirectoryClient(Protocol):
    def fetch_users(self, config: LdapConfig) -> Sequence[DirectoryUser]:
        raise NotImplementedError


def login_attribute(user_filter: str) -> str:
    """Attribute holding the login name, read from a filter like ``(uid={0})``."""
    m = _FILTER_ATTR_RE.search(user_filter)
    return m.group(1) if m else "uid"


def _first(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else ""
    if isinstance(value, bytes):
        value = value.decode("utf-8")
    return str(value or "")


def _entries(conn: Connection) -> List[dict]:
    return [r for r in (conn.response or []) if r.get("type") == "searchResEntry"]


class Ldap3DirectoryClient(DirectoryClient):
    def __init__(self, *, connect_timeout: int = 10):
        self._connect_timeout = connect_timeout

    def _connect(self, config: LdapConfig) -> Connection:
        server = Server(config.server_url, get_info=NONE, connect_timeout=self._connect_timeout)
        return Connection(server, user=config.bind_dn, password=config.bind_password, auto_bind=True)

    def fetch_users(self, config: LdapConfig) -> Sequence[DirectoryUser]:
        attr = login_attribute(config.user_filter)
        try:
            conn = self._connect(config)
        except LDAPException as exc:
            raise DirectoryError(f"LDAP bind failed: {exc}") from exc

        try:
            conn.search(
                config.base_dn,
                config.user_filter.replace("{0}", "*"),
                search_scope=SUBTREE,
                attributes=[attr, "cn", "displayName"],
            )
            found = _entries(conn)
            users: List[DirectoryUser] = []
            for entry in found:
                attrs = entry.get("attributes", {})
                username = _first(attrs.get(attr))
                if not username:
                    continue
                name = _first(attrs.get("displayName")) or _first(attrs.get("cn")) or username
                users.append(
                    DirectoryUser(username=username, name=name, groups=tuple(self._groups(conn, config, entry["dn"])))
                )
            logger.debug("LDAP search under %s returned %d users", config.base_dn, len(users))
            return users
        except LDAPException as exc:
            raise DirectoryError(f"LDAP search failed: {exc}") from exc
        finally:
            conn.unbind()

    def _groups(self, conn: Connection, config: LdapConfig, user_dn: str) -> List[str]:
        conn.search(
            config.group_base_dn,
            config.group_filter.replace("{0}", escape_filter_chars(user_dn)),
            search_scope=SUBTREE,
            attributes=["cn"],
        )
        groups: List[str] = []
        for entry in _entries(conn):
            groups.append(entry["dn"])
            cn = _first(entry.get("attributes", {}).get("cn"))
            if cn:
                groups.append(cn)
        return groups
