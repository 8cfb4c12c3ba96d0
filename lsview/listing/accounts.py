"""Owner and group name resolution with cached fallback tables.

``load_accounts`` snapshots the platform account databases once at startup;
the resulting :class:`Accounts` value is read-only and safe to share.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

try:
    import grp
    import pwd
except ImportError:  # Windows has no POSIX account databases.
    grp = None
    pwd = None


@dataclass(frozen=True)
class Accounts:
    """Read-only uid → user name and gid → group name tables."""

    users: Mapping[int, str] = field(default_factory=dict)
    groups: Mapping[int, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "users", MappingProxyType(dict(self.users)))
        object.__setattr__(self, "groups", MappingProxyType(dict(self.groups)))


def load_accounts() -> Accounts:
    """Snapshot every known user and group name."""
    users: dict[int, str] = {}
    groups: dict[int, str] = {}
    if pwd is not None:
        for record in pwd.getpwall():
            users.setdefault(record.pw_uid, record.pw_name)
    if grp is not None:
        for record in grp.getgrall():
            groups.setdefault(record.gr_gid, record.gr_name)
    return Accounts(users=users, groups=groups)


def lookup_user_name(uid: int) -> str | None:
    """Ask the live account database for ``uid``; ``None`` when unavailable."""
    if pwd is None:
        return None
    try:
        return pwd.getpwuid(uid).pw_name
    except (KeyError, OverflowError):
        return None


def resolve_owner(uid: int, accounts: Accounts) -> str:
    """Live lookup first, then the cached table, then the numeric uid."""
    name = lookup_user_name(uid)
    if name:
        return name
    name = accounts.users.get(uid)
    if name:
        return name
    return str(uid)


def resolve_group(gid: int, accounts: Accounts) -> str:
    """Cached table only, then the numeric gid."""
    name = accounts.groups.get(gid)
    if name:
        return name
    return str(gid)


__all__ = [
    "Accounts",
    "load_accounts",
    "lookup_user_name",
    "resolve_owner",
    "resolve_group",
]
