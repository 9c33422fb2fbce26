from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..core.enums import PermissionModule, Role


@dataclass(frozen=True)
class NavigationEntry:
    label: str
    route: str
    icon: str
    allowed_roles: frozenset = field(default_factory=frozenset)
    permission_key: Optional[PermissionModule] = None
    notification_source: Optional[str] = None


@dataclass(frozen=True)
class NavigationCategory:
    title: str
    entries: tuple


@dataclass(frozen=True)
class VisibleEntry:
    label: str
    route: str
    icon: str
    badge: Optional[str] = None

    def to_dict(self) -> dict:
        return {"label": self.label, "route": self.route, "icon": self.icon, "badge": self.badge}


@dataclass(frozen=True)
class VisibleCategory:
    title: str
    entries: tuple

    def to_dict(self) -> dict:
        return {"title": self.title, "entries": [e.to_dict() for e in self.entries]}


def entry(
    label: str,
    route: str,
    icon: str,
    roles: Iterable[Role],
    *,
    permission: Optional[PermissionModule] = None,
    notification: Optional[str] = None,
) -> NavigationEntry:
    return NavigationEntry(
        label=label,
        route=route,
        icon=icon,
        allowed_roles=frozenset(roles),
        permission_key=permission,
        notification_source=notification,
    )


def category(title: str, *entries: NavigationEntry) -> NavigationCategory:
    return NavigationCategory(title=title, entries=tuple(entries))
