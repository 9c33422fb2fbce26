from __future__ import annotations

from typing import Callable, Iterable, Optional

from ..access.predicate import can_access, is_superuser
from ..core.constants import ORGANIZATION_ADMIN_LABEL, ORGANIZATION_MEMBER_LABEL, ORGANIZATION_ROUTE
from ..core.enums import Role
from ..users.model import Principal
from .badges import format_badge
from .catalog import NAVIGATION_MODEL
from .model import NavigationCategory, NavigationEntry, VisibleCategory, VisibleEntry

# notification source -> current count
BadgeLookup = Callable[[str], int]

ROLE_DISPLAY_NAMES = {
    Role.HR_ADMIN: "HR Administrator",
    Role.BRANCH_MANAGER: "Branch Manager",
    Role.TEAM_LEAD: "Team Lead",
    Role.EMPLOYEE: "Employee",
    Role.LOGISTICS_MANAGER: "Logistics Manager",
    Role.DEPARTMENT_HEAD: "Department Head",
    Role.PROJECT_MANAGER: "Project Manager",
    Role.STUDIO_MANAGER: "Studio Manager",
    Role.SOCIAL_MEDIA_MANAGER: "Social Media Manager",
    Role.CONTENT_CREATOR: "Content Creator",
    Role.CONTENT_EDITOR: "Content Editor",
    Role.SOCIAL_MEDIA_SPECIALIST: "Social Media Specialist",
    Role.CREATIVE_DIRECTOR: "Creative Director",
    Role.ADMIN: "System Administrator",
}


def role_display_name(role) -> str:
    if not role:
        return "Employee"
    parsed = Role.parse(role)
    if parsed is None:
        return str(getattr(role, "value", role))
    return ROLE_DISPLAY_NAMES.get(parsed, parsed.value)


def resolve_label(item: NavigationEntry, principal: Optional[Principal]) -> str:
    # The organization screen is the only entry whose label depends on who is looking.
    if item.route != ORGANIZATION_ROUTE:
        return item.label
    is_hr = principal is not None and (
        Role.parse(getattr(principal, "role", None)) == Role.HR_ADMIN or is_superuser(principal)
    )
    return ORGANIZATION_ADMIN_LABEL if is_hr else ORGANIZATION_MEMBER_LABEL


def entry_visible(item: NavigationEntry, principal: Optional[Principal]) -> bool:
    return can_access(principal, item.allowed_roles, item.route, item.permission_key)


def _badge_for(item: NavigationEntry, badges: Optional[BadgeLookup]) -> Optional[str]:
    if not item.notification_source or badges is None:
        return None
    try:
        return format_badge(badges(item.notification_source))
    except Exception:
        return None


def visible_navigation(
    principal: Optional[Principal],
    model: Iterable[NavigationCategory] = NAVIGATION_MODEL,
    badges: Optional[BadgeLookup] = None,
) -> tuple:
    """Categories and entries the principal may see, in catalog order.

    Categories left without entries are dropped rather than rendered empty.
    """
    out = []
    for cat in model:
        entries = tuple(
            VisibleEntry(
                label=resolve_label(item, principal),
                route=item.route,
                icon=item.icon,
                badge=_badge_for(item, badges),
            )
            for item in cat.entries
            if entry_visible(item, principal)
        )
        if entries:
            out.append(VisibleCategory(title=cat.title, entries=entries))
    return tuple(out)
