"""Access predicate shared by the sidebar, the API and the badge pollers.

Evaluation order, first match wins:

1. no principal            -> deny
2. superuser username      -> allow
3. flag-unlocked route     -> allow (job applications / CRM screens)
4. module permission       -> allow when the level is view or manage
5. role membership         -> allow iff the role is in the allowed set

The function never raises; anything it cannot interpret counts as "no access"
for the rule being evaluated.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..core.constants import SUPERUSER_USERNAME
from ..core.enums import PermissionModule, Role
from ..users.model import Principal, module_capability, route_capability


def is_superuser(principal: Optional[Principal]) -> bool:
    return principal is not None and getattr(principal, "username", None) == SUPERUSER_USERNAME


def _has(principal: Principal, capability: str) -> bool:
    try:
        return principal.has_capability(capability)
    except Exception:
        return False


def _role_allowed(principal: Principal, allowed_roles: Iterable) -> bool:
    role = Role.parse(getattr(principal, "role", None))
    if role is None or not allowed_roles:
        return False
    try:
        return any(Role.parse(r) == role for r in allowed_roles)
    except TypeError:
        return False


def can_access(
    principal: Optional[Principal],
    allowed_roles: Iterable = (),
    route_key: Optional[str] = None,
    permission_key: Optional[PermissionModule | str] = None,
) -> bool:
    if principal is None:
        return False

    if is_superuser(principal):
        return True

    if route_key and _has(principal, route_capability(route_key)):
        return True

    if permission_key:
        module = getattr(permission_key, "value", permission_key)
        if isinstance(module, str) and _has(principal, module_capability(module)):
            return True

    return _role_allowed(principal, allowed_roles)
