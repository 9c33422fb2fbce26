from __future__ import annotations

from typing import Optional

from ..core.enums import LandingComponent, Role
from ..users.model import Principal

# Reachable without a session: public test links, onboarding portals and the
# subscription marketing pages.
PUBLIC_ROUTES = frozenset(
    {
        "/psychometric-test",
        "/test-results",
        "/onboarding-hub",
        "/applicant-portal",
        "/onboarding-portal",
        "/employee-onboarding",
        "/employee-onboarding-legacy",
        "/subscription-plans",
        "/subscribe",
        "/subscription-success",
        "/generate-pdf",
        "/download-pdf",
    }
)

# Only meaningful before login.
ANONYMOUS_ROUTES = frozenset({"/", "/auth"})

# Infrastructure paths the guard never intercepts.
ALWAYS_OPEN_PREFIXES = ("/static/", "/api/login", "/api/logout", "/api/user")

LANDING_ROUTE = "/"

_LANDING_BY_ROLE = {
    Role.EMPLOYEE: LandingComponent.PERSONAL_DASHBOARD,
    Role.LOGISTICS_MANAGER: LandingComponent.LOGISTICS_DASHBOARD,
}


def choose_landing_component(principal: Optional[Principal]) -> LandingComponent:
    if principal is None:
        return LandingComponent.LANDING
    role = Role.parse(getattr(principal, "role", None))
    return _LANDING_BY_ROLE.get(role, LandingComponent.ADMIN_DASHBOARD)


def _normalize(path: str) -> str:
    if not path:
        return LANDING_ROUTE
    path = path.split("?", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/")
    return path or LANDING_ROUTE


def is_public_route(path: str) -> bool:
    path = _normalize(path)
    return path in PUBLIC_ROUTES or path.startswith(ALWAYS_OPEN_PREFIXES)


def anonymous_may_view(path: str) -> bool:
    """True when an unauthenticated visitor may see `path` instead of being redirected."""
    return is_public_route(path) or _normalize(path) in ANONYMOUS_ROUTES
