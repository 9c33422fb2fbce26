from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..common.validators import as_bool
from ..core.constants import CRM_ROUTES, JOB_APPLICATIONS_ROUTES
from ..core.enums import PermissionLevel, Role

GRANTING_LEVELS = frozenset({PermissionLevel.VIEW.value, PermissionLevel.MANAGE.value})


@dataclass(frozen=True)
class User:
    """Domain entity: User row.

    Note: plain data object (no DB access code).
    """

    user_id: int
    username: str
    email: str
    password_hash: str
    role: Optional[Role]
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    status: str = "active"
    has_crm_access: bool = False
    has_job_applications_access: bool = False

    @property
    def is_active(self) -> bool:
        return self.status in {"active", "onboarding"}


@dataclass(frozen=True)
class PermissionOverride:
    user_id: int
    module: str
    level: str
    granted_by: Optional[int] = None
    revoked_at: Optional[datetime] = None


def route_capability(route: str) -> str:
    return f"route:{route}"


def module_capability(module: str) -> str:
    return f"module:{module}"


def _normalize_permissions(permissions: Any) -> Mapping[str, str]:
    if not isinstance(permissions, Mapping):
        return MappingProxyType({})
    out: dict[str, str] = {}
    for module, level in permissions.items():
        if isinstance(level, PermissionLevel):
            level = level.value
        module = getattr(module, "value", module)
        if isinstance(module, str) and isinstance(level, str):
            out[module] = level.strip().lower()
    return MappingProxyType(out)


def _derive_capabilities(
    permissions: Mapping[str, str],
    *,
    has_job_applications_access: bool,
    has_crm_access: bool,
) -> frozenset:
    caps: set[str] = set()
    if has_job_applications_access:
        caps.update(route_capability(r) for r in JOB_APPLICATIONS_ROUTES)
    if has_crm_access:
        caps.update(route_capability(r) for r in CRM_ROUTES)
    caps.update(module_capability(m) for m, level in permissions.items() if level in GRANTING_LEVELS)
    return frozenset(caps)


@dataclass(frozen=True)
class Principal:
    """The signed-in user as seen by access checks.

    Built once when the session is loaded and replaced wholesale on change.
    `capabilities` is derived from the route flags and the permission map at
    construction time so access checks are a single set lookup.
    """

    id: int
    username: str
    role: Optional[Role]
    permissions: Mapping[str, str] = field(default_factory=dict, hash=False)
    has_job_applications_access: bool = False
    has_crm_access: bool = False
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    status: Optional[str] = None
    capabilities: frozenset = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        permissions = _normalize_permissions(self.permissions)
        object.__setattr__(self, "permissions", permissions)
        object.__setattr__(self, "role", Role.parse(self.role) if self.role is not None else None)
        object.__setattr__(
            self,
            "capabilities",
            _derive_capabilities(
                permissions,
                has_job_applications_access=bool(self.has_job_applications_access),
                has_crm_access=bool(self.has_crm_access),
            ),
        )

    def has_capability(self, capability: str) -> bool:
        return capability in self.capabilities

    @property
    def display_name(self) -> str:
        name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return name or "User"

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["Principal"]:
        """Parse the `/api/user` JSON shape. Returns None when there is no usable user."""
        if not isinstance(payload, Mapping):
            return None
        username = payload.get("username")
        if not isinstance(username, str) or not username:
            return None
        try:
            user_id = int(payload.get("id"))
        except (TypeError, ValueError):
            user_id = 0

        return cls(
            id=user_id,
            username=username,
            role=Role.parse(payload.get("role")),
            permissions=payload.get("permissions") or {},
            has_job_applications_access=as_bool(payload.get("hasJobApplicationsAccess")),
            has_crm_access=as_bool(payload.get("hasCrmAccess")),
            first_name=payload.get("firstName"),
            last_name=payload.get("lastName"),
            email=payload.get("email"),
            status=payload.get("status"),
        )

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "role": self.role.value if self.role else None,
            "status": self.status,
            "hasCrmAccess": self.has_crm_access,
            "hasJobApplicationsAccess": self.has_job_applications_access,
            "permissions": dict(self.permissions),
        }
