from __future__ import annotations

from typing import Dict, Mapping, Optional

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.enums import PermissionLevel, PermissionModule, Role
from ..core.exceptions import AuthenticationError
from ..core.logging import get_logger
from .model import Principal, User
from .repository import PermissionRepository, UserRepository

logger = get_logger(__name__)

_VIEW = PermissionLevel.VIEW.value
_MANAGE = PermissionLevel.MANAGE.value

ROLE_DEFAULT_PERMISSIONS: Mapping[Role, Mapping[str, str]] = {
    Role.HR_ADMIN: {
        PermissionModule.EMPLOYEE_MANAGEMENT.value: _MANAGE,
        PermissionModule.CONTRACT_MANAGEMENT.value: _MANAGE,
        PermissionModule.ANNOUNCEMENTS.value: _MANAGE,
        PermissionModule.LEAVE_MANAGEMENT.value: _MANAGE,
    },
    Role.BRANCH_MANAGER: {
        PermissionModule.EMPLOYEE_MANAGEMENT.value: _VIEW,
        PermissionModule.CONTRACT_MANAGEMENT.value: _VIEW,
        PermissionModule.ANNOUNCEMENTS.value: _MANAGE,
        PermissionModule.LEAVE_MANAGEMENT.value: _VIEW,
    },
    Role.TEAM_LEAD: {m.value: _VIEW for m in PermissionModule},
    Role.EMPLOYEE: {m.value: _VIEW for m in PermissionModule},
    Role.LOGISTICS_MANAGER: {m.value: _VIEW for m in PermissionModule},
}


class PermissionService:
    """Use case: compute the effective module permissions of a user."""

    def __init__(self, permissions: PermissionRepository):
        self._permissions = permissions

    def aggregate(self, user_id: int, role: Optional[Role]) -> Dict[str, str]:
        """Role defaults first, then the user's non-revoked overrides on top."""
        effective = dict(ROLE_DEFAULT_PERMISSIONS.get(role, {})) if role else {}
        for override in self._permissions.list_active_for_user(user_id):
            effective[override.module] = override.level
        return effective


class SessionService:
    """Use case: turn a stored user into the Principal used by access checks."""

    def __init__(self, users: UserRepository, permissions: PermissionService):
        self._users = users
        self._permissions = permissions

    def build_principal(self, user: User) -> Principal:
        if user.role is None:
            logger.warning("User %s has an unknown role; navigation will be minimal", user.user_id)

        try:
            permissions = self._permissions.aggregate(user.user_id, user.role)
        except Exception:
            logger.exception("Failed to load permissions for user %s", user.user_id)
            permissions = {}

        return Principal(
            id=user.user_id,
            username=user.username,
            role=user.role,
            permissions=permissions,
            has_job_applications_access=user.has_job_applications_access,
            has_crm_access=user.has_crm_access,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            status=user.status,
        )

    def load(self, user_id: int) -> Optional[Principal]:
        """Reload the principal for a session. None means the session is no longer valid."""
        user = self._users.get_by_id(int(user_id))
        if not user or not user.is_active:
            return None
        return self.build_principal(user)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository, sessions: SessionService):
        self._users = users
        self._sessions = sessions

    def authenticate(self, username: str, password: str) -> Principal:
        username = require_non_empty(username, "Username")
        user = self._users.get_by_username(username)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except Exception:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        logger.info("User %s signed in", user.username)
        return self._sessions.build_principal(user)
