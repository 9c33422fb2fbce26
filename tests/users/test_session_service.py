from datetime import datetime

import pytest

from src.q361_portal.q361_portal.core.enums import PermissionModule, Role
from src.q361_portal.q361_portal.core.exceptions import AuthenticationError, ValidationError
from src.q361_portal.q361_portal.users.model import PermissionOverride, Principal
from src.q361_portal.q361_portal.users.service import AuthService, PermissionService, SessionService
from tests.conftest import InMemoryPermissions, InMemoryUsers


@pytest.fixture
def services(repos):
    users, permissions, _ = repos
    permission_service = PermissionService(permissions)
    sessions = SessionService(users, permission_service)
    return users, permissions, permission_service, sessions, AuthService(users, sessions)


def test_role_defaults_then_overrides(services):
    _, permissions, permission_service, _, _ = services
    permissions.overrides += [
        PermissionOverride(user_id=4, module="employee_management", level="manage", granted_by=1),
        PermissionOverride(user_id=4, module="announcements", level="none", granted_by=1),
        PermissionOverride(user_id=4, module="contract_management", level="manage", revoked_at=datetime(2024, 1, 1)),
        PermissionOverride(user_id=9, module="leave_management", level="manage"),
    ]

    effective = permission_service.aggregate(4, Role.LOGISTICS_MANAGER)

    assert effective == {
        "employee_management": "manage",
        "contract_management": "view",
        "announcements": "none",
        "leave_management": "view",
    }


def test_roles_without_defaults_only_get_overrides(services):
    _, permissions, permission_service, _, _ = services
    permissions.overrides.append(PermissionOverride(user_id=7, module="announcements", level="view"))
    assert permission_service.aggregate(7, Role.CONTENT_CREATOR) == {"announcements": "view"}
    assert permission_service.aggregate(7, None) == {"announcements": "view"}


def test_load_builds_principal(services):
    _, _, _, sessions, _ = services
    principal = sessions.load(3)

    assert principal.username == "jdoe"
    assert principal.role is Role.EMPLOYEE
    assert principal.has_crm_access is True
    assert principal.display_name == "John Doe"
    assert principal.has_capability("route:/crm-inquiries")
    assert principal.has_capability("module:" + PermissionModule.LEAVE_MANAGEMENT.value)


def test_load_rejects_missing_and_inactive_users(services):
    _, _, _, sessions, _ = services
    assert sessions.load(99) is None
    assert sessions.load(5) is None


def test_unknown_role_yields_minimal_principal(make_user):
    users = InMemoryUsers()
    users.add(make_user(11, "odd", role=None))
    sessions = SessionService(users, PermissionService(InMemoryPermissions()))

    principal = sessions.load(11)
    assert principal.role is None
    assert dict(principal.permissions) == {}


def test_permission_failure_degrades_to_no_overrides(services):
    users, _, _, _, _ = services

    class Broken:
        def list_active_for_user(self, user_id):
            raise RuntimeError("db down")

    principal = SessionService(users, PermissionService(Broken())).load(2)
    assert principal.role is Role.HR_ADMIN
    assert dict(principal.permissions) == {}


def test_authenticate(services):
    _, _, _, _, auth = services
    principal = auth.authenticate("hr.manager", "secret")
    assert isinstance(principal, Principal)
    assert principal.id == 2


@pytest.mark.parametrize("username, password", [("hr.manager", "wrong"), ("nobody", "secret"), ("gone", "secret")])
def test_authenticate_rejects(services, username, password):
    _, _, _, _, auth = services
    with pytest.raises(AuthenticationError):
        auth.authenticate(username, password)


def test_authenticate_requires_username(services):
    _, _, _, _, auth = services
    with pytest.raises(ValidationError):
        auth.authenticate("   ", "secret")


def test_principal_from_payload():
    principal = Principal.from_payload(
        {
            "id": "3",
            "username": "jdoe",
            "role": "employee",
            "hasCrmAccess": "true",
            "permissions": {"announcements": "VIEW", "leave_management": "none"},
        }
    )
    assert principal.id == 3
    assert principal.role is Role.EMPLOYEE
    assert principal.has_crm_access is True
    assert principal.has_capability("module:announcements")
    assert not principal.has_capability("module:leave_management")
    assert Principal.from_payload({"username": ""}) is None
    assert Principal.from_payload(["jdoe"]) is None


def test_principal_is_hashable(make_principal):
    a = make_principal("jdoe", Role.EMPLOYEE, permissions={"announcements": "view"})
    b = make_principal("jdoe", Role.EMPLOYEE, permissions={"announcements": "view"})

    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
