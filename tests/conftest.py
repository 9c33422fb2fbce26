from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pytest

from src.q361_portal.q361_portal.container import Settings, assemble
from src.q361_portal.q361_portal.core.constants import TRIAL_REQUESTS_SOURCE
from src.q361_portal.q361_portal.core.enums import Role, TrialRequestStatus
from src.q361_portal.q361_portal.navigation.badges import BadgeRegistry
from src.q361_portal.q361_portal.users.model import PermissionOverride, Principal, User


@dataclass
class InMemoryUsers:
    users: dict[int, User] = field(default_factory=dict)

    def add(self, user: User) -> User:
        self.users[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        for u in self.users.values():
            if u.username == username:
                return u
        return None


@dataclass
class InMemoryPermissions:
    overrides: list[PermissionOverride] = field(default_factory=list)

    def list_active_for_user(self, user_id: int):
        return [o for o in self.overrides if o.user_id == user_id and o.revoked_at is None]


@dataclass
class InMemoryTrials:
    by_status: dict[TrialRequestStatus, int] = field(default_factory=dict)

    def count_by_status(self, status: TrialRequestStatus) -> int:
        return self.by_status.get(status, 0)

    def list_requests(self, *, status=None, limit: int = 200):
        return []


class FakeCountSource:
    """Returns queued payloads; an Exception instance in the queue is raised instead."""

    def __init__(self, *payloads):
        self.payloads = list(payloads)
        self.calls = 0

    def fetch(self):
        self.calls += 1
        payload = self.payloads.pop(0) if len(self.payloads) > 1 else (self.payloads[0] if self.payloads else None)
        if isinstance(payload, Exception):
            raise payload
        return payload


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def make_principal():
    def _make(username: str = "jdoe", role=Role.EMPLOYEE, **kwargs) -> Principal:
        return Principal(id=kwargs.pop("id", 7), username=username, role=role, **kwargs)

    return _make


@pytest.fixture
def make_user():
    from werkzeug.security import generate_password_hash

    def _make(user_id: int, username: str, role=Role.EMPLOYEE, password: str = "secret", **kwargs) -> User:
        return User(
            user_id=user_id,
            username=username,
            email=f"{username}@example.com",
            password_hash=generate_password_hash(password),
            role=role,
            **kwargs,
        )

    return _make


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def repos(make_user):
    users = InMemoryUsers()
    users.add(make_user(1, "admin", Role.HR_ADMIN, first_name="System", last_name="Admin"))
    users.add(make_user(2, "hr.manager", Role.HR_ADMIN))
    users.add(make_user(3, "jdoe", Role.EMPLOYEE, first_name="John", last_name="Doe", has_crm_access=True))
    users.add(make_user(4, "logistics", Role.LOGISTICS_MANAGER))
    users.add(make_user(5, "gone", Role.EMPLOYEE, status="terminated"))
    trials = InMemoryTrials({TrialRequestStatus.PENDING: 150})
    return users, InMemoryPermissions(), trials


@pytest.fixture
def container(repos, fake_clock):
    users, permissions, trials = repos
    registry = BadgeRegistry({TRIAL_REQUESTS_SOURCE: FakeCountSource({"count": 150})}, interval=300, clock=fake_clock)
    return assemble(
        users_repo=users,
        permissions_repo=permissions,
        trials_repo=trials,
        settings=Settings(),
        badge_registry=registry,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.q361_portal.q361_portal.main import create_app

    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(user_id: int):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
        return client

    return _login
