from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .core.constants import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_SESSION_DAYS,
    TRIAL_REQUESTS_SOURCE,
)
from .database.connection import DBConfig, DatabaseConnection
from .navigation.badges import BadgeRegistry
from .navigation.sources import HttpPendingCountSource, RepositoryPendingCountSource
from .trials.mysql_trial_repository import MySQLTrialRequestRepository
from .trials.repository import TrialRequestRepository
from .trials.service import TrialRequestService
from .users.mysql_user_repository import MySQLPermissionRepository, MySQLUserRepository
from .users.repository import PermissionRepository, UserRepository
from .users.service import AuthService, PermissionService, SessionService


@dataclass(frozen=True)
class Settings:
    session_days: int = DEFAULT_SESSION_DAYS
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    notification_count_url: Optional[str] = None
    notification_http_timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    notification_http_headers: Mapping[str, str] = field(default_factory=dict, hash=False)

    @classmethod
    def from_module(cls, settings: Any) -> "Settings":
        return cls(
            session_days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)),
            poll_interval_seconds=float(getattr(settings, "NOTIFICATION_POLL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS)),
            notification_count_url=getattr(settings, "NOTIFICATION_COUNT_URL", None) or None,
            notification_http_timeout=float(
                getattr(settings, "NOTIFICATION_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT_SECONDS)
            ),
            notification_http_headers={
                str(k): str(v) for k, v in dict(getattr(settings, "NOTIFICATION_HTTP_HEADERS", None) or {}).items()
            },
        )


@dataclass(frozen=True)
class Container:
    settings: Settings

    users_repo: UserRepository
    permissions_repo: PermissionRepository
    trials_repo: TrialRequestRepository

    permission_service: PermissionService
    session_service: SessionService
    auth_service: AuthService
    trial_service: TrialRequestService

    badge_registry: BadgeRegistry
    conn: Optional[DatabaseConnection] = None


def assemble(
    *,
    users_repo: UserRepository,
    permissions_repo: PermissionRepository,
    trials_repo: TrialRequestRepository,
    settings: Optional[Settings] = None,
    conn: Optional[DatabaseConnection] = None,
    badge_registry: Optional[BadgeRegistry] = None,
) -> Container:
    settings = settings or Settings()

    permission_service = PermissionService(permissions_repo)
    session_service = SessionService(users_repo, permission_service)
    auth_service = AuthService(users_repo, session_service)
    trial_service = TrialRequestService(trials_repo)

    if badge_registry is None:
        if settings.notification_count_url:
            trial_source = HttpPendingCountSource(
                settings.notification_count_url,
                timeout=settings.notification_http_timeout,
                headers=dict(settings.notification_http_headers),
            )
        else:
            trial_source = RepositoryPendingCountSource(trials_repo)
        badge_registry = BadgeRegistry(
            {TRIAL_REQUESTS_SOURCE: trial_source},
            interval=settings.poll_interval_seconds,
            idle_seconds=settings.session_days * 24 * 3600,
        )

    return Container(
        settings=settings,
        users_repo=users_repo,
        permissions_repo=permissions_repo,
        trials_repo=trials_repo,
        permission_service=permission_service,
        session_service=session_service,
        auth_service=auth_service,
        trial_service=trial_service,
        badge_registry=badge_registry,
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Optional[Settings] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        users_repo=MySQLUserRepository(conn),
        permissions_repo=MySQLPermissionRepository(conn),
        trials_repo=MySQLTrialRequestRepository(conn),
        settings=settings,
        conn=conn,
    )
