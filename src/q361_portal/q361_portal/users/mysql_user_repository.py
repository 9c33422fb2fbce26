from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.validators import as_bool
from ..core.enums import Role
from ..database.connection import DatabaseConnection, fetchall, fetchone
from .model import PermissionOverride, User
from .repository import PermissionRepository, UserRepository

_USER_COLUMNS = """
    user_id, username, email, password_hash, first_name, last_name, role, status,
    has_crm_access, has_job_applications_access
"""


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        email=row.get("email") or "",
        password_hash=row["password_hash"],
        role=Role.parse(row.get("role")),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        status=row.get("status") or "active",
        has_crm_access=as_bool(row.get("has_crm_access")),
        has_job_applications_access=as_bool(row.get("has_job_applications_access")),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._conn_factory.cursor() as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with self._conn_factory.cursor() as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None


class MySQLPermissionRepository(PermissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_for_user(self, user_id: int) -> Sequence[PermissionOverride]:
        with self._conn_factory.cursor() as (_, cur):
            cur.execute(
                """
                SELECT user_id, module, level, granted_by, revoked_at
                FROM user_permissions
                WHERE user_id=%s AND revoked_at IS NULL
                ORDER BY permission_id
                """,
                (user_id,),
            )
            return [
                PermissionOverride(
                    user_id=int(r["user_id"]),
                    module=r["module"],
                    level=r["level"],
                    granted_by=r.get("granted_by"),
                    revoked_at=r.get("revoked_at"),
                )
                for r in fetchall(cur)
            ]
