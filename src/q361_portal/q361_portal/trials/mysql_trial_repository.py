from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TrialRequestStatus
from ..database.connection import DatabaseConnection, fetchall, fetchone
from .model import TrialRequest
from .repository import TrialRequestRepository


class MySQLTrialRequestRepository(TrialRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def count_by_status(self, status: TrialRequestStatus) -> int:
        with self._conn_factory.cursor() as (_, cur):
            cur.execute("SELECT COUNT(*) AS cnt FROM trial_requests WHERE status=%s", (status.value,))
            row = fetchone(cur)
            return int(row["cnt"]) if row else 0

    def list_requests(self, *, status: Optional[TrialRequestStatus] = None, limit: int = 200) -> Sequence[TrialRequest]:
        sql = """
            SELECT request_id, name, email, company, plan_id, status, created_at
            FROM trial_requests
        """
        params: list = []
        if status is not None:
            sql += " WHERE status=%s"
            params.append(status.value)
        sql += " ORDER BY created_at DESC LIMIT %s"
        params.append(int(limit))

        with self._conn_factory.cursor() as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                TrialRequest(
                    request_id=int(r["request_id"]),
                    name=r["name"],
                    email=r["email"],
                    company=r.get("company") or "",
                    plan_id=r.get("plan_id") or "",
                    status=TrialRequestStatus(r["status"]),
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]
