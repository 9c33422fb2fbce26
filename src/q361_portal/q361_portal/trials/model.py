from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import TrialRequestStatus


@dataclass(frozen=True)
class TrialRequest:
    """A prospect asking for a trial subscription."""

    request_id: int
    name: str
    email: str
    company: str
    plan_id: str
    status: TrialRequestStatus
    created_at: Optional[datetime] = None
