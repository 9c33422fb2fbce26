from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import TrialRequestStatus
from .model import TrialRequest


class TrialRequestRepository(Protocol):
    def count_by_status(self, status: TrialRequestStatus) -> int:
        raise NotImplementedError

    def list_requests(self, *, status: Optional[TrialRequestStatus] = None, limit: int = 200) -> Sequence[TrialRequest]:
        raise NotImplementedError
