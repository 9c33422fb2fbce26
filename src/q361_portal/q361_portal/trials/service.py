from __future__ import annotations

from typing import Optional, Sequence

from ..access.predicate import can_access
from ..core.constants import TRIAL_REQUESTS_ROUTE
from ..core.enums import Role, TrialRequestStatus
from ..core.exceptions import AuthorizationError
from ..navigation.catalog import find_entry
from ..navigation.visibility import entry_visible
from ..users.model import Principal
from .model import TrialRequest
from .repository import TrialRequestRepository

# The pending counter feeds the HR badge only; the page follows its sidebar entry.
TRIAL_COUNT_ROLES = frozenset({Role.HR_ADMIN})


class TrialRequestService:
    """Use case: let HR see how many trial requests are waiting for review."""

    def __init__(self, trials: TrialRequestRepository):
        self._trials = trials

    def pending_count(self, principal: Optional[Principal]) -> int:
        if not can_access(principal, TRIAL_COUNT_ROLES):
            raise AuthorizationError("Only HR administrators can read the pending trial count")
        return self._trials.count_by_status(TrialRequestStatus.PENDING)

    def list_requests(
        self, principal: Optional[Principal], *, status: Optional[TrialRequestStatus] = None
    ) -> Sequence[TrialRequest]:
        if not entry_visible(find_entry(TRIAL_REQUESTS_ROUTE), principal):
            raise AuthorizationError("You do not have access to trial requests")
        return self._trials.list_requests(status=status)
