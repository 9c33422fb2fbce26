"""
Count sources feeding navigation badges.

Each source exposes `fetch()` returning the decoded `{"count": n}` payload.
Errors propagate to the poller, which decides how to degrade.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

import requests

from ..core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS, PENDING_TRIAL_COUNT_PATH
from ..core.enums import TrialRequestStatus
from ..core.exceptions import CountFetchError
from ..trials.repository import TrialRequestRepository


class CountSource(Protocol):
    def fetch(self) -> Any:
        raise NotImplementedError


class RepositoryPendingCountSource:
    """Reads the pending trial-request count straight from the database."""

    def __init__(self, trials: TrialRequestRepository):
        self._trials = trials

    def fetch(self) -> dict:
        return {"count": int(self._trials.count_by_status(TrialRequestStatus.PENDING))}


class HttpPendingCountSource:
    """Polls `GET /api/trial-requests/pending/count` on a remote portal."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        headers: Optional[dict] = None,
    ):
        self.url = base_url.rstrip("/") + PENDING_TRIAL_COUNT_PATH
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if headers:
            self.session.headers.update(headers)

    def fetch(self) -> Any:
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise CountFetchError(f"GET {self.url} failed: {e}") from e
