from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Mapping, Optional

from ..access.predicate import can_access
from ..core.constants import (
    BADGE_DISPLAY_CAP,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_RESOLVER_IDLE_SECONDS,
    TRIAL_REQUESTS_SOURCE,
)
from ..core.enums import Role
from ..core.logging import get_logger

logger = get_logger(__name__)

# Roles whose navigation polls each notification source (superuser always does).
SOURCE_ROLES = {
    TRIAL_REQUESTS_SOURCE: frozenset({Role.HR_ADMIN}),
}


def format_badge(count: Any) -> Optional[str]:
    """Badge text for a count, or None when no badge should be shown."""
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        return None
    if count > BADGE_DISPLAY_CAP:
        return f"{BADGE_DISPLAY_CAP}+"
    return str(count)


def count_from_payload(payload: Any) -> int:
    """Extract `count` from a `{"count": n}` response; anything else reads as zero."""
    if not isinstance(payload, Mapping):
        return 0
    count = payload.get("count")
    if isinstance(count, bool) or not isinstance(count, int):
        return 0
    return max(count, 0)


class CountPoller:
    """Keeps the latest count from one source.

    The count is refreshed when `poll_if_due` is called after the interval has
    elapsed, immediately on `refetch` (window focus), or by a background
    thread between `start` and `stop`. A failed fetch keeps the last good count
    (zero if there never was one); a non-object response reads as zero.
    """

    def __init__(
        self,
        source,
        *,
        interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        name: str = "",
    ):
        self._source = source
        self._interval = float(interval)
        self._clock = clock
        self._name = name or type(source).__name__
        self._lock = threading.Lock()
        self._count = 0
        self._last_attempt: Optional[float] = None
        self._generation = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def interval(self) -> float:
        return self._interval

    def is_due(self) -> bool:
        with self._lock:
            if self._last_attempt is None:
                return True
            return self._clock() - self._last_attempt >= self._interval

    def refetch(self) -> int:
        with self._lock:
            generation = self._generation

        try:
            count: Optional[int] = count_from_payload(self._source.fetch())
        except Exception as e:
            logger.debug("Count fetch for %s failed: %s", self._name, e)
            count = None

        with self._lock:
            if generation != self._generation:
                # stopped while fetching; result discarded
                return self._count
            self._last_attempt = self._clock()
            if count is not None:
                self._count = count
            return self._count

    def poll_if_due(self) -> int:
        if self.is_due():
            return self.refetch()
        return self.count

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=f"poll-{self._name}", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        with self._lock:
            self._generation += 1
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)

    def _run(self) -> None:
        while not self._stop_event.is_set():
            self.refetch()
            self._stop_event.wait(self._interval)


class BadgeResolver:
    """Badge counts for one navigation instance (one signed-in principal)."""

    def __init__(
        self,
        principal,
        sources: Mapping[str, Any],
        *,
        interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.principal = principal
        self._pollers: Dict[str, CountPoller] = {
            name: CountPoller(source, interval=interval, clock=clock, name=name)
            for name, source in sources.items()
            if can_access(principal, SOURCE_ROLES.get(name, frozenset()))
        }

    def enabled(self, source_name: str) -> bool:
        return source_name in self._pollers

    def count(self, source_name: str) -> int:
        poller = self._pollers.get(source_name)
        if poller is None:
            return 0
        return poller.poll_if_due()

    __call__ = count

    def refetch_all(self) -> None:
        for poller in self._pollers.values():
            poller.refetch()

    def stop(self) -> None:
        for poller in self._pollers.values():
            poller.stop()


class BadgeRegistry:
    """One BadgeResolver per signed-in user, rebuilt whenever the principal changes.

    Sessions can expire without a logout, so resolvers not asked for within
    `idle_seconds` are stopped and dropped on the next lookup.
    """

    def __init__(
        self,
        sources: Mapping[str, Any],
        *,
        interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        idle_seconds: float = DEFAULT_RESOLVER_IDLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._sources = dict(sources)
        self._interval = interval
        self._idle_seconds = float(idle_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._resolvers: Dict[int, BadgeResolver] = {}
        self._last_used: Dict[int, float] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._resolvers)

    def for_principal(self, principal) -> Optional[BadgeResolver]:
        if principal is None:
            return None
        with self._lock:
            now = self._clock()
            stale = self._prune_locked(now)
            resolver = self._resolvers.get(principal.id)
            if resolver is None or resolver.principal != principal:
                if resolver is not None:
                    stale.append(resolver)
                resolver = BadgeResolver(principal, self._sources, interval=self._interval, clock=self._clock)
                self._resolvers[principal.id] = resolver
            self._last_used[principal.id] = now
        for old in stale:
            old.stop()
        return resolver

    def discard(self, principal_id: int) -> None:
        with self._lock:
            resolver = self._resolvers.pop(principal_id, None)
            self._last_used.pop(principal_id, None)
        if resolver is not None:
            resolver.stop()

    def _prune_locked(self, now: float) -> list:
        idle = [pid for pid, seen in self._last_used.items() if now - seen > self._idle_seconds]
        dropped = []
        for pid in idle:
            self._last_used.pop(pid, None)
            resolver = self._resolvers.pop(pid, None)
            if resolver is not None:
                dropped.append(resolver)
        if dropped:
            logger.debug("Dropped %d idle badge resolver(s)", len(dropped))
        return dropped
