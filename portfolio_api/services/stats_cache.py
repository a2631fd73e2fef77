# portfolio_api/services/stats_cache.py
from __future__ import annotations

import threading
import time
from typing import Callable, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class StatsCache(Generic[T]):
    """
    In-process memo slot holding (timestamp, value) with a freshness window.

    Also tracks whether a refresh is in flight so concurrent stale reads
    coalesce into a single upstream fetch. A claim older than
    `claim_timeout` is considered abandoned (its task never ran or never
    released it) and can be taken over. The lock only guards the slot and
    the claim; it is never held across I/O.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        claim_timeout: Optional[float] = None,
    ):
        self.ttl_seconds = ttl_seconds
        self.claim_timeout = claim_timeout if claim_timeout is not None else ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._slot: Optional[Tuple[float, T]] = None
        self._claimed_at: Optional[float] = None

    def get_fresh(self) -> Optional[T]:
        with self._lock:
            if self._slot is None:
                return None
            stamp, value = self._slot
            if self._clock() - stamp >= self.ttl_seconds:
                return None
            return value

    def put(self, value: T) -> None:
        with self._lock:
            self._slot = (self._clock(), value)

    def invalidate(self) -> None:
        with self._lock:
            self._slot = None

    def begin_refresh(self) -> bool:
        """Claim the refresh; False while another live claim is held."""
        with self._lock:
            now = self._clock()
            if self._claimed_at is not None and now - self._claimed_at < self.claim_timeout:
                return False
            self._claimed_at = now
            return True

    def end_refresh(self) -> None:
        with self._lock:
            self._claimed_at = None

    @property
    def refreshing(self) -> bool:
        with self._lock:
            return self._claimed_at is not None
