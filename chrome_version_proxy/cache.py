import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Dict, Optional

from .models import VersionResult

DEFAULT_TTL = timedelta(hours=24)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def cache_key(platform: str, offset: int) -> str:
    return f"{platform}:{offset}"


class UpstreamStatus(str, Enum):
    unknown = "unknown"
    healthy = "healthy"
    unhealthy = "unhealthy"


@dataclass(frozen=True)
class UpstreamState:
    status: UpstreamStatus
    last_call: Optional[datetime] = None
    last_error: Optional[str] = None


@dataclass(frozen=True)
class CacheEntry:
    result: VersionResult
    expires_at: datetime

    def expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass(frozen=True)
class CacheStats:
    total_entries: int
    active_entries: int
    expired_entries: int
    hit_rate_percent: Optional[float] = None


class ReadWriteLock:
    """Many concurrent readers or one writer.

    A waiting writer blocks new readers. Every critical section in
    CacheStore is a dict operation or a single pass over the entries,
    so waits on the event loop thread stay short.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class CacheStore:
    """Version results keyed by "<platform>:<offset>", with TTL expiry.

    Also tracks hit/miss counters and the outcome of the last upstream
    call, which the health endpoint reports. Expiry is checked on every
    read; the background sweep only frees memory held by stale keys.
    """

    def __init__(self,
                 ttl: timedelta = DEFAULT_TTL,
                 clock: Callable[[], datetime] = utcnow):
        self.ttl = ttl
        self._clock = clock
        self._lock = ReadWriteLock()
        self._entries: Dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._upstream = UpstreamState(UpstreamStatus.unknown)

    def get(self, key: str) -> Optional[VersionResult]:
        with self._lock.read():
            entry = self._entries.get(key)
            if entry is None or entry.expired(self._clock()):
                return None
            return entry.result

    def set(self, key: str, result: VersionResult):
        with self._lock.write():
            self._entries[key] = CacheEntry(result,
                                            self._clock() + self.ttl)

    def record_hit(self):
        with self._lock.write():
            self._hits += 1

    def record_miss(self):
        with self._lock.write():
            self._misses += 1

    def record_upstream_success(self):
        with self._lock.write():
            self._upstream = UpstreamState(UpstreamStatus.healthy,
                                           last_call=self._clock())

    def record_upstream_failure(self, reason: str):
        with self._lock.write():
            self._upstream = UpstreamState(UpstreamStatus.unhealthy,
                                           last_call=self._clock(),
                                           last_error=reason)

    def upstream_state(self) -> UpstreamState:
        with self._lock.read():
            return self._upstream

    def purge_expired(self) -> int:
        with self._lock.write():
            now = self._clock()
            stale = [k for k, e in self._entries.items() if e.expired(now)]
            for k in stale:
                del self._entries[k]
            return len(stale)

    def stats(self) -> CacheStats:
        with self._lock.read():
            now = self._clock()
            expired = sum(1 for e in self._entries.values() if e.expired(now))
            total = len(self._entries)
            lookups = self._hits + self._misses
            hit_rate = None
            if lookups:
                hit_rate = self._hits / lookups * 100
            return CacheStats(total_entries=total,
                              active_entries=total - expired,
                              expired_entries=expired,
                              hit_rate_percent=hit_rate)
