from datetime import datetime
from typing import Callable, Optional

from .cache import CacheStore, UpstreamStatus, utcnow
from .models import CacheStatsOut, HealthReport


def format_uptime(seconds: float) -> str:
    total = int(seconds)
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{days}d {hours}h {minutes}m {secs}s"


def rfc3339(ts: datetime) -> str:
    return ts.strftime("%Y-%m-%dT%H:%M:%SZ")


class HealthReporter:

    def __init__(self,
                 store: CacheStore,
                 started_at: Optional[datetime] = None,
                 clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock
        self.started_at = started_at or clock()

    def report(self) -> HealthReport:
        now = self.clock()
        stats = self.store.stats()
        upstream = self.store.upstream_state()

        # no upstream call yet counts as healthy
        status = "degraded"
        if upstream.status != UpstreamStatus.unhealthy:
            status = "healthy"

        hit_rate = None
        if stats.hit_rate_percent is not None:
            hit_rate = f"{stats.hit_rate_percent:.2f}%"

        return HealthReport(
            status=status,
            timestamp=rfc3339(now),
            uptime=format_uptime((now - self.started_at).total_seconds()),
            upstream_status=upstream.status.value,
            cache_stats=CacheStatsOut(total_entries=stats.total_entries,
                                      active_entries=stats.active_entries,
                                      expired_entries=stats.expired_entries,
                                      hit_rate=hit_rate),
            last_upstream_call=rfc3339(upstream.last_call)
            if upstream.last_call else None,
            last_upstream_error=upstream.last_error or None)
