from apscheduler.schedulers.asyncio import AsyncIOScheduler
from .cache import CacheStore
import logging


class CacheReaper:
    """Frees memory held by expired entries; reads already ignore them."""

    def __init__(self, store: CacheStore):
        self.store = store

    def sweep(self) -> int:
        removed = self.store.purge_expired()
        if removed:
            logging.info(f"Cache cleanup: removed {removed} expired entries")
        return removed


def init_scheduler(reaper: CacheReaper, interval_seconds: int = 3600):
    sched = AsyncIOScheduler()

    @sched.scheduled_job("interval",
                         seconds=interval_seconds,
                         id="cache_reaper")
    def sweep_expired_entries():
        try:
            reaper.sweep()
        except Exception as e:
            logging.error(f"Cache cleanup error: {e}")

    sched.start()
    return sched
