from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest

from chrome_version_proxy.cache import CacheStore
from chrome_version_proxy.errors import UpstreamError


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeUpstream:
    """Stands in for the Version History API client."""

    def __init__(self, versions: Optional[List[str]] = None):
        self.versions = versions or []
        self.error: Optional[str] = None
        self.calls = []

    async def list_versions(self, platform: str, channel: str = "stable"):
        self.calls.append((platform, channel))
        if self.error:
            raise UpstreamError(self.error)
        return list(self.versions)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return CacheStore(clock=clock)


@pytest.fixture
def upstream():
    return FakeUpstream(["143.0.7499.41", "142.0.1.1", "133.0.6943.143"])
