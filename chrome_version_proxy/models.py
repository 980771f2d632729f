from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Platform(str, Enum):
    win = "win"
    win64 = "win64"
    mac = "mac"
    mac_arm64 = "mac_arm64"
    linux = "linux"


class VersionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    latest: str
    latest_accepted: str
    channel: str
    platform: str


class ErrorResponse(BaseModel):
    error: str


class CacheStatsOut(BaseModel):
    total_entries: int
    active_entries: int
    expired_entries: int
    hit_rate: Optional[str] = None


class HealthReport(BaseModel):
    status: str
    timestamp: str
    uptime: str
    upstream_status: str
    cache_stats: CacheStatsOut
    last_upstream_call: Optional[str] = None
    last_upstream_error: Optional[str] = None

    @property
    def healthy(self) -> bool:
        return self.status == "healthy"
