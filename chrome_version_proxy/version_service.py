import logging
from typing import List, Optional, Protocol

from .cache import CacheStore, cache_key
from .errors import (InvalidOffsetError, InvalidPlatformError, UpstreamError,
                     VersionsNotFoundError)
from .models import Platform, VersionResult
from .versions import (extract_major, fallback_version,
                       find_first_with_major, parse_int)

CHANNEL = "stable"
DEFAULT_PLATFORM = Platform.win64
PLATFORM_CHOICES = ", ".join(p.value for p in Platform)


class VersionSource(Protocol):

    async def list_versions(self,
                            platform: str,
                            channel: str = CHANNEL) -> List[str]:
        ...


class VersionService:

    def __init__(self, store: CacheStore, upstream: VersionSource,
                 default_offset: int):
        self.store = store
        self.upstream = upstream
        self.default_offset = default_offset

    def parse_platform(self, platform: Optional[str]) -> Platform:
        if not platform:
            return DEFAULT_PLATFORM
        try:
            return Platform(platform)
        except ValueError:
            raise InvalidPlatformError(
                f"Invalid platform. Use: {PLATFORM_CHOICES}") from None

    def resolve_offset(self, offset: Optional[str]) -> int:
        """Query parameter first, then the configured default."""
        if offset is None or offset == "":
            return self.default_offset
        value = parse_int(offset)
        if value is None or value < 0:
            raise InvalidOffsetError("Offset must be a number >= 0")
        return value

    async def get_versions(self, platform: Optional[str],
                           offset: Optional[str]) -> VersionResult:
        plat = self.parse_platform(platform).value
        off = self.resolve_offset(offset)

        key = cache_key(plat, off)
        cached = self.store.get(key)
        if cached is not None:
            self.store.record_hit()
            logging.info(f"Cache HIT for platform={plat}, offset={off}")
            return cached

        self.store.record_miss()
        logging.info(f"Cache MISS for platform={plat}, offset={off}")

        logging.info(f"Calling Version History API for platform={plat}")
        try:
            versions = await self.upstream.list_versions(plat, CHANNEL)
        except UpstreamError as e:
            self.store.record_upstream_failure(str(e))
            raise
        if not versions:
            raise VersionsNotFoundError("No versions found")
        self.store.record_upstream_success()

        latest = versions[0]
        latest_major = extract_major(latest)
        # negative when offset exceeds the latest major; fallback covers it
        target_major = latest_major - off
        logging.info(f"Latest version: {latest} (major: {latest_major}), "
                     f"supported major: {target_major}")

        accepted = find_first_with_major(versions, target_major)
        if accepted is None:
            logging.info(f"No version found for major {target_major}")
            accepted = fallback_version(target_major)

        result = VersionResult(latest=latest,
                               latest_accepted=accepted,
                               channel=CHANNEL,
                               platform=plat)
        self.store.set(key, result)
        logging.info(f"Cached result for platform={plat}, offset={off}")
        return result
