import logging
from typing import List, Optional

import httpx

from .errors import UpstreamError

PAGE_SIZE = 1000


class VersionHistoryClient:
    """Reads released versions from Google's Version History API."""

    def __init__(self,
                 base_url: str,
                 timeout: float = 15,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def list_versions(self,
                            platform: str,
                            channel: str = "stable") -> List[str]:
        url = f"{self.base_url}/chrome/platforms/{platform}/channels/{channel}/versions"
        params = {"pageSize": PAGE_SIZE, "orderBy": "version desc"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout,
                                         transport=self.transport) as client:
                r = await client.get(url, params=params)
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logging.warning(f"Version History API call failed: {e}")
            raise UpstreamError(f"Error calling API: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamError("Error calling API: unexpected response body")
        items = data.get("versions") or []
        if not isinstance(items, list):
            raise UpstreamError("Error calling API: unexpected response body")
        versions = []
        for item in items:
            v = item.get("version") if isinstance(item, dict) else None
            if isinstance(v, str) and v:
                versions.append(v)
        return versions
