"""npm registry + downloads API client."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from rasgen.config import DEFAULT_UPSTREAM_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from rasgen.services.upstream_client import UpstreamClient

SERVICE = "NPM"
NPM_REGISTRY = "https://registry.npmjs.org"
NPM_DOWNLOADS = "https://api.npmjs.org/downloads/point"

DOWNLOAD_PERIODS: dict[str, str] = {
    "day": "last-day",
    "week": "last-week",
    "month": "last-month",
    "year": "last-year",
}


class NpmClient:
    def __init__(
        self,
        registry_url: str = NPM_REGISTRY,
        downloads_url: str = NPM_DOWNLOADS,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT_SECONDS,
    ) -> None:
        self._registry_url = registry_url.rstrip("/")
        self._downloads_url = downloads_url.rstrip("/")
        headers = {"Accept": "application/json", "User-Agent": user_agent}
        self._upstream = UpstreamClient(SERVICE, headers=headers, timeout=timeout)

    def package_url(self, package: str) -> str:
        return f"{self._registry_url}/{quote(package, safe='')}"

    def downloads_url(self, package: str, period: str) -> str:
        return f"{self._downloads_url}/{DOWNLOAD_PERIODS[period]}/{quote(package, safe='')}"

    async def get_package(self, package: str) -> dict[str, Any]:
        data = await self._upstream.get_json(self.package_url(package))
        return data if isinstance(data, dict) else {}

    async def get_downloads(self, package: str, period: str) -> dict[str, Any]:
        """Download count for ``period`` (day/week/month/year)."""
        data = await self._upstream.get_json(self.downloads_url(package, period))
        return data if isinstance(data, dict) else {}
