"""Yurba adapter: dialog info and paged member lists.

Every call authenticates with the ``Token`` header. The token is injected by
the caller; a missing token is a server configuration error raised before any
request is made.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

from rasgen.config import DEFAULT_UPSTREAM_TIMEOUT_SECONDS
from rasgen.errors import ConfigurationError
from rasgen.services.upstream_client import UpstreamClient

SERVICE = "Yurba"
YURBA_API = "https://api.yurba.one"


class YurbaClient:
    def __init__(
        self,
        token: Optional[str],
        base_url: str = YURBA_API,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT_SECONDS,
    ) -> None:
        token = (token or "").strip()
        if not token:
            raise ConfigurationError("YURBA_TOKEN is not set")
        self._base_url = base_url.rstrip("/")
        headers = {"Accept": "application/json", "Token": token}
        self._upstream = UpstreamClient(
            SERVICE, headers=headers, timeout=timeout, fetch_subject="dialog info"
        )

    def dialog_url(self, dialog_id: str) -> str:
        return f"{self._base_url}/dialogs/{quote(dialog_id, safe='')}"

    def members_url(self, dialog_id: str, page: int, page_size: int) -> str:
        return f"{self.dialog_url(dialog_id)}/members?page={page}&pageSize={page_size}"

    async def get_dialog(self, dialog_id: str) -> Any:
        return await self._upstream.get_json(self.dialog_url(dialog_id))

    async def get_members_page(self, dialog_id: str, page: int, page_size: int) -> Any:
        """Raw member records for one page; the caller checks the shape."""
        return await self._upstream.get_json(
            self.members_url(dialog_id, page, page_size),
            fetch_subject=f"members page {page}",
        )
