"""Single-shot JSON GET against an upstream API.

One request per call (redirects followed), fixed timeout, no retries. Failures are split in two:
``UpstreamStatusError`` when the upstream answered non-2xx (the caller may
forward the status), ``UpstreamFetchError`` when nothing usable came back
(connection error, timeout, non-JSON body).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from rasgen.config import DEFAULT_UPSTREAM_TIMEOUT_SECONDS
from rasgen.errors import UpstreamFetchError, UpstreamStatusError

logger = logging.getLogger(__name__)


class UpstreamClient:
    def __init__(
        self,
        service: str,
        headers: Optional[dict[str, str]] = None,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT_SECONDS,
        fetch_subject: Optional[str] = None,
    ) -> None:
        self.service = service
        self._headers = dict(headers or {})
        self._timeout = timeout
        self._fetch_subject = fetch_subject

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    async def get_json(self, url: str, *, fetch_subject: Optional[str] = None) -> Any:
        subject = fetch_subject or self._fetch_subject
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, headers=self._headers, follow_redirects=True
            ) as client:
                r = await client.get(url)
        except httpx.TimeoutException as exc:
            logger.warning("%s upstream timeout url=%s", self.service, url)
            raise UpstreamFetchError(self.service, url, f"timeout: {exc}", subject=subject) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s upstream unreachable url=%s error=%s", self.service, url, exc)
            raise UpstreamFetchError(self.service, url, str(exc), subject=subject) from exc

        if not r.is_success:
            raise UpstreamStatusError(self.service, r.status_code, url, body=r.text[:500])

        try:
            return r.json()
        except ValueError as exc:
            logger.warning("%s upstream sent non-JSON body url=%s", self.service, url)
            raise UpstreamFetchError(self.service, url, "invalid JSON body", subject=subject) from exc
