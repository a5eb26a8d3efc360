"""GitHub REST client for repository badges.

Thin wrapper over ``UpstreamClient`` with:
- optional bearer token auth (injected, usually GITHUB_TOKEN)
- GitHub API version + user agent headers
- repo slug validation (owner/name)
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

from rasgen.config import DEFAULT_UPSTREAM_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from rasgen.services.upstream_client import UpstreamClient

SERVICE = "GitHub"


def split_repo(repo: str) -> Optional[tuple[str, str]]:
    """Return (owner, name) for an ``owner/name`` slug, or None if malformed."""
    parts = [p.strip() for p in (repo or "").strip().strip("/").split("/")]
    if len(parts) != 2 or not all(parts):
        return None
    return parts[0], parts[1]


class GitHubClient:
    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT_SECONDS,
    ) -> None:
        self._token = (token or "").strip() or None
        self._base_url = base_url.rstrip("/")
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        self._upstream = UpstreamClient(SERVICE, headers=headers, timeout=timeout)

    @property
    def has_token(self) -> bool:
        return self._token is not None

    def repo_url(self, repo: str) -> str:
        owner_name = split_repo(repo)
        if owner_name is None:
            # Malformed slugs pass through; GitHub answers 404 for them.
            return f"{self._base_url}/repos/{quote(repo.strip(), safe='/')}"
        owner, name = owner_name
        return f"{self._base_url}/repos/{quote(owner, safe='')}/{quote(name, safe='')}"

    async def get_repo(self, repo: str) -> dict[str, Any]:
        data = await self._upstream.get_json(self.repo_url(repo))
        return data if isinstance(data, dict) else {}
