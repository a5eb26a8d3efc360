"""Process configuration for the badge API.

Values come from the environment (a local ``.env`` is loaded first) and are
frozen into a ``Settings`` object at startup. Upstream clients receive their
tokens and base URLs from this object instead of reading ``os.environ``.
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

DEFAULT_API_URL = "https://rasgen.vercel.app"
DEFAULT_USER_AGENT = "Rasgen-Badge-Generator"
DEFAULT_UPSTREAM_TIMEOUT_SECONDS = 5.0
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def _env_optional(*names: str) -> Optional[str]:
    for name in names:
        value = (os.getenv(name) or "").strip()
        if value:
            return value
    return None


def _env_float(name: str, default: float, minimum: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return max(minimum, float(raw))
    except ValueError:
        return default


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "1" if default else "").strip().lower()
    return raw in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Read-only runtime configuration."""

    model_config = ConfigDict(frozen=True)

    github_token: Optional[str] = None
    yurba_token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    upstream_timeout_seconds: float = DEFAULT_UPSTREAM_TIMEOUT_SECONDS
    github_api_url: str = "https://api.github.com"
    npm_registry_url: str = "https://registry.npmjs.org"
    npm_downloads_url: str = "https://api.npmjs.org/downloads/point"
    yurba_api_url: str = "https://api.yurba.one"
    allowed_origins: list[str] = ["*"]
    slow_request_ms: float = 1500.0
    log_all_requests: bool = False
    log_level: str = "INFO"


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Build settings from the environment, loading ``.env`` when present."""
    load_dotenv(dotenv_path, override=False)
    origins = [o.strip() for o in _env_str("ALLOWED_ORIGINS", "*").split(",") if o.strip()]
    log_level = _env_str("LOG_LEVEL", "INFO").upper()
    return Settings(
        github_token=_env_optional("GITHUB_TOKEN", "GH_TOKEN"),
        yurba_token=_env_optional("YURBA_TOKEN"),
        api_url=_env_str("API_URL", DEFAULT_API_URL).rstrip("/"),
        user_agent=_env_str("BADGE_USER_AGENT", DEFAULT_USER_AGENT),
        upstream_timeout_seconds=_env_float(
            "UPSTREAM_TIMEOUT_SECONDS", DEFAULT_UPSTREAM_TIMEOUT_SECONDS, minimum=0.5
        ),
        github_api_url=_env_str("GITHUB_API_URL", "https://api.github.com").rstrip("/"),
        npm_registry_url=_env_str("NPM_REGISTRY_URL", "https://registry.npmjs.org").rstrip("/"),
        npm_downloads_url=_env_str(
            "NPM_DOWNLOADS_URL", "https://api.npmjs.org/downloads/point"
        ).rstrip("/"),
        yurba_api_url=_env_str("YURBA_API_URL", "https://api.yurba.one").rstrip("/"),
        allowed_origins=origins or ["*"],
        slow_request_ms=_env_float("API_SLOW_REQUEST_MS", 1500.0, minimum=25.0),
        log_all_requests=_env_flag("API_LOG_ALL_REQUESTS", False),
        log_level=log_level if log_level in LOG_LEVELS else "INFO",
    )
