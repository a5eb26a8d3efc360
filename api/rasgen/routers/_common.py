"""Shared pieces of the badge routers: dependencies, query checks, SVG responses."""

from __future__ import annotations

from typing import Optional

from fastapi import Request, Response

from rasgen.config import Settings, load_settings
from rasgen.errors import InvalidParameterError, MissingParameterError
from rasgen.models.badge import BadgeStyle
from rasgen.services.badge_renderer import BadgeRenderer
from rasgen.services.github_client import GitHubClient
from rasgen.services.npm_client import NpmClient
from rasgen.services.yurba_client import YurbaClient

SVG_MEDIA_TYPE = "image/svg+xml"

CACHE_STATIC = "public, max-age=86400, s-maxage=604800"
CACHE_UPSTREAM = "public, max-age=3600, s-maxage=86400"
CACHE_PRESENCE = "public, max-age=60, s-maxage=300"


def get_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = load_settings()
        request.app.state.settings = settings
    return settings


def get_renderer() -> BadgeRenderer:
    return BadgeRenderer()


def get_github_client(request: Request) -> GitHubClient:
    settings = get_settings(request)
    return GitHubClient(
        token=settings.github_token,
        base_url=settings.github_api_url,
        user_agent=settings.user_agent,
        timeout=settings.upstream_timeout_seconds,
    )


def get_npm_client(request: Request) -> NpmClient:
    settings = get_settings(request)
    return NpmClient(
        registry_url=settings.npm_registry_url,
        downloads_url=settings.npm_downloads_url,
        user_agent=settings.user_agent,
        timeout=settings.upstream_timeout_seconds,
    )


def get_yurba_client(request: Request) -> YurbaClient:
    """Raises ConfigurationError when YURBA_TOKEN is unset."""
    settings = get_settings(request)
    return YurbaClient(
        token=settings.yurba_token,
        base_url=settings.yurba_api_url,
        timeout=settings.upstream_timeout_seconds,
    )


def require(value: Optional[str], name: str, *, as_json: bool = False) -> str:
    if value is None or not value.strip():
        raise MissingParameterError(name, as_json=as_json)
    return value.strip()


def parse_style(value: Optional[str]) -> BadgeStyle:
    if value is None or value == "":
        return BadgeStyle.FLAT
    try:
        return BadgeStyle(value)
    except ValueError as exc:
        raise InvalidParameterError("style", BadgeStyle.values()) from exc


def svg_response(svg: str, cache_control: str) -> Response:
    return Response(
        content=svg,
        media_type=SVG_MEDIA_TYPE,
        headers={
            "Cache-Control": cache_control,
            "Access-Control-Allow-Origin": "*",
        },
    )
