"""GET /api/npm: package badges from the npm registry and downloads API."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from rasgen.errors import InvalidParameterError, UpstreamFetchError, UpstreamStatusError
from rasgen.models.badge import BadgeContent, BadgeSpec
from rasgen.routers._common import (
    CACHE_UPSTREAM,
    get_npm_client,
    get_renderer,
    parse_style,
    require,
    svg_response,
)
from rasgen.services.badge_renderer import BadgeRenderer
from rasgen.services.field_mapper import NPM_DOWNLOADS_TYPE, map_npm, map_npm_downloads
from rasgen.services.npm_client import DOWNLOAD_PERIODS, NpmClient

logger = logging.getLogger(__name__)

router = APIRouter()


async def _downloads_content(client: NpmClient, package: str, period: str) -> BadgeContent:
    """The downloads lookup never fails the request; it degrades the badge instead."""
    try:
        payload = await client.get_downloads(package, period)
    except UpstreamStatusError as exc:
        logger.warning(
            "npm_downloads_unavailable package=%s period=%s status=%s", package, period, exc.status_code
        )
        return map_npm_downloads(period, None)
    except UpstreamFetchError as exc:
        logger.warning("npm_downloads_failed package=%s period=%s reason=%s", package, period, exc.reason)
        return map_npm_downloads(period, None, failed=True)
    return map_npm_downloads(period, payload)


@router.get("/npm", response_class=Response)
async def npm_badge(
    package: Optional[str] = Query(None, description="Package name, scoped names allowed."),
    type: str = Query("version", description="version | license | downloads | node | type"),
    style: Optional[str] = Query(None, description="flat | flat-square | plastic"),
    period: str = Query("month", description="day | week | month | year (downloads only)"),
    client: NpmClient = Depends(get_npm_client),
    renderer: BadgeRenderer = Depends(get_renderer),
) -> Response:
    name = require(package, "package")
    badge_style = parse_style(style)
    badge_type = type or "version"
    period = period or "month"
    if badge_type == NPM_DOWNLOADS_TYPE and period not in DOWNLOAD_PERIODS:
        raise InvalidParameterError("period", tuple(DOWNLOAD_PERIODS))

    doc = await client.get_package(name)
    if badge_type == NPM_DOWNLOADS_TYPE:
        content = await _downloads_content(client, name, period)
    else:
        content = map_npm(badge_type, doc)
    return svg_response(renderer.render(BadgeSpec.from_content(content, badge_style)), CACHE_UPSTREAM)
