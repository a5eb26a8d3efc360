"""GET /api/github: repository badges backed by the GitHub REST API."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from rasgen.models.badge import BadgeSpec
from rasgen.routers._common import (
    CACHE_UPSTREAM,
    get_github_client,
    get_renderer,
    parse_style,
    require,
    svg_response,
)
from rasgen.services.badge_renderer import BadgeRenderer
from rasgen.services.field_mapper import map_github
from rasgen.services.github_client import GitHubClient

router = APIRouter()


@router.get("/github", response_class=Response)
async def github_badge(
    repo: Optional[str] = Query(None, description="Repository slug, owner/name."),
    type: str = Query("stars", description="stars | forks | issues | license | watchers | subscribers | language | branch"),
    style: Optional[str] = Query(None, description="flat | flat-square | plastic"),
    client: GitHubClient = Depends(get_github_client),
    renderer: BadgeRenderer = Depends(get_renderer),
) -> Response:
    slug = require(repo, "repo")
    badge_style = parse_style(style)
    data = await client.get_repo(slug)
    content = map_github(type or "stars", data)
    return svg_response(renderer.render(BadgeSpec.from_content(content, badge_style)), CACHE_UPSTREAM)
