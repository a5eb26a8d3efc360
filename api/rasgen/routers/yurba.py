"""GET /api/yurba: online-member count for a Yurba dialog."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from rasgen.models.badge import BadgeSpec
from rasgen.routers._common import (
    CACHE_PRESENCE,
    get_renderer,
    get_yurba_client,
    parse_style,
    require,
    svg_response,
)
from rasgen.services.badge_renderer import BadgeRenderer
from rasgen.services.dialog_presence_service import dialog_presence
from rasgen.services.field_mapper import map_presence
from rasgen.services.yurba_client import YurbaClient

router = APIRouter()

DEFAULT_LABEL = "Online"


@router.get("/yurba", response_class=Response)
async def yurba_badge(
    dialog_id: Optional[str] = Query(None, description="Yurba dialog id."),
    label: Optional[str] = Query(None, description="Left-hand text, default Online."),
    style: Optional[str] = Query(None, description="flat | flat-square | plastic"),
    client: YurbaClient = Depends(get_yurba_client),
    renderer: BadgeRenderer = Depends(get_renderer),
) -> Response:
    # get_yurba_client has already failed if YURBA_TOKEN is missing.
    dialog = require(dialog_id, "dialog_id", as_json=True)
    badge_style = parse_style(style)
    summary = await dialog_presence(client, dialog)
    content = map_presence(label or DEFAULT_LABEL, summary.online, summary.total)
    return svg_response(renderer.render(BadgeSpec.from_content(content, badge_style)), CACHE_PRESENCE)
