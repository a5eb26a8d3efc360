"""GET /api/badge: static badge from query parameters, no upstream."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from rasgen.errors import MissingParameterError
from rasgen.models.badge import BadgeSpec
from rasgen.routers._common import CACHE_STATIC, get_renderer, parse_style, svg_response
from rasgen.services.badge_renderer import BadgeRenderer

router = APIRouter()


@router.get("/badge", response_class=Response)
async def custom_badge(
    label: Optional[str] = Query(None, description="Left-hand text."),
    message: Optional[str] = Query(None, description="Right-hand text."),
    color: str = Query("blue", description="Message color: shields name or hex."),
    style: Optional[str] = Query(None, description="flat | flat-square | plastic"),
    label_color: Optional[str] = Query(None, alias="labelColor", description="Label color."),
    renderer: BadgeRenderer = Depends(get_renderer),
) -> Response:
    if not label or not message:
        raise MissingParameterError("label", "message", as_json=True)
    spec = BadgeSpec(
        label=label,
        message=message,
        color=color or "blue",
        style=parse_style(style),
        label_color=label_color or None,
    )
    return svg_response(renderer.render(spec), CACHE_STATIC)
