"""Tests for GET /api/badge."""

import pytest
from httpx import AsyncClient

from rasgen.models.badge import BadgeStyle


@pytest.mark.asyncio
async def test_custom_badge_returns_svg_with_static_cache(client: AsyncClient):
    response = await client.get("/api/badge", params={"label": "build", "message": "passing", "color": "green"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert response.headers["cache-control"] == "public, max-age=86400, s-maxage=604800"
    assert response.headers["access-control-allow-origin"] == "*"
    assert ">build</text>" in response.text
    assert ">passing</text>" in response.text
    assert 'fill="#97CA00"' in response.text


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"label": "build"}, {"message": "passing"}, {"label": "", "message": "x"}, {}])
async def test_missing_label_or_message_answers_json_400(client: AsyncClient, params):
    response = await client.get("/api/badge", params=params)
    assert response.status_code == 400
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"detail": "Missing required parameters: label and message are required"}


@pytest.mark.asyncio
async def test_invalid_style_never_reaches_renderer(client: AsyncClient, renderer):
    response = await client.get("/api/badge", params={"label": "a", "message": "b", "style": "neon"})
    assert response.status_code == 400
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Invalid style parameter. Must be one of: flat, flat-square, plastic"
    assert renderer.specs == []


@pytest.mark.asyncio
async def test_renderer_receives_exactly_the_validated_fields(client: AsyncClient, renderer):
    response = await client.get(
        "/api/badge",
        params={"label": "coverage", "message": "97%", "color": "orange", "style": "plastic", "labelColor": "black"},
    )
    assert response.status_code == 200
    assert len(renderer.specs) == 1
    spec = renderer.specs[0]
    assert (spec.label, spec.message, spec.color) == ("coverage", "97%", "orange")
    assert spec.style is BadgeStyle.PLASTIC
    assert spec.label_color == "black"


@pytest.mark.asyncio
async def test_defaults_color_blue_and_style_flat(client: AsyncClient, renderer):
    await client.get("/api/badge", params={"label": "a", "message": "b"})
    spec = renderer.specs[0]
    assert spec.color == "blue"
    assert spec.style is BadgeStyle.FLAT
    assert spec.label_color is None


@pytest.mark.asyncio
async def test_bad_color_answers_400_no_store(client: AsyncClient):
    response = await client.get("/api/badge", params={"label": "a", "message": "b", "color": "no-such-color"})
    assert response.status_code == 400
    assert response.text.startswith("Invalid badge options: ")
    assert response.headers["cache-control"] == "no-store"


@pytest.mark.asyncio
@pytest.mark.parametrize("color", ["tomato", "rgb(10,20,30)"])
async def test_css_colors_render(client: AsyncClient, color):
    response = await client.get("/api/badge", params={"label": "a", "message": "b", "color": color})
    assert response.status_code == 200
    assert f'fill="{color}"' in response.text


@pytest.mark.asyncio
async def test_whitespace_message_is_rendered_not_rejected(client: AsyncClient):
    response = await client.get("/api/badge", params={"label": "status", "message": " "})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert ">status</text>" in response.text
