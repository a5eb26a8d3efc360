"""Tests for GET /api/github (GitHub mocked with respx)."""

import httpx
import pytest
import respx
from httpx import AsyncClient, Response

REPO_URL = "https://api.github.com/repos/facebook/react"
REPO = {
    "stargazers_count": 228_431,
    "forks_count": 46_700,
    "open_issues_count": 0,
    "license": {"spdx_id": "MIT", "name": "MIT License"},
    "language": "JavaScript",
    "default_branch": "main",
}


@pytest.mark.asyncio
@respx.mock
async def test_stars_badge_by_default(client: AsyncClient, renderer):
    respx.get(REPO_URL).mock(return_value=Response(200, json=REPO))

    response = await client.get("/api/github", params={"repo": "facebook/react"})

    assert response.status_code == 200
    assert response.headers["cache-control"] == "public, max-age=3600, s-maxage=86400"
    assert response.headers["access-control-allow-origin"] == "*"
    spec = renderer.specs[0]
    assert (spec.label, spec.message, spec.color) == ("stars", "228.4K", "blue")


@pytest.mark.asyncio
@respx.mock
@pytest.mark.parametrize(
    ("badge_type", "expected"),
    [
        ("forks", ("forks", "46.7K", "green")),
        ("issues", ("issues", "0", "brightgreen")),
        ("license", ("license", "MIT", "purple")),
        ("language", ("language", "JavaScript", "informational")),
        ("branch", ("default branch", "main", "grey")),
        ("sponsors", ("sponsors", "unknown", "gray")),
    ],
)
async def test_badge_types(client: AsyncClient, renderer, badge_type, expected):
    respx.get(REPO_URL).mock(return_value=Response(200, json=REPO))

    response = await client.get("/api/github", params={"repo": "facebook/react", "type": badge_type})

    assert response.status_code == 200
    spec = renderer.specs[0]
    assert (spec.label, spec.message, spec.color) == expected


@pytest.mark.asyncio
async def test_missing_repo_answers_plain_400(client: AsyncClient):
    response = await client.get("/api/github")
    assert response.status_code == 400
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Missing required parameter: repo"


@pytest.mark.asyncio
@respx.mock
async def test_invalid_style_makes_no_upstream_call(client: AsyncClient):
    response = await client.get("/api/github", params={"repo": "facebook/react", "style": "3d"})
    assert response.status_code == 400
    assert len(respx.calls) == 0


@pytest.mark.asyncio
@respx.mock
async def test_upstream_status_is_forwarded(client: AsyncClient):
    respx.get("https://api.github.com/repos/nobody/nothing").mock(
        return_value=Response(404, json={"message": "Not Found"})
    )

    response = await client.get("/api/github", params={"repo": "nobody/nothing"})

    assert response.status_code == 404
    assert response.text == "GitHub API error: 404"
    assert response.headers["cache-control"] == "no-store"


@pytest.mark.asyncio
@respx.mock
async def test_unreachable_github_answers_500(client: AsyncClient):
    respx.get(REPO_URL).mock(side_effect=httpx.ConnectError("refused"))

    response = await client.get("/api/github", params={"repo": "facebook/react"})

    assert response.status_code == 500
    assert response.text == "Failed to fetch GitHub data"
    assert response.headers["cache-control"] == "no-store"


@pytest.mark.asyncio
@respx.mock
async def test_configured_token_is_sent(client: AsyncClient, use_settings):
    use_settings(github_token="ghp_test")
    route = respx.get(REPO_URL).mock(return_value=Response(200, json=REPO))

    response = await client.get("/api/github", params={"repo": "facebook/react"})

    assert response.status_code == 200
    assert route.calls[0].request.headers["authorization"] == "Bearer ghp_test"


@pytest.mark.asyncio
@respx.mock
async def test_renamed_repository_redirect_is_followed(client: AsyncClient, renderer):
    respx.get("https://api.github.com/repos/old/name").mock(
        return_value=Response(301, headers={"Location": "https://api.github.com/repositories/1"})
    )
    moved = respx.get("https://api.github.com/repositories/1").mock(
        return_value=Response(200, json={"stargazers_count": 1500})
    )

    response = await client.get("/api/github", params={"repo": "old/name"})

    assert response.status_code == 200
    assert moved.called
    assert renderer.specs[0].message == "1.5K"
