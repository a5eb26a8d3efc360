"""GET /api: machine-readable API documentation."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from rasgen.config import Settings
from rasgen.models.badge import BadgeStyle
from rasgen.models.docs import ApiDocs, EndpointDoc, ParameterDoc, RateLimitDoc, UsageDoc
from rasgen.routers._common import get_settings
from rasgen.services.field_mapper import GITHUB_MAPPERS, NPM_DOWNLOADS_TYPE, NPM_MAPPERS
from rasgen.services.npm_client import DOWNLOAD_PERIODS

router = APIRouter()

API_NAME = "Rasgen Badge API"
API_VERSION = "1.1.0"
DOCS_CACHE_CONTROL = "public, max-age=3600"

_STYLE_PARAM = ParameterDoc(
    name="style",
    default=BadgeStyle.FLAT.value,
    description="The style of the badge",
    options=list(BadgeStyle.values()),
)


def build_api_docs(base_url: str) -> ApiDocs:
    badge_link = "https://rasgen.vercel.app/api/badge?label=example&message=badge"
    return ApiDocs(
        name=API_NAME,
        version=API_VERSION,
        description=(
            "API for generating SVG badges for GitHub repositories, NPM packages, and other services"
        ),
        baseUrl=base_url,
        endpoints=[
            EndpointDoc(
                path="/api/badge",
                description="Generate a custom badge with specified parameters",
                parameters=[
                    ParameterDoc(
                        name="label", required=True, description="The text on the left side of the badge"
                    ),
                    ParameterDoc(
                        name="message", required=True, description="The text on the right side of the badge"
                    ),
                    ParameterDoc(
                        name="color",
                        default="blue",
                        description=(
                            'The color of the right side of the badge (e.g., "blue", "green", "red", '
                            '"orange", "yellow", "purple", "pink", "grey") or a hex value'
                        ),
                    ),
                    ParameterDoc(name="labelColor", description="The color of the left side of the badge"),
                    _STYLE_PARAM,
                ],
                example=f"{base_url}/api/badge?label=build&message=passing&color=green",
            ),
            EndpointDoc(
                path="/api/github",
                description="Generate badges based on GitHub repository data",
                parameters=[
                    ParameterDoc(
                        name="repo", required=True, description='GitHub repository in format "username/repo"'
                    ),
                    ParameterDoc(
                        name="type",
                        default="stars",
                        description="Type of badge to generate",
                        options=list(GITHUB_MAPPERS),
                    ),
                    _STYLE_PARAM,
                ],
                example=f"{base_url}/api/github?repo=facebook/react&type=stars",
            ),
            EndpointDoc(
                path="/api/npm",
                description="Generate badges for NPM packages",
                parameters=[
                    ParameterDoc(name="package", required=True, description="NPM package name"),
                    ParameterDoc(
                        name="type",
                        default="version",
                        description="Type of badge to generate",
                        options=[*NPM_MAPPERS, NPM_DOWNLOADS_TYPE],
                    ),
                    ParameterDoc(
                        name="period",
                        default="month",
                        description="Download count window, used when type=downloads",
                        options=list(DOWNLOAD_PERIODS),
                    ),
                    _STYLE_PARAM,
                ],
                example=f"{base_url}/api/npm?package=react&type=version",
            ),
            EndpointDoc(
                path="/api/yurba",
                description="Generate badges showing online users in Yurba dialogs",
                parameters=[
                    ParameterDoc(name="dialog_id", required=True, description="Yurba dialog ID"),
                    ParameterDoc(name="label", default="Online", description="The text on the left side of the badge"),
                    _STYLE_PARAM,
                ],
                example=f"{base_url}/api/yurba?dialog_id=123456",
                note="Requires YURBA_TOKEN environment variable to be set",
            ),
        ],
        usage=UsageDoc(
            markdown=f"![Badge Example]({badge_link})",
            html=f'<img src="{badge_link}" alt="Badge Example">',
            shields="Compatible with shields.io URL format",
        ),
        rateLimit=RateLimitDoc(
            limit="100 requests per minute",
            note="Excessive usage may be rate-limited",
        ),
        documentation="/docs",
        repository="https://github.com/yourusername/rasgen-badge",
        license="MIT",
    )


@router.get("", response_model=ApiDocs)
async def api_docs(settings: Settings = Depends(get_settings)) -> JSONResponse:
    """Endpoint list, parameters and usage snippets."""
    docs = build_api_docs(settings.api_url)
    return JSONResponse(
        content=docs.model_dump(mode="json", exclude_none=True),
        headers={
            "Cache-Control": DOCS_CACHE_CONTROL,
            "Access-Control-Allow-Origin": "*",
        },
    )
