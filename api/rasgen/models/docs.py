"""GET /api documentation payload. Field names follow the published JSON (camelCase)."""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field


class ParameterDoc(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    type: str = "string"
    required: bool = False
    default: Optional[str] = None
    description: str
    options: Optional[list[str]] = None


class EndpointDoc(BaseModel):
    model_config = ConfigDict(extra="forbid")

    path: str
    description: str
    method: str = "GET"
    parameters: list[ParameterDoc]
    example: str
    note: Optional[str] = None


class UsageDoc(BaseModel):
    markdown: str
    html: str
    shields: str


class RateLimitDoc(BaseModel):
    limit: Annotated[str, Field(description="Documented only; not enforced")]
    note: str


class ApiDocs(BaseModel):
    """GET /api response."""

    name: str
    version: str
    description: str
    baseUrl: str
    endpoints: list[EndpointDoc]
    usage: UsageDoc
    rateLimit: RateLimitDoc
    documentation: str
    repository: str
    license: str
