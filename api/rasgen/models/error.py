"""JSON error body used by the missing-parameter paths that answer application/json."""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Single top-level ``detail`` string. No extra keys."""

    detail: str
