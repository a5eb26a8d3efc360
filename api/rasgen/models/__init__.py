"""Pydantic models."""

from rasgen.models.badge import BadgeContent, BadgeSpec, BadgeStyle
from rasgen.models.docs import ApiDocs, EndpointDoc, ParameterDoc
from rasgen.models.error import ErrorDetail
from rasgen.models.yurba import DialogInfo, DialogMember, PresenceSummary

__all__ = [
    "ApiDocs",
    "BadgeContent",
    "BadgeSpec",
    "BadgeStyle",
    "DialogInfo",
    "DialogMember",
    "EndpointDoc",
    "ErrorDetail",
    "ParameterDoc",
    "PresenceSummary",
]
