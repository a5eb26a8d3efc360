"""Badge models shared by the routers, the mapper and the renderer."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class BadgeStyle(str, Enum):
    FLAT = "flat"
    FLAT_SQUARE = "flat-square"
    PLASTIC = "plastic"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


class BadgeContent(BaseModel):
    """What a badge says: output of the field mapper, before styling."""

    label: str
    message: str
    color: str


class BadgeSpec(BaseModel):
    """Everything the renderer needs to draw one badge."""

    label: str
    message: str
    color: str = "blue"
    style: BadgeStyle = BadgeStyle.FLAT
    label_color: Optional[str] = None

    @classmethod
    def from_content(cls, content: BadgeContent, style: BadgeStyle) -> "BadgeSpec":
        return cls(label=content.label, message=content.message, color=content.color, style=style)
