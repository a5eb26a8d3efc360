"""SVG badges via pybadges.

pybadges draws the shields ``flat`` badge. ``flat-square`` and ``plastic``
are the same drawing with the corner radius and gloss gradient swapped.
Colors are shields names (resolved by pybadges) or CSS colors; bare 3/6 digit
hex gets a ``#``.
"""

from __future__ import annotations

import re
from typing import Optional
from xml.dom import minidom

import pybadges

from rasgen.errors import BadgeValidationError
from rasgen.models.badge import BadgeSpec, BadgeStyle

DEFAULT_LABEL_COLOR = "#555"

_BARE_HEX_RE = re.compile(r"^(?:[0-9a-fA-F]{3}){1,2}$")
_CSS_COLOR_RE = re.compile(
    r"^(?:#(?:[0-9a-fA-F]{3,4}){1,2}"
    r"|(?:rgb|hsl)a?\(\s*[\d.%\s,/+-]+\)"
    r"|[a-zA-Z]+)$"
)

# (corner radius, gradient stops as (offset, color, opacity))
_STYLE_SHAPES: dict[BadgeStyle, tuple[str, Optional[tuple[tuple[str, str, str], ...]]]] = {
    BadgeStyle.FLAT_SQUARE: ("0", None),
    BadgeStyle.PLASTIC: (
        "4",
        (("0", "#fff", ".7"), (".1", "#aaa", ".1"), (".9", "#000", ".3"), ("1", "#000", ".5")),
    ),
}


def normalize_color(value: Optional[str]) -> Optional[str]:
    """CSS color text for ``value``, or None when it is not color-shaped."""
    if value is None:
        return None
    text = value.strip()
    if _BARE_HEX_RE.match(text):
        return f"#{text}"
    if _CSS_COLOR_RE.match(text):
        return text
    return None


def _require_text(field: str, value: str) -> str:
    if not isinstance(value, str) or value == "":
        raise BadgeValidationError(f"Field `{field}` must be a non-empty string")
    return value


def _require_color(field: str, value: str) -> str:
    color = normalize_color(value)
    if color is None:
        raise BadgeValidationError(f"Field `{field}` must be a valid CSS color, got {value!r}")
    return color


def _restyle(svg: str, style: BadgeStyle) -> str:
    if style not in _STYLE_SHAPES:
        return svg
    radius, stops = _STYLE_SHAPES[style]
    doc = minidom.parseString(svg)
    for clip in doc.getElementsByTagName("clipPath"):
        for rect in clip.getElementsByTagName("rect"):
            rect.setAttribute("rx", radius)
    for gradient in doc.getElementsByTagName("linearGradient"):
        if stops is None:
            gradient_ref = f"url(#{gradient.getAttribute('id')})"
            for rect in doc.getElementsByTagName("rect"):
                if rect.getAttribute("fill") == gradient_ref:
                    rect.parentNode.removeChild(rect)
            gradient.parentNode.removeChild(gradient)
            continue
        for stop in list(gradient.getElementsByTagName("stop")):
            gradient.removeChild(stop)
        for offset, color, opacity in stops:
            stop = doc.createElement("stop")
            stop.setAttribute("offset", offset)
            stop.setAttribute("stop-color", color)
            stop.setAttribute("stop-opacity", opacity)
            gradient.appendChild(stop)
    return doc.documentElement.toxml()


class BadgeRenderer:
    """Turns a BadgeSpec into SVG text. Raises BadgeValidationError on bad options."""

    def render(self, spec: BadgeSpec) -> str:
        label = _require_text("label", spec.label)
        message = _require_text("message", spec.message)
        color = _require_color("color", spec.color)
        label_color = _require_color("labelColor", spec.label_color) if spec.label_color else DEFAULT_LABEL_COLOR
        try:
            style = BadgeStyle(spec.style)
        except ValueError as exc:
            raise BadgeValidationError(
                f"Field `style` must be one of ({', '.join(BadgeStyle.values())})"
            ) from exc

        try:
            svg = pybadges.badge(
                left_text=label,
                right_text=message,
                left_color=label_color,
                right_color=color,
                whole_title=f"{label}: {message}",
            )
        except ValueError as exc:
            raise BadgeValidationError(str(exc)) from exc
        return _restyle(svg, style)
