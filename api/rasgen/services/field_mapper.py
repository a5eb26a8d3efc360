"""Upstream payload -> badge content.

Pure functions only. Each badge family has a lookup table from ``type`` to a
mapping function; unknown types fall back to ``<type> | unknown | gray``.
Upstream fields are read defensively and default per field.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from rasgen.models.badge import BadgeContent

FALLBACK_MESSAGE = "unknown"
FALLBACK_COLOR = "gray"

PayloadMapper = Callable[[dict[str, Any]], BadgeContent]


def _as_count(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def format_number(value: Any) -> str:
    """999 -> "999", 1500 -> "1.5K", 2_300_000 -> "2.3M"."""
    num = _as_count(value)
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return str(num)


def fallback_content(badge_type: str) -> BadgeContent:
    return BadgeContent(label=badge_type, message=FALLBACK_MESSAGE, color=FALLBACK_COLOR)


# --- GitHub repository ---


def _github_issues(repo: dict[str, Any]) -> BadgeContent:
    count = _as_count(repo.get("open_issues_count"))
    return BadgeContent(
        label="issues",
        message=format_number(count),
        color="yellow" if count > 0 else "brightgreen",
    )


def _github_license(repo: dict[str, Any]) -> BadgeContent:
    license_info = _as_dict(repo.get("license"))
    message = _text(license_info.get("spdx_id")) or _text(license_info.get("name")) or FALLBACK_MESSAGE
    return BadgeContent(label="license", message=message, color="purple")


def _github_count(field: str, label: str, color: str) -> PayloadMapper:
    def mapper(repo: dict[str, Any]) -> BadgeContent:
        return BadgeContent(label=label, message=format_number(repo.get(field)), color=color)

    return mapper


GITHUB_MAPPERS: dict[str, PayloadMapper] = {
    "stars": _github_count("stargazers_count", "stars", "blue"),
    "forks": _github_count("forks_count", "forks", "green"),
    "issues": _github_issues,
    "license": _github_license,
    "watchers": _github_count("watchers_count", "watchers", "orange"),
    "subscribers": _github_count("subscribers_count", "subscribers", "yellowgreen"),
    "language": lambda repo: BadgeContent(
        label="language",
        message=_text(repo.get("language")) or FALLBACK_MESSAGE,
        color="informational",
    ),
    "branch": lambda repo: BadgeContent(
        label="default branch",
        message=_text(repo.get("default_branch")) or "main",
        color="grey",
    ),
}


def map_github(badge_type: str, repo: Any) -> BadgeContent:
    mapper = GITHUB_MAPPERS.get(badge_type)
    if mapper is None:
        return fallback_content(badge_type)
    return mapper(_as_dict(repo))


# --- npm package ---

TYPESCRIPT_MARKERS = ("typescript", "@types/react")


def _latest_manifest(doc: dict[str, Any]) -> dict[str, Any]:
    latest = _text(_as_dict(doc.get("dist-tags")).get("latest"))
    if latest is None:
        return {}
    return _as_dict(_as_dict(doc.get("versions")).get(latest))


def _node_engine(doc: dict[str, Any]) -> Optional[str]:
    for source in (doc, _latest_manifest(doc)):
        engine = _text(_as_dict(source.get("engines")).get("node"))
        if engine:
            return engine
    return None


def _declares_types(manifest: dict[str, Any]) -> bool:
    if manifest.get("types") or manifest.get("typings"):
        return True
    for key in ("dependencies", "devDependencies"):
        deps = _as_dict(manifest.get(key))
        if any(deps.get(marker) for marker in TYPESCRIPT_MARKERS):
            return True
    return False


def _npm_version(doc: dict[str, Any]) -> BadgeContent:
    latest = _text(_as_dict(doc.get("dist-tags")).get("latest"))
    return BadgeContent(
        label="npm",
        message=latest or _text(doc.get("version")) or FALLBACK_MESSAGE,
        color="blue",
    )


def _npm_license(doc: dict[str, Any]) -> BadgeContent:
    license_value = doc.get("license")
    if isinstance(license_value, dict):
        license_value = license_value.get("type")
    return BadgeContent(label="license", message=_text(license_value) or FALLBACK_MESSAGE, color="green")


def _npm_types(doc: dict[str, Any]) -> BadgeContent:
    typed = _declares_types(doc) or _declares_types(_latest_manifest(doc))
    return BadgeContent(
        label="types",
        message="TypeScript" if typed else "JavaScript",
        color="blue" if typed else "yellow",
    )


NPM_MAPPERS: dict[str, PayloadMapper] = {
    "version": _npm_version,
    "license": _npm_license,
    "node": lambda doc: BadgeContent(
        label="node", message=_node_engine(doc) or FALLBACK_MESSAGE, color="green"
    ),
    "type": _npm_types,
}

NPM_DOWNLOADS_TYPE = "downloads"


def map_npm(badge_type: str, doc: Any) -> BadgeContent:
    """Registry document -> badge. ``downloads`` needs a second lookup; see map_npm_downloads."""
    mapper = NPM_MAPPERS.get(badge_type)
    if mapper is None:
        return fallback_content(badge_type)
    return mapper(_as_dict(doc))


def map_npm_downloads(
    period: str, payload: Optional[dict[str, Any]], *, failed: bool = False
) -> BadgeContent:
    """``payload`` None means the downloads API answered non-2xx; ``failed`` means it was unreachable."""
    label = f"downloads/{period}"
    if failed:
        return BadgeContent(label=label, message="error", color="red")
    if payload is None:
        return BadgeContent(label=label, message=FALLBACK_MESSAGE, color=FALLBACK_COLOR)
    return BadgeContent(label=label, message=format_number(payload.get("downloads")), color="brightgreen")


# --- Yurba presence ---

PRESENCE_TIERS: tuple[tuple[float, str], ...] = (
    (25.0, "orange"),
    (50.0, "yellow"),
    (75.0, "yellowgreen"),
)
PRESENCE_NONE_COLOR = "red"
PRESENCE_TOP_COLOR = "brightgreen"


def online_percentage(online: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return online / total * 100


def presence_color(percentage: float) -> str:
    """0 -> red, (0,25) orange, [25,50) yellow, [50,75) yellowgreen, >=75 brightgreen."""
    if percentage == 0:
        return PRESENCE_NONE_COLOR
    for upper, color in PRESENCE_TIERS:
        if percentage < upper:
            return color
    return PRESENCE_TOP_COLOR


def map_presence(label: str, online: int, total: int) -> BadgeContent:
    return BadgeContent(
        label=label,
        message=str(online),
        color=presence_color(online_percentage(online, total)),
    )
