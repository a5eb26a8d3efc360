"""Tests for upstream payload -> badge content mapping."""

import pytest

from rasgen.services.field_mapper import (
    format_number,
    map_github,
    map_npm,
    map_npm_downloads,
    map_presence,
    online_percentage,
    presence_color,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, "0"),
        (999, "999"),
        (1000, "1.0K"),
        (1500, "1.5K"),
        (999_999, "1000.0K"),
        (1_000_000, "1.0M"),
        (2_345_678, "2.3M"),
        (None, "0"),
        ("42", "42"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_github_stars_formats_count():
    content = map_github("stars", {"stargazers_count": 228_431})
    assert (content.label, content.message, content.color) == ("stars", "228.4K", "blue")


def test_github_issues_color_depends_on_count():
    assert map_github("issues", {"open_issues_count": 3}).color == "yellow"
    clean = map_github("issues", {"open_issues_count": 0})
    assert (clean.message, clean.color) == ("0", "brightgreen")


def test_github_license_prefers_spdx_then_name():
    assert map_github("license", {"license": {"spdx_id": "MIT", "name": "MIT License"}}).message == "MIT"
    assert map_github("license", {"license": {"name": "Custom"}}).message == "Custom"
    missing = map_github("license", {"license": None})
    assert (missing.message, missing.color) == ("unknown", "purple")


def test_github_branch_defaults_to_main():
    content = map_github("branch", {})
    assert (content.label, content.message, content.color) == ("default branch", "main", "grey")


def test_github_language_and_counts_tolerate_missing_fields():
    assert map_github("language", {"language": None}).message == "unknown"
    assert map_github("watchers", {}).message == "0"
    assert map_github("subscribers", {"subscribers_count": 1200}).message == "1.2K"
    assert map_github("forks", "not a dict").message == "0"


def test_unknown_type_falls_back_to_gray_unknown():
    for content in (map_github("sponsors", {"x": 1}), map_npm("sponsors", {"x": 1})):
        assert (content.label, content.message, content.color) == ("sponsors", "unknown", "gray")


def test_npm_version_prefers_latest_dist_tag():
    doc = {"dist-tags": {"latest": "18.3.1"}, "version": "0.0.1"}
    content = map_npm("version", doc)
    assert (content.label, content.message, content.color) == ("npm", "18.3.1", "blue")
    assert map_npm("version", {}).message == "unknown"


def test_npm_license_accepts_string_or_object():
    assert map_npm("license", {"license": "ISC"}).message == "ISC"
    assert map_npm("license", {"license": {"type": "BSD-3-Clause"}}).message == "BSD-3-Clause"
    assert map_npm("license", {}).message == "unknown"


def test_npm_node_falls_back_to_latest_manifest():
    doc = {
        "dist-tags": {"latest": "2.0.0"},
        "versions": {"2.0.0": {"engines": {"node": ">=18"}}},
    }
    assert map_npm("node", doc).message == ">=18"
    assert map_npm("node", {"engines": {"node": ">=14"}}).message == ">=14"
    assert map_npm("node", {}).message == "unknown"


def test_npm_type_detects_typescript():
    typed = map_npm("type", {"devDependencies": {"typescript": "^5.0.0"}})
    assert (typed.message, typed.color) == ("TypeScript", "blue")
    manifest = {"dist-tags": {"latest": "1.0.0"}, "versions": {"1.0.0": {"types": "index.d.ts"}}}
    assert map_npm("type", manifest).message == "TypeScript"
    plain = map_npm("type", {"dependencies": {"lodash": "^4"}})
    assert (plain.message, plain.color) == ("JavaScript", "yellow")


def test_npm_downloads_outcomes():
    ok = map_npm_downloads("week", {"downloads": 25_000_000})
    assert (ok.label, ok.message, ok.color) == ("downloads/week", "25.0M", "brightgreen")
    unavailable = map_npm_downloads("month", None)
    assert (unavailable.message, unavailable.color) == ("unknown", "gray")
    failed = map_npm_downloads("day", None, failed=True)
    assert (failed.label, failed.message, failed.color) == ("downloads/day", "error", "red")


@pytest.mark.parametrize(
    ("online", "total", "color"),
    [
        (0, 10, "red"),
        (2, 10, "orange"),
        (3, 10, "yellow"),
        (5, 10, "yellowgreen"),
        (7, 10, "yellowgreen"),
        (10, 10, "brightgreen"),
        (0, 0, "red"),
    ],
)
def test_presence_color_tiers(online, total, color):
    assert presence_color(online_percentage(online, total)) == color


def test_presence_tier_boundaries():
    assert presence_color(24.9) == "orange"
    assert presence_color(25.0) == "yellow"
    assert presence_color(50.0) == "yellowgreen"
    assert presence_color(75.0) == "brightgreen"


def test_map_presence_uses_online_count_as_message():
    content = map_presence("Online", 5, 10)
    assert (content.label, content.message, content.color) == ("Online", "5", "yellowgreen")
    assert online_percentage(3, 0) == 0.0
