"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rasgen.config import Settings  # noqa: E402
from rasgen.main import app  # noqa: E402
from rasgen.models.badge import BadgeSpec  # noqa: E402
from rasgen.services import dialog_presence_service  # noqa: E402

TEST_SETTINGS = Settings(yurba_token="test-yurba-token", api_url="https://badges.example.test")


class RecordingRenderer:
    """Stands in for BadgeRenderer; keeps every spec it was asked to draw."""

    def __init__(self) -> None:
        self.specs: list[BadgeSpec] = []

    def render(self, spec: BadgeSpec) -> str:
        self.specs.append(spec)
        return f"<svg>{spec.label}|{spec.message}|{spec.color}|{spec.style.value}</svg>"


@pytest.fixture(autouse=True)
def _isolate_app_state(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(app.state, "settings", TEST_SETTINGS, raising=False)
    monkeypatch.setattr(dialog_presence_service, "RETRY_BACKOFF_SECONDS", 0.0)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def use_settings(monkeypatch: pytest.MonkeyPatch):
    """Swap the app settings for one test: ``use_settings(yurba_token=None)``."""

    def _apply(**changes) -> Settings:
        settings = TEST_SETTINGS.model_copy(update=changes)
        monkeypatch.setattr(app.state, "settings", settings, raising=False)
        return settings

    return _apply


@pytest.fixture
def renderer() -> RecordingRenderer:
    from rasgen.routers._common import get_renderer

    recorder = RecordingRenderer()
    app.dependency_overrides[get_renderer] = lambda: recorder
    return recorder


@pytest_asyncio.fixture
async def client():
    """ASGI client with raise_app_exceptions=False so 5xx return response body."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
