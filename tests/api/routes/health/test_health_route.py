"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import json

import pytest

from api.routes.health import router as health
from config.settings import BaseSettings, DiscordSettings, RequesterSettings, checks

PUBLIC_KEY = "ab" * 32


def _configure(
    monkeypatch: pytest.MonkeyPatch,
    *,
    role: str = "all",
    discord: DiscordSettings | None = None,
) -> None:
    base = BaseSettings(service_role=role)
    monkeypatch.setattr(health, "get_base_settings", lambda: base)
    monkeypatch.setattr(checks, "get_base_settings", lambda: base)
    monkeypatch.setattr(checks, "get_discord_settings", lambda: discord or DiscordSettings())
    monkeypatch.setattr(checks, "get_requester_settings", lambda: RequesterSettings())


@pytest.mark.asyncio
async def test_health_reports_service_and_role(monkeypatch: pytest.MonkeyPatch) -> None:
    _configure(monkeypatch, role="worker")

    response = await health.health_check()

    assert response.status == "healthy"
    assert response.service == "ponte-discord"
    assert response.role == "worker"


@pytest.mark.asyncio
async def test_probe_is_plain_ok() -> None:
    assert await health.probe() == "ok"


@pytest.mark.asyncio
async def test_readiness_fails_without_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    _configure(monkeypatch)

    response = await health.readiness_check()
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["status"] == "not_ready"
    assert payload["checks"]["discord"]["status"] == "failed"
    assert "DISCORD_BOT_TOKEN não configurado" in payload["checks"]["discord"]["errors"]
    assert payload["checks"]["requester"]["status"] == "ok"


@pytest.mark.asyncio
async def test_readiness_ok_when_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    _configure(
        monkeypatch,
        discord=DiscordSettings(bot_token="bot", application_id="app", public_key=PUBLIC_KEY),
    )

    response = await health.readiness_check()
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"
    assert payload["role"] == "all"


@pytest.mark.asyncio
async def test_requester_role_only_needs_bot_token(monkeypatch: pytest.MonkeyPatch) -> None:
    _configure(monkeypatch, role="requester", discord=DiscordSettings(bot_token="bot"))

    response = await health.readiness_check()

    assert response.status_code == 200
