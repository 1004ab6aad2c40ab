"""Testes para config.settings (base, discord, requester)."""

from __future__ import annotations

import pytest

from config.settings import BaseSettings, DiscordSettings, RequesterSettings
from config.settings.base.core import _load_base_from_env
from config.settings.discord import _load_from_env as load_discord_from_env
from config.settings.requester import _load_from_env as load_requester_from_env

VALID_PUBLIC_KEY = "ab" * 32


class TestBaseSettings:
    def test_roles_select_served_surfaces(self) -> None:
        assert BaseSettings(service_role="all").serves_worker is True
        assert BaseSettings(service_role="all").serves_requester is True
        assert BaseSettings(service_role="worker").serves_requester is False
        assert BaseSettings(service_role="requester").serves_worker is False

    def test_load_from_env_normalizes_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "prod")
        monkeypatch.setenv("SERVICE_ROLE", "Requester")
        monkeypatch.setenv("DEBUG", "yes")

        settings = _load_base_from_env()

        assert settings.environment == "production"
        assert settings.is_production is True
        assert settings.service_role == "requester"
        assert settings.debug is True
        assert settings.validate() == []

    def test_unknown_role_falls_back_to_all(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SERVICE_ROLE", "gateway")
        assert _load_base_from_env().service_role == "all"


class TestDiscordSettings:
    def test_defaults(self) -> None:
        settings = DiscordSettings()

        assert settings.api_endpoint == "https://discord.com/api/v10"
        assert settings.ack_deadline_ms == 3000
        assert settings.token_ttl_seconds == 900
        assert settings.max_rate_limit_retries == 3

    def test_validate_reports_missing_credentials(self) -> None:
        errors = DiscordSettings().validate()

        assert "DISCORD_BOT_TOKEN não configurado" in errors
        assert "DISCORD_APPLICATION_ID não configurado" in errors
        assert "DISCORD_PUBLIC_KEY não configurado" in errors

    def test_validate_rejects_public_key_with_wrong_size(self) -> None:
        settings = DiscordSettings(bot_token="t", application_id="1", public_key="abcd")

        assert settings.validate() == ["DISCORD_PUBLIC_KEY deve ser hex de 32 bytes"]

    def test_valid_settings(self) -> None:
        settings = DiscordSettings(bot_token="t", application_id="1", public_key=VALID_PUBLIC_KEY)

        assert settings.validate() == []
        assert settings.public_key_bytes() == bytes.fromhex(VALID_PUBLIC_KEY)

    def test_load_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISCORD_BOT_TOKEN", "  token-123  ")
        monkeypatch.setenv("DISCORD_API_BASE_URL", "http://upstream.local/api/")
        monkeypatch.setenv("DISCORD_MAX_RATE_LIMIT_RETRIES", "5")

        settings = load_discord_from_env()

        assert settings.bot_token == "token-123"
        assert settings.api_endpoint == "http://upstream.local/api/v10"
        assert settings.max_rate_limit_retries == 5


class TestRequesterSettings:
    def test_defaults_are_valid(self) -> None:
        settings = RequesterSettings()

        assert settings.base_path == "/api"
        assert settings.validate() == []

    def test_load_from_env_strips_trailing_slashes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REQUESTER_BASE_PATH", "/proxy/")
        monkeypatch.setenv("BOT_REQUESTER_URL", "http://requester:8088/")

        settings = load_requester_from_env()

        assert settings.base_path == "/proxy"
        assert settings.requester_url == "http://requester:8088"

    def test_validate_reports_invalid_values(self) -> None:
        errors = RequesterSettings(base_path="api", requester_url="ftp://x").validate()

        assert len(errors) == 2


class TestRoleSettingsErrors:
    @pytest.fixture
    def configure(self, monkeypatch: pytest.MonkeyPatch):
        from config.settings import checks

        def _configure(role: str, discord: DiscordSettings) -> None:
            monkeypatch.setattr(checks, "get_base_settings", lambda: BaseSettings(service_role=role))
            monkeypatch.setattr(checks, "get_discord_settings", lambda: discord)
            monkeypatch.setattr(checks, "get_requester_settings", lambda: RequesterSettings())

        return _configure

    def test_worker_needs_public_key(self, configure) -> None:
        from config.settings import role_settings_errors

        configure("worker", DiscordSettings(bot_token="t", application_id="1"))

        assert role_settings_errors()["discord"] == ["DISCORD_PUBLIC_KEY não configurado"]

    def test_requester_only_needs_bot_token(self, configure) -> None:
        from config.settings import role_settings_errors

        configure("requester", DiscordSettings(bot_token="t"))

        assert role_settings_errors() == {"base": [], "discord": [], "requester": []}

    def test_requester_without_token_fails(self, configure) -> None:
        from config.settings import role_settings_errors

        configure("requester", DiscordSettings())

        assert role_settings_errors()["discord"] == ["DISCORD_BOT_TOKEN não configurado"]

    def test_invalid_log_level_is_reported(self) -> None:
        assert BaseSettings(log_level="LOUD").validate() == ["LOG_LEVEL inválido: LOUD"]
