"""Testes do endpoint POST /interactions."""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from starlette.requests import Request

from api.routes.discord import interactions
from app.coordinators.interactions import InteractionDispatcher
from app.domain.interaction import Interaction
from app.domain.responses import Deferred
from app.use_cases.commands import CommandDefinition, CommandOutcome, PingCommand
from config.settings import DiscordSettings

TIMESTAMP = "1700000000"


class SlowCommand:
    definition = CommandDefinition(name="slow", description="Defers and replies later.")

    def handle(self, interaction: Interaction) -> CommandOutcome:
        async def reply(followups: Any) -> None:
            await followups.send("done")

        return CommandOutcome(response=Deferred(), after_ack=reply)


@pytest.fixture(scope="module")
def private_key() -> Ed25519PrivateKey:
    return Ed25519PrivateKey.generate()


@pytest.fixture
def settings(private_key: Ed25519PrivateKey, monkeypatch: pytest.MonkeyPatch) -> DiscordSettings:
    public_key = private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw).hex()
    configured = DiscordSettings(bot_token="bot", application_id="app", public_key=public_key)
    monkeypatch.setattr(interactions, "get_discord_settings", lambda: configured)
    monkeypatch.setattr(
        interactions,
        "get_dispatcher",
        lambda: InteractionDispatcher([PingCommand(), SlowCommand()]),
    )
    return configured


def _build_request(body: bytes, headers: dict[str, str]) -> Request:
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in headers.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/interactions",
        "raw_path": b"/interactions",
        "query_string": b"",
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _signed_request(private_key: Ed25519PrivateKey, body: bytes) -> Request:
    signature = private_key.sign(TIMESTAMP.encode() + body).hex()
    return _build_request(
        body,
        {"x-signature-ed25519": signature, "x-signature-timestamp": TIMESTAMP},
    )


@pytest.mark.asyncio
async def test_ping_is_answered_with_pong(
    private_key: Ed25519PrivateKey, settings: DiscordSettings
) -> None:
    response = await interactions.receive_interaction(_signed_request(private_key, b'{"type":1}'))

    assert response.status_code == 200
    assert json.loads(response.body) == {"type": 1}
    assert response.background is None


@pytest.mark.asyncio
async def test_bad_signature_is_rejected(
    private_key: Ed25519PrivateKey, settings: DiscordSettings
) -> None:
    request = _signed_request(private_key, b'{"type":1}')
    tampered = _build_request(b'{"type":2}', dict(request.headers))

    response = await interactions.receive_interaction(tampered)

    assert response.status_code == 401
    assert response.body == b"invalid request signature"


@pytest.mark.asyncio
async def test_missing_signature_is_rejected(settings: DiscordSettings) -> None:
    response = await interactions.receive_interaction(_build_request(b'{"type":1}', {}))

    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [b"not json", b"[1, 2]", b'{"id": "1"}'])
async def test_malformed_body_is_bad_request(
    private_key: Ed25519PrivateKey, settings: DiscordSettings, body: bytes
) -> None:
    response = await interactions.receive_interaction(_signed_request(private_key, body))

    assert response.status_code == 400
    assert response.body == b"Bad Request"


@pytest.mark.asyncio
async def test_unsupported_kind_gets_ephemeral_message(
    private_key: Ed25519PrivateKey, settings: DiscordSettings
) -> None:
    response = await interactions.receive_interaction(_signed_request(private_key, b'{"type":4}'))
    payload = json.loads(response.body)

    assert response.status_code == 400
    assert payload["type"] == 4
    assert payload["data"]["flags"] == 64
    assert payload["data"]["content"].startswith("Unsupported interaction")


@pytest.mark.asyncio
async def test_invalid_public_key_is_server_error(
    private_key: Ed25519PrivateKey,
    settings: DiscordSettings,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    broken = replace(settings, public_key="not-hex")
    monkeypatch.setattr(interactions, "get_discord_settings", lambda: broken)

    response = await interactions.receive_interaction(_signed_request(private_key, b'{"type":1}'))

    assert response.status_code == 500


@pytest.mark.asyncio
async def test_immediate_command_reply(
    private_key: Ed25519PrivateKey, settings: DiscordSettings
) -> None:
    body = json.dumps(
        {"type": 2, "id": "1", "application_id": "app", "token": "t", "data": {"name": "ping"}}
    ).encode()

    response = await interactions.receive_interaction(_signed_request(private_key, body))
    payload = json.loads(response.body)

    assert response.status_code == 200
    assert payload["type"] == 4
    assert response.background is None


@pytest.mark.asyncio
async def test_deferred_command_schedules_followups(
    private_key: Ed25519PrivateKey, settings: DiscordSettings
) -> None:
    body = json.dumps(
        {"type": 2, "id": "1", "application_id": "app", "token": "t", "data": {"name": "slow"}}
    ).encode()

    response = await interactions.receive_interaction(_signed_request(private_key, body))

    assert response.status_code == 200
    assert json.loads(response.body) == {"type": 5}
    assert response.background is not None
    assert response.background.func is interactions.schedule_followups
